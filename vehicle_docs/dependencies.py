from fastapi import Depends, Request

from vehicle_docs.exceptions import RemoteStoreError
from vehicle_docs.repositories.vehicle_repo import VehicleRepository
from vehicle_docs.services.vehicle_service import VehicleService

# Repository Dependencies
def get_vehicle_repository(request: Request) -> VehicleRepository:
    """Get the vehicle repository created at startup"""
    repo = getattr(request.app.state, "vehicle_repository", None)
    if repo is None:
        raise RemoteStoreError("Document store is not initialised")
    return repo

# Service Dependencies
def get_vehicle_service(
    vehicle_repo: VehicleRepository = Depends(get_vehicle_repository)
) -> VehicleService:
    """Get vehicle service instance"""
    return VehicleService(vehicle_repo)
