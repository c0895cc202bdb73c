import logging
import uuid
from typing import Any, Dict

from vehicle_docs.exceptions import NotFoundError
from vehicle_docs.repositories.vehicle_repo import VehicleRepository

logger = logging.getLogger(__name__)


class VehicleService:
    def __init__(self, vehicle_repo: VehicleRepository):
        self.vehicle_repo = vehicle_repo

    def get_vehicle(self, vehicle_id: str) -> Dict[str, Any]:
        """Get a vehicle flattened for clients, conditions always present"""
        data = self.vehicle_repo.get_by_id(vehicle_id)
        if data is None:
            logger.info(f"Vehicle not found: {vehicle_id}")
            raise NotFoundError("Vehicle not found")
        return {
            "vehicleId": vehicle_id,
            **data,
            "conditions": data.get("conditions") or [],
        }

    def add_condition(self, vehicle_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Tag the payload with a fresh id and append it to the vehicle"""
        # the generated id replaces any id sent by the caller
        record = {"id": str(uuid.uuid4())}
        record.update({k: v for k, v in payload.items() if k != "id"})
        created = self.vehicle_repo.append_condition(vehicle_id, record)
        logger.info(f"Condition {created['id']} added to vehicle {vehicle_id}")
        return created

    def delete_condition(self, vehicle_id: str, condition_id: str) -> int:
        """Delete a condition by id; an unknown id is not an error"""
        removed = self.vehicle_repo.remove_condition(vehicle_id, condition_id)
        logger.info(f"Deleted {removed} condition(s) with id {condition_id} from vehicle {vehicle_id}")
        return removed
