import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from vehicle_docs.dependencies import get_vehicle_service
from vehicle_docs.exceptions import NotFoundError, VehicleDocsError
from vehicle_docs.repositories.vehicle_repo import FIRESTORE_ENCODERS
from vehicle_docs.schemas.meta import ErrorResponse, MessageResponse
from vehicle_docs.services.vehicle_service import VehicleService

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND_BODY = {"error": "Vehicle not found"}


def _store_error(title: str, e: Exception) -> JSONResponse:
    status_code = e.status_code if isinstance(e, VehicleDocsError) else 500
    details = e.message if isinstance(e, VehicleDocsError) else str(e)
    body = ErrorResponse(error=title, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post(
    "/{vehicle_id}/conditions",
    status_code=201,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def add_condition(
    vehicle_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    vehicle_service: VehicleService = Depends(get_vehicle_service),
):
    """Append a condition record to a vehicle; the response carries its generated id"""
    logger.info(f"Adding condition for vehicle: {vehicle_id}")
    try:
        # an empty body creates a record holding only the generated id
        record = vehicle_service.add_condition(vehicle_id, payload or {})
        content = jsonable_encoder(record)
    except NotFoundError:
        logger.info(f"Vehicle not found: {vehicle_id}")
        return JSONResponse(status_code=404, content=NOT_FOUND_BODY)
    except Exception as e:
        logger.error(f"Error adding condition: {e}")
        return _store_error("Error adding condition", e)
    return JSONResponse(status_code=201, content=content)


@router.delete(
    "/{vehicle_id}/conditions/{condition_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def delete_condition(
    vehicle_id: str,
    condition_id: str,
    vehicle_service: VehicleService = Depends(get_vehicle_service),
):
    """Delete a condition by id; deleting an unknown id still succeeds"""
    logger.info(f"Deleting condition: vehicle_id={vehicle_id}, condition_id={condition_id}")
    try:
        vehicle_service.delete_condition(vehicle_id, condition_id)
    except NotFoundError:
        logger.info(f"Vehicle not found: {vehicle_id}")
        return JSONResponse(status_code=404, content=NOT_FOUND_BODY)
    except Exception as e:
        logger.error(f"Error deleting condition: {e}")
        return _store_error("Error deleting condition", e)
    return MessageResponse(message="Condition deleted successfully")


@router.get(
    "/{vehicle_id}",
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def get_vehicle(
    vehicle_id: str,
    vehicle_service: VehicleService = Depends(get_vehicle_service),
):
    """Get a vehicle with all its fields and its conditions"""
    logger.info(f"Getting vehicle data for ID: {vehicle_id}")
    try:
        vehicle = vehicle_service.get_vehicle(vehicle_id)
        content = jsonable_encoder(vehicle, custom_encoder=FIRESTORE_ENCODERS)
    except NotFoundError:
        return JSONResponse(status_code=404, content=NOT_FOUND_BODY)
    except Exception as e:
        logger.error(f"Error getting vehicle: {e}")
        return _store_error("Error getting vehicle data", e)
    return JSONResponse(content=content)
