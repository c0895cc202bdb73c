import logging
from typing import Any, Dict, List, Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore

from vehicle_docs.exceptions import NotFoundError, RemoteStoreError

logger = logging.getLogger(__name__)

# jsonable_encoder hooks for Firestore values that are not plain JSON
FIRESTORE_ENCODERS = {
    firestore.GeoPoint: lambda point: {"latitude": point.latitude, "longitude": point.longitude},
    firestore.DocumentReference: lambda ref: ref.path,
}


def _read_conditions(snapshot) -> List[Dict[str, Any]]:
    if not snapshot.exists:
        raise NotFoundError("Vehicle not found")
    data = snapshot.to_dict() or {}
    return list(data.get("conditions") or [])


def _append_condition(transaction, doc_ref, record: Dict[str, Any]) -> Dict[str, Any]:
    conditions = _read_conditions(doc_ref.get(transaction=transaction))
    conditions.append(record)
    transaction.update(doc_ref, {"conditions": conditions})
    return record


def _remove_condition(transaction, doc_ref, condition_id: str) -> int:
    conditions = _read_conditions(doc_ref.get(transaction=transaction))
    kept = [c for c in conditions if not (isinstance(c, dict) and c.get("id") == condition_id)]
    removed = len(conditions) - len(kept)
    if removed:
        transaction.update(doc_ref, {"conditions": kept})
    return removed


class VehicleRepository:
    """Vehicle documents held in a Firestore collection.

    Condition changes run inside a Firestore transaction: the document is
    read and written as one unit and retried by the client when another
    writer changed it in between, so concurrent additions are not lost.
    """

    def __init__(self, client, collection: str = "vehicles"):
        self.client = client
        self.collection = collection

    def _doc(self, vehicle_id: str):
        return self.client.collection(self.collection).document(vehicle_id)

    def get_by_id(self, vehicle_id: str) -> Optional[Dict[str, Any]]:
        """Get vehicle document data, None when it does not exist"""
        try:
            snapshot = self._doc(vehicle_id).get()
        except GoogleAPIError as e:
            raise RemoteStoreError(f"Document store error while fetching vehicle {vehicle_id}: {str(e)}") from e
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    def append_condition(self, vehicle_id: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Append a condition record to the vehicle's conditions list"""
        try:
            append = firestore.transactional(_append_condition)
            return append(self.client.transaction(), self._doc(vehicle_id), record)
        except GoogleAPIError as e:
            raise RemoteStoreError(f"Document store error while adding condition: {str(e)}") from e

    def remove_condition(self, vehicle_id: str, condition_id: str) -> int:
        """Remove condition records by id, returning how many were removed"""
        try:
            remove = firestore.transactional(_remove_condition)
            removed = remove(self.client.transaction(), self._doc(vehicle_id), condition_id)
        except GoogleAPIError as e:
            raise RemoteStoreError(f"Document store error while deleting condition: {str(e)}") from e
        if not removed:
            logger.info(f"No condition {condition_id} on vehicle {vehicle_id}, nothing removed")
        return removed
