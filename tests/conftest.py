import copy
import os
import tempfile

# must be set before vehicle_docs.core.config builds its settings
os.environ.setdefault("DOCUMENTS_ROOT", tempfile.mkdtemp(prefix="vehicle-docs-"))

import pytest
from fastapi.testclient import TestClient

from vehicle_docs.core.config import Settings, get_settings
from vehicle_docs.dependencies import get_vehicle_repository
from vehicle_docs.exceptions import NotFoundError
from vehicle_docs.main import app


class InMemoryVehicleRepository:
    """Stands in for VehicleRepository with plain dicts."""

    def __init__(self, vehicles=None):
        self.vehicles = vehicles if vehicles is not None else {}
        self.writes = 0

    def get_by_id(self, vehicle_id):
        data = self.vehicles.get(vehicle_id)
        return copy.deepcopy(data) if data is not None else None

    def append_condition(self, vehicle_id, record):
        if vehicle_id not in self.vehicles:
            raise NotFoundError("Vehicle not found")
        doc = self.vehicles[vehicle_id]
        doc["conditions"] = list(doc.get("conditions") or []) + [copy.deepcopy(record)]
        self.writes += 1
        return record

    def remove_condition(self, vehicle_id, condition_id):
        if vehicle_id not in self.vehicles:
            raise NotFoundError("Vehicle not found")
        doc = self.vehicles[vehicle_id]
        conditions = list(doc.get("conditions") or [])
        kept = [c for c in conditions if c.get("id") != condition_id]
        if len(kept) != len(conditions):
            doc["conditions"] = kept
            self.writes += 1
        return len(conditions) - len(kept)


@pytest.fixture
def vehicle_repo():
    return InMemoryVehicleRepository({
        "v1": {"make": "Renault", "model": "Clio", "year": 2019},
        "v2": {"make": "Peugeot", "conditions": [{"id": "c-old", "note": "scratch"}]},
    })


@pytest.fixture
def upload_settings(tmp_path):
    return Settings(DOCUMENTS_ROOT=str(tmp_path), MAX_UPLOAD_SIZE=1024)


@pytest.fixture
def client(vehicle_repo, upload_settings):
    app.dependency_overrides[get_vehicle_repository] = lambda: vehicle_repo
    app.dependency_overrides[get_settings] = lambda: upload_settings
    # no context manager: the startup hook would connect to Firestore
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()
