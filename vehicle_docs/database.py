import json
import logging
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import credentials, firestore

from vehicle_docs.core.config import Settings

logger = logging.getLogger(__name__)


def load_service_account(raw: Optional[str]) -> Dict[str, Any]:
    """Parse the service account JSON supplied through the environment"""
    if not raw or not raw.strip():
        raise RuntimeError("FIREBASE_SERVICE_ACCOUNT environment variable is required")
    try:
        account = json.loads(raw)
    except ValueError as e:
        raise RuntimeError(f"FIREBASE_SERVICE_ACCOUNT is not valid JSON: {e}") from e
    if not isinstance(account, dict):
        raise RuntimeError("FIREBASE_SERVICE_ACCOUNT must be a JSON object")
    return account


def init_firestore(settings: Settings):
    """Initialise the firebase app once and return a Firestore client.

    Raises RuntimeError when credentials are missing, so the process refuses
    to start instead of failing on the first request.
    """
    account = load_service_account(settings.FIREBASE_SERVICE_ACCOUNT)
    try:
        firebase_app = firebase_admin.get_app()
        logger.info("Reusing existing firebase app")
    except ValueError:
        cred = credentials.Certificate(account)
        firebase_app = firebase_admin.initialize_app(cred)
        logger.info(f"Firebase app initialised for project {account.get('project_id')}")
    return firestore.client(firebase_app)
