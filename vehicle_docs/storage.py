# vehicle_docs/storage.py
import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, Union

from fastapi import UploadFile

from vehicle_docs.exceptions import StorageIOError, UploadTooLargeError, ValidationError

logger = logging.getLogger(__name__)

SAFE_CHARS = "-_.() abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
SEGMENT_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")
CHUNK_SIZE = 1024 * 1024


@dataclass
class StoredDocument:
    path: str  # public path, e.g. /documents/v1/insurance/1700000000000-card.pdf
    filename: str
    size: int
    abs_path: Path


def validate_segment(value: Optional[str], field: str) -> str:
    """Check a caller supplied identifier is usable as one directory name"""
    if not value or not value.strip():
        raise ValidationError(f"{field} is required")
    value = value.strip()
    if not SEGMENT_PATTERN.match(value):
        raise ValidationError(
            f"{field} may only contain letters, digits, '-', '_' and '.', and must start with a letter or digit"
        )
    return value


def safe_filename(name: Optional[str]) -> str:
    # drop any directory part, client side paths included
    base = re.split(r"[\\/]", name or "")[-1]
    base = ''.join(c for c in base if c in SAFE_CHARS).strip().lstrip(".")
    return base or "file"


def build_stored_name(original_name: Optional[str], timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{timestamp_ms}-{safe_filename(original_name)}"


def ensure_upload_dir(root: Union[str, Path], vehicle_id: str, doc_type: str) -> Path:
    """Resolve documents/{vehicle_id}/{doc_type} under root and create it if absent"""
    abs_dir = Path(root) / vehicle_id / doc_type
    try:
        abs_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Could not create upload directory {abs_dir}: {e}")
        raise StorageIOError("Could not prepare upload directory") from e
    return abs_dir


async def read_upload_limited(upload: UploadFile, max_bytes: int) -> bytes:
    """Read the upload in chunks, stopping as soon as it passes max_bytes"""
    chunks = []
    total = 0
    while True:
        chunk = await upload.read(CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise UploadTooLargeError(f"File too large (max {max_bytes} bytes)")
        chunks.append(chunk)
    return b"".join(chunks)


def store_document(
    root: Union[str, Path],
    vehicle_id: str,
    doc_type: str,
    original_name: Optional[str],
    content: bytes,
    url_prefix: str = "/documents",
) -> StoredDocument:
    """Persist content as {timestamp}-{name} and return its public path"""
    vehicle_id = validate_segment(vehicle_id, "vehicleId")
    doc_type = validate_segment(doc_type, "type")

    abs_dir = ensure_upload_dir(root, vehicle_id, doc_type)
    unique_name = build_stored_name(original_name)
    abs_path = abs_dir / unique_name
    try:
        abs_path.write_bytes(content)
    except OSError as e:
        logger.error(f"Could not write {abs_path}: {e}")
        raise StorageIOError("Could not write file") from e

    # public paths always use forward slashes
    rel_path = str(PurePosixPath(url_prefix) / vehicle_id / doc_type / unique_name)
    logger.info(f"[UPLOAD] wrote={abs_path} ({len(content)} bytes) rel='{rel_path}'")
    return StoredDocument(path=rel_path, filename=unique_name, size=len(content), abs_path=abs_path)
