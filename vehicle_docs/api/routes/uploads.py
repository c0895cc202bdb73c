import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from vehicle_docs.core.config import Settings, get_settings
from vehicle_docs.exceptions import StorageIOError, UploadTransportError, ValidationError
from vehicle_docs.schemas.meta import UploadErrorResponse
from vehicle_docs.schemas.uploads import UploadResponse
from vehicle_docs.storage import read_upload_limited, store_document, validate_segment

logger = logging.getLogger(__name__)

router = APIRouter()


def _upload_error(status_code: int, message: str, error: str) -> JSONResponse:
    body = UploadErrorResponse(message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": UploadErrorResponse}, 500: {"model": UploadErrorResponse}},
)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    vehicle_id: Optional[str] = Form(None, alias="vehicleId"),
    doc_type: Optional[str] = Form(None, alias="type"),
    settings: Settings = Depends(get_settings),
):
    """Store one vehicle document under documents/{vehicleId}/{type}/"""
    logger.info(
        f"Processing upload request: vehicleId={vehicle_id}, type={doc_type}, "
        f"file={file.filename if file else None}"
    )

    if not (vehicle_id or "").strip() or not (doc_type or "").strip():
        logger.error(f"Missing required fields: vehicleId={vehicle_id}, type={doc_type}")
        return _upload_error(400, "Missing required fields", "vehicleId and type are required")

    try:
        vehicle_id = validate_segment(vehicle_id, "vehicleId")
        doc_type = validate_segment(doc_type, "type")
    except ValidationError as e:
        logger.error(f"Rejected upload destination: {e.message}")
        return _upload_error(400, "Invalid upload destination", e.message)

    if file is None:
        logger.error("No file in request")
        return _upload_error(400, "No file uploaded", "File is required")

    try:
        content = await read_upload_limited(file, settings.MAX_UPLOAD_SIZE)
        stored = await run_in_threadpool(
            store_document,
            settings.DOCUMENTS_ROOT,
            vehicle_id,
            doc_type,
            file.filename,
            content,
            settings.DOCUMENTS_URL_PREFIX,
        )
    except UploadTransportError as e:
        logger.error(f"File upload error: {e.message}")
        return _upload_error(e.status_code, "File upload error", e.message)
    except StorageIOError as e:
        logger.error(f"Upload error: {e.message}")
        return _upload_error(e.status_code, "Upload error", e.message)
    except Exception as e:
        logger.exception(f"Error processing upload: {e}")
        return _upload_error(500, "Error processing upload", "Unexpected server error")
    finally:
        await file.close()

    logger.info(f"File uploaded successfully: vehicleId={vehicle_id}, type={doc_type}, filename={stored.filename}, size={stored.size}")
    return UploadResponse(message="File uploaded successfully", path=stored.path)
