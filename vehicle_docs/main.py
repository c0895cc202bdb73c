# vehicle_docs/main.py
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from vehicle_docs.api import router as api_router
from vehicle_docs.core.config import settings
from vehicle_docs.database import init_firestore
from vehicle_docs.exceptions import VehicleDocsError
from vehicle_docs.middleware import UploadSizeLimitMiddleware
from vehicle_docs.repositories.vehicle_repo import VehicleRepository

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Stored documents root; it must exist before StaticFiles is mounted
documents_path = Path(settings.DOCUMENTS_ROOT).resolve()
if not documents_path.exists():
    documents_path.mkdir(parents=True, exist_ok=True)
    logger.info(f"Created documents directory: {documents_path}")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request and turns unhandled errors into a JSON 500
    """

    async def dispatch(self, request: Request, call_next):
        logger.info(f"Request: {request.method} {request.url}")
        try:
            return await call_next(request)
        except Exception:
            logger.exception(f"Unexpected error on {request.method} {request.url.path}")
            return JSONResponse(
                status_code=500,
                content={"error": "Internal server error"}
            )


UPLOAD_PATH = f"{settings.API_PREFIX}/upload"


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Vehicle document uploads and condition records",
    version="1.0.0"
)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    UploadSizeLimitMiddleware,
    max_bytes=settings.MAX_UPLOAD_SIZE,
    paths=[UPLOAD_PATH],
    form_overhead=settings.UPLOAD_FORM_OVERHEAD,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


@app.exception_handler(VehicleDocsError)
async def vehicle_docs_error_handler(request: Request, exc: VehicleDocsError):
    logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.error(f"Invalid request on {request.url.path}: {details}")
    if request.url.path == UPLOAD_PATH:
        return JSONResponse(
            status_code=400,
            content={"message": "File upload error", "error": details},
        )
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": details},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # bad multipart bodies and unknown files end up here
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.on_event("startup")
async def init_document_store():
    """Connect to the document store; missing credentials stop the process"""
    db = init_firestore(settings)
    app.state.vehicle_repository = VehicleRepository(db, settings.VEHICLES_COLLECTION)
    logger.info(f"Server is running on port {settings.PORT}")
    logger.info(f"Documents directory: {documents_path}")
    logger.info(f"Vehicles collection: {settings.VEHICLES_COLLECTION}")


# Health check endpoint for Docker
@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration"""
    return {"status": "healthy", "message": "Vehicle Documents API is running"}

# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": settings.PROJECT_NAME,
        "version": "1.0.0",
        "status": "running",
        "health_check": "/health"
    }

app.include_router(api_router, prefix=settings.API_PREFIX)

# Serve stored documents
app.mount(settings.DOCUMENTS_URL_PREFIX, StaticFiles(directory=str(documents_path)), name="documents")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.PORT)
