from fastapi import APIRouter
from .routes import uploads, vehicles

router = APIRouter()

# Include all route modules
router.include_router(uploads.router, prefix="", tags=["uploads"])
router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
