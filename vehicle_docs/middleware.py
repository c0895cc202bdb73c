import logging
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class UploadSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject uploads whose declared Content-Length is above the ceiling.

    Runs before the multipart body is parsed, so nothing is spooled to disk.
    The file part itself is checked again while it is read.
    """

    def __init__(self, app, max_bytes: int, paths: Iterable[str], form_overhead: int = 65536):
        super().__init__(app)
        self.max_bytes = max_bytes
        self.paths = set(paths)
        self.form_overhead = form_overhead

    async def dispatch(self, request, call_next):
        if request.method == "POST" and request.url.path in self.paths:
            length = request.headers.get("content-length")
            try:
                size = int(length) if length is not None else None
            except ValueError:
                size = None
            if size is not None and size > self.max_bytes + self.form_overhead:
                logger.error(f"Rejected upload of {size} bytes on {request.url.path}")
                return JSONResponse(
                    status_code=400,
                    content={
                        "message": "File upload error",
                        "error": f"File too large (max {self.max_bytes} bytes)",
                    },
                )
        return await call_next(request)
