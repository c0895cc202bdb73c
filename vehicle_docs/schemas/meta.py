from pydantic import BaseModel
from typing import Optional

class MessageResponse(BaseModel):
    message: str

class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None

class UploadErrorResponse(BaseModel):
    message: str
    error: str
