from pydantic import BaseModel

class UploadResponse(BaseModel):
    message: str
    path: str  # public path served under /documents
