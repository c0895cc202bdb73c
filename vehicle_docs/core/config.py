from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # Base settings
    PROJECT_NAME: str = "Vehicle Documents API"
    API_PREFIX: str = "/api"

    # Logging settings
    LOG_LEVEL: str = "INFO"

    # API settings
    API_HOST: str = "0.0.0.0"
    PORT: int = 8080
    FRONTEND_URL: str = "http://localhost:3000"
    CORS_ALLOW_METHODS: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    CORS_ALLOW_HEADERS: List[str] = ["Content-Type", "Authorization"]

    # Storage settings
    DOCUMENTS_ROOT: str = "public/documents"
    DOCUMENTS_URL_PREFIX: str = "/documents"
    MAX_UPLOAD_SIZE: int = 10485760  # 10MB
    UPLOAD_FORM_OVERHEAD: int = 65536  # room for form fields and multipart headers

    # Document store settings
    FIREBASE_SERVICE_ACCOUNT: Optional[str] = None  # service account JSON
    VEHICLES_COLLECTION: str = "vehicles"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()

def get_settings() -> Settings:
    return settings
