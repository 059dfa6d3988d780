"""
Application Configuration
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Application Settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra='ignore'
    )

    # App Configuration
    APP_NAME: str = "Resume Manager"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./resume_manager.db"
    AUTO_CREATE_TABLES: bool = False

    # Redis Configuration (revoked access tokens)
    REDIS_URL: str = "redis://localhost:6379/0"

    # JWT Configuration
    JWT_SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    JWT_REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    CONFIRMATION_TOKEN_EXPIRE_HOURS: int = 24

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080"]

    # Blob Storage
    STORAGE_DIR: str = "/app/storage"
    DOCUMENTS_BUCKET: str = "documents"
    GENERATED_BUCKET: str = "generated-resumes"
    MAX_UPLOAD_SIZE: int = 10485760  # 10MB
    ALLOWED_EXTENSIONS: str = "pdf,doc,docx,txt,png,jpg,jpeg"
    ORPHAN_GRACE_MINUTES: int = 60

    # Extraction / export worker
    WORKER_API_TOKEN: Optional[str] = None

    @property
    def allowed_extensions(self) -> List[str]:
        return [ext.strip().lower() for ext in self.ALLOWED_EXTENSIONS.split(",") if ext.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
