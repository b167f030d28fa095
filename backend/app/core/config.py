# backend/app/core/config.py
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    PROJECT_NAME: str = "Kerala Map Data"
    API_V1_STR: str = "/api/v1"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Static file server hosting the CSV files
    DATA_BASE_URL: str = "http://localhost:5173"

    LOAD_RETRIES: int = 3
    LOAD_TIMEOUT_MS: int = 30000  # per attempt
    RETRY_BACKOFF_MS: int = 1000  # delay = backoff * attempt
    PRELOAD_ON_STARTUP: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """
    Single Settings instance reused by the whole application.
    """
    return Settings()
