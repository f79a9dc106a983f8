"""Store API Configuration"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "GreenHaven Store API"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    # Plant catalog service
    plant_api_url: str = "https://greenhevaven.netlify.app/.netlify/functions/api"

    # Cart used by callers that send no session-id header
    default_session_key: str = "default"

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
