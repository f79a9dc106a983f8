"""Storefront Client Configuration"""

import os
from pydantic_settings import BaseSettings
from functools import lru_cache
from dotenv import load_dotenv

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "..", "config", ".env"))


class Settings(BaseSettings):
    """Client settings loaded from environment"""

    # Storefront API
    api_base_url: str = "http://localhost:8080"

    # Persisted credentials
    token_storage_path: str = os.path.join(os.path.expanduser("~"), ".greenhaven", "storage.json")
    auth_token_key: str = "authToken"

    # Surface OTPs the server returns inline when email delivery is not configured.
    # Development only.
    demo_otp_enabled: bool = True

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
