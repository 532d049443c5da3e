"""
Application configuration
Read from environment variables and an optional .env file
"""
from typing import List
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Hotel Reservations"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str = "sqlite:///./hotelres.db"

    # JWT
    SECRET_KEY: str = "hotelres-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Avatar storage
    AVATAR_DIR: str = "./avatars"
    AVATAR_BASE_URL: str = "/avatars"
    AVATAR_MAX_BYTES: int = 2 * 1024 * 1024

    # Display-only stay times
    CHECK_IN_TIME: str = "15:00"
    CHECK_OUT_TIME: str = "12:00"

    model_config = ConfigDict(env_file=".env", case_sensitive=True)


# Global settings instance
settings = Settings()
