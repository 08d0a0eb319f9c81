"""Configuration management for the application."""
import logging
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration class."""

    VERSION = "0.3.0"

    # Environment
    ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")  # development, production
    ALLOWED_ORIGINS = os.environ.get("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:8501").split(",")

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.environ.get("LOG_FILE")

    # Explorer -> API
    API_URL = os.environ.get("API_URL", "http://localhost:8000")
    REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "5"))

    # Input limits
    MAX_NOTES_LENGTH = 1000

    @classmethod
    def log_level(cls) -> int:
        level = logging.getLevelName(cls.LOG_LEVEL)
        return level if isinstance(level, int) else logging.INFO

    @classmethod
    def cors_origins(cls):
        if cls.ENVIRONMENT == "production":
            return [origin.strip() for origin in cls.ALLOWED_ORIGINS if origin.strip()]
        return ["*"]
