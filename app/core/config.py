"""
Application configuration.
Values come from environment variables or a local .env file. Everything has
a development default so the API boots against a local SQLite database
without any setup.
"""
import logging
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # PostgreSQL (asyncpg) in production, SQLite (aiosqlite) locally
    DATABASE_URL: str = "sqlite+aiosqlite:///./chat_widget.db"

    # Gemini generative-text backend
    GEMINI_API_KEY: str = ""
    GEMINI_API_URL: str = (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-2.0-flash:generateContent"
    )
    GEMINI_TIMEOUT_SECONDS: float = 10.0

    # Website sync from an upstream admin backend
    SYNC_TIMEOUT_SECONDS: float = 15.0

    class Config:
        env_file = ".env"


settings = Settings()

if not settings.GEMINI_API_KEY:
    logger.info("GEMINI_API_KEY not set; AI fallback answers are disabled.")
