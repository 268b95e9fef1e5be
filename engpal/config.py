"""
Configuration management using Pydantic Settings
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Gemini API (required - startup fails without it)
    GEMINI_API_KEY: str
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GEMINI_REVIEW_MODEL: str = "gemini-2.0-flash"
    GEMINI_TIMEOUT_SECONDS: float = 60.0

    # Cache
    CACHE_BACKEND: str = "memory"  # memory | redis
    REDIS_URL: Optional[str] = None
    REVIEW_CACHE_TTL: int = 3600  # 1 hour
    ASSIGNMENT_CACHE_TTL: int = 600  # 10 minutes

    # Application
    APP_NAME: str = "EngPal API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080"]

    # Review limits
    REVIEW_MIN_WORDS: int = 10
    REVIEW_MAX_WORDS: int = 1000

    # Assignment limits
    ASSIGNMENT_TOPIC_MAX_WORDS: int = 10
    MIN_QUESTIONS: int = 1
    MAX_QUESTIONS: int = 50
    SUGGESTED_TOPIC_COUNT: int = 5

    # Chatbot limits
    CHATBOT_MAX_WORDS: int = 30

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
