from .base import BaseSettings


class TestingSettings(BaseSettings):
    ENVIRONMENT: str = "testing"
    DEBUG: bool = False

    PROJECT_NAME: str = "Bookshelf API - Testing"

    DATABASE_URL: str = "sqlite:///:memory:"
    DATABASE_ECHO: bool = False

    SUPABASE_JWT_SECRET: str = "testing-jwt-secret-not-for-real-use-0123456789"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    LOG_LEVEL: str = "WARNING"
