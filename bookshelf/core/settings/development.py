from typing import List

from .base import BaseSettings


class DevelopmentSettings(BaseSettings):
    # ===============================
    # ENVIRONMENT SETTINGS
    # ===============================
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    PROJECT_NAME: str = "Bookshelf API - Development"
    VERSION: str = "1.0.0-dev"

    # ===============================
    # DATABASE SETTINGS
    # ===============================
    DATABASE_URL: str = "sqlite:///./bookshelf.db"
    DATABASE_ECHO: bool = False

    # ===============================
    # SECURITY SETTINGS
    # ===============================
    # Local stand-in for the identity provider's JWT secret
    SUPABASE_JWT_SECRET: str = (
        "development-jwt-secret-please-change-in-production-environment"
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # ===============================
    # CORS SETTINGS
    # ===============================
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    LOG_LEVEL: str = "DEBUG"

    model_config = {
        "case_sensitive": True,
        "env_file": ".env.dev",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
