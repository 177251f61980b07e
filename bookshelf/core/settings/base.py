from typing import List

from pydantic_settings import BaseSettings as PydanticBaseSettings


class BaseSettings(PydanticBaseSettings):
    # ===============================
    # APPLICATION SETTINGS
    # ===============================
    PROJECT_NAME: str = "Bookshelf API"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = (
        "Personal library tracking: reading sessions, re-reads, notes, "
        "collections and reading statistics"
    )

    # ===============================
    # API SETTINGS
    # ===============================
    API_V1_STR: str = "/api/v1"

    # ===============================
    # AUTH (external identity provider tokens)
    # ===============================
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"

    # ===============================
    # PAGINATION SETTINGS
    # ===============================
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # ===============================
    # STATISTICS
    # ===============================
    STATS_TIMELINE_MONTHS: int = 12
    STATS_COVER_SAMPLE: int = 20

    # ===============================
    # LOGGING SETTINGS
    # ===============================
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    BACKEND_CORS_ORIGINS: List[str] = []

    # ===============================
    # COMPUTED PROPERTIES
    # ===============================
    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "testing"

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
