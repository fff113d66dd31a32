from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "BudgetCare"
    API_VERSION: str = "v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Storage settings
    STORAGE_BACKEND: str = "memory"  # "memory" or "sql"
    DB_URL: Optional[str] = None  # Optional full DB URL, in-memory SQLite otherwise
    SEED_RESERVATIONS: bool = True

    # Mock authentication settings
    LOGIN_DELAY_MS: int = 600
    DEMO_EMAIL: str = "finance@solidcam.org"
    DEMO_PASSWORD: str = "BudgetCare!23"
    DEMO_USER_NAME: str = "Agnès Mbarga"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        validate_default = True

    @property
    def sync_db_url(self) -> str:
        """Get synchronous database URL."""
        if self.DB_URL:
            return self.DB_URL
        return "sqlite://"


@lru_cache()
def get_settings() -> Settings:
    """
    Returns cached Settings instance to avoid reloading .env file on every access
    """
    return Settings()
