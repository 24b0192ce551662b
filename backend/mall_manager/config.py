"""
Application settings, read from environment variables (and an optional .env file).
DATABASE picks the SQLite file under db/; DATABASE_URL overrides it entirely.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database: str = "development"
    database_url: Optional[str] = None
    database_echo: bool = False

    # API
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Logging
    log_level: str = "INFO"

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_postgres_url(cls, v: Optional[str]) -> Optional[str]:
        """Heroku-style postgres:// URLs are rejected by SQLAlchemy."""
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @property
    def database_path(self) -> Path:
        return PROJECT_ROOT / "db" / f"{self.database}.sqlite3"

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.database_path}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
