"""
Configuration management for the NU Schedule application.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Application
    app_name: str = "NU Schedule API"
    debug: bool = False
    version: str = "1.0.0"

    # Database
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "scheduler"
    db_user: str = "postgres"
    db_password: str = ""

    # Seeding
    seed_csv_path: Path = PACKAGE_ROOT / "data" / "school_schedule_by_term.csv"
    seed_on_startup: bool = True
    reset_db_on_start: bool = False
    professor_email_domain: str = "nu.edu.kz"

    # Auth
    student_email_domain: str = "@nu.edu.kz"
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24

    # Cache (disabled when unset)
    redis_url: Optional[str] = None

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    cors_origins: List[str] = [
        "*",
        "http://localhost:8080",
        "http://127.0.0.1:8080",
    ]

    @model_validator(mode="after")
    def assemble_db_connection(self) -> "Settings":
        if not self.database_url:
            self.database_url = (
                f"postgresql://{self.db_user}:{self.db_password}"
                f"@{self.db_host}:{self.db_port}/{self.db_name}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
