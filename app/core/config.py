# app/core/config.py
"""Application configuration management."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./contatos.db"
    db_echo: bool = False

    # Application
    app_name: str = "Contatos"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Access log, relative to the working directory unless absolute
    access_log_path: Path = Path("access.log")

    templates_dir: Path = TEMPLATES_DIR


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
