from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from the environment or a `.env` file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    APP_NAME: str = "Inventario API"
    DATABASE_URL: str = "sqlite:///./inventario.db"
    SQL_ECHO: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 2003
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = ["*"]
    STATIC_DIR: str = "public"


@lru_cache
def get_settings() -> Settings:
    return Settings()
