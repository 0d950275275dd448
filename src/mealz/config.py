"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Application settings loaded from environment variables (prefix MEALZ_)."""

    model_config = SettingsConfigDict(
        env_prefix="MEALZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # HTTP API
    host: str = "127.0.0.1"
    port: int = 8000
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    # Plan generation
    random_seed: int | None = Field(
        default=None, description="Fixed shuffle seed; unset means OS entropy"
    )
    default_number_of_meals: int = Field(default=7, ge=0)

    # Optional JSON file used to seed the (volatile) card store at startup
    cards_file: Path | None = None

    @property
    def origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
