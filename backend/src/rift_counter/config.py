"""Application configuration via pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SOURCE_WEIGHTS = {
    "WildRiftFire": 1.0,
    "WR-META": 0.9,
    "WildRiftGuides": 0.8,
    "Community": 0.6,
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Knowledge directory with champion/item/build JSON (empty = repo knowledge/)
    knowledge_dir: str = ""

    @computed_field
    @property
    def knowledge_path(self) -> Path:
        """Resolve the knowledge directory, relative paths from the repo root."""
        repo_root = Path(__file__).parents[3]
        if not self.knowledge_dir:
            return repo_root / "knowledge"
        path = Path(self.knowledge_dir)
        return path if path.is_absolute() else repo_root / path

    # Analysis cache
    cache_enabled: bool = True
    cache_ttl_seconds: int = 1800

    # Counter picks
    default_counter_limit: int = 5
    max_counter_limit: int = 10

    # Source trust weights, 0-1 (env var: SOURCE_WEIGHTS as JSON)
    source_weights: dict[str, float] = DEFAULT_SOURCE_WEIGHTS

    # Patch reported until the refresh trigger says otherwise
    patch_version: str = "5.4"
    patch_date: str = "2025-12-01"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
