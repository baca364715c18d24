"""Service settings."""

from typing import Set

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Service settings loaded from environment variables."""

    # Comma-separated; empty accepts every request
    api_keys: str = ""
    cors_origins: str = "*"

    # Limits
    max_samples: int = 20000
    max_events_per_frame: int = 64

    # Logging
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_prefix = "INKSTABLE_"

    def get_valid_api_keys(self) -> Set[str]:
        if not self.api_keys:
            return set()
        return {key.strip() for key in self.api_keys.split(",") if key.strip()}

    def get_cors_origins(self) -> list[str]:
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
