"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent

VALID_STRATEGIES = {"frontier", "branching"}
VALID_BRANCHING_MODES = {"bounded", "unbounded"}


class Settings(BaseSettings):
    """Application settings loaded from MAZE_RUNNER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MAZE_RUNNER_",
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Maze Runner"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "WARNING"

    # Exploration
    strategy: str = "frontier"
    worker_count: int = Field(5, ge=1)
    branching_mode: str = "bounded"
    max_branch_workers: int = Field(8, ge=1)
    step_delay_ms: int = Field(20, ge=0)  # visualization throttle per claim
    poll_interval_ms: int = Field(1, ge=0)
    api_allow_unbounded: bool = False  # thread per branch point on API requests

    # Display
    display_enabled: bool = True

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://localhost:8080"

    @field_validator("strategy")
    @classmethod
    def validate_strategy(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_STRATEGIES:
            raise ValueError(
                f"Invalid strategy '{v}'. "
                f"Must be one of: {', '.join(sorted(VALID_STRATEGIES))}"
            )
        return v

    @field_validator("branching_mode")
    @classmethod
    def validate_branching_mode(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_BRANCHING_MODES:
            raise ValueError(
                f"Invalid branching mode '{v}'. "
                f"Must be one of: {', '.join(sorted(VALID_BRANCHING_MODES))}"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{v}'")
        return v

    @property
    def step_delay(self) -> float:
        """Visualization throttle in seconds."""
        return self.step_delay_ms / 1000

    @property
    def poll_interval(self) -> float:
        return self.poll_interval_ms / 1000

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.debug:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
