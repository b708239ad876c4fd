"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from connexe.core.maze_generator import GenerationAlgorithm

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from CONNEXE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CONNEXE_",
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Connexe"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "WARNING"

    # Maze generation
    default_rows: int = Field(10, gt=0)
    default_cols: int = Field(10, gt=0)
    default_seed: Optional[int] = None  # random seed per game when unset
    default_algorithm: GenerationAlgorithm = GenerationAlgorithm.KRUSKAL
    chaos_probability: float = Field(0.0, ge=0.0, le=1.0)  # 0 keeps mazes perfect

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level and reject unknown names."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def effective_log_level(self) -> str:
        """Log level to configure, forced to DEBUG in debug mode."""
        return "DEBUG" if self.debug else self.log_level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
