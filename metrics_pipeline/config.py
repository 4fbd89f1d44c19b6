"""Pipeline configuration loading via Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from metrics_pipeline.paths import DEFAULT_DIAGNOSTIC_LOG_FILE, DEFAULT_OUTPUT_FILE, STORAGE_DIR


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    storage_dir: Path = Field(default=STORAGE_DIR, alias="METRICS_STORAGE_DIR")
    output_file: Path = Field(default=Path(DEFAULT_OUTPUT_FILE), alias="METRICS_OUTPUT_FILE")
    diagnostic_log_file: Path = Field(
        default=Path(DEFAULT_DIAGNOSTIC_LOG_FILE), alias="METRICS_DIAGNOSTIC_LOG"
    )
    collect_interval_seconds: float = Field(default=1.0, gt=0, alias="METRICS_COLLECT_INTERVAL")
    simulation_duration_seconds: int = Field(default=6, ge=0, alias="METRICS_SIMULATION_DURATION")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO", alias="METRICS_LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def output_path(self) -> Path:
        """Return the metrics output file, resolved against the storage directory."""

        return self._resolve(self.output_file)

    @property
    def diagnostic_log_path(self) -> Path:
        return self._resolve(self.diagnostic_log_file)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.storage_dir / path


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    settings = Settings()
    settings.storage_dir.mkdir(parents=True, exist_ok=True)
    return settings
