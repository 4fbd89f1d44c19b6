"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from metrics_pipeline.config import Settings


def test_relative_files_resolve_against_storage_dir(settings: Settings, storage_dir: Path) -> None:
    assert settings.storage_dir == storage_dir
    assert settings.output_path == storage_dir / "metrics_output.txt"
    assert settings.diagnostic_log_path == storage_dir / "metrics.log"
    assert settings.collect_interval_seconds == pytest.approx(0.05)


def test_absolute_output_file_is_kept(storage_dir: Path, tmp_path: Path) -> None:
    target = tmp_path / "elsewhere.txt"
    settings = Settings(storage_dir=storage_dir, output_file=target)

    assert settings.output_path == target


def test_interval_must_be_positive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METRICS_COLLECT_INTERVAL", "0")

    with pytest.raises(ValidationError):
        Settings()
