"""Pytest fixtures for metrics pipeline tests."""

from collections.abc import Iterator
import logging
from pathlib import Path

import pytest

from metrics_pipeline.config import Settings, get_settings
from metrics_pipeline.lib.logger import DiagnosticFileHandler, configure_logging

# Configure once up front so later calls never replace pytest's capture handlers.
configure_logging()


@pytest.fixture()
def storage_dir(tmp_path: Path) -> Path:
    """Return an isolated storage directory for the test."""

    directory = tmp_path / "storage"
    directory.mkdir()
    return directory


@pytest.fixture()
def output_path(storage_dir: Path) -> Path:
    return storage_dir / "metrics_output.txt"


@pytest.fixture()
def settings(storage_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Settings]:
    """Provide settings rooted in the temporary storage directory."""

    monkeypatch.setenv("METRICS_STORAGE_DIR", str(storage_dir))
    monkeypatch.setenv("METRICS_COLLECT_INTERVAL", "0.05")
    monkeypatch.setenv("METRICS_SIMULATION_DURATION", "0")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture()
def test_logger() -> logging.Logger:
    """Return a logger injected into components under test."""

    return logging.getLogger("tests.metrics_pipeline")


@pytest.fixture(autouse=True)
def detach_diagnostic_sinks() -> Iterator[None]:
    """Remove diagnostic file handlers attached to the root logger during a test."""

    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, DiagnosticFileHandler):
            root.removeHandler(handler)
            handler.close()
