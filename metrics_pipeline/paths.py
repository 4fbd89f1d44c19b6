"""Shared filesystem paths for the metrics pipeline."""

from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
STORAGE_DIR = BASE_DIR / "storage"
DEFAULT_OUTPUT_FILE = "metrics_output.txt"
DEFAULT_DIAGNOSTIC_LOG_FILE = "metrics.log"
