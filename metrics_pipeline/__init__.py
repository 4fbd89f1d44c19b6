"""In-process metrics collection pipeline."""

__version__ = "0.1.0"
