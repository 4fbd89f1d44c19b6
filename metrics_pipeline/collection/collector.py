"""Collector owning the instrument registry and its persister."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable

from metrics_pipeline.collection.instruments import Instrument
from metrics_pipeline.collection.persister import Persister
from metrics_pipeline.collection.schemas import Snapshot
from metrics_pipeline.lib.logger import get_logger


class Collector:
    """Snapshot-and-reset every registered instrument and hand the result to a persister.

    Registration order defines snapshot order. Each instrument is read and reset
    under its own lock, so an update is reported by exactly one cycle. Nothing
    makes a cycle atomic across instruments: an update to a later instrument that
    lands while earlier ones are being collected is reported in this cycle.
    """

    def __init__(
        self,
        output_path: Path | str,
        *,
        logger: logging.Logger | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._logger = logger or get_logger(__name__)
        self._metrics: list[Instrument] = []
        self._lock = threading.Lock()
        self._persister = Persister(output_path, logger=self._logger, clock=clock)

    @property
    def persister(self) -> Persister:
        return self._persister

    @property
    def metrics(self) -> tuple[Instrument, ...]:
        with self._lock:
            return tuple(self._metrics)

    def add_metric(self, instrument: Instrument) -> None:
        """Register ``instrument``; duplicate names are not rejected."""

        with self._lock:
            self._metrics.append(instrument)
        self._logger.debug("Registered instrument %s", instrument.name)

    def collect_and_write(self) -> Snapshot:
        """Run one collection cycle and queue its snapshot for persistence."""

        with self._lock:
            snapshot = Snapshot.from_pairs((metric.name, metric.collect()) for metric in self._metrics)
        self._persister.write(snapshot)
        return snapshot

    def values(self) -> dict[str, str]:
        """Return current formatted values in registration order without resetting them.

        Instruments sharing a name report the value of the last one registered.
        """

        with self._lock:
            return {metric.name: metric.get_value_as_string() for metric in self._metrics}

    def close(self) -> None:
        """Flush pending snapshots and release the output file."""

        self._persister.close()

    def __enter__(self) -> "Collector":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
