"""Periodic driver calling ``collect_and_write`` on a fixed cadence."""

from __future__ import annotations

import logging
import threading

from metrics_pipeline.collection.collector import Collector
from metrics_pipeline.lib.logger import get_logger


class CollectionScheduler:
    """Run collection cycles from a background thread every ``interval_seconds``."""

    def __init__(
        self,
        collector: Collector,
        interval_seconds: float,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._collector = collector
        self._interval = interval_seconds
        self._logger = logger or get_logger(__name__)
        self._stop_event = threading.Event()
        self._stop_lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._cycles_lock = threading.Lock()
        self._cycles = 0

    @property
    def cycles(self) -> int:
        with self._cycles_lock:
            return self._cycles

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="metrics-scheduler", daemon=True)
        self._thread.start()

    def stop(self, final: bool = True) -> None:
        """Stop the loop; when ``final`` is set run one last cycle afterwards."""

        with self._stop_lock:
            if self._stop_event.is_set():
                return
            self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
        if final:
            self.run_cycle()

    def run_cycle(self) -> None:
        try:
            self._collector.collect_and_write()
        except Exception:
            self._logger.exception("Metrics collection cycle failed")
            return
        with self._cycles_lock:
            self._cycles += 1

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            self.run_cycle()
