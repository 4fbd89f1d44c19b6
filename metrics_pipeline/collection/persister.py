"""Background writer appending snapshots to a timestamped metrics log."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable, TextIO

from metrics_pipeline.collection.handoff import HandoffQueue
from metrics_pipeline.collection.schemas import Snapshot, format_line
from metrics_pipeline.lib.logger import get_logger


class PersisterOpenError(RuntimeError):
    """Raised when the metrics output file cannot be opened."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to open metrics output file '{path}': {reason}")
        self.path = path


class Persister:
    """Own the output file and the single worker thread draining the hand-off queue.

    The file is opened on the constructing thread so that an unusable path fails
    immediately; the worker is only started once the handle is open. ``close()``
    drains every snapshot queued before it was called, joins the worker and
    then closes the file. There is no timeout on that join.
    """

    def __init__(
        self,
        path: Path | str,
        *,
        logger: logging.Logger | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._path = Path(path)
        self._logger = logger or get_logger(__name__)
        self._clock = clock or datetime.now
        self._queue = HandoffQueue()
        self._close_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._closed = False
        self.lines_written = 0
        self.failed_writes = 0

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._file: TextIO = self._path.open("a", encoding="utf-8")
        except OSError as exc:
            self._logger.error("Failed to open metrics output file %s: %s", self._path, exc)
            raise PersisterOpenError(self._path, str(exc)) from exc

        self._thread = threading.Thread(target=self._run, name="metrics-persister", daemon=True)
        self._thread.start()
        self._logger.info("Metrics persister started for %s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, snapshot: Snapshot) -> None:
        """Queue ``snapshot`` for the worker; never touches the file."""

        with self._state_lock:
            if self._closed:
                raise RuntimeError("Persister is closed")
            self._queue.push(snapshot)

    def pending(self) -> int:
        return len(self._queue)

    def close(self) -> None:
        """Stop the queue, wait for the worker to drain it, then close the file."""

        with self._close_lock:
            with self._state_lock:
                if self._closed:
                    return
                self._closed = True
                self._queue.stop()
            self._thread.join()
            self._file.close()
        self._logger.info(
            "Metrics persister stopped for %s",
            self._path,
            extra={"lines_written": self.lines_written, "failed_writes": self.failed_writes},
        )

    def __enter__(self) -> "Persister":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _run(self) -> None:
        while True:
            snapshot = self._queue.wait_and_pop()
            if snapshot is None:
                if self._queue.stopped:
                    break
                continue
            if snapshot.is_empty:
                self._logger.debug("Skipping empty snapshot")
                continue
            self._append(snapshot)

    def _append(self, snapshot: Snapshot) -> None:
        # Any failure here drops this line only; the worker must outlive it.
        try:
            line = format_line(snapshot, self._clock())
            self._file.write(line)
            self._file.flush()
        except Exception:
            self.failed_writes += 1
            self._logger.exception("Failed to append metrics line to %s", self._path)
            return
        self.lines_written += 1
