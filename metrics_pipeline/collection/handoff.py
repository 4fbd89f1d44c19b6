"""Unbounded FIFO handing snapshots from the collecting thread to the persister."""

from __future__ import annotations

import threading
from collections import deque

from metrics_pipeline.collection.schemas import Snapshot


class HandoffQueue:
    """FIFO of pending snapshots with blocking consumption and a one-way stop flag.

    Items pushed before (or after) ``stop()`` stay retrievable; ``wait_and_pop``
    only reports ``None`` once the queue is both stopped and empty.
    """

    def __init__(self) -> None:
        self._items: deque[Snapshot] = deque()
        self._condition = threading.Condition(threading.Lock())
        self._stopped = False

    def push(self, snapshot: Snapshot) -> None:
        """Append ``snapshot`` and wake one waiting consumer."""

        with self._condition:
            self._items.append(snapshot)
            self._condition.notify()

    def try_pop(self) -> Snapshot | None:
        """Return the head item, or ``None`` immediately when empty."""

        with self._condition:
            if not self._items:
                return None
            return self._items.popleft()

    def wait_and_pop(self) -> Snapshot | None:
        """Block until an item is available or the queue is stopped.

        Returns ``None`` only when stopped and empty.
        """

        with self._condition:
            self._condition.wait_for(lambda: self._items or self._stopped)
            if not self._items:
                return None
            return self._items.popleft()

    def stop(self) -> None:
        """Set the stop flag and wake every waiter. Safe to call repeatedly."""

        with self._condition:
            self._stopped = True
            self._condition.notify_all()

    @property
    def stopped(self) -> bool:
        with self._condition:
            return self._stopped

    def __len__(self) -> int:
        with self._condition:
            return len(self._items)
