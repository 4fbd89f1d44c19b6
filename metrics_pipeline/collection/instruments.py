"""Thread-safe numeric instruments updated by producer threads."""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable


@runtime_checkable
class Instrument(Protocol):
    """Capability set shared by every instrument stored in a collector registry."""

    @property
    def name(self) -> str: ...

    def get_value_as_string(self) -> str: ...

    def reset(self) -> None: ...

    def collect(self) -> str: ...


class Gauge:
    """Floating-point instrument; each update replaces the stored value."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._lock = threading.Lock()
        self._value = 0.0

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> float:
        with self._lock:
            return self._value

    def update(self, value: float) -> None:
        with self._lock:
            self._value = float(value)

    def get_value_as_string(self) -> str:
        with self._lock:
            return _format_gauge(self._value)

    def reset(self) -> None:
        with self._lock:
            self._value = 0.0

    def collect(self) -> str:
        """Return the formatted value and reset it within one critical section."""

        with self._lock:
            current, self._value = self._value, 0.0
        return _format_gauge(current)

    def __repr__(self) -> str:
        return f"Gauge(name={self._name!r})"


class Counter:
    """Integer instrument accumulating increments until the next reset.

    Negative increments are accepted as-is.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._lock = threading.Lock()
        self._value = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self, value: int = 1) -> None:
        with self._lock:
            self._value += value

    def get_value_as_string(self) -> str:
        with self._lock:
            return str(self._value)

    def reset(self) -> None:
        with self._lock:
            self._value = 0

    def collect(self) -> str:
        """Return the formatted value and reset it within one critical section."""

        with self._lock:
            current, self._value = self._value, 0
        return str(current)

    def __repr__(self) -> str:
        return f"Counter(name={self._name!r})"


def _format_gauge(value: float) -> str:
    return f"{value:.2f}"
