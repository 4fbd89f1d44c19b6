"""Pydantic schemas for collection snapshots and their persisted line format."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field


class SnapshotEntry(BaseModel):
    """A single instrument reading captured during a collection cycle."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class Snapshot(BaseModel):
    """Ordered, immutable capture of every registered instrument for one cycle."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[SnapshotEntry, ...] = Field(default_factory=tuple)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "Snapshot":
        return cls(entries=tuple(SnapshotEntry(name=name, value=value) for name, value in pairs))

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def pairs(self) -> list[tuple[str, str]]:
        return [(entry.name, entry.value) for entry in self.entries]


def format_timestamp(moment: datetime) -> str:
    """Render ``YYYY-MM-DD HH:MM:SS.mmm``."""

    return moment.strftime("%Y-%m-%d %H:%M:%S") + f".{moment.microsecond // 1000:03d}"


def format_line(snapshot: Snapshot, moment: datetime) -> str:
    """Render a snapshot as one newline-terminated log line."""

    parts = [format_timestamp(moment)]
    for entry in snapshot.entries:
        parts.append(f'"{entry.name}" {entry.value}')
    return " ".join(parts) + "\n"
