"""Collection package: instruments, hand-off queue, persister and collector."""

from metrics_pipeline.collection.collector import Collector
from metrics_pipeline.collection.handoff import HandoffQueue
from metrics_pipeline.collection.instruments import Counter, Gauge, Instrument
from metrics_pipeline.collection.persister import Persister, PersisterOpenError
from metrics_pipeline.collection.scheduler import CollectionScheduler
from metrics_pipeline.collection.schemas import Snapshot, SnapshotEntry

__all__ = [
    "CollectionScheduler",
    "Collector",
    "Counter",
    "Gauge",
    "HandoffQueue",
    "Instrument",
    "Persister",
    "PersisterOpenError",
    "Snapshot",
    "SnapshotEntry",
]
