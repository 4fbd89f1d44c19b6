"""Synthetic load drivers exercising the collection pipeline end to end."""

from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import dataclass
from pathlib import Path

from metrics_pipeline.collection import Collector, Counter, Gauge
from metrics_pipeline.lib.logger import get_logger

_logger = get_logger(__name__)


@dataclass(frozen=True)
class GaugeProfile:
    name: str
    low: float
    high: float


@dataclass(frozen=True)
class CounterProfile:
    name: str
    low: int
    high: int


GAUGE_PROFILES = (
    GaugeProfile("CPU_usage", 0.0, 8.0),
    GaugeProfile("Memory_usage_GB", 0.0, 16.0),
)
COUNTER_PROFILES = (
    CounterProfile("HTTP_requests_RPS", 0, 150),
    CounterProfile("Server_errors", 0, 5),
)


@dataclass
class SimulationResult:
    output_path: Path
    steps: int
    cycles: int
    instruments: tuple[str, ...]


def simulate_gauge(
    gauge: Gauge,
    low: float,
    high: float,
    steps: int,
    interval_seconds: float,
    *,
    rng: random.Random,
    stop_event: threading.Event,
    logger: logging.Logger | None = None,
) -> None:
    """Replace ``gauge`` with a uniform sample every interval."""

    log = logger or _logger
    for _ in range(steps):
        sample = rng.uniform(low, high)
        gauge.update(sample)
        log.info("%s simulated: %.6f", gauge.name, sample)
        if stop_event.wait(interval_seconds):
            break


def simulate_counter(
    counter: Counter,
    low: int,
    high: int,
    steps: int,
    interval_seconds: float,
    *,
    rng: random.Random,
    stop_event: threading.Event,
    logger: logging.Logger | None = None,
) -> None:
    """Add a uniform integer sample to ``counter`` every interval."""

    log = logger or _logger
    for _ in range(steps):
        sample = rng.randint(low, high)
        counter.increment(sample)
        log.info("%s simulated: %d", counter.name, sample)
        if stop_event.wait(interval_seconds):
            break


def run_simulation(
    output_path: Path | str,
    duration_seconds: float,
    interval_seconds: float = 1.0,
    *,
    seed: int | None = None,
    logger: logging.Logger | None = None,
) -> SimulationResult:
    """Drive synthetic producers for ``duration_seconds`` and collect once per interval.

    After the producers finish a final collection is made and the collector is
    closed, so every cycle is on disk when this returns.
    """

    if interval_seconds <= 0:
        raise ValueError("interval_seconds must be positive")
    log = logger or _logger
    steps = max(int(round(duration_seconds / interval_seconds)), 0)
    stop_event = threading.Event()
    cycles = 0

    with Collector(output_path, logger=log) as collector:
        log.info("Metrics collector initialised with file: %s", output_path)
        threads: list[threading.Thread] = []
        names: list[str] = []

        for index, profile in enumerate(GAUGE_PROFILES):
            gauge = Gauge(profile.name)
            collector.add_metric(gauge)
            names.append(gauge.name)
            threads.append(
                threading.Thread(
                    target=simulate_gauge,
                    args=(gauge, profile.low, profile.high, steps, interval_seconds),
                    kwargs={"rng": _rng(seed, index), "stop_event": stop_event, "logger": log},
                    name=f"simulate-{profile.name}",
                )
            )
        for index, profile in enumerate(COUNTER_PROFILES, start=len(GAUGE_PROFILES)):
            counter = Counter(profile.name)
            collector.add_metric(counter)
            names.append(counter.name)
            threads.append(
                threading.Thread(
                    target=simulate_counter,
                    args=(counter, profile.low, profile.high, steps, interval_seconds),
                    kwargs={"rng": _rng(seed, index), "stop_event": stop_event, "logger": log},
                    name=f"simulate-{profile.name}",
                )
            )
        log.info("All metrics added to collector")

        for thread in threads:
            thread.start()
        try:
            for step in range(steps):
                collector.collect_and_write()
                cycles += 1
                log.info("Metrics collected and written at step %d", step + 1)
                time.sleep(interval_seconds)
        except BaseException:
            stop_event.set()
            raise
        finally:
            for thread in threads:
                thread.join()

        collector.collect_and_write()
        cycles += 1
        log.info("Final metrics collection completed")

    return SimulationResult(
        output_path=Path(output_path),
        steps=steps,
        cycles=cycles,
        instruments=tuple(names),
    )


def _rng(seed: int | None, index: int) -> random.Random:
    if seed is None:
        return random.Random()
    return random.Random(seed + index)
