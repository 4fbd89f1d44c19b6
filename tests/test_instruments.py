"""Tests for gauge and counter instruments."""

from __future__ import annotations

import threading

import pytest

from metrics_pipeline.collection import Counter, Gauge, Instrument


def test_gauge_update_replaces_and_formats_two_decimals() -> None:
    gauge = Gauge("test_gauge")
    gauge.update(3.14159)
    gauge.update(42.57)

    assert gauge.get_value_as_string() == "42.57"
    assert gauge.value == pytest.approx(42.57)


def test_gauge_formats_integers_and_small_values() -> None:
    gauge = Gauge("g")
    gauge.update(7)
    assert gauge.get_value_as_string() == "7.00"
    gauge.update(0.004)
    assert gauge.get_value_as_string() == "0.00"
    gauge.update(-1.5)
    assert gauge.get_value_as_string() == "-1.50"


def test_counter_increment_accumulates() -> None:
    counter = Counter("test_counter")
    counter.increment(10)
    assert counter.get_value_as_string() == "10"

    counter.increment()
    counter.increment(-3)
    assert counter.get_value_as_string() == "8"
    assert counter.value == 8


@pytest.mark.parametrize(
    ("instrument", "mutate", "zero"),
    [
        (Gauge("g"), lambda m: m.update(99.99), "0.00"),
        (Counter("c"), lambda m: m.increment(5), "0"),
    ],
)
def test_reset_is_idempotent(instrument, mutate, zero: str) -> None:
    mutate(instrument)
    instrument.reset()
    assert instrument.get_value_as_string() == zero
    instrument.reset()
    assert instrument.get_value_as_string() == zero


def test_collect_returns_previous_value_and_resets() -> None:
    gauge = Gauge("g")
    counter = Counter("c")
    gauge.update(123.45)
    counter.increment(7)

    assert gauge.collect() == "123.45"
    assert counter.collect() == "7"
    assert gauge.get_value_as_string() == "0.00"
    assert counter.get_value_as_string() == "0"


def test_name_is_exposed_and_instruments_satisfy_protocol() -> None:
    gauge = Gauge("CPU_usage")
    counter = Counter("HTTP_requests_RPS")

    assert gauge.name == "CPU_usage"
    assert counter.name == "HTTP_requests_RPS"
    assert isinstance(gauge, Instrument)
    assert isinstance(counter, Instrument)


def test_counter_has_no_lost_updates_under_contention() -> None:
    counter = Counter("contended")
    threads_count = 8
    per_thread = 5_000
    barrier = threading.Barrier(threads_count)

    def worker() -> None:
        barrier.wait()
        for _ in range(per_thread):
            counter.increment(1)

    threads = [threading.Thread(target=worker) for _ in range(threads_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert counter.get_value_as_string() == str(threads_count * per_thread)


def test_gauge_concurrent_updates_keep_one_written_value() -> None:
    gauge = Gauge("contended")
    values = [float(i) for i in range(1, 17)]

    threads = [threading.Thread(target=gauge.update, args=(value,)) for value in values]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert gauge.value in values


def test_counter_does_not_coerce_non_integer_increments() -> None:
    counter = Counter("strict")
    counter.increment(2)

    with pytest.raises(TypeError):
        counter.increment("5")  # type: ignore[arg-type]

    assert counter.get_value_as_string() == "2"
