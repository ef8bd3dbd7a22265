import math

import pytest

from study_diagnostic.core.metrics import (
    count_calls,
    get_counters,
    get_histograms,
    get_last_runs,
    get_metrics,
    measure_time,
    metrics_registry,
    set_instrumentation_enabled,
    timer,
)


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics_registry.reset()
    set_instrumentation_enabled(True)
    yield
    metrics_registry.reset()
    set_instrumentation_enabled(True)


def test_timer_records_last_run():
    with timer("metrics.test.timer"):
        pass
    last_runs = get_last_runs()
    assert "metrics.test.timer" in last_runs
    payload = last_runs["metrics.test.timer"]
    assert payload["duration_ms"] >= 0.0
    assert "timestamp" in payload


def test_measure_time_records_when_enabled():
    @measure_time("tests.metrics.enabled")
    def work(x):
        return x * 2

    assert work(6) == 12
    assert get_metrics()["tests.metrics.enabled"]["count"] == 1.0


def test_measure_time_fills_histogram():
    @measure_time("tests.metrics.hist", histogram=True, buckets=(1000.0,))
    def work():
        return None

    work()
    work()
    hist = get_histograms()["tests.metrics.hist"]
    assert hist["1000.0"] + hist["+Inf"] == 2.0


def test_metrics_registry_tracks_variance_and_stddev():
    metrics_registry.record("metrics.var", 10.0)
    metrics_registry.record("metrics.var", 30.0)

    entry = get_metrics()["metrics.var"]
    assert entry["count"] == 2.0
    assert entry["avg_ms"] == pytest.approx(20.0, rel=1e-3)
    assert entry["variance_ms"] == pytest.approx(200.0, rel=1e-3)
    assert entry["stddev_ms"] == pytest.approx(math.sqrt(200.0), rel=1e-3)
    assert entry["max_ms"] == 30.0


def test_instrumentation_toggle_disables_measure_time():
    set_instrumentation_enabled(False)

    @measure_time("tests.metrics.disabled")
    def work(x):
        return x + 1

    assert work(5) == 6
    assert "tests.metrics.disabled" not in get_metrics()


def test_timer_context_respects_toggle():
    set_instrumentation_enabled(False)
    with timer("tests.timer.disabled"):
        pass
    assert "tests.timer.disabled" not in get_metrics()

    set_instrumentation_enabled(True)
    with timer("tests.timer.enabled"):
        pass
    assert "tests.timer.enabled" in get_metrics()


def test_count_calls_guarded_by_toggle():
    @count_calls("tests.counter.guard")
    def do_work():
        return "ok"

    set_instrumentation_enabled(False)
    do_work()
    assert get_counters() == {}

    set_instrumentation_enabled(True)
    do_work()
    assert get_counters()["tests.counter.guard"] == 1.0


def test_empty_label_is_ignored():
    metrics_registry.record("", 1.0)
    metrics_registry.inc("")
    assert get_metrics() == {}
    assert get_counters() == {}
