import json
import logging

from app.observability import JsonFormatter, metrics_store, observe_timing, set_request_id


def test_metrics_store_reset_clears_counters_and_timings():
    metrics_store.increment("deliveries_created_total")
    metrics_store.observe("delivery_create_seconds", 0.25)

    metrics_store.reset()

    snapshot = metrics_store.snapshot()
    assert snapshot.counters == {}
    assert snapshot.timings == {}


def test_metrics_store_summarises_timings():
    metrics_store.observe("delivery_create_seconds", 0.1)
    metrics_store.observe("delivery_create_seconds", 0.3)

    timing = metrics_store.snapshot().timings["delivery_create_seconds"]

    assert timing["count"] == 2.0
    assert timing["max_s"] == 0.3
    assert abs(timing["avg_s"] - 0.2) < 1e-9


def test_observe_timing_records_elapsed_duration():
    with observe_timing("payment_seconds"):
        pass

    assert metrics_store.snapshot().timings["payment_seconds"]["count"] == 1.0


def test_json_formatter_carries_request_and_delivery_context():
    set_request_id("req-42")
    record = logging.LogRecord(
        name="spoedpakket.delivery",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="delivery_created",
        args=(),
        exc_info=None,
    )
    record.delivery_id = 7
    record.status = "assigned"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "delivery_created"
    assert payload["request_id"] == "req-42"
    assert payload["delivery_id"] == 7
    assert payload["driver_id"] is None
    assert payload["status"] == "assigned"
