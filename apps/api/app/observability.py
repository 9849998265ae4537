import json
import logging
import threading
import time
from collections import defaultdict
from contextvars import ContextVar
from dataclasses import dataclass

LOGGER_NAME = "spoedpakket.delivery"
CONTEXT_FIELDS = ("request_id", "delivery_id", "driver_id", "status")

_request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            payload[field] = getattr(record, field, None)
        if payload["request_id"] is None:
            payload["request_id"] = _request_id_ctx.get()
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())


@dataclass
class MetricsSnapshot:
    counters: dict[str, int]
    timings: dict[str, dict[str, float]]


class MetricsStore:
    """Process-local counters and timings. Sync endpoints record from worker threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[str, int] = defaultdict(int)
        self._timings: dict[str, list[float]] = defaultdict(list)

    def increment(self, name: str, amount: int = 1) -> None:
        with self._lock:
            self._counters[name] += amount

    def observe(self, name: str, value_s: float) -> None:
        with self._lock:
            self._timings[name].append(value_s)

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._timings.clear()

    def snapshot(self) -> MetricsSnapshot:
        with self._lock:
            counters = dict(self._counters)
            samples = {key: list(values) for key, values in self._timings.items() if values}

        timings = {
            key: {
                "count": float(len(values)),
                "avg_s": sum(values) / len(values),
                "max_s": max(values),
            }
            for key, values in samples.items()
        }
        return MetricsSnapshot(counters=counters, timings=timings)


metrics_store = MetricsStore()


def set_request_id(request_id: str) -> None:
    _request_id_ctx.set(request_id)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


def log_event(
    message: str,
    *,
    delivery_id: int | str | None = None,
    driver_id: int | None = None,
    status: str | None = None,
    level: int = logging.INFO,
) -> None:
    logging.getLogger(LOGGER_NAME).log(
        level,
        message,
        extra={
            "request_id": get_request_id(),
            "delivery_id": delivery_id,
            "driver_id": driver_id,
            "status": status,
        },
    )


class observe_timing:
    def __init__(self, metric_name: str) -> None:
        self.metric_name = metric_name
        self._start = 0.0

    def __enter__(self) -> "observe_timing":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        metrics_store.observe(self.metric_name, time.perf_counter() - self._start)
