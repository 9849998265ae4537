from pydantic import BaseModel

from app.observability import MetricsSnapshot


class TimingMetricStats(BaseModel):
    count: int
    avg_s: float
    max_s: float


class MetricsResponse(BaseModel):
    """Counters such as ``deliveries_created_total`` and request timings."""

    counters: dict[str, int]
    timings: dict[str, TimingMetricStats]

    @classmethod
    def from_snapshot(cls, snapshot: MetricsSnapshot) -> "MetricsResponse":
        return cls(
            counters=snapshot.counters,
            timings={
                name: TimingMetricStats(
                    count=int(stats["count"]),
                    avg_s=stats["avg_s"],
                    max_s=stats["max_s"],
                )
                for name, stats in snapshot.timings.items()
            },
        )
