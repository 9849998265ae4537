from fastapi import APIRouter

from app.observability import metrics_store
from app.schemas.metrics import MetricsResponse

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("", summary="Delivery store metrics", response_model=MetricsResponse)
def metrics_endpoint() -> MetricsResponse:
    return MetricsResponse.from_snapshot(metrics_store.snapshot())
