from datetime import datetime, timezone

from fastapi import APIRouter, Response, status

from app.db.session import SessionLocal
from app.schemas.health import HealthResponse, ReadinessDependency, ReadinessResponse
from app.services.readiness_service import database_dependency_status, safe_dependency_status

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", summary="Health check", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc))


@router.get(
    "/ready",
    summary="Readiness check",
    response_model=ReadinessResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ReadinessResponse}},
)
def readiness(response: Response) -> ReadinessResponse:
    readiness_report = ReadinessResponse.from_dependencies(
        [
            ReadinessDependency(
                name="database",
                status=safe_dependency_status(
                    "database", lambda: database_dependency_status(SessionLocal)
                ),
            )
        ]
    )
    if not readiness_report.is_ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return readiness_report
