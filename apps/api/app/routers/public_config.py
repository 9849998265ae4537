from fastapi import APIRouter

from app.config import settings
from app.schemas.config import PublicConfigResponse

router = APIRouter(prefix="/api", tags=["config"])


@router.get("/config", summary="Public client configuration", response_model=PublicConfigResponse)
def public_config_endpoint() -> PublicConfigResponse:
    return PublicConfigResponse(
        google_maps_api_key=settings.google_maps_api_key or None,
        locationiq_api_key=settings.locationiq_api_key or None,
    )
