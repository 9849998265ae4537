from pydantic import BaseModel, ConfigDict, Field


class PublicConfigResponse(BaseModel):
    """Public, browser-safe keys. Missing keys are reported as null."""

    model_config = ConfigDict(populate_by_name=True)

    google_maps_api_key: str | None = Field(default=None, alias="GOOGLE_MAPS_API_KEY")
    locationiq_api_key: str | None = Field(default=None, alias="LOCATIONIQ_API_KEY")
