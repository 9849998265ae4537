from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ALLOWED_APP_MODES = {"demo", "pilot", "production"}


class Settings(BaseSettings):
    app_name: str = "Spoedpakket Delivery Store"

    database_url: str = Field(
        default="sqlite+pysqlite:///./test.db",
        validation_alias="SPOEDPAKKET_DATABASE_URL",
    )
    cors_allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    testing: bool = Field(default=False, validation_alias="SPOEDPAKKET_TESTING")
    app_mode: str = Field(default="demo", validation_alias="APP_MODE")
    auto_create_schema: bool = Field(default=True, validation_alias="AUTO_CREATE_SCHEMA")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    google_maps_api_key: str = Field(default="", validation_alias="GOOGLE_MAPS_API_KEY")
    locationiq_api_key: str = Field(default="", validation_alias="LOCATIONIQ_API_KEY")

    default_driver_id: int = 1

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @field_validator("app_mode")
    @classmethod
    def validate_app_mode(cls, value: str) -> str:
        mode = value.lower().strip()
        if mode not in ALLOWED_APP_MODES:
            allowed = ", ".join(sorted(ALLOWED_APP_MODES))
            raise ValueError(f"APP_MODE must be one of: {allowed}")
        return mode


settings = Settings()


def allowed_origins() -> list[str]:
    return [origin.strip() for origin in settings.cors_allowed_origins.split(",") if origin.strip()]


def is_production_mode() -> bool:
    return settings.app_mode == "production"


def ensure_secure_runtime_settings() -> None:
    """Fail fast when a production runtime is configured like a dev box."""
    if settings.testing or not is_production_mode():
        return
    if _is_sqlite_url(settings.database_url):
        raise RuntimeError(
            "SPOEDPAKKET_DATABASE_URL must use postgres when APP_MODE=production"
        )
    if settings.auto_create_schema:
        raise RuntimeError("AUTO_CREATE_SCHEMA must be disabled in APP_MODE=production")


def _is_sqlite_url(database_url: str) -> bool:
    value = database_url.strip().lower()
    return value.startswith("sqlite")
