"""Runtime configuration for MC Inspector."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="MC_INSPECTOR_", env_file=".env", extra="ignore")

    app_name: str = "mc-inspector"
    log_level: str = "WARNING"
    max_depth: int = Field(
        default=512, ge=1, le=512, description="Deepest Compound/List nesting accepted by the decoder."
    )
    scan_workers: int = Field(default=4, ge=1, description="Record files decoded concurrently during a scan.")
    file_timeout_seconds: float = Field(default=10.0, gt=0, description="Per-file read and decode budget.")
    username_lookup_enabled: bool = True
    username_lookup_url: str = Field(
        default="https://api.minecraftservices.com/minecraft/profile/lookup/{uuid}",
        description="Profile lookup endpoint; {uuid} is replaced with the dash-less player UUID.",
    )
    username_lookup_timeout_seconds: float = 3.0
    username_lookup_min_interval_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Minimum spacing between outbound lookups to stay clear of HTTP 429.",
    )


settings = Settings()
