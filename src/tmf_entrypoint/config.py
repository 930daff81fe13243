"""Configuration for the TMF discovery entrypoint service."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import ComponentIdentity


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    component_name: str = Field(default="geographicaddress")
    release_name: str = Field(default="tmf673")

    default_base_path: str = Field(default="/tmf-api/geographicAddressManagement/v4")
    openapi_source: str = Field(default="api/openapi.yaml")
    openapi_cache_seconds: int = Field(default=3600)

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)

    log_level: str = Field(default="INFO")

    def identity(self) -> ComponentIdentity:
        # Blank env values fall back to the defaults rather than an empty id.
        defaults = ComponentIdentity()
        return ComponentIdentity(
            component_name=self.component_name or defaults.component_name,
            release_name=self.release_name or defaults.release_name,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
