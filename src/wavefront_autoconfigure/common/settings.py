"""Application configuration consumed by the auto-configuration bootstrap."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROPERTY_PREFIX = "metrics.export.wavefront."
API_TOKEN_PROPERTY = PROPERTY_PREFIX + "api-token"
URI_PROPERTY = PROPERTY_PREFIX + "uri"
DEFAULT_CLUSTER_URI = "https://wavefront.surf"

APPLICATION_PREFIX = "wavefront.application."
APPLICATION_NAME_PROPERTY = APPLICATION_PREFIX + "name"
APPLICATION_SERVICE_PROPERTY = APPLICATION_PREFIX + "service"
APPLICATION_CLUSTER_PROPERTY = APPLICATION_PREFIX + "cluster"
APPLICATION_SHARD_PROPERTY = APPLICATION_PREFIX + "shard"
LEGACY_APPLICATION_NAME_PROPERTY = "application.name"


def env_field(default, env_name: str):
    return Field(default, validation_alias=env_name)


class AutoconfigureSettings(BaseSettings):
    """Operator-supplied configuration, read from the environment or ``.env``."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    api_token: Optional[str] = env_field(None, "WAVEFRONT_API_TOKEN")
    uri: Optional[str] = env_field(None, "WAVEFRONT_URI")
    application_name: Optional[str] = env_field(None, "WAVEFRONT_APPLICATION_NAME")
    application_service: Optional[str] = env_field(None, "WAVEFRONT_APPLICATION_SERVICE")
    application_cluster: Optional[str] = env_field(None, "WAVEFRONT_APPLICATION_CLUSTER")
    application_shard: Optional[str] = env_field(None, "WAVEFRONT_APPLICATION_SHARD")
    legacy_application_name: Optional[str] = env_field(None, "APPLICATION_NAME")
    token_file: Optional[Path] = env_field(None, "WAVEFRONT_TOKEN_FILE")
    log_level: str = env_field("INFO", "WAVEFRONT_LOG_LEVEL")
    otel_exporter_endpoint: Optional[str] = env_field(None, "WAVEFRONT_OTEL_EXPORTER_ENDPOINT")
    otel_exporter_headers: Optional[str] = env_field(None, "WAVEFRONT_OTEL_EXPORTER_HEADERS")
    otel_sampler_ratio: float = env_field(0.1, "WAVEFRONT_OTEL_SAMPLER_RATIO")

    @field_validator(
        "api_token",
        "uri",
        "application_name",
        "application_service",
        "application_cluster",
        "application_shard",
        "legacy_application_name",
        mode="before",
    )
    @classmethod
    def _blank_as_unset(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        return value

    @field_validator("token_file", mode="before")
    @classmethod
    def _normalize_token_file(cls, value):
        if value in (None, ""):
            return None
        if isinstance(value, str):
            return Path(value.strip()).expanduser()
        return value

    def as_properties(self) -> dict[str, str]:
        """Map the configured values onto their property keys, skipping unset ones."""

        candidates = {
            API_TOKEN_PROPERTY: self.api_token,
            URI_PROPERTY: self.uri,
            APPLICATION_NAME_PROPERTY: self.application_name,
            APPLICATION_SERVICE_PROPERTY: self.application_service,
            APPLICATION_CLUSTER_PROPERTY: self.application_cluster,
            APPLICATION_SHARD_PROPERTY: self.application_shard,
            LEGACY_APPLICATION_NAME_PROPERTY: self.legacy_application_name,
        }
        return {key: value for key, value in candidates.items() if value is not None}
