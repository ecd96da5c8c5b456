"""Identity of the running application, as reported to Wavefront."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.settings import (
    APPLICATION_CLUSTER_PROPERTY,
    APPLICATION_NAME_PROPERTY,
    APPLICATION_SERVICE_PROPERTY,
    APPLICATION_SHARD_PROPERTY,
    LEGACY_APPLICATION_NAME_PROPERTY,
)
from .environment import ConfigurationContext

UNNAMED_APPLICATION = "unnamed_application"
UNNAMED_SERVICE = "unnamed_service"


@dataclass(frozen=True, slots=True)
class ApplicationInfo:
    """Application, service, cluster and shard used to provision an account."""

    name: str
    service: str
    cluster: Optional[str] = None
    shard: Optional[str] = None

    def query_params(self) -> dict[str, str]:
        params = {"application": self.name, "service": self.service}
        if self.cluster is not None:
            params["cluster"] = self.cluster
        if self.shard is not None:
            params["shard"] = self.shard
        return params


def _optional(context: ConfigurationContext, key: str) -> Optional[str]:
    value = context.get_property(key)
    return value if value else None


def resolve_application_info(context: ConfigurationContext) -> ApplicationInfo:
    name = (
        context.get_property(APPLICATION_NAME_PROPERTY)
        or context.get_property(LEGACY_APPLICATION_NAME_PROPERTY)
        or UNNAMED_APPLICATION
    )
    service = context.get_property(APPLICATION_SERVICE_PROPERTY) or UNNAMED_SERVICE
    return ApplicationInfo(
        name=name,
        service=service,
        cluster=_optional(context, APPLICATION_CLUSTER_PROPERTY),
        shard=_optional(context, APPLICATION_SHARD_PROPERTY),
    )
