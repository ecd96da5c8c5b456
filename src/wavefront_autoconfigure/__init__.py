"""Automatic Wavefront API token provisioning for metrics-emitting applications."""

from .account.application_info import ApplicationInfo, resolve_application_info
from .account.client import (
    AccountProvisioningClient,
    AccountProvisioningError,
    ProvisioningError,
    TransportError,
)
from .account.coordinator import AccountProvisioningCoordinator, ProvisioningOutcome, ProvisioningStatus
from .account.environment import ConfigurationContext, PropertySource
from .bootstrap import bootstrap
from .common.schemas import AccountInfo

__all__ = [
    "AccountInfo",
    "AccountProvisioningClient",
    "AccountProvisioningCoordinator",
    "AccountProvisioningError",
    "ApplicationInfo",
    "ConfigurationContext",
    "PropertySource",
    "ProvisioningError",
    "ProvisioningOutcome",
    "ProvisioningStatus",
    "TransportError",
    "bootstrap",
    "resolve_application_info",
]
