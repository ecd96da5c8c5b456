"""Startup hook that provisions the API token before metrics export starts."""

from __future__ import annotations

from typing import Optional

import structlog

from .account.coordinator import AccountProvisioningCoordinator, ProvisioningOutcome
from .account.environment import ConfigurationContext
from .account.token_cache import default_token_file
from .common.observability import configure_logging, configure_tracing
from .common.settings import AutoconfigureSettings

SERVICE_NAME = "wavefront_autoconfigure"


def build_coordinator(settings: AutoconfigureSettings) -> AccountProvisioningCoordinator:
    token_file = settings.token_file
    if token_file is not None:
        return AccountProvisioningCoordinator(locate_token_file=lambda: token_file)
    return AccountProvisioningCoordinator(locate_token_file=default_token_file)


def bootstrap(
    settings: Optional[AutoconfigureSettings] = None,
    context: Optional[ConfigurationContext] = None,
    coordinator: Optional[AccountProvisioningCoordinator] = None,
) -> tuple[ConfigurationContext, ProvisioningOutcome]:
    """Run the coordinator once, then configure logging and flush its records.

    Call this before anything reads the API token from *context*.
    """

    settings = settings or AutoconfigureSettings()
    context = context or ConfigurationContext.from_settings(settings)
    coordinator = coordinator or build_coordinator(settings)

    configure_tracing(
        service_name=SERVICE_NAME,
        endpoint=settings.otel_exporter_endpoint,
        headers=settings.otel_exporter_headers,
        sampler_ratio=settings.otel_sampler_ratio,
    )
    outcome = coordinator.postprocess(context)

    configure_logging(SERVICE_NAME, settings.log_level)
    coordinator.logger.switch_to(structlog.get_logger("wavefront_autoconfigure.account"))
    return context, outcome
