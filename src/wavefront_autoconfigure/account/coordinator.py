"""Auto-negotiation of a Wavefront API token at application startup."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from ..common.schemas import AccountInfo
from ..common.settings import API_TOKEN_PROPERTY, DEFAULT_CLUSTER_URI, URI_PROPERTY
from .application_info import ApplicationInfo, resolve_application_info
from .client import AccountProvisioningClient, AccountProvisioningError
from .deferred_log import DeferredLog
from .environment import ConfigurationContext, PropertySource
from .token_cache import default_token_file, read_token, write_token

PROPERTY_SOURCE_NAME = "wavefront"

TokenFileLocator = Callable[[], Path]
AccountProvisioner = Callable[[str, ApplicationInfo], AccountInfo]


class ProvisioningStatus(str, Enum):
    ALREADY_CONFIGURED = "already_configured"
    CACHED = "cached"
    PROVISIONED = "provisioned"
    FAILED = "failed"


@dataclass(frozen=True)
class ProvisioningOutcome:
    status: ProvisioningStatus
    api_token: Optional[str] = None
    token_file: Optional[Path] = None
    report: Optional[str] = None


class AccountProvisioningCoordinator:
    """Make sure an API token is available before metrics export starts.

    In order: an explicitly configured token wins; otherwise a token cached in
    the local token file is used; otherwise an account is negotiated with the
    cluster and its token is cached for the next start. Failures never
    propagate, the application simply starts without a token.
    """

    def __init__(
        self,
        *,
        locate_token_file: TokenFileLocator = default_token_file,
        provision_account: Optional[AccountProvisioner] = None,
        logger: Optional[DeferredLog] = None,
    ) -> None:
        self._locate_token_file = locate_token_file
        self.logger = logger or DeferredLog()
        self._provision_account = provision_account or self._negotiate

    def _negotiate(self, cluster_uri: str, application_info: ApplicationInfo) -> AccountInfo:
        with AccountProvisioningClient(logger=self.logger) as client:
            return client.provision_account(cluster_uri, application_info)

    def postprocess(self, context: ConfigurationContext) -> ProvisioningOutcome:
        api_token = context.get_property(API_TOKEN_PROPERTY)
        if api_token and api_token.strip():
            self.logger.debug("Wavefront api token already set, no need to auto-negotiate one")
            return ProvisioningOutcome(ProvisioningStatus.ALREADY_CONFIGURED)

        token_file = self._locate_token_file()
        existing_token = read_token(token_file, logger=self.logger)
        if existing_token is not None:
            self.logger.debug("Existing Wavefront api token found", path=str(token_file))
            self._register_api_token(context, existing_token)
            return ProvisioningOutcome(ProvisioningStatus.CACHED, api_token=existing_token, token_file=token_file)

        return self._auto_negotiate(context, token_file)

    def _auto_negotiate(self, context: ConfigurationContext, token_file: Path) -> ProvisioningOutcome:
        cluster_uri = context.get_property(URI_PROPERTY) or DEFAULT_CLUSTER_URI
        application_info = resolve_application_info(context)
        try:
            account_info = self._provision_account(cluster_uri, application_info)
        except AccountProvisioningError as exc:
            return self._failed(token_file, failure_report(cluster_uri, exc.detail))

        if not account_info.api_token:
            return self._failed(token_file, failure_report(cluster_uri, "response did not include an api token"))

        self._register_api_token(context, account_info.api_token)
        saved = write_token(token_file, account_info.api_token, logger=self.logger)
        report = success_report(cluster_uri, account_info, token_file if saved else None)
        self.logger.info(report)
        return ProvisioningOutcome(
            ProvisioningStatus.PROVISIONED,
            api_token=account_info.api_token,
            token_file=token_file,
            report=report,
        )

    def _failed(self, token_file: Path, report: str) -> ProvisioningOutcome:
        self.logger.warning(report)
        return ProvisioningOutcome(ProvisioningStatus.FAILED, token_file=token_file, report=report)

    def _register_api_token(self, context: ConfigurationContext, api_token: str) -> None:
        properties = {API_TOKEN_PROPERTY: api_token}
        if not context.contains(URI_PROPERTY):
            properties[URI_PROPERTY] = DEFAULT_CLUSTER_URI
        name = PROPERTY_SOURCE_NAME
        suffix = 1
        while context.get_source(name) is not None:
            name = f"{PROPERTY_SOURCE_NAME}-{suffix}"
            suffix += 1
        context.add_last(PropertySource(name, properties))


def success_report(cluster_uri: str, account_info: AccountInfo, token_file: Optional[Path] = None) -> str:
    lines = [f"A Wavefront account has been provisioned successfully on {cluster_uri}."]
    if token_file is not None:
        lines.append(f"The API token has been saved to {token_file}.")
    lines += [
        "",
        "To share this account, make sure the following is added to your configuration:",
        "",
        f"\t{API_TOKEN_PROPERTY}={account_info.api_token}",
    ]
    if account_info.login_url:
        lines += [
            "",
            "Connect to your Wavefront dashboard using this one-time use link:",
            f"{cluster_uri.rstrip('/')}{account_info.login_url}",
        ]
    return "\n".join(lines) + "\n"


def failure_report(cluster_uri: str, detail: Optional[str]) -> str:
    lines = [f"Failed to auto-negotiate a Wavefront api token from {cluster_uri}."]
    if detail:
        lines.append(f"Reason: {detail}")
    return "\n".join(lines) + "\n"
