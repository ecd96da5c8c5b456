"""HTTP client negotiating a trial Wavefront account."""

from __future__ import annotations

from typing import Any, Optional

import httpx
import structlog
from opentelemetry import trace
from pydantic import ValidationError

from ..common.schemas import AccountInfo
from .application_info import ApplicationInfo

LOGGER = structlog.get_logger("wavefront_autoconfigure.account.client")
TRACER = trace.get_tracer("wavefront_autoconfigure.account.client")

PROVISIONING_PATH = "/api/v2/trial/python-autoconfigure"
DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=10.0, read=10.0)


class AccountProvisioningError(Exception):
    """Negotiation did not produce an account."""

    def __init__(self, detail: Optional[str]) -> None:
        super().__init__(detail)
        self.detail = detail


class ProvisioningError(AccountProvisioningError):
    """The cluster answered but refused to provision an account."""

    def __init__(self, detail: Optional[str], status_code: Optional[int] = None) -> None:
        super().__init__(detail)
        self.status_code = status_code


class TransportError(AccountProvisioningError):
    """The request to the cluster could not be sent or did not complete."""


class AccountProvisioningClient:
    """Negotiate an :class:`AccountInfo` for an :class:`ApplicationInfo`.

    Requests are bounded by a 10 second connect and a 10 second read timeout
    and are never retried.
    """

    def __init__(
        self,
        *,
        http_client: Optional[httpx.Client] = None,
        transport: Optional[httpx.BaseTransport] = None,
        logger: Any = LOGGER,
    ) -> None:
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=DEFAULT_TIMEOUT, transport=transport)
        self._logger = logger

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "AccountProvisioningClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def provision_account(self, cluster_uri: str, application_info: ApplicationInfo) -> AccountInfo:
        url = f"{cluster_uri.rstrip('/')}{PROVISIONING_PATH}"
        params = application_info.query_params()
        with TRACER.start_as_current_span("account.provision_account") as span:
            span.set_attribute("wavefront.cluster_uri", cluster_uri)
            span.set_attribute("wavefront.application", application_info.name)
            try:
                request = self._http.build_request("POST", url, params=params)
                self._logger.debug("Auto-negotiating Wavefront credentials", url=str(request.url))
                response = self._http.send(request)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                span.set_attribute("http.status_code", exc.response.status_code)
                raise ProvisioningError(exc.response.text, status_code=exc.response.status_code) from exc
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise TransportError(str(exc) or exc.__class__.__name__) from exc
            return parse_account_info(response)


def parse_account_info(response: httpx.Response) -> AccountInfo:
    try:
        payload = response.json()
    except ValueError as exc:
        raise ProvisioningError(response.text, status_code=response.status_code) from exc
    if not isinstance(payload, dict):
        raise ProvisioningError(response.text, status_code=response.status_code)
    try:
        return AccountInfo.model_validate(payload)
    except ValidationError as exc:
        raise ProvisioningError(response.text, status_code=response.status_code) from exc
