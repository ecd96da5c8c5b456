from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
import structlog

from wavefront_autoconfigure.account.application_info import ApplicationInfo
from wavefront_autoconfigure.common import observability
from wavefront_autoconfigure.common.schemas import AccountInfo

_SETTINGS_ENV = (
    "WAVEFRONT_API_TOKEN",
    "WAVEFRONT_URI",
    "WAVEFRONT_APPLICATION_NAME",
    "WAVEFRONT_APPLICATION_SERVICE",
    "WAVEFRONT_APPLICATION_CLUSTER",
    "WAVEFRONT_APPLICATION_SHARD",
    "APPLICATION_NAME",
    "WAVEFRONT_TOKEN_FILE",
    "WAVEFRONT_LOG_LEVEL",
    "WAVEFRONT_OTEL_EXPORTER_ENDPOINT",
    "WAVEFRONT_OTEL_EXPORTER_HEADERS",
    "WAVEFRONT_OTEL_SAMPLER_RATIO",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of the settings under test
    monkeypatch.chdir(tmp_path)
    yield
    monkeypatch.setattr(observability, "_logging_configured", False)
    structlog.reset_defaults()


@pytest.fixture
def token_file(tmp_path) -> Path:
    return tmp_path / "test.token"


@pytest.fixture
def unreachable_cluster() -> Callable[[str, ApplicationInfo], AccountInfo]:
    def provision(cluster_uri: str, application_info: ApplicationInfo) -> AccountInfo:
        raise AssertionError(f"unexpected negotiation with {cluster_uri}")

    return provision
