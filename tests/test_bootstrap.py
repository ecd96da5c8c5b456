from __future__ import annotations

import importlib

from wavefront_autoconfigure.account.coordinator import AccountProvisioningCoordinator, ProvisioningStatus
from wavefront_autoconfigure.bootstrap import bootstrap, build_coordinator
from wavefront_autoconfigure.common import observability
from wavefront_autoconfigure.common.schemas import AccountInfo
from wavefront_autoconfigure.common.settings import AutoconfigureSettings


def test_bootstrap_injects_negotiated_token_and_flushes_log(monkeypatch, token_file):
    monkeypatch.setenv("WAVEFRONT_APPLICATION_NAME", "wavefront-app")
    flushed: list[tuple[str, str]] = []

    class Destination:
        def info(self, event, **fields):
            flushed.append(("info", event))

        def debug(self, event, **fields):
            flushed.append(("debug", event))

        def warning(self, event, **fields):
            flushed.append(("warning", event))

    bootstrap_module = importlib.import_module("wavefront_autoconfigure.bootstrap")
    monkeypatch.setattr(bootstrap_module.structlog, "get_logger", lambda *_: Destination())
    coordinator = AccountProvisioningCoordinator(
        locate_token_file=lambda: token_file,
        provision_account=lambda uri, info: AccountInfo(token="abc-def", url=f"/{info.name}"),
    )

    context, outcome = bootstrap(coordinator=coordinator)

    assert outcome.status is ProvisioningStatus.PROVISIONED
    assert context.get_property("metrics.export.wavefront.api-token") == "abc-def"
    assert "https://wavefront.surf/wavefront-app" in outcome.report
    assert flushed[-1] == ("info", outcome.report)
    assert coordinator.logger.records == []
    assert observability._logging_configured is True


def test_bootstrap_with_explicit_token_skips_provisioning(monkeypatch, unreachable_cluster):
    monkeypatch.setenv("WAVEFRONT_API_TOKEN", "existing")

    def locate():
        raise AssertionError("token file should not be located")

    coordinator = AccountProvisioningCoordinator(locate_token_file=locate, provision_account=unreachable_cluster)
    context, outcome = bootstrap(coordinator=coordinator)

    assert outcome.status is ProvisioningStatus.ALREADY_CONFIGURED
    assert context.source_names == ["environment"]


def test_build_coordinator_uses_configured_token_file(monkeypatch, token_file, unreachable_cluster):
    token_file.write_text("abc-def", encoding="utf-8")
    monkeypatch.setenv("WAVEFRONT_TOKEN_FILE", str(token_file))

    coordinator = build_coordinator(AutoconfigureSettings())
    coordinator._provision_account = unreachable_cluster
    context, outcome = bootstrap(coordinator=coordinator)

    assert outcome.status is ProvisioningStatus.CACHED
    assert outcome.token_file == token_file
    assert context.get_property("metrics.export.wavefront.api-token") == "abc-def"


def test_bootstrap_with_empty_token_variable_uses_token_file(monkeypatch, token_file, unreachable_cluster):
    monkeypatch.setenv("WAVEFRONT_API_TOKEN", "")
    token_file.write_text("abc-def", encoding="utf-8")
    coordinator = AccountProvisioningCoordinator(
        locate_token_file=lambda: token_file, provision_account=unreachable_cluster
    )

    context, outcome = bootstrap(coordinator=coordinator)

    assert outcome.status is ProvisioningStatus.CACHED
    assert context.get_property("metrics.export.wavefront.api-token") == "abc-def"
