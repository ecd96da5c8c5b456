from __future__ import annotations

import json
from pathlib import Path

from wavefront_autoconfigure.account.coordinator import ProvisioningOutcome, ProvisioningStatus
from wavefront_autoconfigure.account.environment import ConfigurationContext, PropertySource
from wavefront_autoconfigure.cli import provision


def test_cli_prints_success_report(monkeypatch, capsys):
    captured = {}

    def fake_bootstrap(settings):
        captured["settings"] = settings
        outcome = ProvisioningOutcome(ProvisioningStatus.PROVISIONED, api_token="abc-def", report="provisioned!\n")
        return ConfigurationContext.from_mapping({}), outcome

    monkeypatch.setattr(provision, "bootstrap", fake_bootstrap)

    exit_code = provision.run(["--uri", "https://example.org", "--application", "test-app", "--token-file", "tok"])

    assert exit_code == 0
    assert capsys.readouterr().out == "provisioned!\n"
    assert captured["settings"].uri == "https://example.org"
    assert captured["settings"].application_name == "test-app"
    assert captured["settings"].token_file == Path("tok")


def test_cli_failure_exit_code(monkeypatch, capsys):
    outcome = ProvisioningOutcome(ProvisioningStatus.FAILED, report="Failed\nReason: quota exceeded\n")
    monkeypatch.setattr(provision, "bootstrap", lambda settings: (ConfigurationContext.from_mapping({}), outcome))

    assert provision.run([]) == 1
    assert "quota exceeded" in capsys.readouterr().out


def test_cli_json_output(monkeypatch, capsys, token_file):
    context = ConfigurationContext.from_mapping({})
    context.add_last(
        PropertySource(
            "wavefront",
            {"metrics.export.wavefront.api-token": "abc-def", "metrics.export.wavefront.uri": "https://wavefront.surf"},
        )
    )
    outcome = ProvisioningOutcome(ProvisioningStatus.CACHED, api_token="abc-def", token_file=token_file)
    monkeypatch.setattr(provision, "bootstrap", lambda settings: (context, outcome))

    assert provision.run(["--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "status": "cached",
        "token_file": str(token_file),
        "api_token_present": True,
        "uri": "https://wavefront.surf",
    }


def test_cli_with_configured_token(monkeypatch, capsys):
    monkeypatch.setenv("WAVEFRONT_API_TOKEN", "existing")

    assert provision.run([]) == 0
    assert "already configured" in capsys.readouterr().out
