"""Command-line entrypoint for provisioning a Wavefront API token."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from ..account.coordinator import ProvisioningStatus
from ..bootstrap import bootstrap
from ..common.settings import API_TOKEN_PROPERTY, URI_PROPERTY, AutoconfigureSettings


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Provision a Wavefront API token for this machine")
    parser.add_argument("--uri", help="Wavefront cluster URI (defaults to WAVEFRONT_URI or https://wavefront.surf)")
    parser.add_argument("--token-file", type=Path, help="Location of the cached API token")
    parser.add_argument("--application", help="Application name reported to Wavefront")
    parser.add_argument("--service", help="Service name reported to Wavefront")
    parser.add_argument("--cluster", help="Cluster name reported to Wavefront")
    parser.add_argument("--shard", help="Shard name reported to Wavefront")
    parser.add_argument("--json", action="store_true", help="Output raw JSON")
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> AutoconfigureSettings:
    overrides = {
        "uri": args.uri,
        "token_file": args.token_file,
        "application_name": args.application,
        "application_service": args.service,
        "application_cluster": args.cluster,
        "application_shard": args.shard,
    }
    settings = AutoconfigureSettings()
    return settings.model_copy(update={key: value for key, value in overrides.items() if value is not None})


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    context, outcome = bootstrap(settings_from_args(args))
    if args.json:
        payload = {
            "status": outcome.status.value,
            "token_file": str(outcome.token_file) if outcome.token_file else None,
            "api_token_present": context.contains(API_TOKEN_PROPERTY),
            "uri": context.get_property(URI_PROPERTY),
        }
        print(json.dumps(payload, indent=2))
    elif outcome.report:
        print(outcome.report, end="")
    elif outcome.status is ProvisioningStatus.CACHED:
        print(f"Using the Wavefront api token cached in {outcome.token_file}")
    else:
        print("Wavefront api token already configured")
    return 1 if outcome.status is ProvisioningStatus.FAILED else 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
