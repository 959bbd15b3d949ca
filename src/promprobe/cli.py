"""
Command line entrypoint for the Prometheus probe.

Runs the probe calls once against a target configuration file and
prints the resulting DTOs, which is handy for checking a target before
it is registered with the orchestration server.
"""

from __future__ import annotations

import argparse
import json
from typing import Any, Sequence

from rich.console import Console
from rich.table import Table

from promprobe.config.settings import get_settings
from promprobe.core.errors import ExitCode, main_with_error_handling
from promprobe.discovery.client import PrometheusDiscoveryClient
from promprobe.logging import configure_logging
from promprobe.registration import account_definition, supply_chain
from promprobe.sdk.models import DiscoveryResponse

console = Console()


def _print_json(payload: Any) -> None:
    console.print_json(json.dumps(payload))


def _entities_table(response: DiscoveryResponse) -> Table:
    table = Table(title="Discovered entities")
    table.add_column("Type")
    table.add_column("ID")
    table.add_column("Commodity")
    table.add_column("Used", justify="right")
    table.add_column("Capacity", justify="right")
    for entity in response.entities:
        for commodity in entity.sells or [None]:
            table.add_row(
                str(entity.entity_type),
                entity.id,
                str(commodity.commodity_type) if commodity else "-",
                f"{commodity.used:.2f}" if commodity and commodity.used is not None else "-",
                f"{commodity.capacity:.1f}" if commodity and commodity.capacity is not None else "-",
            )
    return table


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="promprobe", description="Prometheus discovery probe")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command")

    def add_conf(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--conf",
            default=settings.conf_path,
            help="Path to the target configuration file",
        )

    add_conf(subparsers.add_parser("account-values", help="Print the target account values"))
    add_conf(subparsers.add_parser("validate", help="Validate the target"))

    discover_parser = subparsers.add_parser("discover", help="Run one discovery cycle")
    add_conf(discover_parser)
    discover_parser.add_argument(
        "--format",
        choices=["json", "table"],
        default="json",
        help="Output format",
    )
    discover_parser.add_argument(
        "--timeout",
        type=float,
        default=settings.query_timeout,
        help="Query deadline in seconds",
    )

    subparsers.add_parser("supply-chain", help="Print the supply chain and account definition")
    return parser


@main_with_error_handling()
def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "supply-chain":
        _print_json(
            {
                "supplyChain": [t.model_dump(by_alias=True) for t in supply_chain()],
                "accountDefinition": [e.model_dump(by_alias=True) for e in account_definition()],
            }
        )
        return ExitCode.SUCCESS

    if args.command not in {"account-values", "validate", "discover"}:
        parser.print_help()
        return 1

    client = PrometheusDiscoveryClient.from_conf_file(
        args.conf, timeout=getattr(args, "timeout", None)
    )
    target_info = client.get_account_values()

    if args.command == "account-values":
        _print_json(target_info.model_dump(by_alias=True))
        return ExitCode.SUCCESS

    if args.command == "validate":
        _print_json(client.validate(target_info.account_values).model_dump(by_alias=True))
        return ExitCode.SUCCESS

    response = client.discover(target_info.account_values)
    if args.format == "table" and not response.errors:
        console.print(_entities_table(response))
    else:
        _print_json(response.model_dump(by_alias=True))
    return ExitCode.PROVIDER_ERROR if response.errors else ExitCode.SUCCESS


if __name__ == "__main__":  # pragma: no cover - exercised via module entrypoint
    raise SystemExit(main())
