"""Command-line entry point for the Arc Contract Wizard.

Usage::

    contractwiz generate token.yaml -o ./build
    contractwiz estimate token.yaml
    contractwiz defaults > token.yaml
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

import yaml

from contractwiz.config import Config
from contractwiz.exporter import ContractExporter, ContractExportError
from contractwiz.gas import GasEstimate, estimate_gas_cost
from contractwiz.models import ContractConfiguration, ContractFamily, collect_issues
from contractwiz.utils import (
    console,
    load_mapping,
    print_error,
    print_header,
    print_panel,
    print_success,
    print_summary_table,
    print_warning,
)


def _load_configuration(path: str, family: str | None) -> tuple[ContractConfiguration, dict[str, Any]]:
    """Read a contract configuration file, exiting with status 1 on failure."""
    config_path = Path(path)
    if not config_path.exists():
        print_error(f"Error: configuration file not found: {config_path}")
        sys.exit(1)
    try:
        raw = load_mapping(config_path)
    except (ValueError, yaml.YAMLError) as exc:
        print_error(f"Error: cannot parse {config_path}: {exc}")
        sys.exit(1)

    if family:
        raw = {**raw, "family": family}
    try:
        config = ContractConfiguration.from_dict(raw)
    except ValueError as exc:
        print_error(f"Error: invalid configuration in {config_path}: {exc}")
        sys.exit(1)

    for issue in collect_issues(config, raw):
        print_warning(f"{issue.field}: {issue.message}")
    return config, raw


def _print_estimate(estimate: GasEstimate) -> None:
    rows = estimate.as_rows()
    rows["Total"] = f"{estimate.estimated_gas:,}"
    rows["Estimated cost"] = f"{estimate.estimated_cost_usdc} USDC"
    print_summary_table(rows, title="Gas Estimate")


def _cmd_generate(args: argparse.Namespace, settings: Config) -> int:
    config, _ = _load_configuration(args.config, args.family)
    output = Path(args.output) if args.output else settings.output_dir

    print_header(f"{config.family.value}: {config.name}")
    try:
        result = asyncio.run(ContractExporter(settings).export(config, output))
    except ContractExportError as exc:
        print_error(str(exc))
        return 1

    _print_estimate(result.estimate)
    for path in result.all_paths():
        console.print(f"  [dim]wrote[/dim] {path}")
    print_success(f"Contract bundle written to {output}")
    print_panel(
        f"Open {result.contract_path.name} in Remix, compile with Solidity "
        f"{settings.solidity_pragma} and deploy to {settings.network.name} "
        f"(chain {settings.network.chain_id}).",
        title="Next steps",
    )
    return 0


def _cmd_estimate(args: argparse.Namespace, settings: Config) -> int:
    config, _ = _load_configuration(args.config, args.family)
    _print_estimate(estimate_gas_cost(config, settings))
    return 0


def _cmd_defaults(args: argparse.Namespace, settings: Config) -> int:
    data = ContractConfiguration().model_dump(mode="json")
    sys.stdout.write(yaml.safe_dump(data, sort_keys=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contractwiz",
        description="Arc Contract Wizard -- generate Circle-compatible Solidity contracts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  contractwiz generate token.yaml\n"
            "  contractwiz generate token.yaml -o ./build --family ERC1155\n"
            "  contractwiz estimate token.yaml\n"
            "  contractwiz defaults > token.yaml\n"
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)
    families = [f.value for f in ContractFamily]

    gen = sub.add_parser("generate", help="Write contract, README and gas estimate")
    gen.add_argument("config", help="YAML or JSON contract configuration")
    gen.add_argument("--output", "-o", default=None, help="Output directory (default: ./output)")
    gen.add_argument("--family", choices=families, default=None, help="Override the contract family")
    gen.set_defaults(handler=_cmd_generate)

    est = sub.add_parser("estimate", help="Print the gas estimate only")
    est.add_argument("config", help="YAML or JSON contract configuration")
    est.add_argument("--family", choices=families, default=None, help="Override the contract family")
    est.set_defaults(handler=_cmd_estimate)

    defaults = sub.add_parser("defaults", help="Print the default configuration as YAML")
    defaults.set_defaults(handler=_cmd_defaults)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``contractwiz`` / ``python -m contractwiz.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Config.from_env()
    sys.exit(args.handler(args, settings))


if __name__ == "__main__":
    main()
