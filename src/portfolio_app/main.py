"""ETF portfolio tracker command line.

Usage:
    etf-portfolio report portfolio.yaml                     # value, allocation and drift
    etf-portfolio report portfolio.yaml --refresh           # ignore fresh cached prices
    etf-portfolio report portfolio.yaml --offline --as-of 2025-06-30
    etf-portfolio import portfolio.yaml                     # store in the local cache
"""

import argparse
import asyncio
import sys
from datetime import date
from typing import List, Optional

from app_config import AppConfig, load_config, resolve_config_path, set_config
from portfolio_app.commands.base import Command, CommandStatus
from portfolio_app.commands.import_portfolio import ImportPortfolioCommand
from portfolio_app.commands.report import ReportCommand
from portfolio_app.core.service_container import ServiceContainer
from portfolio_app.logger import AppLogger, configure_root_logger

app_logger = AppLogger(__name__)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="etf-portfolio", description="ETF portfolio value and drift tracker")
    parser.add_argument("--config", help="Path to config.yaml (default $ETF_PORTFOLIO_CONFIG, else built-in defaults)")
    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Print value, allocation and rebalancing drift")
    report.add_argument("portfolio", help="YAML portfolio file")
    report.add_argument("--as-of", type=_parse_date, default=None, help="Valuation date (default today)")
    report.add_argument("--refresh", action="store_true", help="Fetch prices even when the cache is fresh")
    report.add_argument("--offline", action="store_true", help="Use cached prices only")

    importer = sub.add_parser("import", help="Validate a portfolio and store it in the cache")
    importer.add_argument("portfolio", help="YAML portfolio file")
    return parser


def build_command(args: argparse.Namespace) -> Command:
    if args.command == "report":
        return ReportCommand(args.portfolio, as_of=args.as_of, force_refresh=args.refresh, offline=args.offline)
    return ImportPortfolioCommand(args.portfolio)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config_path = resolve_config_path(args.config)
        config = load_config(config_path) if config_path else set_config(AppConfig())
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    configure_root_logger(config.logging)

    container = ServiceContainer()
    container.config.override(config)

    command = build_command(args)
    app_logger.log_debug(f"Running {command!r}")
    result = asyncio.run(command.execute(container))

    if result.status == CommandStatus.SUCCESS:
        print(result.message)
    else:
        print(f"Error: {result.error}", file=sys.stderr)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
