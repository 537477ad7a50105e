"""Command-line interface for the DLMM position monitor."""
from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import sys
from datetime import datetime
from typing import Any

from .config import load_config
from .engine import calculate_portfolio_summary
from .logging_setup import configure_logging
from .services import Dashboard
from .sources import SnapshotSource


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="dlmm-monitor",
        description="DLMM liquidity position metrics",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--now",
        type=float,
        default=None,
        help="Reference unix timestamp for yield estimates (default: current time)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("positions", help="Positions with status and risk metrics")
    sub.add_parser("summary", help="Portfolio summary per wallet and overall")

    pool_parser = sub.add_parser("pool", help="Pool stats and liquidity distribution")
    pool_parser.add_argument("address", help="Pool address")

    return parser


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _dump(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=_json_default))


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    dashboard = Dashboard(SnapshotSource(config.source.snapshot_path), config)

    if args.command == "positions":
        views = await dashboard.refresh_all(args.now)
        _dump([dataclasses.asdict(v) for v in views])
    elif args.command == "summary":
        views = await dashboard.refresh_all(args.now)
        every = [p for v in views for p in v.positions]
        _dump(
            {
                "wallets": {v.label: dataclasses.asdict(v.summary) for v in views},
                "overall": dataclasses.asdict(calculate_portfolio_summary(every)),
            }
        )
    elif args.command == "pool":
        pool = await dashboard.pool_info(args.address)
        bins = await dashboard.liquidity_distribution(args.address)
        _dump(
            {
                "pool": dataclasses.asdict(pool),
                "bins": [dataclasses.asdict(b) for b in bins],
            }
        )
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    asyncio.run(_run(args))
