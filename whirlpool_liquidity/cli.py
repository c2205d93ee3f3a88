"""Print the liquidity distribution of a whirlpool as half-open tick ranges.

Usage:
    python -m whirlpool_liquidity.cli [POOL_ADDRESS] [--rpc-url URL] [--include-tail]

The RPC endpoint must support getProgramAccounts.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import logging

from whirlpool_liquidity.api.deps import build_liquidity_curve_use_case
from whirlpool_liquidity.application.dto.liquidity_curve import GetLiquidityCurveInput
from whirlpool_liquidity.domain.entities.liquidity_curve import LiquidityRange
from whirlpool_liquidity.domain.exceptions import DomainError
from whirlpool_liquidity.domain.services.curve_report import format_liquidity_ranges
from whirlpool_liquidity.infrastructure.clients.solana_rpc_client import SolanaRpcError
from whirlpool_liquidity.shared.config import get_settings


logger = logging.getLogger(__name__)


def build_parser(default_pool_address: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print the liquidity distribution of a whirlpool.")
    parser.add_argument(
        "pool_address",
        nargs="?",
        default=default_pool_address,
        help=f"Whirlpool address (default: {default_pool_address})",
    )
    parser.add_argument("--rpc-url", help="Solana RPC endpoint (default: RPC_URL)")
    parser.add_argument(
        "--include-tail",
        action="store_true",
        help="Close the last range at the maximum tick index",
    )
    parser.add_argument("--tick-width", type=int, default=7)
    parser.add_argument("--liquidity-width", type=int, default=20)
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL)")
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    args = build_parser(settings.default_pool_address).parse_args(argv)

    log_level = (args.log_level or settings.log_level).upper()
    logging.basicConfig(level=log_level, format="%(message)s")
    # request and progress lines stay quiet unless debugging
    if log_level != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("whirlpool_liquidity.infrastructure").setLevel(logging.WARNING)
    if args.rpc_url:
        settings = replace(settings, rpc_url=args.rpc_url)

    use_case = build_liquidity_curve_use_case(settings)
    try:
        result = use_case.execute(
            GetLiquidityCurveInput(
                pool_address=args.pool_address,
                include_tail=args.include_tail,
            )
        )
        lines = format_liquidity_ranges(
            [
                LiquidityRange(
                    lower_tick=item.lower_tick,
                    upper_tick=item.upper_tick,
                    liquidity=int(item.liquidity),
                )
                for item in result.ranges
            ],
            tick_width=args.tick_width,
            liquidity_width=args.liquidity_width,
        )
    except (DomainError, SolanaRpcError) as exc:
        logger.error("liquidity curve failed: %s", exc)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
