from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    rpc_timeout_seconds: float
    rpc_max_retries: int
    rpc_min_interval_ms: int
    whirlpool_program_address: str
    default_pool_address: str
    log_level: str


def get_settings() -> Settings:
    return Settings(
        rpc_url=_env("RPC_URL", "https://api.mainnet-beta.solana.com"),
        rpc_timeout_seconds=float(_env("RPC_TIMEOUT_SECONDS", "30")),
        rpc_max_retries=int(_env("RPC_MAX_RETRIES", "1")),
        rpc_min_interval_ms=int(_env("RPC_MIN_INTERVAL_MS", "0")),
        whirlpool_program_address=_env(
            "WHIRLPOOL_PROGRAM_ADDRESS", "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc"
        ),
        # KMNO/USDC, tick spacing 1
        default_pool_address=_env(
            "DEFAULT_POOL_ADDRESS", "3ndjN1nJVUKGrJBc1hhVpER6kWTZKHdyDrPyCJyX3CXK"
        ),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
