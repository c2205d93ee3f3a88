from __future__ import annotations

from functools import lru_cache

from whirlpool_liquidity.application.use_cases.get_liquidity_curve import GetLiquidityCurveUseCase
from whirlpool_liquidity.infrastructure.clients.solana_rpc_client import (
    SolanaRpcClient,
    SolanaRpcClientSettings,
)
from whirlpool_liquidity.infrastructure.repositories.whirlpool_account_repository import (
    RpcWhirlpoolAccountRepository,
)
from whirlpool_liquidity.shared.config import Settings, get_settings


def build_solana_rpc_client(settings: Settings) -> SolanaRpcClient:
    return SolanaRpcClient(
        SolanaRpcClientSettings(
            rpc_url=settings.rpc_url,
            timeout_seconds=settings.rpc_timeout_seconds,
            max_retries=settings.rpc_max_retries,
            min_interval_ms=settings.rpc_min_interval_ms,
        )
    )


def build_liquidity_curve_use_case(settings: Settings) -> GetLiquidityCurveUseCase:
    return GetLiquidityCurveUseCase(
        tick_array_source_port=RpcWhirlpoolAccountRepository(
            build_solana_rpc_client(settings),
            program_address=settings.whirlpool_program_address,
        )
    )


@lru_cache(maxsize=1)
def _get_liquidity_curve_use_case() -> GetLiquidityCurveUseCase:
    return build_liquidity_curve_use_case(get_settings())


def get_liquidity_curve_use_case() -> GetLiquidityCurveUseCase:
    return _get_liquidity_curve_use_case()
