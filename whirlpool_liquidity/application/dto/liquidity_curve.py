from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GetLiquidityCurveInput:
    pool_address: str
    include_tail: bool = False


@dataclass(frozen=True)
class LiquidityPointOutput:
    tick_index: int
    liquidity: str


@dataclass(frozen=True)
class LiquidityRangeOutput:
    lower_tick: int
    upper_tick: int
    liquidity: str


@dataclass(frozen=True)
class GetLiquidityCurveOutput:
    pool_address: str
    tick_spacing: int
    tick_current_index: int
    current_liquidity: str
    fee_rate: int
    liquidity: str
    sqrt_price: str
    token_mint_a: str
    token_mint_b: str
    fixed_tick_array_count: int
    dynamic_tick_array_count: int
    points: list[LiquidityPointOutput]
    ranges: list[LiquidityRangeOutput]
