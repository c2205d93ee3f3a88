from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LiquidityPoint:
    tick_index: int
    liquidity: int


@dataclass(frozen=True)
class LiquidityRange:
    lower_tick: int
    upper_tick: int
    liquidity: int
