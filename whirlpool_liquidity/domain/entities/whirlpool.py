from __future__ import annotations

from dataclasses import dataclass


MAX_TICK_INDEX = 443636


@dataclass(frozen=True)
class Whirlpool:
    address: str
    tick_spacing: int
    fee_rate: int
    liquidity: int
    sqrt_price: int
    tick_current_index: int
    token_mint_a: str
    token_mint_b: str
