from __future__ import annotations

from pydantic import BaseModel, Field


class LiquidityPointResponse(BaseModel):
    tick_index: int
    liquidity: str = Field(..., description="Cumulative active liquidity from this tick on (integer as string).")


class LiquidityRangeResponse(BaseModel):
    lower_tick: int = Field(..., description="Inclusive lower tick of the range.")
    upper_tick: int = Field(..., description="Exclusive upper tick of the range.")
    liquidity: str


class LiquidityCurvePoolResponse(BaseModel):
    address: str
    tick_spacing: int
    tick_current_index: int
    current_liquidity: str
    fee_rate: int
    liquidity: str = Field(..., description="On-chain active liquidity of the pool (integer as string).")
    sqrt_price: str = Field(..., description="Q64.64 square root price (integer as string).")
    token_mint_a: str
    token_mint_b: str


class LiquidityCurveResponse(BaseModel):
    pool: LiquidityCurvePoolResponse
    fixed_tick_array_count: int
    dynamic_tick_array_count: int
    points: list[LiquidityPointResponse]
    ranges: list[LiquidityRangeResponse]
