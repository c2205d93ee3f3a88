from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from whirlpool_liquidity.api.deps import get_liquidity_curve_use_case
from whirlpool_liquidity.api.schemas.liquidity_curve import (
    LiquidityCurvePoolResponse,
    LiquidityCurveResponse,
    LiquidityPointResponse,
    LiquidityRangeResponse,
)
from whirlpool_liquidity.application.dto.liquidity_curve import GetLiquidityCurveInput
from whirlpool_liquidity.application.use_cases.get_liquidity_curve import GetLiquidityCurveUseCase
from whirlpool_liquidity.domain.exceptions import (
    InvariantViolationError,
    LiquidityCurveInputError,
    MalformedRecordError,
    PoolNotFoundError,
)
from whirlpool_liquidity.infrastructure.clients.solana_rpc_client import SolanaRpcError

router = APIRouter()


@router.get("/v1/whirlpools/{pool_address}/liquidity-curve", response_model=LiquidityCurveResponse)
def get_liquidity_curve(
    pool_address: str,
    include_tail: bool = Query(
        False,
        description="Also return the last range, closed at the maximum tick index.",
    ),
    use_case: GetLiquidityCurveUseCase = Depends(get_liquidity_curve_use_case),
):
    try:
        result = use_case.execute(
            GetLiquidityCurveInput(
                pool_address=pool_address,
                include_tail=include_tail,
            )
        )
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except LiquidityCurveInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except (MalformedRecordError, InvariantViolationError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except SolanaRpcError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return LiquidityCurveResponse(
        pool=LiquidityCurvePoolResponse(
            address=result.pool_address,
            tick_spacing=result.tick_spacing,
            tick_current_index=result.tick_current_index,
            current_liquidity=result.current_liquidity,
            fee_rate=result.fee_rate,
            liquidity=result.liquidity,
            sqrt_price=result.sqrt_price,
            token_mint_a=result.token_mint_a,
            token_mint_b=result.token_mint_b,
        ),
        fixed_tick_array_count=result.fixed_tick_array_count,
        dynamic_tick_array_count=result.dynamic_tick_array_count,
        points=[
            LiquidityPointResponse(tick_index=item.tick_index, liquidity=item.liquidity)
            for item in result.points
        ],
        ranges=[
            LiquidityRangeResponse(
                lower_tick=item.lower_tick,
                upper_tick=item.upper_tick,
                liquidity=item.liquidity,
            )
            for item in result.ranges
        ],
    )
