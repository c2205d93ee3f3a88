from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import logging

from whirlpool_liquidity.application.dto.liquidity_curve import (
    GetLiquidityCurveInput,
    GetLiquidityCurveOutput,
    LiquidityPointOutput,
    LiquidityRangeOutput,
)
from whirlpool_liquidity.application.ports.tick_array_source_port import TickArraySourcePort
from whirlpool_liquidity.domain.entities.whirlpool import MAX_TICK_INDEX
from whirlpool_liquidity.domain.exceptions import (
    LiquidityCurveInputError,
    MalformedRecordError,
    PoolNotFoundError,
)
from whirlpool_liquidity.domain.services.curve_report import build_liquidity_ranges
from whirlpool_liquidity.domain.services.liquidity_curve import (
    build_liquidity_curve,
    liquidity_at_tick,
)
from whirlpool_liquidity.domain.services.tick_array_normalizer import consolidate_tick_arrays


logger = logging.getLogger(__name__)


class GetLiquidityCurveUseCase:
    def __init__(self, *, tick_array_source_port: TickArraySourcePort, max_workers: int = 2):
        self._tick_array_source_port = tick_array_source_port
        self._max_workers = max_workers

    def execute(self, command: GetLiquidityCurveInput) -> GetLiquidityCurveOutput:
        pool_address = command.pool_address.strip()
        if not pool_address:
            raise LiquidityCurveInputError("pool_address is required.")

        whirlpool = self._tick_array_source_port.get_whirlpool(pool_address=pool_address)
        if whirlpool is None:
            raise PoolNotFoundError("Whirlpool not found.")
        if whirlpool.tick_spacing <= 0:
            raise MalformedRecordError(
                f"Whirlpool {pool_address} has invalid tick_spacing {whirlpool.tick_spacing}."
            )

        # both collections must be complete before the sort runs
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            fixed_future = executor.submit(
                self._tick_array_source_port.fetch_fixed_tick_arrays,
                pool_address=pool_address,
            )
            dynamic_future = executor.submit(
                self._tick_array_source_port.fetch_dynamic_tick_arrays,
                pool_address=pool_address,
            )
            fixed_records = fixed_future.result()
            dynamic_records = dynamic_future.result()

        logger.info(
            "Found %s fixed tick arrays and %s dynamic tick arrays for whirlpool %s",
            len(fixed_records),
            len(dynamic_records),
            pool_address,
        )

        tick_arrays = consolidate_tick_arrays([*fixed_records, *dynamic_records])
        points = build_liquidity_curve(
            tick_arrays=tick_arrays,
            tick_spacing=whirlpool.tick_spacing,
        )
        ranges = build_liquidity_ranges(
            points,
            upper_tick=MAX_TICK_INDEX if command.include_tail else None,
        )

        logger.debug(
            "get_liquidity_curve: built pool=%s tick_spacing=%s points=%s ranges=%s",
            pool_address,
            whirlpool.tick_spacing,
            len(points),
            len(ranges),
        )

        return GetLiquidityCurveOutput(
            pool_address=pool_address,
            tick_spacing=whirlpool.tick_spacing,
            tick_current_index=whirlpool.tick_current_index,
            current_liquidity=str(liquidity_at_tick(points, whirlpool.tick_current_index)),
            fee_rate=whirlpool.fee_rate,
            liquidity=str(whirlpool.liquidity),
            sqrt_price=str(whirlpool.sqrt_price),
            token_mint_a=whirlpool.token_mint_a,
            token_mint_b=whirlpool.token_mint_b,
            fixed_tick_array_count=len(fixed_records),
            dynamic_tick_array_count=len(dynamic_records),
            points=[
                LiquidityPointOutput(tick_index=point.tick_index, liquidity=str(point.liquidity))
                for point in points
            ],
            ranges=[
                LiquidityRangeOutput(
                    lower_tick=item.lower_tick,
                    upper_tick=item.upper_tick,
                    liquidity=str(item.liquidity),
                )
                for item in ranges
            ],
        )
