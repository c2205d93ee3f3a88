from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable

from whirlpool_liquidity.domain.entities.liquidity_curve import LiquidityPoint
from whirlpool_liquidity.domain.entities.tick_array import TickArray
from whirlpool_liquidity.domain.exceptions import (
    DuplicateRangeError,
    InvariantViolationError,
    LiquidityCurveInputError,
)


def build_liquidity_curve(
    *,
    tick_arrays: Iterable[TickArray],
    tick_spacing: int,
) -> list[LiquidityPoint]:
    """Sweep the tick arrays left to right into a cumulative liquidity curve.

    Each emitted point holds the active liquidity on
    [point.tick_index, next_point.tick_index). Ticks with a zero
    liquidity_net produce no point.
    """
    if tick_spacing <= 0:
        raise LiquidityCurveInputError("tick_spacing must be >= 1.")

    ordered = sorted(tick_arrays, key=lambda item: item.start_tick_index)
    _ensure_single_pool(ordered)
    _ensure_disjoint_windows(ordered, tick_spacing=tick_spacing)

    points: list[LiquidityPoint] = []
    liquidity = 0
    for tick_array in ordered:
        for slot, tick in enumerate(tick_array.ticks):
            if tick.liquidity_net == 0:
                continue

            liquidity += tick.liquidity_net
            points.append(
                LiquidityPoint(
                    tick_index=tick_array.tick_index(slot, tick_spacing),
                    liquidity=liquidity,
                )
            )

    return points


def liquidity_at_tick(points: list[LiquidityPoint], tick_index: int) -> int:
    idx = bisect_right([point.tick_index for point in points], tick_index)
    if idx == 0:
        return 0
    return points[idx - 1].liquidity


def _ensure_single_pool(ordered: list[TickArray]) -> None:
    pools = {item.whirlpool for item in ordered}
    if len(pools) > 1:
        raise InvariantViolationError(
            f"Tick arrays belong to more than one whirlpool: {', '.join(sorted(pools))}."
        )


def _ensure_disjoint_windows(ordered: list[TickArray], *, tick_spacing: int) -> None:
    for prev, curr in zip(ordered, ordered[1:]):
        if curr.start_tick_index == prev.start_tick_index:
            raise DuplicateRangeError(
                f"Tick arrays {prev.address} and {curr.address} share start_tick_index "
                f"{curr.start_tick_index}."
            )
        if curr.start_tick_index < prev.end_tick_index(tick_spacing):
            raise InvariantViolationError(
                f"Tick array {curr.address} starting at {curr.start_tick_index} overlaps "
                f"{prev.address} covering [{prev.start_tick_index}, {prev.end_tick_index(tick_spacing)})."
            )
