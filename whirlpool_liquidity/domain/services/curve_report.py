from __future__ import annotations

from whirlpool_liquidity.domain.entities.liquidity_curve import LiquidityPoint, LiquidityRange
from whirlpool_liquidity.domain.exceptions import LiquidityCurveInputError


def build_liquidity_ranges(
    points: list[LiquidityPoint],
    *,
    upper_tick: int | None = None,
) -> list[LiquidityRange]:
    ranges = [
        LiquidityRange(
            lower_tick=curr.tick_index,
            upper_tick=nxt.tick_index,
            liquidity=curr.liquidity,
        )
        for curr, nxt in zip(points, points[1:])
    ]

    # the open-ended tail is only reported on request
    if points and upper_tick is not None and upper_tick > points[-1].tick_index:
        last = points[-1]
        ranges.append(
            LiquidityRange(
                lower_tick=last.tick_index,
                upper_tick=upper_tick,
                liquidity=last.liquidity,
            )
        )

    return ranges


def format_liquidity_ranges(
    ranges: list[LiquidityRange],
    *,
    tick_width: int = 7,
    liquidity_width: int = 20,
) -> list[str]:
    if tick_width < 1 or liquidity_width < 1:
        raise LiquidityCurveInputError("tick_width and liquidity_width must be >= 1.")

    return [
        f"[{item.lower_tick:>{tick_width}}, {item.upper_tick:>{tick_width}}) "
        f"=> liquidity: {item.liquidity:>{liquidity_width}}"
        for item in ranges
    ]
