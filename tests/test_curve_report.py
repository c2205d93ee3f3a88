from __future__ import annotations

import pytest

from whirlpool_liquidity.domain.entities.liquidity_curve import LiquidityPoint, LiquidityRange
from whirlpool_liquidity.domain.exceptions import LiquidityCurveInputError
from whirlpool_liquidity.domain.services.curve_report import (
    build_liquidity_ranges,
    format_liquidity_ranges,
)


POINTS = [
    LiquidityPoint(tick_index=-443636, liquidity=416944588),
    LiquidityPoint(tick_index=-69082, liquidity=637265203),
    LiquidityPoint(tick_index=443636, liquidity=0),
]


def test_ranges_pair_adjacent_points():
    ranges = build_liquidity_ranges(POINTS)

    assert ranges == [
        LiquidityRange(lower_tick=-443636, upper_tick=-69082, liquidity=416944588),
        LiquidityRange(lower_tick=-69082, upper_tick=443636, liquidity=637265203),
    ]


def test_ranges_skip_open_tail_unless_requested():
    points = [LiquidityPoint(tick_index=0, liquidity=100), LiquidityPoint(tick_index=704, liquidity=60)]

    assert len(build_liquidity_ranges(points)) == 1
    assert build_liquidity_ranges(points, upper_tick=1000)[-1] == LiquidityRange(
        lower_tick=704,
        upper_tick=1000,
        liquidity=60,
    )
    # a bound at or below the last tick adds nothing
    assert len(build_liquidity_ranges(points, upper_tick=704)) == 1


def test_ranges_of_empty_or_single_point_curve():
    assert build_liquidity_ranges([]) == []
    assert build_liquidity_ranges([], upper_tick=10) == []
    assert build_liquidity_ranges([LiquidityPoint(tick_index=5, liquidity=1)]) == []


def test_format_pads_ticks_and_liquidity():
    lines = format_liquidity_ranges(build_liquidity_ranges(POINTS))

    assert lines == [
        "[-443636,  -69082) => liquidity:            416944588",
        "[ -69082,  443636) => liquidity:            637265203",
    ]


def test_format_accepts_custom_widths():
    lines = format_liquidity_ranges(
        [LiquidityRange(lower_tick=1, upper_tick=2, liquidity=3)],
        tick_width=2,
        liquidity_width=3,
    )

    assert lines == ["[ 1,  2) => liquidity:   3"]


def test_format_rejects_non_positive_widths():
    with pytest.raises(LiquidityCurveInputError):
        format_liquidity_ranges([], tick_width=0)
