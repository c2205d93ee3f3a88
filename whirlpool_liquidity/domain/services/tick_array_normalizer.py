from __future__ import annotations

from collections.abc import Iterable

from whirlpool_liquidity.domain.entities.tick_array import (
    TICK_ARRAY_SIZE,
    DynamicTick,
    DynamicTickArrayRecord,
    FixedTickArrayRecord,
    Tick,
    TickArray,
    TickArrayRecord,
)
from whirlpool_liquidity.domain.exceptions import MalformedRecordError


def consolidate_tick_array(record: TickArrayRecord) -> TickArray:
    """Reshape a fixed or dynamic tick array record into a TickArray.

    Every slot is kept, zero-liquidity ones included.
    """
    if isinstance(record, FixedTickArrayRecord):
        ticks = tuple(record.ticks)
    elif isinstance(record, DynamicTickArrayRecord):
        ticks = tuple(
            _consolidate_dynamic_tick(tick, slot=slot, record=record)
            for slot, tick in enumerate(record.ticks)
        )
    else:
        raise MalformedRecordError(f"Unsupported tick array record type: {type(record).__name__}")

    if len(ticks) != TICK_ARRAY_SIZE:
        raise MalformedRecordError(
            f"Tick array {record.address} has {len(ticks)} slots, expected {TICK_ARRAY_SIZE}."
        )

    return TickArray(
        address=record.address,
        whirlpool=record.whirlpool,
        start_tick_index=record.start_tick_index,
        ticks=ticks,
    )


def consolidate_tick_arrays(records: Iterable[TickArrayRecord]) -> list[TickArray]:
    return [consolidate_tick_array(record) for record in records]


def _consolidate_dynamic_tick(tick: DynamicTick, *, slot: int, record: DynamicTickArrayRecord) -> Tick:
    bitmap_initialized = bool((record.tick_bitmap >> slot) & 1)
    if tick.initialized != bitmap_initialized or tick.initialized != (tick.data is not None):
        raise MalformedRecordError(
            f"Dynamic tick array {record.address} slot {slot} disagrees with its tick bitmap."
        )

    if tick.data is None:
        return Tick.empty()

    return Tick(
        initialized=True,
        liquidity_net=tick.data.liquidity_net,
        liquidity_gross=tick.data.liquidity_gross,
        fee_growth_outside_a=tick.data.fee_growth_outside_a,
        fee_growth_outside_b=tick.data.fee_growth_outside_b,
        reward_growths_outside=tick.data.reward_growths_outside,
    )
