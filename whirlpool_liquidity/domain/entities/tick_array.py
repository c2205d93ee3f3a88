from __future__ import annotations

from dataclasses import dataclass


TICK_ARRAY_SIZE = 88


@dataclass(frozen=True)
class Tick:
    initialized: bool
    liquidity_net: int
    liquidity_gross: int
    fee_growth_outside_a: int
    fee_growth_outside_b: int
    reward_growths_outside: tuple[int, int, int]

    @classmethod
    def empty(cls) -> Tick:
        return cls(
            initialized=False,
            liquidity_net=0,
            liquidity_gross=0,
            fee_growth_outside_a=0,
            fee_growth_outside_b=0,
            reward_growths_outside=(0, 0, 0),
        )


@dataclass(frozen=True)
class TickArray:
    """Uniform view of a tick array, whatever its on-chain layout was."""

    address: str
    whirlpool: str
    start_tick_index: int
    ticks: tuple[Tick, ...]

    def tick_index(self, slot: int, tick_spacing: int) -> int:
        return self.start_tick_index + slot * tick_spacing

    def end_tick_index(self, tick_spacing: int) -> int:
        """Exclusive upper bound of the window covered by this array."""
        return self.start_tick_index + TICK_ARRAY_SIZE * tick_spacing


@dataclass(frozen=True)
class FixedTickArrayRecord:
    address: str
    whirlpool: str
    start_tick_index: int
    ticks: tuple[Tick, ...]


@dataclass(frozen=True)
class DynamicTickData:
    liquidity_net: int
    liquidity_gross: int
    fee_growth_outside_a: int
    fee_growth_outside_b: int
    reward_growths_outside: tuple[int, int, int]


@dataclass(frozen=True)
class DynamicTick:
    initialized: bool
    data: DynamicTickData | None = None


@dataclass(frozen=True)
class DynamicTickArrayRecord:
    address: str
    whirlpool: str
    start_tick_index: int
    tick_bitmap: int
    ticks: tuple[DynamicTick, ...]


TickArrayRecord = FixedTickArrayRecord | DynamicTickArrayRecord
