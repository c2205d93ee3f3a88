from __future__ import annotations

from typing import Protocol

from whirlpool_liquidity.domain.entities.tick_array import (
    DynamicTickArrayRecord,
    FixedTickArrayRecord,
)
from whirlpool_liquidity.domain.entities.whirlpool import Whirlpool


class TickArraySourcePort(Protocol):
    def get_whirlpool(self, *, pool_address: str) -> Whirlpool | None:
        ...

    def fetch_fixed_tick_arrays(self, *, pool_address: str) -> list[FixedTickArrayRecord]:
        ...

    def fetch_dynamic_tick_arrays(self, *, pool_address: str) -> list[DynamicTickArrayRecord]:
        ...
