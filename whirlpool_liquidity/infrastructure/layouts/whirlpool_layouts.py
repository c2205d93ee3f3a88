from __future__ import annotations

import hashlib

import base58
from construct import (
    Array,
    Bytes,
    BytesInteger,
    Const,
    ConstructError,
    Error,
    Flag,
    Int8ul,
    Int16ul,
    Int32sl,
    Int64ul,
    Pass,
    Struct,
    Switch,
    this,
)

from whirlpool_liquidity.domain.entities.tick_array import (
    TICK_ARRAY_SIZE,
    DynamicTick,
    DynamicTickArrayRecord,
    DynamicTickData,
    FixedTickArrayRecord,
    Tick,
)
from whirlpool_liquidity.domain.entities.whirlpool import Whirlpool
from whirlpool_liquidity.domain.exceptions import MalformedRecordError


WHIRLPOOL_PROGRAM_ADDRESS = "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc"


def account_discriminator(account_name: str) -> bytes:
    return hashlib.sha256(f"account:{account_name}".encode()).digest()[:8]


WHIRLPOOL_DISCRIMINATOR = account_discriminator("Whirlpool")
FIXED_TICK_ARRAY_DISCRIMINATOR = account_discriminator("TickArray")
DYNAMIC_TICK_ARRAY_DISCRIMINATOR = account_discriminator("DynamicTickArray")

# byte offsets of the owning whirlpool, used as memcmp filters
FIXED_TICK_ARRAY_WHIRLPOOL_OFFSET = 9956
DYNAMIC_TICK_ARRAY_WHIRLPOOL_OFFSET = 12

U128 = BytesInteger(16, signed=False, swapped=True)
I128 = BytesInteger(16, signed=True, swapped=True)
PUBKEY = Bytes(32)

WHIRLPOOL_LAYOUT = Struct(
    "discriminator" / Const(WHIRLPOOL_DISCRIMINATOR),
    "whirlpools_config" / PUBKEY,
    "whirlpool_bump" / Int8ul,
    "tick_spacing" / Int16ul,
    "fee_tier_index_seed" / Bytes(2),
    "fee_rate" / Int16ul,
    "protocol_fee_rate" / Int16ul,
    "liquidity" / U128,
    "sqrt_price" / U128,
    "tick_current_index" / Int32sl,
    "protocol_fee_owed_a" / Int64ul,
    "protocol_fee_owed_b" / Int64ul,
    "token_mint_a" / PUBKEY,
    "token_vault_a" / PUBKEY,
    "fee_growth_global_a" / U128,
    "token_mint_b" / PUBKEY,
)

TICK_LAYOUT = Struct(
    "initialized" / Flag,
    "liquidity_net" / I128,
    "liquidity_gross" / U128,
    "fee_growth_outside_a" / U128,
    "fee_growth_outside_b" / U128,
    "reward_growths_outside" / Array(3, U128),
)

FIXED_TICK_ARRAY_LAYOUT = Struct(
    "discriminator" / Const(FIXED_TICK_ARRAY_DISCRIMINATOR),
    "start_tick_index" / Int32sl,
    "ticks" / Array(TICK_ARRAY_SIZE, TICK_LAYOUT),
    "whirlpool" / PUBKEY,
)

DYNAMIC_TICK_DATA_LAYOUT = Struct(
    "liquidity_net" / I128,
    "liquidity_gross" / U128,
    "fee_growth_outside_a" / U128,
    "fee_growth_outside_b" / U128,
    "reward_growths_outside" / Array(3, U128),
)

# 0 = Uninitialized, 1 = Initialized(DynamicTickData)
DYNAMIC_TICK_LAYOUT = Struct(
    "tag" / Int8ul,
    "data" / Switch(this.tag, {0: Pass, 1: DYNAMIC_TICK_DATA_LAYOUT}, default=Error),
)

DYNAMIC_TICK_ARRAY_LAYOUT = Struct(
    "discriminator" / Const(DYNAMIC_TICK_ARRAY_DISCRIMINATOR),
    "start_tick_index" / Int32sl,
    "whirlpool" / PUBKEY,
    "tick_bitmap" / U128,
    "ticks" / Array(TICK_ARRAY_SIZE, DYNAMIC_TICK_LAYOUT),
)


def encode_pubkey(raw: bytes) -> str:
    return base58.b58encode(bytes(raw)).decode("ascii")


def decode_pubkey(address: str) -> bytes:
    raw = base58.b58decode(address)
    if len(raw) != 32:
        raise ValueError(f"Invalid public key: {address}")
    return raw


def decode_whirlpool(address: str, data: bytes) -> Whirlpool:
    parsed = _parse(WHIRLPOOL_LAYOUT, address=address, data=data, kind="whirlpool")
    return Whirlpool(
        address=address,
        tick_spacing=parsed.tick_spacing,
        fee_rate=parsed.fee_rate,
        liquidity=parsed.liquidity,
        sqrt_price=parsed.sqrt_price,
        tick_current_index=parsed.tick_current_index,
        token_mint_a=encode_pubkey(parsed.token_mint_a),
        token_mint_b=encode_pubkey(parsed.token_mint_b),
    )


def decode_fixed_tick_array(address: str, data: bytes) -> FixedTickArrayRecord:
    parsed = _parse(FIXED_TICK_ARRAY_LAYOUT, address=address, data=data, kind="fixed tick array")
    return FixedTickArrayRecord(
        address=address,
        whirlpool=encode_pubkey(parsed.whirlpool),
        start_tick_index=parsed.start_tick_index,
        ticks=tuple(
            Tick(
                initialized=bool(tick.initialized),
                liquidity_net=tick.liquidity_net,
                liquidity_gross=tick.liquidity_gross,
                fee_growth_outside_a=tick.fee_growth_outside_a,
                fee_growth_outside_b=tick.fee_growth_outside_b,
                reward_growths_outside=tuple(tick.reward_growths_outside),
            )
            for tick in parsed.ticks
        ),
    )


def decode_dynamic_tick_array(address: str, data: bytes) -> DynamicTickArrayRecord:
    parsed = _parse(DYNAMIC_TICK_ARRAY_LAYOUT, address=address, data=data, kind="dynamic tick array")
    return DynamicTickArrayRecord(
        address=address,
        whirlpool=encode_pubkey(parsed.whirlpool),
        start_tick_index=parsed.start_tick_index,
        tick_bitmap=parsed.tick_bitmap,
        ticks=tuple(_dynamic_tick(tick) for tick in parsed.ticks),
    )


def _dynamic_tick(tick) -> DynamicTick:
    if tick.tag == 0:
        return DynamicTick(initialized=False)
    return DynamicTick(
        initialized=True,
        data=DynamicTickData(
            liquidity_net=tick.data.liquidity_net,
            liquidity_gross=tick.data.liquidity_gross,
            fee_growth_outside_a=tick.data.fee_growth_outside_a,
            fee_growth_outside_b=tick.data.fee_growth_outside_b,
            reward_growths_outside=tuple(tick.data.reward_growths_outside),
        ),
    )


def _parse(layout: Struct, *, address: str, data: bytes, kind: str):
    try:
        return layout.parse(data)
    except ConstructError as exc:
        raise MalformedRecordError(f"Cannot decode {kind} account {address}: {exc}") from exc
