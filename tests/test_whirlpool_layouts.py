from __future__ import annotations

import base58
import pytest

from whirlpool_liquidity.domain.entities.tick_array import TICK_ARRAY_SIZE
from whirlpool_liquidity.domain.exceptions import MalformedRecordError
from whirlpool_liquidity.infrastructure.layouts.whirlpool_layouts import (
    DYNAMIC_TICK_ARRAY_LAYOUT,
    DYNAMIC_TICK_ARRAY_WHIRLPOOL_OFFSET,
    FIXED_TICK_ARRAY_DISCRIMINATOR,
    FIXED_TICK_ARRAY_LAYOUT,
    FIXED_TICK_ARRAY_WHIRLPOOL_OFFSET,
    WHIRLPOOL_LAYOUT,
    decode_dynamic_tick_array,
    decode_fixed_tick_array,
    decode_pubkey,
    decode_whirlpool,
)


POOL = "3ndjN1nJVUKGrJBc1hhVpER6kWTZKHdyDrPyCJyX3CXK"
POOL_BYTES = base58.b58decode(POOL)


def _tick(liquidity_net: int) -> dict:
    return {
        "initialized": liquidity_net != 0,
        "liquidity_net": liquidity_net,
        "liquidity_gross": abs(liquidity_net),
        "fee_growth_outside_a": 0,
        "fee_growth_outside_b": 0,
        "reward_growths_outside": [0, 0, 0],
    }


def _fixed_bytes(start_tick_index: int, nets: dict[int, int]) -> bytes:
    return FIXED_TICK_ARRAY_LAYOUT.build(
        {
            "start_tick_index": start_tick_index,
            "ticks": [_tick(nets.get(slot, 0)) for slot in range(TICK_ARRAY_SIZE)],
            "whirlpool": POOL_BYTES,
        }
    )


def _dynamic_bytes(start_tick_index: int, nets: dict[int, int]) -> bytes:
    ticks = []
    bitmap = 0
    for slot in range(TICK_ARRAY_SIZE):
        if slot not in nets:
            ticks.append({"tag": 0, "data": None})
            continue
        bitmap |= 1 << slot
        data = _tick(nets[slot])
        data.pop("initialized")
        ticks.append({"tag": 1, "data": data})
    return DYNAMIC_TICK_ARRAY_LAYOUT.build(
        {
            "start_tick_index": start_tick_index,
            "whirlpool": POOL_BYTES,
            "tick_bitmap": bitmap,
            "ticks": ticks,
        }
    )


def test_fixed_tick_array_layout_matches_account_size_and_offsets():
    raw = _fixed_bytes(-5632, {0: 1})

    assert len(raw) == 9988
    assert raw[:8] == FIXED_TICK_ARRAY_DISCRIMINATOR
    assert raw[FIXED_TICK_ARRAY_WHIRLPOOL_OFFSET:FIXED_TICK_ARRAY_WHIRLPOOL_OFFSET + 32] == POOL_BYTES


def test_decode_fixed_tick_array_reads_signed_liquidity_net():
    record = decode_fixed_tick_array("ta", _fixed_bytes(-5632, {0: -(2**100), 87: 7}))

    assert record.whirlpool == POOL
    assert record.start_tick_index == -5632
    assert len(record.ticks) == TICK_ARRAY_SIZE
    assert record.ticks[0].liquidity_net == -(2**100)
    assert record.ticks[0].initialized is True
    assert record.ticks[1].initialized is False
    assert record.ticks[87].liquidity_net == 7


def test_decode_dynamic_tick_array_keeps_variants_and_bitmap():
    raw = _dynamic_bytes(704, {2: -40})
    record = decode_dynamic_tick_array("dyn", raw)

    assert raw[DYNAMIC_TICK_ARRAY_WHIRLPOOL_OFFSET:DYNAMIC_TICK_ARRAY_WHIRLPOOL_OFFSET + 32] == POOL_BYTES
    assert record.whirlpool == POOL
    assert record.start_tick_index == 704
    assert record.tick_bitmap == 1 << 2
    assert record.ticks[0].initialized is False
    assert record.ticks[0].data is None
    assert record.ticks[2].initialized is True
    assert record.ticks[2].data.liquidity_net == -40


def test_wrong_discriminator_is_malformed():
    raw = _dynamic_bytes(0, {})

    with pytest.raises(MalformedRecordError):
        decode_fixed_tick_array("dyn", raw)


def test_truncated_account_is_malformed():
    with pytest.raises(MalformedRecordError):
        decode_fixed_tick_array("ta", _fixed_bytes(0, {})[:100])


def test_unknown_dynamic_tick_tag_is_malformed():
    raw = bytearray(_dynamic_bytes(0, {}))
    # first tick tag sits right after discriminator, start index, whirlpool and bitmap
    raw[8 + 4 + 32 + 16] = 7

    with pytest.raises(MalformedRecordError):
        decode_dynamic_tick_array("dyn", bytes(raw))


def test_decode_whirlpool_reads_tick_spacing_and_mints():
    mint_a = bytes(range(32))
    mint_b = bytes(range(32, 64))
    raw = WHIRLPOOL_LAYOUT.build(
        {
            "whirlpools_config": bytes(32),
            "whirlpool_bump": 255,
            "tick_spacing": 64,
            "fee_tier_index_seed": b"\x40\x00",
            "fee_rate": 3000,
            "protocol_fee_rate": 1300,
            "liquidity": 9737184753466,
            "sqrt_price": 2**64,
            "tick_current_index": -23030,
            "protocol_fee_owed_a": 0,
            "protocol_fee_owed_b": 0,
            "token_mint_a": mint_a,
            "token_vault_a": bytes(32),
            "fee_growth_global_a": 0,
            "token_mint_b": mint_b,
        }
    )

    whirlpool = decode_whirlpool(POOL, raw + bytes(64))

    assert raw[41:43] == (64).to_bytes(2, "little")
    assert whirlpool.tick_spacing == 64
    assert whirlpool.tick_current_index == -23030
    assert whirlpool.liquidity == 9737184753466
    assert whirlpool.token_mint_a == base58.b58encode(mint_a).decode()
    assert whirlpool.token_mint_b == base58.b58encode(mint_b).decode()


def test_decode_pubkey_rejects_wrong_length():
    assert decode_pubkey(POOL) == POOL_BYTES
    with pytest.raises(ValueError):
        decode_pubkey("abc")
