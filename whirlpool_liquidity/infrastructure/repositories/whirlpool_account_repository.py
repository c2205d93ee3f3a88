from __future__ import annotations

import logging

from whirlpool_liquidity.domain.entities.tick_array import (
    DynamicTickArrayRecord,
    FixedTickArrayRecord,
)
from whirlpool_liquidity.domain.entities.whirlpool import Whirlpool
from whirlpool_liquidity.domain.exceptions import LiquidityCurveInputError
from whirlpool_liquidity.infrastructure.clients.solana_rpc_client import (
    SolanaRpcClient,
    memcmp_filter,
)
from whirlpool_liquidity.infrastructure.layouts.whirlpool_layouts import (
    DYNAMIC_TICK_ARRAY_DISCRIMINATOR,
    DYNAMIC_TICK_ARRAY_WHIRLPOOL_OFFSET,
    FIXED_TICK_ARRAY_DISCRIMINATOR,
    FIXED_TICK_ARRAY_WHIRLPOOL_OFFSET,
    WHIRLPOOL_DISCRIMINATOR,
    WHIRLPOOL_PROGRAM_ADDRESS,
    decode_dynamic_tick_array,
    decode_fixed_tick_array,
    decode_pubkey,
    decode_whirlpool,
)


logger = logging.getLogger(__name__)


class RpcWhirlpoolAccountRepository:
    def __init__(self, rpc_client: SolanaRpcClient, *, program_address: str = WHIRLPOOL_PROGRAM_ADDRESS):
        self._rpc_client = rpc_client
        self._program_address = program_address

    def get_whirlpool(self, *, pool_address: str) -> Whirlpool | None:
        _pool_pubkey(pool_address)
        account = self._rpc_client.get_account_info(pool_address)
        if account is None:
            return None
        if account.owner != self._program_address or not account.data.startswith(WHIRLPOOL_DISCRIMINATOR):
            logger.info(
                "whirlpool_account_repo: not_a_whirlpool address=%s owner=%s",
                pool_address,
                account.owner,
            )
            return None
        return decode_whirlpool(pool_address, account.data)

    def fetch_fixed_tick_arrays(self, *, pool_address: str) -> list[FixedTickArrayRecord]:
        accounts = self._rpc_client.get_program_accounts(
            self._program_address,
            filters=[
                memcmp_filter(0, FIXED_TICK_ARRAY_DISCRIMINATOR),
                memcmp_filter(FIXED_TICK_ARRAY_WHIRLPOOL_OFFSET, _pool_pubkey(pool_address)),
            ],
        )
        records = [decode_fixed_tick_array(account.address, account.data) for account in accounts]
        logger.info(
            "whirlpool_account_repo: fetched_fixed_tick_arrays pool=%s fetched=%s",
            pool_address,
            len(records),
        )
        return records

    def fetch_dynamic_tick_arrays(self, *, pool_address: str) -> list[DynamicTickArrayRecord]:
        accounts = self._rpc_client.get_program_accounts(
            self._program_address,
            filters=[
                memcmp_filter(0, DYNAMIC_TICK_ARRAY_DISCRIMINATOR),
                memcmp_filter(DYNAMIC_TICK_ARRAY_WHIRLPOOL_OFFSET, _pool_pubkey(pool_address)),
            ],
        )
        records = [decode_dynamic_tick_array(account.address, account.data) for account in accounts]
        logger.info(
            "whirlpool_account_repo: fetched_dynamic_tick_arrays pool=%s fetched=%s",
            pool_address,
            len(records),
        )
        return records


def _pool_pubkey(pool_address: str) -> bytes:
    try:
        return decode_pubkey(pool_address)
    except ValueError as exc:
        raise LiquidityCurveInputError("pool_address must be a base58 public key.") from exc
