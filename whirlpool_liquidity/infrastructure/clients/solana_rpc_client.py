from __future__ import annotations

import base64
from dataclasses import dataclass
import logging
from threading import Lock
import time

import base58
import httpx


logger = logging.getLogger(__name__)


class SolanaRpcError(RuntimeError):
    pass


@dataclass(frozen=True)
class SolanaRpcClientSettings:
    rpc_url: str
    timeout_seconds: float
    max_retries: int
    min_interval_ms: int


@dataclass(frozen=True)
class AccountInfo:
    address: str
    owner: str
    data: bytes


def memcmp_filter(offset: int, raw_bytes: bytes) -> dict:
    return {
        "memcmp": {
            "offset": offset,
            "bytes": base58.b58encode(raw_bytes).decode("ascii"),
            "encoding": "base58",
        }
    }


class SolanaRpcClient:
    def __init__(self, settings: SolanaRpcClientSettings):
        self._settings = settings
        self._lock = Lock()
        self._last_request_at = 0.0
        self._request_id = 0

    def get_account_info(self, address: str) -> AccountInfo | None:
        result = self._post_rpc(
            method="getAccountInfo",
            params=[address, {"encoding": "base64"}],
        )
        value = (result or {}).get("value")
        if not value:
            return None
        return AccountInfo(
            address=address,
            owner=value.get("owner", ""),
            data=_decode_account_data(value.get("data")),
        )

    def get_program_accounts(self, program_address: str, *, filters: list[dict]) -> list[AccountInfo]:
        result = self._post_rpc(
            method="getProgramAccounts",
            params=[program_address, {"encoding": "base64", "filters": filters}],
        )
        rows = result or []
        accounts = [
            AccountInfo(
                address=row["pubkey"],
                owner=row["account"].get("owner", program_address),
                data=_decode_account_data(row["account"].get("data")),
            )
            for row in rows
        ]

        logger.info(
            "solana_rpc_client: fetched_program_accounts program=%s filters=%s fetched=%s",
            program_address,
            len(filters),
            len(accounts),
        )
        return accounts

    def _post_rpc(self, *, method: str, params: list):
        attempts = max(1, self._settings.max_retries)
        delay = 0.25
        last_exc: Exception | None = None

        for attempt in range(1, attempts + 1):
            self._respect_rate_limit()
            try:
                with httpx.Client(timeout=self._settings.timeout_seconds) as client:
                    response = client.post(
                        self._settings.rpc_url,
                        json={
                            "jsonrpc": "2.0",
                            "id": self._next_request_id(),
                            "method": method,
                            "params": params,
                        },
                    )
                    response.raise_for_status()
                    payload = response.json()

                if not isinstance(payload, dict):
                    raise SolanaRpcError(
                        f"{method} failed: unexpected response body of type {type(payload).__name__}"
                    )

                error = payload.get("error")
                if error:
                    raise SolanaRpcError(
                        f"{method} failed: {error.get('message', error)} (code={error.get('code')})"
                    )

                return payload.get("result")
            except (httpx.HTTPError, SolanaRpcError, ValueError) as exc:
                last_exc = exc
                if attempt == attempts:
                    break
                logger.warning(
                    "solana_rpc_client: rpc_retry method=%s attempt=%s/%s error=%s",
                    method,
                    attempt,
                    attempts,
                    exc,
                )
                time.sleep(delay)
                delay *= 2

        raise SolanaRpcError(f"RPC request {method} failed after retries: {last_exc}") from last_exc

    def _next_request_id(self) -> int:
        with self._lock:
            self._request_id += 1
            return self._request_id

    def _respect_rate_limit(self) -> None:
        min_interval = max(0, self._settings.min_interval_ms) / 1000.0
        if min_interval <= 0:
            return

        with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_at
            if elapsed < min_interval:
                time.sleep(min_interval - elapsed)
            self._last_request_at = time.monotonic()


def _decode_account_data(data) -> bytes:
    # base64 encoding answers with [payload, "base64"]
    if isinstance(data, list) and data:
        data = data[0]
    if not isinstance(data, str):
        raise SolanaRpcError(f"Unexpected account data encoding: {type(data).__name__}")
    return base64.b64decode(data)
