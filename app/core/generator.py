from __future__ import annotations

import re
import threading
from typing import Any, Dict

from observability import build_log_context, log_event
from signing import KeyProvider, sign_transaction
from transactions import (
    AccessListTransaction,
    FeeMarketTransaction,
    Transaction,
    build_transaction,
    transaction_hash_hex,
)
from transactions.encoding import to_int

from .schemas import GenerateTxRequest

LEGACY_TXN_TYPE = "legacy"

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")

_CTX = build_log_context(component="generator")


def _utf8(s: str) -> bytes:
    # JSON can carry unpaired surrogates; they become U+FFFD.
    return _LONE_SURROGATE.sub("\ufffd", s).encode("utf-8")


def render_transaction(tx: Transaction) -> Dict[str, Any]:
    """
    Wire view of a signed transaction: wei values and signature as decimal
    strings, addresses and storage keys as 0x hex.
    """
    out: Dict[str, Any] = {
        "chain_id": str(tx.chain_id),
        "nonce": tx.nonce,
        "to": tx.to or "",
        "value": str(tx.value),
        "data": tx.data.decode("utf-8", errors="replace"),
        "gas_limit": tx.gas_limit,
    }
    if isinstance(tx, FeeMarketTransaction):
        out["max_priority_fee"] = str(tx.max_priority_fee_per_gas)
        out["max_fee"] = str(tx.max_fee_per_gas)
    else:
        out["gas_price"] = str(tx.gas_price)
    if isinstance(tx, (AccessListTransaction, FeeMarketTransaction)) and tx.access_list:
        out["access_list"] = [
            {"address": t.address, "storage_keys": ["0x" + k.hex() for k in t.storage_keys]}
            for t in tx.access_list
        ]
    out["v"] = str(tx.v)
    out["r"] = str(tx.r)
    out["s"] = str(tx.s)
    out["type"] = tx.label
    return out


class TransactionGenerator:
    """
    Builds, signs and hashes one transaction per request.

    Key load, build and sign run under a single process-wide lock, so at most
    one signing operation is in flight at a time.
    """

    def __init__(self, key_provider: KeyProvider) -> None:
        self._key_provider = key_provider
        self._lock = threading.Lock()

    def generate(self, req: GenerateTxRequest) -> Dict[str, Any]:
        txn = req.txn
        amount = to_int(txn.amount, name="amount")
        gas_price = to_int(txn.gas_price, name="gas price")
        data = _utf8(txn.data)

        if req.txn_type == LEGACY_TXN_TYPE:
            response_key = "legacy_tx"
            # Legacy requests always sign a Type-0 transaction; the access list is dropped.
            fields: Dict[str, Any] = {"gas_price": gas_price, "access_list": []}
        else:
            if not (txn.max_fee and txn.max_priority_fee):
                log_event("tx_generation_skipped", ctx=_CTX, data={"txn_type": req.txn_type, "reason": "missing_fee_market_fields"})
                return {}
            response_key = "eip1559_tx"
            fields = {
                "access_list": [t.model_dump() for t in txn.access_list],
                "max_fee_per_gas": to_int(txn.max_fee, name="max fee"),
                "max_priority_fee_per_gas": to_int(txn.max_priority_fee, name="max priority fee"),
            }

        with self._lock:
            tx = build_transaction(
                chain_id=txn.chain_id,
                to=txn.recipient_address,
                value=amount,
                nonce=txn.nonce,
                gas_limit=txn.gas_limit,
                data=data,
                **fields,
            )
            key = self._key_provider.get_key()
            sign_transaction(tx, key.private_key)

        tx_hash = transaction_hash_hex(tx)
        log_event(
            "tx_generated",
            ctx=_CTX,
            data={"type": tx.label, "chain_id": tx.chain_id, "hash": tx_hash, "from": key.address},
        )
        return {response_key: {"transaction": render_transaction(tx), "transaction_hash": tx_hash}}
