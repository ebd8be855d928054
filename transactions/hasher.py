from __future__ import annotations

import logging

from eth_utils import keccak

from observability import build_log_context, log_event

from .encoding import encode_signed_transaction
from .model import Transaction

_CTX = build_log_context(component="hasher")


def transaction_hash(tx: Transaction) -> bytes:
    """
    keccak-256 of the canonical serialized transaction.

    The signature is part of the preimage, so only a signed transaction yields
    its on-chain id.
    """
    if not tx.is_signed:
        log_event("unsigned_tx_hashed", ctx=_CTX, data={"type": tx.label}, level=logging.WARNING)
    return keccak(encode_signed_transaction(tx))


def transaction_hash_hex(tx: Transaction) -> str:
    return "0x" + transaction_hash(tx).hex()
