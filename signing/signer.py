from __future__ import annotations

from eth_keys import keys
from eth_utils import keccak

from errors import SigningError
from transactions.encoding import encode_signing_payload
from transactions.model import Transaction, TxType


def signing_hash(tx: Transaction) -> bytes:
    return keccak(encode_signing_payload(tx))


def sign_transaction(tx: Transaction, private_key: bytes) -> Transaction:
    """
    Sign ``tx`` in place and return it.

    Legacy transactions get an EIP-155 ``v`` (recovery id + 35 + 2 * chain id).
    Typed transactions store the bare recovery id (y parity) in ``v``.
    """
    if tx.chain_id is None or tx.chain_id <= 0:
        raise SigningError("invalid_chain_id", "chain id must be positive to sign", {})
    try:
        pk = keys.PrivateKey(private_key)
        sig = pk.sign_msg_hash(signing_hash(tx))
    except Exception as e:
        raise SigningError("signing_failed", f"failed to sign transaction: {e}", {"type": tx.label}) from e

    if tx.tx_type == TxType.LEGACY:
        tx.v = sig.v + 35 + 2 * tx.chain_id
    else:
        tx.v = sig.v
    tx.r = sig.r
    tx.s = sig.s
    return tx
