from .builder import build_transaction
from .encoding import encode_signed_transaction, encode_signing_payload
from .hasher import transaction_hash, transaction_hash_hex
from .model import (
    AccessListTransaction,
    AccessTuple,
    FeeMarketTransaction,
    LegacyTransaction,
    Transaction,
    TxType,
)

__all__ = [
    "AccessListTransaction",
    "AccessTuple",
    "FeeMarketTransaction",
    "LegacyTransaction",
    "Transaction",
    "TxType",
    "build_transaction",
    "encode_signed_transaction",
    "encode_signing_payload",
    "transaction_hash",
    "transaction_hash_hex",
]
