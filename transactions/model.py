from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple, Union


class TxType(IntEnum):
    """EIP-2718 transaction type byte."""

    LEGACY = 0
    ACCESS_LIST = 1
    FEE_MARKET = 2


@dataclass(frozen=True)
class AccessTuple:
    """
    An address plus the storage slots the transaction pre-declares.

    Storage keys are kept in the order supplied; they are part of the signed
    payload so neither reordering nor deduplication is allowed.
    """

    address: str
    storage_keys: Tuple[bytes, ...] = ()


AccessList = Tuple[AccessTuple, ...]


@dataclass
class _SignedFields:
    v: Optional[int] = field(default=None, kw_only=True)
    r: Optional[int] = field(default=None, kw_only=True)
    s: Optional[int] = field(default=None, kw_only=True)

    @property
    def is_signed(self) -> bool:
        return self.v is not None and self.r is not None and self.s is not None


@dataclass
class LegacyTransaction(_SignedFields):
    """
    Type-0 transaction. The chain id is not encoded as a field; it is folded
    into ``v`` when signing (EIP-155).
    """

    chain_id: int
    nonce: int
    to: Optional[str]
    value: int
    data: bytes
    gas_limit: int
    gas_price: int

    tx_type = TxType.LEGACY
    label = "Legacy"


@dataclass
class AccessListTransaction(_SignedFields):
    """Type-1 transaction (EIP-2930)."""

    chain_id: int
    nonce: int
    to: Optional[str]
    value: int
    data: bytes
    gas_limit: int
    gas_price: int
    access_list: AccessList = ()

    tx_type = TxType.ACCESS_LIST
    label = "EIP-2930"


@dataclass
class FeeMarketTransaction(_SignedFields):
    """Type-2 transaction (EIP-1559)."""

    chain_id: int
    nonce: int
    to: Optional[str]
    value: int
    data: bytes
    gas_limit: int
    max_priority_fee_per_gas: int
    max_fee_per_gas: int
    access_list: AccessList = ()

    tx_type = TxType.FEE_MARKET
    label = "EIP-1559"


Transaction = Union[LegacyTransaction, AccessListTransaction, FeeMarketTransaction]
