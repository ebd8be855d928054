from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

UINT64_MAX = 2**64 - 1


class AccessTupleIn(BaseModel):
    address: str
    storage_keys: List[str] = Field(default_factory=list)


class TransactionRequest(BaseModel):
    """
    Wire shape of the transaction parameters.

    Wei amounts are decimal strings; they are parsed into arbitrary precision
    ints by the generator. An empty recipient means contract creation.
    """

    recipient_address: Optional[str] = None
    amount: str
    nonce: int = Field(ge=0, le=UINT64_MAX)
    gas_limit: int = Field(ge=0, le=UINT64_MAX)
    gas_price: str
    data: str = ""
    max_priority_fee: str = ""
    max_fee: str = ""
    chain_id: int
    access_list: List[AccessTupleIn] = Field(default_factory=list)


class GenerateTxRequest(BaseModel):
    txn_type: str
    txn: TransactionRequest
