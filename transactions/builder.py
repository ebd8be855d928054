from __future__ import annotations

from typing import Any, Iterable, Optional

from errors import ValidationError

from .encoding import normalize_address, to_access_list, to_int, to_optional_int
from .model import AccessListTransaction, FeeMarketTransaction, LegacyTransaction, Transaction


def build_transaction(
    *,
    chain_id: Any,
    to: Optional[str],
    value: Any,
    nonce: Any,
    gas_limit: Any,
    gas_price: Any = None,
    max_fee_per_gas: Any = None,
    max_priority_fee_per_gas: Any = None,
    access_list: Iterable[Any] | None = None,
    data: bytes = b"",
) -> Transaction:
    """
    Build an unsigned transaction, picking its shape from the fee fields.

    Dispatch order:
    - max_fee_per_gas set -> EIP-1559 (a stray gas_price is ignored)
    - non-empty access_list -> EIP-2930
    - otherwise -> legacy

    An empty access list never selects EIP-2930.
    """
    cid = to_int(chain_id, name="chain id")
    if cid <= 0:
        raise ValidationError("invalid_chain_id", "chain id must be positive", {"chain_id": cid})

    common = dict(
        chain_id=cid,
        nonce=to_int(nonce, name="nonce"),
        to=normalize_address(to, name="recipient address"),
        value=to_int(value, name="amount"),
        data=bytes(data or b""),
        gas_limit=to_int(gas_limit, name="gas limit"),
    )
    tuples = to_access_list(access_list)

    max_fee = to_optional_int(max_fee_per_gas, name="max fee")
    if max_fee is not None:
        return FeeMarketTransaction(
            **common,
            max_priority_fee_per_gas=to_int(max_priority_fee_per_gas, name="max priority fee"),
            max_fee_per_gas=max_fee,
            access_list=tuples,
        )

    price = to_int(gas_price, name="gas price")
    if tuples:
        return AccessListTransaction(**common, gas_price=price, access_list=tuples)
    return LegacyTransaction(**common, gas_price=price)
