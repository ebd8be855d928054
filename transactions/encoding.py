from __future__ import annotations

from typing import Any, Iterable, List, Optional

import rlp
from eth_utils import is_address, to_checksum_address

from errors import ValidationError

from .model import (
    AccessList,
    AccessListTransaction,
    AccessTuple,
    FeeMarketTransaction,
    LegacyTransaction,
    Transaction,
    TxType,
)

UINT256_MAX = 2**256 - 1
UINT256_MAX_DIGITS = len(str(UINT256_MAX))


def to_int(v: Any, *, name: str) -> int:
    """
    Coerce an int or a decimal string into an int in [0, 2**256 - 1].

    Wei amounts travel as decimal strings so they never pass through a
    fixed-width number on the way in.
    """
    if v is None:
        raise ValidationError("missing_field", f"missing required field: {name}", {"field": name})
    if isinstance(v, bool):
        raise ValidationError("invalid_integer", f"invalid {name}", {"field": name})
    if isinstance(v, int):
        if v < 0 or v > UINT256_MAX:
            raise ValidationError("invalid_integer", f"invalid {name}", {"field": name})
        return v
    if isinstance(v, str):
        s = v.strip()
        digits = s.lstrip("0")
        if not (s.isascii() and s.isdigit()) or len(digits) > UINT256_MAX_DIGITS:
            raise ValidationError("invalid_integer", f"invalid {name}", {"field": name})
        i = int(digits or "0", 10)
        if i > UINT256_MAX:
            raise ValidationError("invalid_integer", f"invalid {name}", {"field": name})
        return i
    raise ValidationError("invalid_integer", f"invalid {name}: {type(v).__name__}", {"field": name})


def to_optional_int(v: Any, *, name: str) -> Optional[int]:
    if v is None:
        return None
    return to_int(v, name=name)


def normalize_address(v: Any, *, name: str = "address") -> Optional[str]:
    """
    Checksummed form of a hex address; empty values mean no address.
    """
    if v is None:
        return None
    if not isinstance(v, str):
        raise ValidationError("invalid_address", f"invalid {name}", {"field": name})
    s = v.strip()
    if s == "":
        return None
    if not s.startswith(("0x", "0X")):
        s = "0x" + s
    if not is_address(s):
        raise ValidationError("invalid_address", f"invalid {name}: {v}", {"field": name})
    return to_checksum_address(s)


def to_storage_key(v: Any) -> bytes:
    """
    Decode a storage key into 32 bytes, left-padding short values.
    """
    if isinstance(v, bytes):
        b = v
    elif isinstance(v, str):
        s = v.strip()
        if s.startswith(("0x", "0X")):
            s = s[2:]
        if len(s) % 2:
            s = "0" + s
        try:
            b = bytes.fromhex(s)
        except ValueError:
            raise ValidationError("invalid_storage_key", f"invalid storage key: {v}", {}) from None
    else:
        raise ValidationError("invalid_storage_key", f"invalid storage key: {type(v).__name__}", {})
    if len(b) > 32:
        raise ValidationError("invalid_storage_key", f"storage key longer than 32 bytes: {v}", {})
    return b.rjust(32, b"\x00")


def to_access_list(entries: Iterable[Any] | None) -> AccessList:
    """
    Accepts AccessTuple instances or ``{"address", "storage_keys"}`` mappings.
    """
    out: List[AccessTuple] = []
    for entry in entries or ():
        if isinstance(entry, AccessTuple):
            address, keys = entry.address, entry.storage_keys
        elif isinstance(entry, dict):
            address, keys = entry.get("address"), entry.get("storage_keys") or []
        else:
            raise ValidationError("invalid_access_list", "access list entries must be objects", {})
        addr = normalize_address(address, name="access list address")
        if addr is None:
            raise ValidationError("invalid_access_list", "access list entry is missing an address", {})
        out.append(AccessTuple(address=addr, storage_keys=tuple(to_storage_key(k) for k in keys)))
    return tuple(out)


def _rlp_int(i: int) -> bytes:
    if i == 0:
        return b""
    return int(i).to_bytes((int(i).bit_length() + 7) // 8, "big")


def _address_bytes(addr: Optional[str]) -> bytes:
    if not addr:
        return b""
    return bytes.fromhex(addr[2:])


def _access_list_items(access_list: AccessList) -> list:
    return [[_address_bytes(t.address), list(t.storage_keys)] for t in access_list]


def _payload_fields(tx: Transaction) -> list:
    if isinstance(tx, LegacyTransaction):
        return [
            _rlp_int(tx.nonce),
            _rlp_int(tx.gas_price),
            _rlp_int(tx.gas_limit),
            _address_bytes(tx.to),
            _rlp_int(tx.value),
            tx.data,
        ]
    if isinstance(tx, AccessListTransaction):
        return [
            _rlp_int(tx.chain_id),
            _rlp_int(tx.nonce),
            _rlp_int(tx.gas_price),
            _rlp_int(tx.gas_limit),
            _address_bytes(tx.to),
            _rlp_int(tx.value),
            tx.data,
            _access_list_items(tx.access_list),
        ]
    if isinstance(tx, FeeMarketTransaction):
        return [
            _rlp_int(tx.chain_id),
            _rlp_int(tx.nonce),
            _rlp_int(tx.max_priority_fee_per_gas),
            _rlp_int(tx.max_fee_per_gas),
            _rlp_int(tx.gas_limit),
            _address_bytes(tx.to),
            _rlp_int(tx.value),
            tx.data,
            _access_list_items(tx.access_list),
        ]
    raise TypeError(f"Unsupported transaction: {type(tx).__name__}")


def _envelope(tx: Transaction, body: list) -> bytes:
    encoded = rlp.encode(body)
    if tx.tx_type == TxType.LEGACY:
        return encoded
    return bytes([int(tx.tx_type)]) + encoded


def encode_signing_payload(tx: Transaction) -> bytes:
    """
    Bytes whose keccak-256 is signed.

    Legacy transactions append ``[chainId, 0, 0]`` (EIP-155); typed
    transactions are the type byte followed by the RLP of their fields.
    """
    body = _payload_fields(tx)
    if tx.tx_type == TxType.LEGACY:
        body += [_rlp_int(tx.chain_id), b"", b""]
    return _envelope(tx, body)


def encode_signed_transaction(tx: Transaction) -> bytes:
    """
    Canonical serialized transaction. Missing signature values encode as zero.
    """
    body = _payload_fields(tx)
    body += [_rlp_int(tx.v or 0), _rlp_int(tx.r or 0), _rlp_int(tx.s or 0)]
    return _envelope(tx, body)
