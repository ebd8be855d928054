from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from eth_account import Account

from errors import CredentialLoadError, DerivationError

from .base import KeyPair, KeyProvider

DEFAULT_DERIVATION_PATH = "m/44'/60'/0'/0/0"

Account.enable_unaudited_hdwallet_features()


@dataclass(frozen=True)
class AccountInfo:
    did: str
    mnemonic: str
    public_key: str


def load_account_info(path: Path) -> AccountInfo:
    try:
        raw: Dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CredentialLoadError("credential_unreadable", f"error reading account file: {e}", {"path": str(path)}) from e
    except ValueError as e:
        raise CredentialLoadError("credential_malformed", f"error parsing account data: {e}", {"path": str(path)}) from e
    if not isinstance(raw, dict):
        raise CredentialLoadError("credential_malformed", "error parsing account data: expected an object", {"path": str(path)})

    mnemonic = str(raw.get("mnemonic") or "").strip()
    if not mnemonic:
        raise CredentialLoadError("credential_malformed", "account file has no mnemonic", {"path": str(path)})
    return AccountInfo(
        did=str(raw.get("did") or ""),
        mnemonic=mnemonic,
        public_key=str(raw.get("public_key") or ""),
    )


def derive_key(mnemonic: str, derivation_path: str = DEFAULT_DERIVATION_PATH) -> KeyPair:
    try:
        acct = Account.from_mnemonic(mnemonic, account_path=derivation_path)
    except Exception as e:
        raise DerivationError("invalid_mnemonic", f"failed to create wallet from mnemonic: {e}", {}) from e
    return KeyPair(private_key=bytes(acct.key), address=acct.address)


class MnemonicFileKeyProvider(KeyProvider):
    """
    Default key provider: a JSON credential file holding a BIP-39 mnemonic.

    File shape: ``{"did": ..., "mnemonic": ..., "public_key": ...}``; only the
    mnemonic is used. The file is re-read on every call, so the result is a
    pure function of its contents.
    """

    def __init__(self, path: str | Path, derivation_path: str = DEFAULT_DERIVATION_PATH) -> None:
        self._path = Path(path).expanduser()
        self._derivation_path = derivation_path

    def get_key(self) -> KeyPair:
        info = load_account_info(self._path)
        return derive_key(info.mnemonic, self._derivation_path)
