from __future__ import annotations

import json
from pathlib import Path

from eth_account import Account

from errors import CredentialLoadError, DerivationError

from .base import KeyPair, KeyProvider


class EncryptedKeystoreKeyProvider(KeyProvider):
    """
    Decrypts an Ethereum keystore JSON with a passphrase on each call.
    """

    def __init__(self, path: str | Path | None, password: str | None) -> None:
        if not path:
            raise CredentialLoadError("keystore_not_configured", "KEYSTORE_PATH is not set", {})
        if not password:
            raise CredentialLoadError("keystore_not_configured", "KEYSTORE_PASSWORD is not set", {})
        self._path = Path(path).expanduser()
        self._password = password

    def get_key(self) -> KeyPair:
        if not self._path.exists():
            raise CredentialLoadError("credential_unreadable", f"Keystore file not found: {self._path}", {})
        try:
            keystore = json.loads(self._path.read_text())
        except ValueError as e:
            raise CredentialLoadError("credential_malformed", f"error parsing keystore: {e}", {}) from e
        try:
            pk_bytes = Account.decrypt(keystore, self._password)
        except ValueError as e:
            raise DerivationError("keystore_decrypt_failed", f"failed to decrypt keystore: {e}", {}) from e
        acct = Account.from_key(pk_bytes)
        return KeyPair(private_key=bytes(acct.key), address=acct.address)
