from __future__ import annotations

import os

from eth_account import Account

from errors import CredentialLoadError, DerivationError

from .base import KeyPair, KeyProvider


class EnvPrivateKeyKeyProvider(KeyProvider):
    """
    Development key provider that reads a raw hex private key from PRIVATE_KEY.
    """

    def __init__(self, env_var: str = "PRIVATE_KEY") -> None:
        self._env_var = env_var

    def get_key(self) -> KeyPair:
        pk = (os.getenv(self._env_var) or "").strip()
        if not pk:
            raise CredentialLoadError("private_key_not_set", f"{self._env_var} environment variable not set", {})
        try:
            acct = Account.from_key(pk)
        except Exception as e:
            raise DerivationError("invalid_private_key", f"invalid private key in {self._env_var}: {e}", {}) from e
        return KeyPair(private_key=bytes(acct.key), address=acct.address)
