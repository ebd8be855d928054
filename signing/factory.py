from __future__ import annotations

from typing import TYPE_CHECKING

from .base import KeyProvider
from .encrypted_keystore import EncryptedKeystoreKeyProvider
from .env_private_key import EnvPrivateKeyKeyProvider
from .mnemonic_file import MnemonicFileKeyProvider

if TYPE_CHECKING:
    from app.core.settings import Settings


def get_key_provider(settings: "Settings") -> KeyProvider:
    """
    Select key provider based on TXGEN_KEY_PROVIDER.

    Supported:
    - mnemonic_file (default): mnemonic JSON at TXGEN_ACCOUNT_PATH
    - keystore: uses KEYSTORE_PATH + KEYSTORE_PASSWORD
    - env_private_key: uses PRIVATE_KEY env var
    """
    from app.core.settings import KeyProviderType

    kind = settings.KEY_PROVIDER
    if kind == KeyProviderType.MNEMONIC_FILE:
        return MnemonicFileKeyProvider(settings.ACCOUNT_PATH, settings.DERIVATION_PATH)
    if kind == KeyProviderType.KEYSTORE:
        return EncryptedKeystoreKeyProvider(settings.KEYSTORE_PATH, settings.KEYSTORE_PASSWORD)
    if kind == KeyProviderType.ENV_PRIVATE_KEY:
        return EnvPrivateKeyKeyProvider()
    raise ValueError(f"Unsupported key provider: {kind}")
