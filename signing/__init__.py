from .base import KeyPair, KeyProvider
from .encrypted_keystore import EncryptedKeystoreKeyProvider
from .env_private_key import EnvPrivateKeyKeyProvider
from .factory import get_key_provider
from .mnemonic_file import MnemonicFileKeyProvider
from .signer import sign_transaction, signing_hash

__all__ = [
    "KeyPair",
    "KeyProvider",
    "MnemonicFileKeyProvider",
    "EncryptedKeystoreKeyProvider",
    "EnvPrivateKeyKeyProvider",
    "get_key_provider",
    "sign_transaction",
    "signing_hash",
]
