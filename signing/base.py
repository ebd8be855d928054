from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyPair:
    private_key: bytes
    address: str

    def __repr__(self) -> str:
        return f"KeyPair(address={self.address!r})"


class KeyProvider(ABC):
    """
    A source of the single signing key used for every transaction.

    Backends differ only in where the key material lives; callers never see
    anything but the derived KeyPair.
    """

    @abstractmethod
    def get_key(self) -> KeyPair:
        raise NotImplementedError
