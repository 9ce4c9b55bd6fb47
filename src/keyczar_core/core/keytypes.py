"""Per-algorithm key size descriptors."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from keyczar_core.core.exceptions import InvalidKeySizeError


class KeyType(str, Enum):
    AES = "AES"
    HMAC_SHA1 = "HMAC_SHA1"
    DSA_PRIV = "DSA_PRIV"
    DSA_PUB = "DSA_PUB"
    RSA_PRIV = "RSA_PRIV"
    RSA_PUB = "RSA_PUB"


@dataclass(frozen=True, slots=True)
class KeyTypeInfo:
    name: str
    default_size: int
    acceptable_sizes: frozenset[int]


KEY_TYPES: Mapping[KeyType, KeyTypeInfo] = MappingProxyType(
    {
        KeyType.AES: KeyTypeInfo("AES", 128, frozenset({128, 192, 256})),
        KeyType.HMAC_SHA1: KeyTypeInfo("HMAC_SHA1", 256, frozenset({160, 256})),
        KeyType.DSA_PRIV: KeyTypeInfo("DSA_PRIV", 1024, frozenset({1024})),
        KeyType.DSA_PUB: KeyTypeInfo("DSA_PUB", 1024, frozenset({1024})),
        KeyType.RSA_PRIV: KeyTypeInfo("RSA_PRIV", 2048, frozenset({1024, 2048, 3072, 4096})),
        KeyType.RSA_PUB: KeyTypeInfo("RSA_PUB", 2048, frozenset({1024, 2048, 3072, 4096})),
    }
)


def _info(key_type: KeyType | str) -> KeyTypeInfo:
    return KEY_TYPES[KeyType(key_type)]


def default_size(key_type: KeyType | str) -> int:
    return _info(key_type).default_size


def is_acceptable_size(key_type: KeyType | str, bits: int) -> bool:
    return bits in _info(key_type).acceptable_sizes


def check_size(key_type: KeyType | str, bits: int) -> int:
    """Return ``bits`` unchanged, or raise if the type does not accept it."""
    if not is_acceptable_size(key_type, bits):
        raise InvalidKeySizeError(f"{KeyType(key_type).value} does not accept a size of {bits} bits")
    return bits


__all__ = [
    "KEY_TYPES",
    "KeyType",
    "KeyTypeInfo",
    "check_size",
    "default_size",
    "is_acceptable_size",
]
