"""Capability protocols implemented by the concrete key classes.

Public keys implement only the read-only half: ``RsaPublicKey`` encrypts and
verifies, ``DsaPublicKey`` verifies. Checks such as
``isinstance(key, SignVerifyKey)`` work at runtime.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyIDer(Protocol):
    def key_id(self) -> bytes: ...


@runtime_checkable
class EncryptKey(KeyIDer, Protocol):
    def encrypt(self, data: bytes) -> bytes: ...


@runtime_checkable
class DecryptEncryptKey(EncryptKey, Protocol):
    def decrypt(self, data: bytes) -> bytes: ...


@runtime_checkable
class VerifyKey(KeyIDer, Protocol):
    def verify(self, message: bytes, signature: bytes) -> bool: ...


@runtime_checkable
class SignVerifyKey(VerifyKey, Protocol):
    def sign(self, message: bytes) -> bytes: ...


__all__ = ["DecryptEncryptKey", "EncryptKey", "KeyIDer", "SignVerifyKey", "VerifyKey"]
