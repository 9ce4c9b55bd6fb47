from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass, field
from typing import ClassVar, Final

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import constant_time, hashes, hmac

from keyczar_core.core.exceptions import InvalidKeySizeError
from keyczar_core.core.keytypes import KeyType, check_size, default_size
from keyczar_core.models import HmacKeyRecord
from keyczar_core.utils import b64d, b64e

HMAC_SIG_LENGTH: Final[int] = 20


@dataclass(frozen=True, slots=True, eq=False)
class HmacKey:
    """HMAC-SHA1 key producing bare 20 byte tags (no envelope header)"""

    key_type: ClassVar[KeyType] = KeyType.HMAC_SHA1

    key: bytes = field(repr=False)

    @classmethod
    def generate(cls, size: int | None = None) -> HmacKey:
        bits = check_size(KeyType.HMAC_SHA1, default_size(KeyType.HMAC_SHA1) if size is None else size)
        return cls(key=os.urandom(bits // 8))

    @classmethod
    def from_record(cls, record: HmacKeyRecord) -> HmacKey:
        check_size(KeyType.HMAC_SHA1, record.size)
        key = b64d(record.key)
        if len(key) * 8 != record.size:
            raise InvalidKeySizeError(
                f"HMAC key is {len(key) * 8} bits but the record declares {record.size}"
            )
        return cls(key=key)

    def to_record(self) -> HmacKeyRecord:
        return HmacKeyRecord(key=b64e(self.key), size=len(self.key) * 8)

    def __eq__(self, other: object) -> bool:
        # Secret material; compared in constant time.
        if not isinstance(other, HmacKey):
            return NotImplemented
        return constant_time.bytes_eq(self.key, other.key)

    __hash__ = None  # type: ignore[assignment]

    def key_id(self) -> bytes:
        return hashlib.sha1(self.key).digest()[:4]

    def sign(self, message: bytes) -> bytes:
        h = hmac.HMAC(self.key, hashes.SHA1())
        h.update(message)
        return h.finalize()

    def verify(self, message: bytes, signature: bytes) -> bool:
        h = hmac.HMAC(self.key, hashes.SHA1())
        h.update(message)
        try:
            h.verify(signature)
        except InvalidSignature:
            return False
        return True
