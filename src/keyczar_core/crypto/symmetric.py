"""AES-CBC with an HMAC-SHA1 trailer.

Ciphertext layout::

    header (5) | IV (16) | AES-CBC(PKCS#7(plaintext)) | HMAC-SHA1 tag (20)

The tag covers everything before it, header included, and is checked before
any block is decrypted.
"""
from __future__ import annotations

import hashlib
import os
import struct
from dataclasses import dataclass, field
from typing import ClassVar, Final

import structlog
from cryptography.hazmat.primitives import constant_time
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from keyczar_core.core.exceptions import (
    InvalidKeyRecordError,
    InvalidKeySizeError,
    InvalidPaddingError,
    InvalidSignatureError,
    ShortCiphertextError,
)
from keyczar_core.core.header import (
    HEADER_LENGTH,
    len_prefix_pack,
    len_prefix_unpack,
    make_header,
    pkcs5_pad,
    pkcs5_unpad,
)
from keyczar_core.core.keytypes import KeyType, check_size, default_size, is_acceptable_size
from keyczar_core.crypto.mac import HMAC_SIG_LENGTH, HmacKey
from keyczar_core.models import AesKeyRecord
from keyczar_core.utils import b64d, b64e

logger = structlog.get_logger(__name__)

BLOCK_SIZE: Final[int] = algorithms.AES.block_size // 8
CIPHER_MODE: Final[str] = "CBC"


@dataclass(frozen=True, slots=True, eq=False)
class AesKey:
    key_type: ClassVar[KeyType] = KeyType.AES

    key: bytes = field(repr=False)
    hmac_key: HmacKey

    @classmethod
    def generate(cls, size: int | None = None, hmac_size: int | None = None) -> AesKey:
        bits = check_size(KeyType.AES, default_size(KeyType.AES) if size is None else size)
        return cls(key=os.urandom(bits // 8), hmac_key=HmacKey.generate(hmac_size))

    @classmethod
    def from_packed_keys(cls, data: bytes) -> AesKey:
        keys = len_prefix_unpack(data)
        if (
            len(keys) != 2
            or not is_acceptable_size(KeyType.AES, len(keys[0]) * 8)
            or not is_acceptable_size(KeyType.HMAC_SHA1, len(keys[1]) * 8)
        ):
            raise InvalidKeySizeError("Packed keys must hold one AES key and one HMAC key of acceptable sizes")
        return cls(key=keys[0], hmac_key=HmacKey(key=keys[1]))

    @classmethod
    def from_record(cls, record: AesKeyRecord) -> AesKey:
        check_size(KeyType.AES, record.size)
        check_size(KeyType.HMAC_SHA1, record.mac_key.size)
        if record.mode.upper() != CIPHER_MODE:
            raise InvalidKeyRecordError(f"Unsupported cipher mode: {record.mode}")
        key = b64d(record.key)
        if len(key) * 8 != record.size:
            raise InvalidKeySizeError(
                f"AES key is {len(key) * 8} bits but the record declares {record.size}"
            )
        return cls(key=key, hmac_key=HmacKey.from_record(record.mac_key))

    def to_record(self) -> AesKeyRecord:
        return AesKeyRecord(
            key=b64e(self.key),
            size=len(self.key) * 8,
            mac_key=self.hmac_key.to_record(),
            mode=CIPHER_MODE,
        )

    def packed_keys(self) -> bytes:
        return len_prefix_pack(self.key, self.hmac_key.key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AesKey):
            return NotImplemented
        return constant_time.bytes_eq(self.packed_keys(), other.packed_keys())

    __hash__ = None  # type: ignore[assignment]

    def key_id(self) -> bytes:
        h = hashlib.sha1()
        h.update(struct.pack(">I", len(self.key)))
        h.update(self.key)
        h.update(self.hmac_key.key)
        return h.digest()[:4]

    def encrypt(self, data: bytes) -> bytes:
        padded = pkcs5_pad(data, BLOCK_SIZE)
        iv = os.urandom(BLOCK_SIZE)
        encryptor = Cipher(algorithms.AES(self.key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        msg = make_header(self) + iv + ciphertext
        return msg + self.hmac_key.sign(msg)

    def decrypt(self, data: bytes) -> bytes:
        if len(data) < HEADER_LENGTH + BLOCK_SIZE + HMAC_SIG_LENGTH:
            raise ShortCiphertextError(
                f"Ciphertext must be at least {HEADER_LENGTH + BLOCK_SIZE + HMAC_SIG_LENGTH} bytes"
            )

        msg = data[:-HMAC_SIG_LENGTH]
        tag = data[-HMAC_SIG_LENGTH:]
        if not self.hmac_key.verify(msg, tag):
            logger.debug("aes.decrypt.mac_mismatch", key_id=self.key_id().hex())
            raise InvalidSignatureError("Ciphertext MAC does not match")

        iv = msg[HEADER_LENGTH:HEADER_LENGTH + BLOCK_SIZE]
        body = msg[HEADER_LENGTH + BLOCK_SIZE:]
        if len(body) % BLOCK_SIZE:
            raise InvalidPaddingError("Ciphertext body is not a whole number of blocks")

        decryptor = Cipher(algorithms.AES(self.key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(body) + decryptor.finalize()
        return pkcs5_unpad(padded, BLOCK_SIZE)
