from __future__ import annotations

import hashlib
from typing import ClassVar

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import dsa
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    decode_dss_signature,
    encode_dss_signature,
)

from keyczar_core.core.exceptions import InvalidKeyMaterialError, InvalidKeySizeError
from keyczar_core.core.keytypes import KeyType, check_size, default_size
from keyczar_core.models import DsaPrivateKeyRecord, DsaPublicKeyRecord
from keyczar_core.utils import b64d, b64e, bytes_to_int, int_to_bytes, len_prefixed


class DsaPublicKey:
    """Verification half of a DSA-SHA1 key; also the source of the pair's KeyID"""

    key_type: ClassVar[KeyType] = KeyType.DSA_PUB
    __slots__ = ("_key",)

    def __init__(self, public_key: dsa.DSAPublicKey) -> None:
        self._key = public_key

    @classmethod
    def from_record(cls, record: DsaPublicKeyRecord) -> DsaPublicKey:
        check_size(KeyType.DSA_PUB, record.size)
        return cls(_build_public_numbers(record).public_key())

    def to_record(self) -> DsaPublicKeyRecord:
        numbers = self._key.public_numbers()
        params = numbers.parameter_numbers
        return DsaPublicKeyRecord(
            q=b64e(int_to_bytes(params.q)),
            p=b64e(int_to_bytes(params.p)),
            g=b64e(int_to_bytes(params.g)),
            y=b64e(int_to_bytes(numbers.y)),
            size=self._key.key_size,
        )

    def key_id(self) -> bytes:
        numbers = self._key.public_numbers()
        params = numbers.parameter_numbers
        h = hashlib.sha1()
        for value in (params.p, params.q, params.g, numbers.y):
            h.update(len_prefixed(int_to_bytes(value)))
        return h.digest()[:4]

    def verify(self, message: bytes, signature: bytes) -> bool:
        try:
            der = encode_dss_signature(*decode_dss_signature(signature))
        except ValueError:
            return False
        digest = hashlib.sha1(message).digest()
        try:
            self._key.verify(der, digest, Prehashed(hashes.SHA1()))
        except InvalidSignature:
            return False
        return True

    def __repr__(self) -> str:
        return f"DsaPublicKey(key_id={self.key_id().hex()})"


class DsaPrivateKey:
    key_type: ClassVar[KeyType] = KeyType.DSA_PRIV
    __slots__ = ("_key", "_public")

    def __init__(self, private_key: dsa.DSAPrivateKey) -> None:
        self._key = private_key
        self._public = DsaPublicKey(private_key.public_key())

    @classmethod
    def generate(cls, size: int | None = None) -> DsaPrivateKey:
        bits = check_size(KeyType.DSA_PRIV, default_size(KeyType.DSA_PRIV) if size is None else size)
        return cls(dsa.generate_private_key(key_size=bits))

    @classmethod
    def from_record(cls, record: DsaPrivateKeyRecord) -> DsaPrivateKey:
        check_size(KeyType.DSA_PRIV, record.size)
        check_size(KeyType.DSA_PUB, record.public_key.size)
        if record.size != record.public_key.size:
            raise InvalidKeySizeError("DSA private and public sizes differ")
        public_numbers = _build_public_numbers(record.public_key)
        x = bytes_to_int(b64d(record.x))
        try:
            private_key = dsa.DSAPrivateNumbers(x=x, public_numbers=public_numbers).private_key()
        except ValueError as exc:
            raise InvalidKeyMaterialError(f"DSA private key rejected: {exc}") from exc
        return cls(private_key)

    def to_record(self) -> DsaPrivateKeyRecord:
        numbers = self._key.private_numbers()
        return DsaPrivateKeyRecord(
            public_key=self._public.to_record(),
            size=self._key.key_size,
            x=b64e(int_to_bytes(numbers.x)),
        )

    @property
    def public_key(self) -> DsaPublicKey:
        return self._public

    def key_id(self) -> bytes:
        return self._public.key_id()

    def sign(self, message: bytes) -> bytes:
        digest = hashlib.sha1(message).digest()
        # cryptography already returns DER SEQUENCE { r, s }
        return self._key.sign(digest, Prehashed(hashes.SHA1()))

    def verify(self, message: bytes, signature: bytes) -> bool:
        return self._public.verify(message, signature)

    def __repr__(self) -> str:
        return f"DsaPrivateKey(key_id={self.key_id().hex()})"


def _build_public_numbers(record: DsaPublicKeyRecord) -> dsa.DSAPublicNumbers:
    p = bytes_to_int(b64d(record.p))
    q = bytes_to_int(b64d(record.q))
    g = bytes_to_int(b64d(record.g))
    y = bytes_to_int(b64d(record.y))
    if p.bit_length() != record.size:
        raise InvalidKeySizeError(f"DSA prime is {p.bit_length()} bits but the record declares {record.size}")
    numbers = dsa.DSAPublicNumbers(y=y, parameter_numbers=dsa.DSAParameterNumbers(p=p, q=q, g=g))
    try:
        numbers.public_key()
    except ValueError as exc:
        raise InvalidKeyMaterialError(f"DSA public key rejected: {exc}") from exc
    return numbers
