"""RSA keys: PKCS#1 v1.5 SHA-1 signatures and OAEP (SHA-1, MGF1-SHA-1) encryption.

Ciphertexts carry the five byte envelope header; signatures are bare.
"""
from __future__ import annotations

import hashlib
from typing import ClassVar

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed

from keyczar_core.config import CONFIG
from keyczar_core.core.exceptions import InvalidKeyMaterialError, InvalidKeySizeError
from keyczar_core.core.header import HEADER_LENGTH, make_header
from keyczar_core.core.keytypes import KeyType, check_size, default_size
from keyczar_core.models import RsaPrivateKeyRecord, RsaPublicKeyRecord
from keyczar_core.utils import b64d, b64e, bytes_to_int, int_to_bytes, len_prefixed


def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA1()),
        algorithm=hashes.SHA1(),
        label=None,
    )


class RsaPublicKey:
    key_type: ClassVar[KeyType] = KeyType.RSA_PUB
    __slots__ = ("_key",)

    def __init__(self, public_key: rsa.RSAPublicKey) -> None:
        self._key = public_key

    @classmethod
    def from_record(cls, record: RsaPublicKeyRecord) -> RsaPublicKey:
        check_size(KeyType.RSA_PUB, record.size)
        numbers = _build_public_numbers(record)
        try:
            return cls(numbers.public_key())
        except ValueError as exc:
            raise InvalidKeyMaterialError(f"RSA public key rejected: {exc}") from exc

    def to_record(self) -> RsaPublicKeyRecord:
        numbers = self._key.public_numbers()
        return RsaPublicKeyRecord(
            modulus=b64e(int_to_bytes(numbers.n)),
            public_exponent=b64e(int_to_bytes(numbers.e)),
            size=self._key.key_size,
        )

    def key_id(self) -> bytes:
        numbers = self._key.public_numbers()
        h = hashlib.sha1()
        h.update(len_prefixed(int_to_bytes(numbers.n)))
        h.update(len_prefixed(int_to_bytes(numbers.e)))
        return h.digest()[:4]

    def verify(self, message: bytes, signature: bytes) -> bool:
        digest = hashlib.sha1(message).digest()
        try:
            self._key.verify(signature, digest, padding.PKCS1v15(), Prehashed(hashes.SHA1()))
        except InvalidSignature:
            return False
        return True

    def encrypt(self, data: bytes) -> bytes:
        # Oversized messages raise ValueError from the primitive.
        ciphertext = self._key.encrypt(data, _oaep())
        return make_header(self) + ciphertext

    def __repr__(self) -> str:
        return f"RsaPublicKey(key_id={self.key_id().hex()}, size={self._key.key_size})"


class RsaPrivateKey:
    key_type: ClassVar[KeyType] = KeyType.RSA_PRIV
    __slots__ = ("_key", "_public")

    def __init__(self, private_key: rsa.RSAPrivateKey) -> None:
        self._key = private_key
        self._public = RsaPublicKey(private_key.public_key())

    @classmethod
    def generate(cls, size: int | None = None) -> RsaPrivateKey:
        bits = check_size(KeyType.RSA_PRIV, default_size(KeyType.RSA_PRIV) if size is None else size)
        return cls(
            rsa.generate_private_key(
                public_exponent=CONFIG.crypto.rsa_public_exponent,
                key_size=bits,
            )
        )

    @classmethod
    def from_record(cls, record: RsaPrivateKeyRecord) -> RsaPrivateKey:
        check_size(KeyType.RSA_PRIV, record.size)
        check_size(KeyType.RSA_PUB, record.public_key.size)
        if record.size != record.public_key.size:
            raise InvalidKeySizeError("RSA private and public sizes differ")
        public_numbers = _build_public_numbers(record.public_key)

        p = bytes_to_int(b64d(record.prime_p))
        q = bytes_to_int(b64d(record.prime_q))
        d = bytes_to_int(b64d(record.private_exponent))
        dmp1 = bytes_to_int(b64d(record.prime_exponent_p))
        dmq1 = bytes_to_int(b64d(record.prime_exponent_q))
        iqmp = bytes_to_int(b64d(record.crt_coefficient))

        _check_crt(public_numbers.n, p, q, d, dmp1, dmq1, iqmp)
        numbers = rsa.RSAPrivateNumbers(
            p=p,
            q=q,
            d=d,
            dmp1=dmp1,
            dmq1=dmq1,
            iqmp=iqmp,
            public_numbers=public_numbers,
        )
        try:
            return cls(numbers.private_key())
        except ValueError as exc:
            raise InvalidKeyMaterialError(f"RSA private key rejected: {exc}") from exc

    def to_record(self) -> RsaPrivateKeyRecord:
        numbers = self._key.private_numbers()
        return RsaPrivateKeyRecord(
            crt_coefficient=b64e(int_to_bytes(numbers.iqmp)),
            prime_exponent_p=b64e(int_to_bytes(numbers.dmp1)),
            prime_exponent_q=b64e(int_to_bytes(numbers.dmq1)),
            prime_p=b64e(int_to_bytes(numbers.p)),
            prime_q=b64e(int_to_bytes(numbers.q)),
            private_exponent=b64e(int_to_bytes(numbers.d)),
            public_key=self._public.to_record(),
            size=self._key.key_size,
        )

    @property
    def public_key(self) -> RsaPublicKey:
        return self._public

    def key_id(self) -> bytes:
        return self._public.key_id()

    def sign(self, message: bytes) -> bytes:
        digest = hashlib.sha1(message).digest()
        return self._key.sign(digest, padding.PKCS1v15(), Prehashed(hashes.SHA1()))

    def verify(self, message: bytes, signature: bytes) -> bool:
        return self._public.verify(message, signature)

    def encrypt(self, data: bytes) -> bytes:
        return self._public.encrypt(data)

    def decrypt(self, data: bytes) -> bytes:
        # Decryption failures raise ValueError from the primitive unchanged.
        return self._key.decrypt(data[HEADER_LENGTH:], _oaep())

    def __repr__(self) -> str:
        return f"RsaPrivateKey(key_id={self.key_id().hex()}, size={self._key.key_size})"


def _build_public_numbers(record: RsaPublicKeyRecord) -> rsa.RSAPublicNumbers:
    n = bytes_to_int(b64d(record.modulus))
    e = bytes_to_int(b64d(record.public_exponent))
    if n.bit_length() != record.size:
        raise InvalidKeySizeError(f"RSA modulus is {n.bit_length()} bits but the record declares {record.size}")
    return rsa.RSAPublicNumbers(e=e, n=n)


def _check_crt(n: int, p: int, q: int, d: int, dmp1: int, dmq1: int, iqmp: int) -> None:
    """Recompute the CRT values instead of trusting the record."""
    if p < 2 or q < 2 or p * q != n:
        raise InvalidKeyMaterialError("RSA primes do not multiply to the modulus")
    if dmp1 != rsa.rsa_crt_dmp1(d, p) or dmq1 != rsa.rsa_crt_dmq1(d, q):
        raise InvalidKeyMaterialError("RSA prime exponents do not match the private exponent")
    try:
        expected_iqmp = rsa.rsa_crt_iqmp(p, q)
    except ValueError as exc:
        raise InvalidKeyMaterialError("RSA primes are not coprime") from exc
    if iqmp != expected_iqmp:
        raise InvalidKeyMaterialError("RSA CRT coefficient does not match the primes")
