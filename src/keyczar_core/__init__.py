"""Key material, envelopes and version loading for a Keyczar-style toolkit."""
from __future__ import annotations

from .core.exceptions import (
    Base64DecodingError,
    FormatError,
    InvalidKeyMaterialError,
    InvalidKeyRecordError,
    InvalidKeySizeError,
    InvalidPaddingError,
    InvalidSignatureError,
    KeyNotFoundError,
    KeySourceError,
    KeyczarError,
    ShortCiphertextError,
)
from .core.header import HEADER_LENGTH, make_header, parse_header
from .core.keytypes import KeyType, default_size, is_acceptable_size
from .crypto.asymmetric import RsaPrivateKey, RsaPublicKey
from .crypto.interfaces import DecryptEncryptKey, EncryptKey, KeyIDer, SignVerifyKey, VerifyKey
from .crypto.mac import HmacKey
from .crypto.signing import DsaPrivateKey, DsaPublicKey
from .crypto.symmetric import AesKey
from .storage.keystore import KeyRecordSource, MemoryKeyReader, decode_key, load_keys, load_versions

__version__ = "0.1.0"

__all__ = [
    "AesKey",
    "Base64DecodingError",
    "DecryptEncryptKey",
    "DsaPrivateKey",
    "DsaPublicKey",
    "EncryptKey",
    "FormatError",
    "HEADER_LENGTH",
    "HmacKey",
    "InvalidKeyMaterialError",
    "InvalidKeyRecordError",
    "InvalidKeySizeError",
    "InvalidPaddingError",
    "InvalidSignatureError",
    "KeyIDer",
    "KeyNotFoundError",
    "KeyRecordSource",
    "KeySourceError",
    "KeyType",
    "KeyczarError",
    "MemoryKeyReader",
    "RsaPrivateKey",
    "RsaPublicKey",
    "ShortCiphertextError",
    "SignVerifyKey",
    "VerifyKey",
    "decode_key",
    "default_size",
    "is_acceptable_size",
    "load_keys",
    "load_versions",
    "make_header",
    "parse_header",
]
