"""Central exception hierarchy"""
from __future__ import annotations


class KeyczarError(Exception):
    """Base exception for all failures"""


class InvalidKeySizeError(KeyczarError, ValueError):
    """Raised when a declared or actual key size is not acceptable for its type"""


class Base64DecodingError(KeyczarError, ValueError):
    """Raised when a key field is not valid web-safe base64"""


class FormatError(KeyczarError, ValueError):
    """Raised when an envelope or record is structurally malformed"""


class ShortCiphertextError(FormatError):
    """Raised when an envelope is too short to contain its fixed-size parts"""


class InvalidPaddingError(FormatError):
    """Raised when block padding cannot be removed"""


class InvalidKeyRecordError(FormatError):
    """Raised when a serialized key record does not match its schema"""


class InvalidSignatureError(KeyczarError):
    """Raised when a MAC tag or signature does not match"""


class InvalidKeyMaterialError(KeyczarError, ValueError):
    """Raised when decoded key material is inconsistent or rejected by the primitive"""


class KeySourceError(KeyczarError):
    """Raised when a key record cannot be fetched from its source"""


class KeyNotFoundError(KeySourceError):
    """Raised when a version number has no record in the source"""


__all__ = [
    "KeyczarError",
    "InvalidKeySizeError",
    "Base64DecodingError",
    "FormatError",
    "ShortCiphertextError",
    "InvalidPaddingError",
    "InvalidKeyRecordError",
    "InvalidSignatureError",
    "InvalidKeyMaterialError",
    "KeySourceError",
    "KeyNotFoundError",
]
