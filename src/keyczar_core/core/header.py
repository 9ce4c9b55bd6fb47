"""Envelope codec shared by every key type.

An envelope starts with a fixed five byte header: one format version byte
followed by the four byte KeyID of the key that produced it. Symmetric
ciphertexts additionally end with a 20 byte HMAC-SHA1 tag.
"""
from __future__ import annotations

import struct
from typing import Final

from cryptography.hazmat.primitives import padding

from keyczar_core.core.exceptions import FormatError, InvalidPaddingError, ShortCiphertextError
from keyczar_core.crypto.interfaces import KeyIDer

FORMAT_VERSION: Final[int] = 0
KEY_ID_LENGTH: Final[int] = 4
HEADER_LENGTH: Final[int] = 1 + KEY_ID_LENGTH
_LENGTH_PREFIX = struct.Struct(">I")


def make_header(key: KeyIDer) -> bytes:
    key_id = key.key_id()
    if len(key_id) != KEY_ID_LENGTH:
        raise FormatError(f"KeyID must be {KEY_ID_LENGTH} bytes, got {len(key_id)}")
    return bytes([FORMAT_VERSION]) + key_id


def parse_header(data: bytes) -> tuple[int, bytes]:
    """Return ``(format_version, key_id)`` from the front of an envelope."""
    if len(data) < HEADER_LENGTH:
        raise ShortCiphertextError(f"Envelope shorter than the {HEADER_LENGTH} byte header")
    version = data[0]
    if version != FORMAT_VERSION:
        raise FormatError(f"Unsupported envelope format version: {version}")
    return version, bytes(data[1:HEADER_LENGTH])


def pkcs5_pad(data: bytes, block_size: int) -> bytes:
    padder = padding.PKCS7(block_size * 8).padder()
    return padder.update(data) + padder.finalize()


def pkcs5_unpad(data: bytes, block_size: int) -> bytes:
    unpadder = padding.PKCS7(block_size * 8).unpadder()
    try:
        return unpadder.update(data) + unpadder.finalize()
    except ValueError as exc:
        raise InvalidPaddingError("Invalid block padding") from exc


def len_prefix_pack(*buffers: bytes) -> bytes:
    out = bytearray()
    for buf in buffers:
        out += _LENGTH_PREFIX.pack(len(buf))
        out += buf
    return bytes(out)


def len_prefix_unpack(data: bytes) -> list[bytes]:
    buffers: list[bytes] = []
    offset = 0
    while offset < len(data):
        if offset + _LENGTH_PREFIX.size > len(data):
            raise FormatError("Truncated length prefix")
        (length,) = _LENGTH_PREFIX.unpack_from(data, offset)
        offset += _LENGTH_PREFIX.size
        if offset + length > len(data):
            raise FormatError("Length prefix overruns packed data")
        buffers.append(bytes(data[offset:offset + length]))
        offset += length
    return buffers


__all__ = [
    "FORMAT_VERSION",
    "HEADER_LENGTH",
    "KEY_ID_LENGTH",
    "len_prefix_pack",
    "len_prefix_unpack",
    "make_header",
    "parse_header",
    "pkcs5_pad",
    "pkcs5_unpad",
]
