from __future__ import annotations

import struct


def int_to_bytes(value: int) -> bytes:
    """Minimal big-endian unsigned encoding; zero encodes as ``b""``"""
    if value < 0:
        raise ValueError("Only non-negative integers can be encoded")
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def bytes_to_int(data: bytes) -> int:
    return int.from_bytes(data, "big")


def len_prefixed(data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + data
