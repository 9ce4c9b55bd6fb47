from __future__ import annotations

from .b64d import b64d
from .b64e import b64e
from .ints import bytes_to_int, int_to_bytes, len_prefixed

__all__ = [
    "b64e",
    "b64d",
    "bytes_to_int",
    "int_to_bytes",
    "len_prefixed",
]
