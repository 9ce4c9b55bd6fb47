import base64
import binascii
import re

from ..core.exceptions import Base64DecodingError

_WEBSAFE = re.compile(r"[A-Za-z0-9_-]*")


def b64d(value: str) -> bytes:
    """URL-safe base64 decode that tolerates missing padding and rejects anything else"""
    stripped = value.rstrip("=")
    if not _WEBSAFE.fullmatch(stripped) or len(stripped) % 4 == 1:
        raise Base64DecodingError("Value is not web-safe base64")
    pad = "=" * (-len(stripped) % 4)
    try:
        return base64.urlsafe_b64decode((stripped + pad).encode("ascii"))
    except (binascii.Error, ValueError) as exc:
        raise Base64DecodingError("Value is not web-safe base64") from exc
