from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Protocol, TypeVar, runtime_checkable

import structlog

from ..core.exceptions import KeyNotFoundError, KeySourceError, KeyczarError
from ..core.keytypes import KeyType
from ..crypto.asymmetric import RsaPrivateKey, RsaPublicKey
from ..crypto.interfaces import KeyIDer
from ..crypto.mac import HmacKey
from ..crypto.signing import DsaPrivateKey, DsaPublicKey
from ..crypto.symmetric import AesKey
from ..models import (
    AesKeyRecord,
    DsaPrivateKeyRecord,
    DsaPublicKeyRecord,
    HmacKeyRecord,
    KeyRecord,
    RecordPayload,
    RsaPrivateKeyRecord,
    RsaPublicKeyRecord,
)

logger = structlog.get_logger(__name__)

K = TypeVar("K", bound=KeyIDer)


@runtime_checkable
class KeyRecordSource(Protocol):
    """Anything that can hand back the serialized record for a version number"""

    def get(self, version: int) -> RecordPayload: ...


class MemoryKeyReader:
    """Dict-backed record source, mostly for tests and embedding callers"""

    def __init__(self, records: Mapping[int, RecordPayload] | None = None) -> None:
        self._records: dict[int, RecordPayload] = dict(records or {})

    def add(self, version: int, record: RecordPayload | KeyRecord) -> None:
        if isinstance(record, KeyRecord):
            record = record.to_json()
        self._records[version] = record

    def get(self, version: int) -> RecordPayload:
        try:
            return self._records[version]
        except KeyError:
            raise KeyNotFoundError(f"No key record for version {version}") from None


_CODECS: Mapping[KeyType, tuple[type[KeyRecord], Callable[[KeyRecord], KeyIDer]]] = MappingProxyType(
    {
        KeyType.AES: (AesKeyRecord, AesKey.from_record),
        KeyType.HMAC_SHA1: (HmacKeyRecord, HmacKey.from_record),
        KeyType.DSA_PRIV: (DsaPrivateKeyRecord, DsaPrivateKey.from_record),
        KeyType.DSA_PUB: (DsaPublicKeyRecord, DsaPublicKey.from_record),
        KeyType.RSA_PRIV: (RsaPrivateKeyRecord, RsaPrivateKey.from_record),
        KeyType.RSA_PUB: (RsaPublicKeyRecord, RsaPublicKey.from_record),
    }
)


def decode_key(key_type: KeyType | str, payload: RecordPayload) -> KeyIDer:
    """Parse one serialized record and build the key it describes."""
    record_cls, build = _CODECS[KeyType(key_type)]
    return build(record_cls.parse(payload))


def load_versions(
    source: KeyRecordSource,
    versions: Iterable[int],
    decode: Callable[[RecordPayload], K],
) -> Mapping[int, K]:
    """Fetch and decode every version in order, failing on the first bad one.

    The returned mapping is read-only and keeps the order of ``versions``.
    Nothing is returned when any version fails.
    """
    keys: dict[int, K] = {}
    for version in versions:
        if version in keys:
            raise KeyczarError(f"Version {version} listed more than once")
        try:
            payload = source.get(version)
        except KeySourceError:
            raise
        except Exception as exc:
            raise KeySourceError(f"Could not read key record for version {version}") from exc

        try:
            keys[version] = decode(payload)
        except KeyczarError as exc:
            logger.warning("keys.version.rejected", version=version, error=str(exc))
            raise
    return MappingProxyType(keys)


def load_keys(
    source: KeyRecordSource,
    versions: Iterable[int],
    key_type: KeyType | str,
) -> Mapping[int, KeyIDer]:
    kt = KeyType(key_type)
    keys = load_versions(source, versions, lambda payload: decode_key(kt, payload))
    logger.info(
        "keys.load.complete",
        key_type=kt.value,
        versions=list(keys),
        key_ids=[key.key_id().hex() for key in keys.values()],
    )
    return keys


__all__ = [
    "KeyRecordSource",
    "MemoryKeyReader",
    "decode_key",
    "load_keys",
    "load_versions",
]
