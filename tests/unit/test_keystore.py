import json

import pytest

from keyczar_core.core.exceptions import (
    Base64DecodingError,
    InvalidKeyRecordError,
    InvalidKeySizeError,
    KeyNotFoundError,
    KeySourceError,
    KeyczarError,
)
from keyczar_core.core.keytypes import KeyType
from keyczar_core.crypto.asymmetric import RsaPrivateKey, RsaPublicKey
from keyczar_core.crypto.mac import HmacKey
from keyczar_core.crypto.signing import DsaPrivateKey, DsaPublicKey
from keyczar_core.crypto.symmetric import AesKey
from keyczar_core.storage.keystore import MemoryKeyReader, decode_key, load_keys, load_versions


def test_loads_versions_in_order() -> None:
    keys = {version: AesKey.generate() for version in (3, 1, 2)}
    reader = MemoryKeyReader({version: key.to_record().to_json() for version, key in keys.items()})

    loaded = load_keys(reader, [3, 1, 2], KeyType.AES)
    assert list(loaded) == [3, 1, 2]
    for version, key in keys.items():
        assert loaded[version] == key
        assert loaded[version].decrypt(key.encrypt(b"v")) == b"v"


def test_version_map_is_read_only() -> None:
    reader = MemoryKeyReader()
    reader.add(1, HmacKey.generate().to_record())
    loaded = load_keys(reader, [1], "HMAC_SHA1")
    with pytest.raises(TypeError):
        loaded[2] = HmacKey.generate()  # type: ignore[index]


def test_key_id_is_stable_across_loads() -> None:
    payload = AesKey.generate().to_record().to_json()
    first = decode_key(KeyType.AES, payload)
    second = decode_key(KeyType.AES, payload.encode("utf-8"))
    assert first.key_id() == second.key_id()


def test_all_asymmetric_types(rsa_key: RsaPrivateKey, dsa_key: DsaPrivateKey) -> None:
    reader = MemoryKeyReader(
        {
            1: rsa_key.to_record().to_json(),
            2: rsa_key.public_key.to_record().to_dict(),
            3: dsa_key.to_record().to_json(),
            4: dsa_key.public_key.to_record().to_json(),
        }
    )
    assert isinstance(load_keys(reader, [1], KeyType.RSA_PRIV)[1], RsaPrivateKey)
    assert isinstance(load_keys(reader, [2], KeyType.RSA_PUB)[2], RsaPublicKey)
    assert isinstance(load_keys(reader, [3], KeyType.DSA_PRIV)[3], DsaPrivateKey)
    assert isinstance(load_keys(reader, [4], KeyType.DSA_PUB)[4], DsaPublicKey)
    assert load_keys(reader, [2], KeyType.RSA_PUB)[2].key_id() == rsa_key.key_id()


def test_size_gate_yields_no_map() -> None:
    good = AesKey.generate().to_record()
    bad = json.loads(good.to_json())
    bad["size"] = 100
    reader = MemoryKeyReader({1: good.to_json(), 2: json.dumps(bad)})
    with pytest.raises(InvalidKeySizeError):
        load_keys(reader, [1, 2], KeyType.AES)


def test_nested_mac_size_is_checked() -> None:
    bad = AesKey.generate().to_record().to_dict()
    bad["macKey"]["size"] = 128
    with pytest.raises(InvalidKeySizeError):
        decode_key(KeyType.AES, bad)


@pytest.mark.parametrize("value", ["not base64!", "ab+/", "A"])
def test_bad_base64_is_encoding_error(value: str) -> None:
    record = HmacKey.generate().to_record().to_dict()
    record["key"] = value
    with pytest.raises(Base64DecodingError):
        decode_key(KeyType.HMAC_SHA1, record)


@pytest.mark.parametrize("payload", ["{not json", json.dumps({"size": 256}), json.dumps({"key": 1, "size": 256})])
def test_malformed_record_is_structural_error(payload: str) -> None:
    with pytest.raises(InvalidKeyRecordError):
        decode_key(KeyType.HMAC_SHA1, payload)


@pytest.mark.parametrize("size", ["256", 256.5, True, -8])
def test_size_must_be_a_json_integer(size: object) -> None:
    record = HmacKey.generate().to_record().to_dict()
    record["size"] = size
    with pytest.raises(InvalidKeyRecordError):
        decode_key(KeyType.HMAC_SHA1, record)
    with pytest.raises(InvalidKeyRecordError):
        decode_key(KeyType.HMAC_SHA1, json.dumps(record))


def test_missing_version_is_source_error() -> None:
    with pytest.raises(KeyNotFoundError):
        load_keys(MemoryKeyReader(), [1], KeyType.AES)


def test_foreign_source_errors_are_wrapped() -> None:
    class BrokenSource:
        def get(self, version: int) -> str:
            raise OSError("disk on fire")

    with pytest.raises(KeySourceError) as excinfo:
        load_keys(BrokenSource(), [1], KeyType.AES)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_duplicate_versions_are_rejected() -> None:
    reader = MemoryKeyReader({1: HmacKey.generate().to_record().to_json()})
    with pytest.raises(KeyczarError):
        load_keys(reader, [1, 1], KeyType.HMAC_SHA1)


def test_load_versions_accepts_any_decoder() -> None:
    reader = MemoryKeyReader({7: "payload-7", 8: "payload-8"})
    loaded = load_versions(reader, [8, 7], lambda payload: HmacKey(key=payload.encode()))
    assert [key.key for key in loaded.values()] == [b"payload-8", b"payload-7"]
