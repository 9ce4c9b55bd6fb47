from hypothesis import given, strategies as st

from keyczar_core.crypto.mac import HmacKey
from keyczar_core.crypto.symmetric import AesKey
from keyczar_core.storage.keystore import decode_key

_aes_bytes = st.binary(min_size=16, max_size=16)
_mac_bytes = st.binary(min_size=32, max_size=32)


@given(_aes_bytes, _mac_bytes)
def test_key_id_survives_serialization(aes: bytes, mac: bytes) -> None:
    key = AesKey(key=aes, hmac_key=HmacKey(key=mac))
    payload = key.to_record().to_json()
    assert key.key_id() == key.key_id()
    assert decode_key("AES", payload).key_id() == key.key_id()
    assert decode_key("AES", payload).key_id() == decode_key("AES", payload).key_id()


def test_key_ids_differ_between_generated_keys() -> None:
    # 32-bit IDs: a handful of keys should not collide, but no stronger claim is made.
    ids = {AesKey.generate().key_id() for _ in range(16)}
    assert len(ids) == 16
