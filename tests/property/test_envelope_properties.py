import pytest
from hypothesis import given, settings, strategies as st

from keyczar_core.core.exceptions import InvalidSignatureError
from keyczar_core.core.header import len_prefix_pack, len_prefix_unpack
from keyczar_core.crypto.mac import HmacKey
from keyczar_core.crypto.symmetric import AesKey

_KEY = AesKey.generate()
_MAC = HmacKey.generate()


@given(st.binary(max_size=256))
def test_symmetric_round_trip(plaintext: bytes) -> None:
    assert _KEY.decrypt(_KEY.encrypt(plaintext)) == plaintext


@settings(max_examples=200)
@given(st.binary(max_size=64), st.data())
def test_any_single_bit_flip_is_detected(plaintext: bytes, data: st.DataObject) -> None:
    ciphertext = bytearray(_KEY.encrypt(plaintext))
    bit = data.draw(st.integers(min_value=0, max_value=len(ciphertext) * 8 - 1))
    ciphertext[bit // 8] ^= 1 << (bit % 8)
    with pytest.raises(InvalidSignatureError):
        _KEY.decrypt(bytes(ciphertext))


@given(st.binary(min_size=1), st.binary(min_size=1))
def test_pack_unpack_round_trip(first: bytes, second: bytes) -> None:
    assert len_prefix_unpack(len_prefix_pack(first, second)) == [first, second]


@given(st.binary(), st.binary())
def test_mac_rejects_other_messages(message: bytes, other: bytes) -> None:
    tag = _MAC.sign(message)
    assert _MAC.verify(message, tag)
    assert _MAC.verify(other, tag) == (other == message)
