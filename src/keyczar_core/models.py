"""Serialized key record schemas.

Field names are a fixed wire contract. Every string field holds unpadded
web-safe base64 of raw key bytes or of a big-endian unsigned integer, and every
``size`` is a bit length. Older Keyczar spellings (``hmacKeyString``,
``aesKeyString``, ``hmacKey`` and upper-case DSA fields) are accepted on input;
output always uses the canonical names.
"""
from __future__ import annotations

import json
from typing import Any, Mapping, TypeVar, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, ValidationError

from keyczar_core.core.exceptions import InvalidKeyRecordError

RecordPayload = Union[str, bytes, Mapping[str, Any]]

_R = TypeVar("_R", bound="KeyRecord")


class KeyRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    size: StrictInt = Field(ge=0)

    @classmethod
    def parse(cls: type[_R], payload: RecordPayload) -> _R:
        try:
            if isinstance(payload, (str, bytes, bytearray)):
                return cls.model_validate_json(payload)
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise InvalidKeyRecordError(f"{cls.__name__} validation failed: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), sort_keys=True)


class HmacKeyRecord(KeyRecord):
    key: str = Field(validation_alias=AliasChoices("key", "hmacKeyString"))


class AesKeyRecord(KeyRecord):
    key: str = Field(validation_alias=AliasChoices("key", "aesKeyString"))
    mac_key: HmacKeyRecord = Field(alias="macKey", validation_alias=AliasChoices("macKey", "hmacKey", "mac_key"))
    mode: str = "CBC"


class DsaPublicKeyRecord(KeyRecord):
    q: str = Field(validation_alias=AliasChoices("q", "Q"))
    p: str = Field(validation_alias=AliasChoices("p", "P"))
    g: str = Field(validation_alias=AliasChoices("g", "G"))
    y: str = Field(validation_alias=AliasChoices("y", "Y"))


class DsaPrivateKeyRecord(KeyRecord):
    public_key: DsaPublicKeyRecord = Field(alias="publicKey")
    x: str


class RsaPublicKeyRecord(KeyRecord):
    modulus: str
    public_exponent: str = Field(alias="publicExponent")


class RsaPrivateKeyRecord(KeyRecord):
    crt_coefficient: str = Field(alias="crtCoefficient")
    prime_exponent_p: str = Field(alias="primeExponentP")
    prime_exponent_q: str = Field(alias="primeExponentQ")
    prime_p: str = Field(alias="primeP")
    prime_q: str = Field(alias="primeQ")
    private_exponent: str = Field(alias="privateExponent")
    public_key: RsaPublicKeyRecord = Field(alias="publicKey")


__all__ = [
    "AesKeyRecord",
    "DsaPrivateKeyRecord",
    "DsaPublicKeyRecord",
    "HmacKeyRecord",
    "KeyRecord",
    "RecordPayload",
    "RsaPrivateKeyRecord",
    "RsaPublicKeyRecord",
]
