import pytest

from keyczar_core.crypto.asymmetric import RsaPrivateKey
from keyczar_core.crypto.signing import DsaPrivateKey


@pytest.fixture(scope="session")
def rsa_key() -> RsaPrivateKey:
    return RsaPrivateKey.generate(2048)


@pytest.fixture(scope="session")
def other_rsa_key() -> RsaPrivateKey:
    return RsaPrivateKey.generate(1024)


@pytest.fixture(scope="session")
def dsa_key() -> DsaPrivateKey:
    return DsaPrivateKey.generate()


@pytest.fixture(scope="session")
def other_dsa_key() -> DsaPrivateKey:
    return DsaPrivateKey.generate(1024)
