import json
import logging

import pytest
import structlog

from keyczar_core.config import CONFIG, AppConfig, LoggingConfig
from keyczar_core.core.exceptions import InvalidSignatureError
from keyczar_core.crypto.symmetric import AesKey
from keyczar_core.logging import configure_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
    logging.basicConfig(handlers=[logging.NullHandler()], force=True)


def test_json_records_carry_component_and_msg(capsys) -> None:
    configure_logging("debug", json_output=True)
    structlog.get_logger("keyczar_core.tests").info("keys.load.complete", versions=[1, 2])
    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["msg"] == "keys.load.complete"
    assert record["level"] == "info"
    assert record["component"] == "keyczar_core.tests"
    assert record["versions"] == [1, 2]
    assert "ts" in record


def test_level_filtering(capsys) -> None:
    configure_logging("warning", json_output=True)
    structlog.get_logger("keyczar_core.tests").info("quiet")
    assert "quiet" not in capsys.readouterr().out
    assert logging.getLogger().level == logging.WARNING


def test_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("KZ_LOG_LEVEL", "debug")
    monkeypatch.setenv("KZ_LOG_JSON", "off")
    cfg = LoggingConfig()
    assert cfg.level == "DEBUG"
    assert cfg.json_output is False
    assert AppConfig().crypto.rsa_public_exponent == 65537 == CONFIG.crypto.rsa_public_exponent


def test_mac_mismatch_event_reports_key_id_only(capsys) -> None:
    configure_logging("debug", json_output=True)
    key = AesKey.generate()
    ciphertext = bytearray(key.encrypt(b"hello"))
    ciphertext[-1] ^= 0x01
    with pytest.raises(InvalidSignatureError):
        key.decrypt(bytes(ciphertext))

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["msg"] == "aes.decrypt.mac_mismatch"
    assert record["component"] == "keyczar_core.crypto.symmetric"
    assert record["key_id"] == key.key_id().hex()
    assert key.key.hex() not in json.dumps(record)


def test_console_output(capsys) -> None:
    configure_logging("info", json_output=False)
    structlog.get_logger("keyczar_core.tests").info("keys.load.complete")
    assert "keys.load.complete" in capsys.readouterr().out


def test_unknown_level_falls_back_to_info() -> None:
    configure_logging("chatty", json_output=True)
    assert logging.getLogger().level == logging.INFO
