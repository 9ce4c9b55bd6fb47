from __future__ import annotations

import os
from dataclasses import dataclass, field

_LOG_LEVEL_ENV = "KZ_LOG_LEVEL"
_LOG_JSON_ENV = "KZ_LOG_JSON"


def _default_level() -> str:
    return os.getenv(_LOG_LEVEL_ENV, "INFO").upper()


def _default_json() -> bool:
    return os.getenv(_LOG_JSON_ENV, "1").strip().lower() not in {"0", "false", "no", "off"}


@dataclass(frozen=True)
class LoggingConfig:
    level: str = field(default_factory=_default_level)
    json_output: bool = field(default_factory=_default_json)


@dataclass(frozen=True)
class CryptoDefaults:
    rsa_public_exponent: int = 65537


@dataclass(frozen=True)
class AppConfig:
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    crypto: CryptoDefaults = field(default_factory=CryptoDefaults)


CONFIG = AppConfig()

__all__ = ["AppConfig", "CONFIG", "CryptoDefaults", "LoggingConfig"]
