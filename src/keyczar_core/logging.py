"""structlog setup for applications that embed keyczar-core.

Library modules only call ``structlog.get_logger(__name__)``; nothing here runs
on import.
"""
from __future__ import annotations

import logging
import sys

import structlog

from .config import CONFIG


def configure_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Route keyczar-core events to stdout.

    Records carry ``ts``, ``level`` and ``component`` (the logger name); JSON
    output puts the event name under ``msg``.
    Arguments left as ``None`` fall back to :data:`keyczar_core.config.CONFIG`.
    """
    numeric_level = logging.getLevelName((level or CONFIG.logging.level).upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    use_json = CONFIG.logging.json_output if json_output is None else json_output

    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(sys.stdout)],
        format="%(message)s",
        force=True,
    )
    processors = [
        structlog.processors.TimeStamper(fmt="iso", key="ts"),
        structlog.stdlib.add_log_level,
        _add_component,
        structlog.processors.format_exc_info,
    ]
    if use_json:
        processors += [structlog.processors.EventRenamer("msg"), structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
    )


def _add_component(logger: logging.Logger, _name: str, event_dict: dict[str, object]) -> dict[str, object]:
    event_dict.setdefault("component", getattr(logger, "name", None) or "keyczar_core")
    return event_dict


__all__ = ["configure_logging"]
