"""Diagnostic logging for perturbation-bench, rendered through structlog.

The measurement report owns stdout. Log records go to stderr and, when
requested, to a file, so redirecting the report never captures diagnostics.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Optional

import structlog

from pb_common.config.env import env_bool, read_env

DEFAULT_LEVEL = logging.WARNING


def _resolve_level(value: str | int | None, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if value is None:
        return DEFAULT_LEVEL
    if isinstance(value, int):
        return value
    if value.strip().isdigit():
        return int(value)
    return logging.getLevelNamesMapping().get(value.strip().upper(), DEFAULT_LEVEL)


@dataclass(frozen=True)
class LogSettings:
    """Effective logging options after merging arguments with ``PB_LOG_*``."""

    level: int
    json: bool
    log_file: Optional[str]

    @classmethod
    def resolve(
        cls,
        level: str | int | None,
        debug: bool,
        log_file: str | None,
        json: bool | None,
    ) -> "LogSettings":
        return cls(
            level=_resolve_level(level or read_env("LOG_LEVEL"), debug),
            json=bool(env_bool("LOG_JSON") if json is None else json),
            log_file=read_env("LOG_FILE") if log_file is None else log_file,
        )


_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def _formatter(json: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_PRE_CHAIN)


def _handlers(settings: LogSettings) -> list[logging.Handler]:
    formatter = _formatter(settings.json)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def _bind_structlog() -> None:
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
    force: bool = False,
) -> LogSettings:
    """Install the stderr (and optional file) handlers on the root logger.

    Explicit arguments win over ``PB_LOG_LEVEL``, ``PB_LOG_JSON`` and
    ``PB_LOG_FILE``. Without ``force`` an already configured root logger is
    left alone and only structlog is bound to it.
    """
    settings = LogSettings.resolve(level, debug, log_file, json)
    root = logging.getLogger()
    if force or not root.handlers:
        if force:
            root.handlers.clear()
        root.setLevel(settings.level)
        for handler in _handlers(settings):
            root.addHandler(handler)
    _bind_structlog()
    return settings
