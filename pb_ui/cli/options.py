"""Translate command-line values into a BenchConfig."""

from __future__ import annotations

from typing import Optional, Sequence

from pydantic import ValidationError

from pb_common.errors import ConfigurationError
from pb_runner.api import BenchConfig


class UsageRequested(Exception):
    """The command line asks for usage text instead of a measurement."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


def _parse_int(raw: str, name: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be an integer", context={name: raw}, cause=exc
        ) from exc


def build_config(
    args: Optional[Sequence[str]],
    *,
    memory_mb: Optional[int] = None,
    verbose: bool = False,
    stride: Optional[int] = None,
) -> BenchConfig:
    """
    Build the measurement configuration from ``[time_ms [max_runs]]`` and options.

    Raises:
        UsageRequested: Too many positional arguments, or ``-m 0``.
        ConfigurationError: Malformed or out-of-range values.
    """
    positionals = list(args or [])
    if len(positionals) > 2:
        raise UsageRequested()
    if memory_mb == 0:
        raise UsageRequested("-m Mbytes must be non-zero")

    values: dict[str, object] = {"verbose": verbose}
    if positionals:
        target_ms = _parse_int(positionals[0], "time_ms")
        if target_ms <= 0:
            raise ConfigurationError("target ms must be > 0", context={"time_ms": target_ms})
        values["target_ms"] = target_ms
    if len(positionals) > 1:
        max_runs = _parse_int(positionals[1], "max_runs")
        if max_runs <= 0:
            raise ConfigurationError("count must be > 0", context={"max_runs": max_runs})
        values["max_runs"] = max_runs
    if memory_mb is not None:
        values["memory_mb"] = memory_mb
    if stride is not None:
        values["stride"] = stride

    try:
        return BenchConfig(**values)
    except ValidationError as exc:
        first = exc.errors()[0]
        field_name = ".".join(str(part) for part in first.get("loc", ())) or "config"
        raise ConfigurationError(
            f"invalid {field_name}: {first.get('msg', 'validation failed')}",
            context={"errors": len(exc.errors())},
            cause=exc,
        ) from exc
