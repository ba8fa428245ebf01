"""Read ``PB_*`` environment variables."""

from __future__ import annotations

import os

ENV_PREFIX = "PB_"
TRUTHY = frozenset({"1", "true", "yes", "on"})


def read_env(name: str) -> str | None:
    """Return the value of ``PB_<name>`` or None when unset or blank."""
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value is None or not value.strip():
        return None
    return value


def parse_bool_env(value: str | None) -> bool | None:
    """True for 1/true/yes/on in any case, False for anything else, None if unset."""
    if value is None:
        return None
    return value.strip().lower() in TRUTHY


def parse_int_env(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def env_bool(name: str) -> bool | None:
    return parse_bool_env(read_env(name))


def env_int(name: str) -> int | None:
    return parse_int_env(read_env(name))
