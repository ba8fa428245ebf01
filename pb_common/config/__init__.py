"""Configuration helpers shared across packages."""

from pb_common.config.env import env_bool, env_int, read_env

__all__ = ["env_bool", "env_int", "read_env"]
