"""Shared helpers for perturbation-bench."""

from pb_common.api import PBError, configure_logging

__all__ = ["PBError", "configure_logging"]
