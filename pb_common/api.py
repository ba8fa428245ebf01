"""Public API surface for pb_common."""

from pb_common.errors import (
    AllocationError,
    CalibrationError,
    ConfigurationError,
    PBError,
    RunSetError,
    WorkerControlError,
    error_to_payload,
)
from pb_common.logging import configure_logging

__all__ = [
    "AllocationError",
    "CalibrationError",
    "ConfigurationError",
    "PBError",
    "RunSetError",
    "WorkerControlError",
    "configure_logging",
    "error_to_payload",
]
