"""Error taxonomy for perturbation-bench.

Every failure that ends a measurement is a ``PBError``. The CLI maps it to
``exit_code`` and logs ``error_to_payload`` so the stage that failed is
visible without a traceback.
"""

from __future__ import annotations

from typing import Any, Mapping

_SCALARS = (str, int, float, bool)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    if value is None or isinstance(value, _SCALARS):
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return _jsonable(context)


class PBError(Exception):
    """Base error; carries a structured context and the measurement stage."""

    exit_code: int = 1
    stage: str = "measurement"

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.error_type,
            "stage": self.stage,
            "message": str(self),
            "context": self.context,
        }


class ConfigurationError(PBError):
    """Invalid command-line or environment settings."""

    stage = "configuration"


class AllocationError(PBError):
    """The memory working set could not be allocated."""

    stage = "allocation"


class WorkerControlError(PBError):
    """The calibration worker thread could not be started, stopped or joined."""

    stage = "calibration"


class CalibrationError(PBError):
    """Calibration produced no usable iteration count."""

    stage = "calibration"


class RunSetError(PBError):
    """No completed runs to analyse."""

    stage = "runs"


def error_to_payload(error: PBError) -> dict[str, Any]:
    """Flatten a PBError into structured log fields."""
    payload = {f"error_{key}": value for key, value in error.to_dict().items()}
    payload["error"] = payload.pop("error_message")
    if error.__cause__ is not None:
        payload["error_cause"] = repr(error.__cause__)
    return payload
