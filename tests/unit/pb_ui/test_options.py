"""Tests for command-line argument translation."""

from __future__ import annotations

import pytest

from pb_common.errors import ConfigurationError
from pb_runner.api import WorkloadKind
from pb_ui.cli.options import UsageRequested, build_config


pytestmark = pytest.mark.unit_ui


@pytest.fixture(autouse=True)
def _no_stride_env(monkeypatch) -> None:
    monkeypatch.delenv("PB_STRIDE", raising=False)


def test_defaults() -> None:
    config = build_config(None)

    assert config.target_ms == 100
    assert config.max_runs == 100
    assert config.workload_kind is WorkloadKind.CPU_SPIN
    assert config.stride == 64
    assert not config.verbose


def test_positionals_and_options() -> None:
    config = build_config(["300", "20"], memory_mb=2, verbose=True, stride=128)

    assert config.target_ms == 300
    assert config.max_runs == 20
    assert config.memory_mb == 2
    assert config.workload_kind is WorkloadKind.MEMORY_SCAN
    assert config.verbose
    assert config.stride == 128


def test_too_many_positionals_requests_usage() -> None:
    with pytest.raises(UsageRequested) as excinfo:
        build_config(["1", "2", "3"])
    assert excinfo.value.message == ""


def test_zero_memory_requests_usage() -> None:
    with pytest.raises(UsageRequested) as excinfo:
        build_config([], memory_mb=0)
    assert "non-zero" in excinfo.value.message


@pytest.mark.parametrize(
    "args, message",
    [
        (["0"], "target ms must be > 0"),
        (["-5"], "target ms must be > 0"),
        (["100", "0"], "count must be > 0"),
        (["abc"], "time_ms must be an integer"),
        (["100", "x"], "max_runs must be an integer"),
    ],
)
def test_invalid_positionals(args, message) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        build_config(args)
    assert str(excinfo.value) == message


def test_negative_memory_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        build_config([], memory_mb=-1)
    assert "memory_mb" in str(excinfo.value)


def test_stride_larger_than_working_set() -> None:
    with pytest.raises(ConfigurationError, match="stride"):
        build_config([], memory_mb=1, stride=2 * 1024 * 1024)
