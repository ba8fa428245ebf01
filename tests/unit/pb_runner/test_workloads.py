"""Tests for the CPU spin and memory scan workloads."""

from __future__ import annotations

import threading
import time

import pytest

from pb_common.errors import AllocationError, ConfigurationError
from pb_runner.engine.context import WorkerContext
from pb_runner.models.config import BenchConfig, WorkloadKind
from pb_runner.workloads import (
    CpuSpinWorkload,
    MemoryScanWorkload,
    WorkingSet,
    create_workload,
)
from pb_runner.workloads import memory_scan


pytestmark = pytest.mark.unit_runner


def _spin_briefly(workload, seconds: float = 0.02) -> WorkerContext:
    context = WorkerContext()
    thread = threading.Thread(target=workload.spin, args=(context,))
    thread.start()
    time.sleep(seconds)
    context.stop()
    thread.join(timeout=5)
    assert not thread.is_alive()
    return context


def test_cpu_spin_runs_exact_count() -> None:
    workload = CpuSpinWorkload()

    assert workload.kind is WorkloadKind.CPU_SPIN
    assert workload.run(0) == 0
    assert workload.run(12345) == 12345


def test_cpu_spin_counts_until_stopped() -> None:
    context = _spin_briefly(CpuSpinWorkload())

    assert context.stopped
    assert context.count > 0


def test_working_set_touches_every_page() -> None:
    working_set = WorkingSet.allocate(3 * 4096 + 10, page_size=4096)

    assert working_set.size == 3 * 4096 + 10
    for offset in (0, 4096, 8192, 12288):
        assert working_set.buffer[offset] == ord("A")
    assert working_set.buffer[1] == 0
    assert working_set.buffer[4097] == 0


def test_working_set_allocation_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_memory(size):
        raise MemoryError()

    monkeypatch.setattr(memory_scan, "bytearray", _no_memory, raising=False)

    with pytest.raises(AllocationError) as excinfo:
        WorkingSet.allocate(1024)
    assert isinstance(excinfo.value.__cause__, MemoryError)
    assert excinfo.value.context == {"size_bytes": 1024}


def test_working_set_rejects_empty_size() -> None:
    with pytest.raises(AllocationError):
        WorkingSet.allocate(0)


def test_memory_scan_reads_with_stride_and_wraps() -> None:
    buffer = bytearray(i % 256 for i in range(256))
    workload = MemoryScanWorkload(WorkingSet(buffer), stride=64)

    assert workload.run(8) == 8
    # offsets 0, 64, 128, 192, then wrap to 0
    assert workload.checksum == 2 * (0 + 64 + 128 + 192)


def test_memory_scan_counts_until_stopped() -> None:
    workload = MemoryScanWorkload(WorkingSet(bytearray(b"\x01" * 1024)), stride=64)
    context = _spin_briefly(workload)

    assert context.count > 0
    assert workload.checksum == context.count


def test_memory_scan_rejects_bad_stride() -> None:
    with pytest.raises(ValueError):
        MemoryScanWorkload(WorkingSet(bytearray(64)), stride=0)


def test_create_workload_selects_by_config() -> None:
    assert isinstance(create_workload(BenchConfig()), CpuSpinWorkload)

    config = BenchConfig(memory_mb=1, stride=128)
    working_set = WorkingSet(bytearray(1024))
    workload = create_workload(config, working_set)
    assert isinstance(workload, MemoryScanWorkload)
    assert workload.stride == 128
    assert workload.working_set is working_set


def test_create_workload_memory_needs_working_set() -> None:
    with pytest.raises(ConfigurationError):
        create_workload(BenchConfig(memory_mb=1))
