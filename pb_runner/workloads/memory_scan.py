"""
Memory-bound strided read loop over a resident working set.
"""

import logging
import mmap
from dataclasses import dataclass

from pb_common.errors import AllocationError
from pb_runner.engine.context import WorkerContext
from pb_runner.models.config import WorkloadKind
from pb_runner.workloads.interface import Workload

logger = logging.getLogger(__name__)

PAGE_FILL = ord("A")


@dataclass
class WorkingSet:
    """Buffer read by the memory scan, owned for the life of the process."""

    buffer: bytearray

    @property
    def size(self) -> int:
        return len(self.buffer)

    @classmethod
    def allocate(cls, size_bytes: int, page_size: int = mmap.PAGESIZE) -> "WorkingSet":
        """
        Allocate ``size_bytes`` and write one byte per page so every page is
        backed by memory before calibration starts.

        Raises:
            AllocationError: If the buffer cannot be allocated.
        """
        if size_bytes <= 0:
            raise AllocationError(
                "Working set size must be positive",
                context={"size_bytes": size_bytes},
            )
        try:
            buffer = bytearray(size_bytes)
        except (MemoryError, OverflowError) as exc:
            raise AllocationError(
                "Unable to allocate the memory working set",
                context={"size_bytes": size_bytes},
                cause=exc,
            ) from exc
        for offset in range(0, size_bytes, page_size):
            buffer[offset] = PAGE_FILL
        logger.debug("Populated working set of %d bytes (page size %d)", size_bytes, page_size)
        return cls(buffer=buffer)


class MemoryScanWorkload(Workload):
    """Each unit of work reads one byte, then advances the offset by ``stride``."""

    def __init__(self, working_set: WorkingSet, stride: int):
        if stride <= 0:
            raise ValueError("stride must be positive")
        self.working_set = working_set
        self.stride = stride
        self.checksum = 0

    @property
    def kind(self) -> WorkloadKind:
        return WorkloadKind.MEMORY_SCAN

    def run(self, count: int) -> int:
        buffer = self.working_set.buffer
        size = len(buffer)
        stride = self.stride
        offset = 0
        junk = 0
        i = 0
        while i < count:
            junk += buffer[offset]
            offset += stride
            if offset >= size:
                offset = 0
            i += 1
        self.checksum = junk
        return i

    def spin(self, context: WorkerContext) -> None:
        buffer = self.working_set.buffer
        size = len(buffer)
        stride = self.stride
        offset = 0
        junk = 0
        while context.keep_running():
            junk += buffer[offset]
            offset += stride
            if offset >= size:
                offset = 0
            context.count += 1
        self.checksum = junk
