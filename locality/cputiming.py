"""Measure the CPU time used by the current process, in nanoseconds."""

from __future__ import annotations

import time
from types import TracebackType
from typing import Optional


class CPUTimer:
    """A stopwatch over process CPU time.

    ``stop`` returns the CPU time used since the last ``start`` as a whole
    number of nanoseconds held in a float. Used as a context manager, the
    timer starts on entry and stores the measured time in ``elapsed`` on exit.
    """

    __slots__ = ("_start_ns", "elapsed")

    def __init__(self) -> None:
        self._start_ns: Optional[int] = None
        self.elapsed: Optional[float] = None

    def start(self) -> None:
        """Record the current process CPU time as the starting point."""
        self._start_ns = time.process_time_ns()

    def stop(self) -> float:
        """Return nanoseconds of CPU time used since ``start``."""
        if self._start_ns is None:
            raise RuntimeError("timer was never started")
        used = time.process_time_ns() - self._start_ns
        if used < 0:
            raise RuntimeError("CPU time went backwards")
        return float(used)

    def __enter__(self) -> CPUTimer:
        self.elapsed = None
        self.start()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.elapsed = self.stop()