"""Thread-safe transferred-bytes counter with running average throughput."""

import threading
import time
from typing import Callable, Optional, Tuple


class TransferStats:
    """
    Counts bytes uploaded since the tracker was created.

    One instance is shared by every worker performing transfers; the counter
    is guarded by a lock so concurrent record() calls never lose updates.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """
        Initialize tracker and capture the start timestamp.

        Args:
            clock: Returns current time in seconds (default time.time)
        """
        self._clock = clock or time.time
        self._lock = threading.Lock()
        self._total_bytes = 0
        self.started_at = self._clock()

    def record(self, num_bytes: int) -> Tuple[int, float]:
        """
        Add transferred bytes and compute running totals.

        Args:
            num_bytes: Bytes transferred by the completed upload

        Returns:
            Tuple of (total bytes so far, average throughput in KB/s)
        """
        with self._lock:
            self._total_bytes += num_bytes
            total = self._total_bytes

        elapsed = self._clock() - self.started_at
        if elapsed == 0:
            return total, 0.0

        # abs() guards against a clock stepping backwards
        return total, abs(total / elapsed) / 1024.0

    @property
    def total_bytes(self) -> int:
        with self._lock:
            return self._total_bytes
