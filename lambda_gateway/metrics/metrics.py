"""
Request metrics for the Lambda Gateway backend.

Responsibilities:
    - Count handled requests (monotonic, process lifetime)
    - Produce a point-in-time snapshot: request total, live user count,
      uptime, memory usage and a timestamp

Notes:
    - The user count is read from the directory at snapshot time; it is
      never stored here.
    - Uptime uses the monotonic clock from the moment this object is built,
      which is application start (see state.py).
"""

import gc
import os
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import psutil

from lambda_gateway.directory.base import BaseUserDirectory
from lambda_gateway.utils import utc_now_iso


def memory_usage(process: Optional[psutil.Process] = None) -> Dict[str, Any]:
    """
    Current process memory figures.

    Returns:
        dict:
            - rss: resident set size in bytes, right now
            - vms: virtual memory size in bytes
            - gcCounts: pending collection counts per generation
    """
    info = (process or psutil.Process(os.getpid())).memory_info()
    return {
        "rss": info.rss,
        "vms": info.vms,
        "gcCounts": list(gc.get_count()),
    }


@dataclass(frozen=True)
class MetricsSnapshot:
    total_requests: int
    total_users: int
    uptime: float
    memory_usage: Dict[str, Any]
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRequests": self.total_requests,
            "totalUsers": self.total_users,
            "uptime": self.uptime,
            "memoryUsage": self.memory_usage,
            "timestamp": self.timestamp,
        }


class RequestMetrics:
    def __init__(
        self,
        directory: BaseUserDirectory,
        clock: Callable[[], float] = time.monotonic,
        started_at: Optional[float] = None,
    ):
        self.directory = directory
        self._clock = clock
        self.started_at = clock() if started_at is None else started_at
        self._total = 0
        self._lock = threading.Lock()
        self._process = psutil.Process(os.getpid())

    def increment(self) -> int:
        """Count one handled request and return the new total."""
        with self._lock:
            self._total += 1
            return self._total

    @property
    def total_requests(self) -> int:
        with self._lock:
            return self._total

    def uptime(self) -> float:
        return self._clock() - self.started_at

    def snapshot(self) -> MetricsSnapshot:
        return MetricsSnapshot(
            total_requests=self.total_requests,
            total_users=self.directory.count(),
            uptime=self.uptime(),
            memory_usage=memory_usage(self._process),
            timestamp=utc_now_iso(),
        )
