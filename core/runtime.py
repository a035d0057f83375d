# core/runtime.py
"""Process-wide facts reported by the status endpoints."""
import os
import socket
import time
from datetime import datetime, timezone
from typing import Dict

from prometheus_client import ProcessCollector

_STARTED_AT = time.monotonic()

# Not registered anywhere; polled directly for /health
_process_collector = ProcessCollector(registry=None)

_MEMORY_METRICS = {
    "process_resident_memory_bytes": "rss",
    "process_virtual_memory_bytes": "vms",
}


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-01-01T00:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def uptime_seconds() -> float:
    """Seconds since this module was first imported, which happens while the process starts up.

    Monotonic, so successive values never decrease.
    """
    return time.monotonic() - _STARTED_AT


def memory_usage() -> Dict[str, int]:
    """Memory figures in bytes; zeros where /proc is unavailable.

    ``rss`` is the resident set size. ``vms`` is the total virtual address
    space, not a heap size: CPython allocates objects from the process heap
    and does not report a separate heap figure.
    """
    usage = {"rss": 0, "vms": 0}
    for metric in _process_collector.collect():
        key = _MEMORY_METRICS.get(metric.name)
        if key and metric.samples:
            usage[key] = int(metric.samples[0].value)
    return usage


def process_id() -> int:
    return os.getpid()


def hostname() -> str:
    return socket.gethostname()
