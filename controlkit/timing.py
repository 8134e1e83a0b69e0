"""
Timing Utilities for Latency Instrumentation

Context manager and log helper for timing request stages
(generation, token signing) in the API routes.
"""

import time
from contextlib import contextmanager
from typing import Optional


def log_timing(stage: str, action: str, duration_ms: Optional[float] = None):
    """Log a timing event in standard format."""
    if duration_ms is not None:
        print(f"[TIMING] {stage}: {action} — duration={duration_ms:.0f}ms")
    else:
        print(f"[TIMING] {stage}: {action}")


@contextmanager
def sync_timer(stage: str, action: str = "OPERATION"):
    """Synchronous context manager for timing operations."""
    log_timing(stage, f"{action} START")
    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        log_timing(stage, f"{action} END", duration_ms)
