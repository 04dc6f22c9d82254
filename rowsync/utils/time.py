"""Time utilities for run timestamps and durations. All datetimes in UTC."""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def monotonic() -> float:
    """Clock for measuring elapsed run time; unaffected by wall-clock changes."""
    return time.monotonic()


def elapsed_seconds(started: float) -> float:
    """Seconds since `started` (a value from monotonic())."""
    return max(0.0, time.monotonic() - started)
