"""Nanosecond timestamp utilities."""

import time
from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_nanos():
    """Current time in nanoseconds since Unix epoch."""
    return time.time_ns()


def from_nanos(epoch_ns):
    """Aware UTC datetime for epoch nanoseconds, truncated to microseconds."""
    return EPOCH + timedelta(microseconds=epoch_ns // 1000)


def format_timestamp(epoch_ns=None):
    """Format timestamp as ISO 8601 with microseconds."""
    if epoch_ns is None:
        epoch_ns = now_nanos()
    return format_datetime(from_nanos(epoch_ns))


def format_datetime(dt):
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z"
