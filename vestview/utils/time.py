"""
Clock helpers for relay block caching and unlock time estimation.

Block heights are converted to wall-clock estimates with a fixed average
block time. The estimate is a modelling assumption, not a protocol
guarantee: real block production drifts.
"""

import time
from datetime import datetime, timedelta, timezone
from typing import Optional

DEFAULT_BLOCK_TIME_MS = 6_000


def now_ms() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


def from_epoch_ms(epoch_ms: int) -> datetime:
    """Convert epoch milliseconds to a UTC datetime."""
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)


def to_epoch_ms(ts: datetime) -> int:
    """Convert a timezone-aware datetime to epoch milliseconds."""
    return int(ts.timestamp() * 1000)


def estimate_block_time(
    target_block: int,
    current_block: int,
    now: Optional[datetime] = None,
    block_time_ms: int = DEFAULT_BLOCK_TIME_MS
) -> datetime:
    """
    Estimate when a relay chain block will be (or was) produced.

    Args:
        target_block: Block height to estimate
        current_block: Current relay chain block height
        now: Reference wall-clock time, defaults to current UTC time
        block_time_ms: Assumed average block time in milliseconds

    Returns:
        UTC datetime of the estimate; in the past for blocks already produced
    """
    if now is None:
        now = datetime.now(timezone.utc)

    return now + timedelta(milliseconds=(target_block - current_block) * block_time_ms)


def format_estimate(ts: Optional[datetime]) -> str:
    """
    Format an unlock estimate for display and logging.

    Args:
        ts: Estimated timestamp, None for entries without an estimate

    Returns:
        ISO8601 formatted string, or "Unsupported" when there is no estimate
    """
    if ts is None:
        return "Unsupported"
    return ts.isoformat()
