"""
Time-release schedule classification.

Entries are partitioned into claimable entries, whose single release period
has already elapsed at the current relay chain height, and upcoming
entries, which are ordered by the relay block at which they unlock.
Multi-period entries are not modelled: they are always upcoming and are
marked unsupported instead of receiving an estimate.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional

import structlog

from ..models.schedule import ScheduleClassification, UpcomingRelease, VestingScheduleEntry
from ..utils.time import DEFAULT_BLOCK_TIME_MS, estimate_block_time

logger = structlog.get_logger(__name__)


def is_claimable(entry: VestingScheduleEntry, relay_block_number: int) -> bool:
    """Whether a single-period entry has unlocked before the given relay block."""
    return entry.is_single_period and entry.unlock_block < relay_block_number


def classify(
    entries: Iterable[VestingScheduleEntry],
    relay_block_number: int,
    now: Optional[datetime] = None,
    block_time_ms: int = DEFAULT_BLOCK_TIME_MS
) -> ScheduleClassification:
    """
    Classify schedule entries against the current relay chain height.

    Args:
        entries: Schedule entries in the order returned by the chain
        relay_block_number: Current relay chain block height
        now: Reference time for unlock estimates, defaults to current UTC time
        block_time_ms: Assumed average relay block time in milliseconds

    Returns:
        ScheduleClassification with the claimable sum and upcoming releases
        sorted by unlock block (stable for equal blocks)
    """
    if now is None:
        now = datetime.now(timezone.utc)

    claimable_total = 0
    claimable_count = 0
    upcoming: list[UpcomingRelease] = []

    for entry in entries:
        if is_claimable(entry, relay_block_number):
            claimable_total += entry.per_period
            claimable_count += 1
            continue

        if entry.is_single_period:
            estimate = estimate_block_time(
                entry.unlock_block, relay_block_number, now, block_time_ms
            )
            upcoming.append(UpcomingRelease(
                entry=entry,
                unlock_block=entry.unlock_block,
                unlock_estimate=estimate,
            ))
        else:
            logger.debug(
                "Unsupported multi-period schedule entry",
                start=entry.start,
                period=entry.period,
                period_count=entry.period_count
            )
            upcoming.append(UpcomingRelease(
                entry=entry,
                unlock_block=entry.unlock_block,
                unlock_estimate=None,
                supported=False,
            ))

    if claimable_count == 0 and not upcoming:
        return ScheduleClassification.empty(relay_block_number)

    # sorted() is stable, equal unlock blocks keep chain order
    upcoming = sorted(upcoming, key=lambda release: release.unlock_block)

    return ScheduleClassification(
        relay_block_number=relay_block_number,
        claimable_total=claimable_total,
        claimable_count=claimable_count,
        upcoming=tuple(upcoming),
    )
