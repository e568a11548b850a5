"""
Time-release schedule data models.

A schedule entry releases ``per_period`` plancks every ``period`` relay
chain blocks starting at relay block ``start``, ``period_count`` times.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from .balance import BalanceRecord


@dataclass(frozen=True)
class VestingScheduleEntry:
    """Single time-release schedule entry as returned by the chain."""
    start: int          # Relay chain block height
    period: int         # Blocks per period
    period_count: int   # Number of periods
    per_period: int     # Plancks released per period

    @property
    def unlock_block(self) -> int:
        """Relay block at which the first period ends."""
        return self.start + self.period

    @property
    def is_single_period(self) -> bool:
        return self.period_count == 1

    @property
    def total_amount(self) -> int:
        return self.per_period * self.period_count

    @classmethod
    def from_chain(cls, value: dict[str, Any]) -> "VestingScheduleEntry":
        """Build from a decoded storage value (snake_case or camelCase keys)."""
        return cls(
            start=int(value["start"]),
            period=int(value["period"]),
            period_count=int(value.get("period_count", value.get("periodCount"))),
            per_period=int(value.get("per_period", value.get("perPeriod"))),
        )


@dataclass(frozen=True)
class UpcomingRelease:
    """A schedule entry that is not claimable yet."""
    entry: VestingScheduleEntry
    unlock_block: int
    unlock_estimate: Optional[datetime]     # None when unsupported
    supported: bool = True                  # False for multi-period entries

    @property
    def amount(self) -> int:
        return self.entry.per_period


@dataclass(frozen=True)
class ScheduleClassification:
    """Result of partitioning schedule entries against a relay block height."""
    claimable_total: int = 0
    claimable_count: int = 0
    upcoming: tuple[UpcomingRelease, ...] = ()
    relay_block_number: Optional[int] = None     # None when no height was needed

    @property
    def is_empty(self) -> bool:
        """True when the account has no schedule entries at all."""
        return self.claimable_count == 0 and not self.upcoming

    @property
    def unsupported_count(self) -> int:
        return sum(1 for release in self.upcoming if not release.supported)

    @classmethod
    def empty(cls, relay_block_number: Optional[int] = None) -> "ScheduleClassification":
        """Create the result for an account without schedules."""
        return cls(relay_block_number=relay_block_number)


@dataclass(frozen=True)
class LookupResult:
    """Combined balance and schedule result of one account lookup."""
    record: BalanceRecord
    schedule: Optional[ScheduleClassification] = None
