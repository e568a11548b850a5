#!/usr/bin/env python3
"""
Basic Usage Example - vestview lookup session

This script demonstrates the core API without a node connection:
- Convert raw plancks to decimal strings
- Aggregate a balance snapshot into a record
- Classify a time-release schedule against a relay block height
- Validate addresses and export the account log

Run: python examples/basic_usage.py
"""

from datetime import datetime, timezone

from vestview.balances import aggregate, to_decimal
from vestview.chain.address import validate_address
from vestview.export.spreadsheet import to_tsv
from vestview.models.balance import RawBalance
from vestview.models.schedule import VestingScheduleEntry
from vestview.schedules import classify
from vestview.utils.time import format_estimate

ALICE = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"


def demo_conversion() -> None:
    print("Decimal conversion (8 decimals):")
    for raw in (0, 5, 100_000_000, 123_456_789_012_345):
        print(f"  {raw} plancks -> {to_decimal(raw, 8)}")


def demo_schedule() -> None:
    entries = [
        VestingScheduleEntry(start=1_000, period=500, period_count=1, per_period=250_000_000),
        VestingScheduleEntry(start=100, period=50, period_count=1, per_period=100_000_000),
        VestingScheduleEntry(start=100, period=100, period_count=12, per_period=10_000_000),
    ]
    result = classify(entries, relay_block_number=1_200, now=datetime.now(timezone.utc))

    print("\nSchedule at relay block 1,200:")
    print(f"  claimable: {to_decimal(result.claimable_total, 8)} ({result.claimable_count} entries)")
    for release in result.upcoming:
        print(f"  block {release.unlock_block}: {to_decimal(release.amount, 8)}"
              f" at {format_estimate(release.unlock_estimate)}")


def demo_balance() -> None:
    validation = validate_address(ALICE, 42)
    print(f"\nAddress valid: {validation.valid} ({validation.normalized})")

    record = aggregate(RawBalance(free=150_000_000, reserved=25_000_000),
                       validation.normalized, decimals=8, note="demo", unit="UNIT")
    print("\nSpreadsheet export:")
    print(to_tsv([record]))


if __name__ == "__main__":
    demo_conversion()
    demo_schedule()
    demo_balance()
