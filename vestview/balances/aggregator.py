"""Balance aggregation into displayable records"""

from typing import Optional

from ..models.balance import BalanceRecord, RawBalance
from .decimal import format_human, group_digits, to_decimal


def aggregate(
    raw: RawBalance,
    account: str,
    decimals: int,
    note: Optional[str] = None,
    unit: str = "",
    group_separator: str = ",",
    decimal_point: str = "."
) -> BalanceRecord:
    """
    Combine free and reserved balances into a balance record.

    The total is ``free + reserved`` computed on integers; ``free`` and
    ``reserved`` are formatted independently so the record shows the source
    values next to their sum.

    Args:
        raw: Balance snapshot in plancks
        account: Normalized account address
        decimals: Digits of subdivision of one unit
        note: Optional operator note
        unit: Token symbol appended to the free and reserved values
        group_separator: Separator for digit grouping
        decimal_point: Separator between integer and fractional part

    Returns:
        BalanceRecord for display, logging and export
    """
    total = raw.free + raw.reserved

    return BalanceRecord(
        account=account,
        decimal=to_decimal(total, decimals, group_separator, decimal_point),
        plancks_total=group_digits(total, group_separator),
        free=format_human(raw.free, decimals, unit, group_separator, decimal_point),
        reserved=format_human(raw.reserved, decimals, unit, group_separator, decimal_point),
        note=note,
    )
