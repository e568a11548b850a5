"""Fixed-point conversion of plancks into decimal unit strings"""

from typing import Union


def group_digits(value: Union[int, str], separator: str = ",") -> str:
    """
    Render a non-negative integer with thousands grouping.

    Args:
        value: Integer or string of decimal digits
        separator: Group separator

    Returns:
        Grouped digits, e.g. "1,234,567"
    """
    grouped = f"{int(value):,}"
    if separator != ",":
        grouped = grouped.replace(",", separator)
    return grouped


def to_decimal(
    raw_amount: Union[int, str],
    decimals: int,
    group_separator: str = ",",
    decimal_point: str = "."
) -> str:
    """
    Convert an amount in plancks into a decimal unit string.

    The decimal point is inserted ``decimals`` digits from the right of the
    raw value; the fractional digits are kept as-is (no trailing-zero
    trimming). Amounts below one unit are zero-padded, so 5 plancks with
    3 decimals renders as "0.005". Zero renders as "0".

    Only integer and string operations are used, so no precision is lost
    for amounts of any size.

    Args:
        raw_amount: Non-negative amount in the smallest on-chain unit
        decimals: Digits of subdivision of one unit
        group_separator: Separator for the integer part
        decimal_point: Separator between integer and fractional part

    Returns:
        Decimal string, e.g. "1,234.50000000"
    """
    value = int(raw_amount)
    if value < 0:
        raise ValueError(f"Amount must be non-negative, got {value}")
    if decimals < 0:
        raise ValueError(f"Decimals must be non-negative, got {decimals}")

    if value == 0:
        return "0"

    if decimals == 0:
        return group_digits(value, group_separator)

    digits = str(value).rjust(decimals + 1, "0")
    integer_part = digits[:-decimals]
    fraction_part = digits[-decimals:]

    return f"{group_digits(integer_part, group_separator)}{decimal_point}{fraction_part}"


def format_human(
    raw_amount: Union[int, str],
    decimals: int,
    unit: str,
    group_separator: str = ",",
    decimal_point: str = "."
) -> str:
    """
    Render an amount in plancks as units followed by the token symbol.

    Args:
        raw_amount: Non-negative amount in the smallest on-chain unit
        decimals: Digits of subdivision of one unit
        unit: Token symbol
        group_separator: Separator for the integer part
        decimal_point: Separator between integer and fractional part

    Returns:
        Human string, e.g. "1.500 UNIT"
    """
    amount = to_decimal(raw_amount, decimals, group_separator, decimal_point)
    return f"{amount} {unit}" if unit else amount
