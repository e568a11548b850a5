"""Balance conversion and aggregation for raw on-chain amounts"""

from .aggregator import aggregate
from .decimal import format_human, group_digits, to_decimal

__all__ = [
    "aggregate",
    "format_human",
    "group_digits",
    "to_decimal",
]
