"""
Balance data models.

Raw balances are kept as Python integers (arbitrary precision) from the
moment they leave the chain client; only the derived record holds strings.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class NetworkParameters:
    """Address format and token denomination of the connected chain."""
    prefix: int         # SS58 address prefix
    unit: str           # Token symbol
    decimals: int       # Digits of subdivision of one unit

    @classmethod
    def from_properties(
        cls,
        properties: Optional[dict[str, Any]],
        fallback: "NetworkParameters"
    ) -> "NetworkParameters":
        """
        Build parameters from a node's ``system_properties`` response.

        Multi-token chains report lists for the symbol and decimals; the
        first entry is the native token. Missing values keep the fallback.
        """
        properties = properties or {}

        def first(value: Any) -> Any:
            if isinstance(value, (list, tuple)):
                return value[0] if value else None
            return value

        prefix = first(properties.get("ss58Format"))
        unit = first(properties.get("tokenSymbol"))
        decimals = first(properties.get("tokenDecimals"))

        return cls(
            prefix=int(prefix) if prefix is not None else fallback.prefix,
            unit=str(unit) if unit is not None else fallback.unit,
            decimals=int(decimals) if decimals is not None else fallback.decimals,
        )


@dataclass(frozen=True)
class RawBalance:
    """Free and reserved balance of an account in plancks."""
    free: int
    reserved: int

    def __post_init__(self):
        if self.free < 0 or self.reserved < 0:
            raise ValueError("Balances must be non-negative")

    @property
    def total(self) -> int:
        return self.free + self.reserved

    @classmethod
    def from_account_info(cls, account_info: Optional[dict[str, Any]]) -> "RawBalance":
        """Build from a ``System.Account`` storage value; unknown accounts are empty."""
        data = (account_info or {}).get("data", {}) or {}
        return cls(
            free=int(data.get("free", 0)),
            reserved=int(data.get("reserved", 0)),
        )


@dataclass(frozen=True)
class BalanceRecord:
    """Displayable result of one balance lookup."""
    account: str                # Normalized SS58 address
    decimal: str                # Total in units, e.g. "1,234.50000000"
    plancks_total: str          # Total in plancks with digit grouping
    free: str                   # Free balance in human units
    reserved: str               # Reserved balance in human units
    note: Optional[str] = None  # Operator note attached to the lookup
