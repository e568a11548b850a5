"""
Error classification for balance and schedule lookups.

Lookup input problems are recoverable and reported inline; network failures
propagate to the caller and never touch cached or logged state.
"""

from .lookup import (
    LookupInputError,
    NotConnectedError,
)
from .network import (
    NetworkFailureError,
    ConnectionFailedError,
    QueryFailedError,
    RelayBlockFetchError,
    UnknownRelayChainError,
)

__all__ = [
    # Lookup input errors
    "LookupInputError",
    "NotConnectedError",
    # Network failures
    "NetworkFailureError",
    "ConnectionFailedError",
    "QueryFailedError",
    "RelayBlockFetchError",
    "UnknownRelayChainError",
]
