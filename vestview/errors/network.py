"""
Network failure error classifications.

These exceptions wrap failures of the chain connection collaborator and the
relay chain block query. They propagate to the caller uncaught; nothing is
retried automatically except the relay block fetch.
"""

from typing import Optional, Dict, Any


class NetworkFailureError(Exception):
    """Base class for connection and query failures."""

    def __init__(self, message: str, endpoint: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.context = context or {}
        self.recoverable = False


class ConnectionFailedError(NetworkFailureError):
    """Opening or closing a node connection failed."""


class QueryFailedError(NetworkFailureError):
    """An account or schedule storage query failed."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 address: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.address = address


class RelayBlockFetchError(NetworkFailureError):
    """The relay chain block height could not be fetched."""

    def __init__(self, message: str, attempts: int = 1, **kwargs):
        super().__init__(message, **kwargs)
        self.attempts = attempts


class UnknownRelayChainError(NetworkFailureError):
    """No relay chain endpoint is configured for the network prefix."""

    def __init__(self, message: str, prefix: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.prefix = prefix
