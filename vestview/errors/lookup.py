"""
Lookup input error classifications.

These exceptions describe requests that cannot be served yet, such as a
lookup without an active connection. Invalid addresses are not errors:
validation reports them as a structured result.
They are recoverable: the operator fixes the input or connects and retries.
"""

from typing import Optional, Dict, Any


class LookupInputError(Exception):
    """Base class for lookup requests that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class NotConnectedError(LookupInputError):
    """A lookup was attempted with no active chain connection."""

    def __init__(self, message: str = "Not connected to a chain", operation: Optional[str] = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
