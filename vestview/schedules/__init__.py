"""Time-release schedule classification against the relay chain height"""

from .classifier import classify, is_claimable

__all__ = [
    "classify",
    "is_claimable",
]
