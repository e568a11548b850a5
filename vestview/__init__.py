"""
vestview - Balance and Time-Release Schedule Lookup

A lightweight client that connects to a Substrate node, resolves account
balances and interprets the time-release (vesting) schedules attached to an
account, rendering the results for a human operator.
"""

__version__ = "0.1.0"
__author__ = "vestview Team"
