"""
Data models module.

Immutable snapshots of on-chain balances and time-release schedules, and
the records derived from them.
"""
