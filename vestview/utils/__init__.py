"""
Utility functions module.

Time Semantics:
- Wall-clock time is expressed as integer epoch milliseconds internally
- Relay chain block heights are the time reference of schedules
- Unlock times are estimates derived from an assumed average block time
"""
