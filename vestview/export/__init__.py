"""
Account log export module.

Renders the session's balance records as spreadsheet-pasteable rows.
"""
