"""
Overview module.

Read-only fan-out over the stock categories, the fuel tank and the audit log.
"""
