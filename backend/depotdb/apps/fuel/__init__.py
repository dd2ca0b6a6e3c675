"""
Fuel module.

Diesel tank balance and its append-only consumption/adjustment ledger.
"""
