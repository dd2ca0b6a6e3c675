"""
Dispatch module.

Log of material leaving the depot (what, how much, where, to whom).
"""
