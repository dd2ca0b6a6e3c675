"""
Audit module.

Append-only activity trail written by every depot mutation.
"""
