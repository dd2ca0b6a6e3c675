"""
Vocabulary module.

Operator-managed pick-lists (machines, oil types, chemicals, part families)
offered by the depot terminals when filling in names.
"""
