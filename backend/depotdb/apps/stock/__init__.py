"""
Stock module.

One record store per consumable category (oils, chemicals, spare parts)
plus the low-stock threshold predicate.
"""
