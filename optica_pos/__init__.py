"""
Point-of-sale ledger for an optical shop.

Registers clients, records glasses and maintenance/product sales, and
answers per-client purchase history queries against an injected
relational store.
"""

__version__ = "1.0.0"
