# blockledger/__init__.py
"""Append-only, hash-chained ledger persisted in a relational store."""

__version__ = "0.1.0"
