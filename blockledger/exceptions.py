# blockledger/exceptions.py
"""
Error taxonomy for the ledger core.

Every failure surfaces to the caller as one of these; nothing in the core
catches and retries. The HTTP layer maps each class to its own status code.
"""


class LedgerError(Exception):
     """Base class for all ledger errors."""


class NotFound(LedgerError):
     """No tail block exists when one is expected."""


class ConstraintViolation(LedgerError):
     """hash or prevHash uniqueness violated (collision or append race)."""


class MalformedInput(LedgerError):
     """Caller supplied data that cannot be stored as a block payload."""


class StorageUnavailable(LedgerError):
     """Connection or query failure unrelated to constraints."""
