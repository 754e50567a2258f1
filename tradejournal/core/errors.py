"""Exceptions raised by the journal core."""


class JournalError(Exception):
    """Base class for Trade Journal errors."""


class InvalidInputError(JournalError, ValueError):
    """An event carried data the ledger refuses to accept."""
