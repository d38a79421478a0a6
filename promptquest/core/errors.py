"""
Error taxonomy for the question bank.

Domain errors propagate to the caller unchanged; the API and CLI layers map
them to status codes and exit codes.
"""

from __future__ import annotations


class QuizBankError(Exception):
    """Base class for all question bank failures."""


class SchemaError(QuizBankError):
    """The input document is not parseable or lacks the `questions` array."""


class ValidationError(QuizBankError):
    """A record is missing a required field or carries an invalid value."""

    def __init__(
        self,
        message: str,
        *,
        record_index: int | None = None,
        field: str | None = None,
        committed_count: int = 0,
    ):
        super().__init__(message)
        self.record_index = record_index
        self.field = field
        # Rows that stay persisted after the failed import
        self.committed_count = committed_count


class NotFoundError(QuizBankError):
    """A referenced file or resource does not exist."""


class StorageError(QuizBankError):
    """The active storage backend failed to execute a read or write."""

    def __init__(self, message: str, *, committed_count: int = 0):
        super().__init__(message)
        self.committed_count = committed_count
