"""Core building blocks shared across the question bank."""

from .errors import (
    NotFoundError,
    QuizBankError,
    SchemaError,
    StorageError,
    ValidationError,
)

__all__ = [
    "QuizBankError",
    "SchemaError",
    "ValidationError",
    "NotFoundError",
    "StorageError",
]
