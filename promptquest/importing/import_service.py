"""
Question bank import service.

Orchestrates the import of a JSON question bank into the active store.
Performs:
- Document parsing (whole import aborts on a schema problem, nothing written)
- Optional clearing of existing questions
- Per-record normalization and save, in document order
- Commit-count reporting when an import fails part way
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from config import Settings, get_settings
from promptquest.core.errors import NotFoundError, StorageError, ValidationError
from promptquest.store.base import QuestionStore

from .normalizer import normalize_record, parse_document

FILE_PREFIX = "file:"


def resolve_source_path(source: str | Path) -> Path:
    """Accept plain paths and `file:`-prefixed resource strings."""
    raw = str(source)
    if raw.startswith(FILE_PREFIX):
        raw = raw[len(FILE_PREFIX):]
    return Path(raw)


class QuestionImportService:
    """
    Service for importing question bank documents.

    Workflow:
    1. Parse the document and locate the `questions` array
    2. Clear existing questions when asked to
    3. Normalize each record and save it through the store
    4. Return the number of imported questions

    On the relational store all saves of one import share a transaction, so
    a failure leaves nothing behind. On the warehouse store rows are written
    one by one and the rows saved before the failure stay; the raised error's
    `committed_count` says how many.
    """

    def __init__(self, store: QuestionStore, settings: Settings | None = None) -> None:
        """
        Initialize import service.

        Args:
            store: Active question store
            settings: Application settings (default: cached settings)
        """
        self.store = store
        self.settings = settings or get_settings()

    # ========================================
    # Main Import Methods
    # ========================================

    def import_document(
        self,
        document: bytes | str,
        clear_first: bool = False,
        source: str = "<document>",
    ) -> int:
        """
        Import every question in a JSON document.

        Args:
            document: Raw JSON bytes or text
            clear_first: Delete existing questions before writing
            source: Label used in log messages

        Returns:
            Number of questions imported

        Raises:
            SchemaError: Document unusable; nothing was cleared or written
            ValidationError: A record is invalid; remaining records skipped
            StorageError: The store failed
        """
        logger.info(f"Starting import from: {source}")

        records = parse_document(document)
        logger.debug(f"Found {len(records)} raw question records")

        if clear_first:
            self.clear_all()

        imported = 0
        try:
            with self.store.batch():
                for index, raw in enumerate(records):
                    question = normalize_record(raw, index)
                    self.store.save(question)
                    imported += 1
                    logger.debug(f"Imported question {imported}: {question.text[:50]}")
        except (ValidationError, StorageError) as e:
            e.committed_count = 0 if self.store.transactional else imported
            logger.error(
                f"Import from {source} failed after {imported} records "
                f"({e.committed_count} persisted): {e}"
            )
            raise

        logger.info(f"Successfully imported {imported} questions")
        return imported

    def import_file(self, path: str | Path, clear_first: bool = False) -> int:
        """
        Import a question bank file.

        Raises:
            NotFoundError: The file does not exist
        """
        file_path = resolve_source_path(path)
        if not file_path.is_file():
            logger.error(f"JSON file not found at: {path} (absolute: {file_path.resolve()})")
            raise NotFoundError(f"File not found: {path}")

        logger.info(f"Found JSON file: {file_path.resolve()} (size: {file_path.stat().st_size} bytes)")
        return self.import_document(file_path.read_bytes(), clear_first=clear_first, source=str(file_path))

    def import_default(self) -> int:
        """Import the configured default question bank without clearing."""
        return self.import_file(self.settings.json_file_path, clear_first=False)

    def clear_all(self) -> None:
        """Clear all existing questions."""
        logger.info("Clearing all existing questions")
        self.store.delete_all()
        logger.info("All questions cleared")
