"""
Question bank import pipeline.

    document bytes -> parse_document -> normalize_record -> QuestionStore.save
"""

from .import_service import QuestionImportService, resolve_source_path
from .normalizer import (
    RawOption,
    RawQuestionRecord,
    normalize_record,
    parse_document,
    project_options,
)

__all__ = [
    "QuestionImportService",
    "resolve_source_path",
    "RawOption",
    "RawQuestionRecord",
    "normalize_record",
    "parse_document",
    "project_options",
]
