"""
QuizBank facade.

Wires one question store to the import, sampling, scoring and statistics
components, and is the only object the API and CLI layers talk to.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from config import Settings, get_settings
from promptquest.importing import QuestionImportService
from promptquest.quiz import (
    QuestionBankStats,
    SamplingEngine,
    ScoreResult,
    ScoringEngine,
    collect_stats,
)
from promptquest.store import Question, QuestionFilters, QuestionStore, create_store


class QuizBank:
    """Collaborator-facing operations over the configured question store."""

    def __init__(self, store: QuestionStore, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.store = store
        self.importer = QuestionImportService(store, self.settings)
        self.sampler = SamplingEngine(store)
        self.scorer = ScoringEngine(store, count_unresolved=self.settings.score_count_unresolved)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> QuizBank:
        settings = settings or get_settings()
        return cls(create_store(settings), settings)

    # ========================================
    # Import / maintenance
    # ========================================

    def import_document(self, document: bytes | str, clear_first: bool = False) -> int:
        return self.importer.import_document(document, clear_first=clear_first)

    def import_file(self, path: str | Path, clear_first: bool = False) -> int:
        return self.importer.import_file(path, clear_first=clear_first)

    def import_default(self) -> int:
        return self.importer.import_default()

    def clear_all(self) -> None:
        self.importer.clear_all()

    # ========================================
    # Reads
    # ========================================

    def stats(self) -> QuestionBankStats:
        return collect_stats(self.store)

    def all_questions(self) -> list[Question]:
        return self.store.find_all()

    def sample(self, limit: int, filters: QuestionFilters | None = None) -> list[Question]:
        return self.sampler.sample(limit, filters)

    def score(self, answers: Mapping[int | str, str | None]) -> ScoreResult:
        return self.scorer.score(answers)
