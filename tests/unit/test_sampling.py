"""Unit tests for the sampling engine."""

import json
from unittest.mock import Mock

import pytest

from promptquest.quiz import SamplingEngine
from promptquest.store.models import Question, QuestionFilters


@pytest.fixture
def populated_bank(quiz_bank, mixed_records):
    quiz_bank.import_document(json.dumps({"questions": mixed_records}))
    return quiz_bank


class TestSample:
    """Sampling against a populated relational store."""

    def test_respects_limit(self, populated_bank):
        assert len(populated_bank.sample(3)) == 3

    def test_population_smaller_than_limit(self, populated_bank):
        questions = populated_bank.sample(100)
        assert len(questions) == 7
        assert len({q.id for q in questions}) == 7

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit(self, populated_bank, limit):
        assert populated_bank.sample(limit) == []

    def test_every_result_satisfies_filters(self, populated_bank):
        filters = QuestionFilters(skill="PYTHON", area="backend")
        questions = populated_bank.sample(10, filters)

        assert len(questions) == 3
        assert all(filters.matches(q) for q in questions)

    def test_difficulty_and_degree(self, populated_bank):
        questions = populated_bank.sample(10, QuestionFilters(difficulty=3, degree="Mid"))
        assert sorted(q.text for q in questions) == ["Python decorators?", "SQL window functions?"]

    def test_unknown_skill(self, populated_bank):
        assert populated_bank.sample(5, QuestionFilters(skill="nonexistent")) == []

    def test_blank_filters_ignored(self, populated_bank):
        assert len(populated_bank.sample(10, QuestionFilters(skill="", area="  "))) == 7


class TestDeduplication:
    def test_duplicate_rows_dropped(self):
        """Backend duplicates never reach the caller."""
        question = Question(text="Q?", correct_answer="A", id=1)
        other = Question(text="R?", correct_answer="B", id=2)
        store = Mock()
        store.find_random.return_value = [question, question, other]

        questions = SamplingEngine(store).sample(3)

        assert [q.id for q in questions] == [1, 2]
        store.find_random.assert_called_once()

    def test_store_not_called_for_zero_limit(self):
        store = Mock()
        assert SamplingEngine(store).sample(0) == []
        store.find_random.assert_not_called()
