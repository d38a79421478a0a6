"""
Unit tests for the scoring engine.

Scoring runs against an in-memory lookup so each test controls exactly
which ids resolve.
"""

from unittest.mock import Mock

import pytest

from promptquest.core.errors import ValidationError
from promptquest.quiz import ScoringEngine
from promptquest.store.models import Question


@pytest.fixture
def store():
    """Store holding question 1 (answer A) and question 2 (answer C)."""
    questions = {
        1: Question(id=1, text="First?", correct_answer="A", explanation="A is right", difficulty=1),
        2: Question(id=2, text="Second?", correct_answer="C", explanation="C is right", difficulty=4),
    }
    mock = Mock()
    mock.find_by_id.side_effect = questions.get
    return mock


class TestScore:
    def test_one_of_two_correct(self, store):
        result = ScoringEngine(store).score({1: "A", 2: "B"})

        assert result.total == 2
        assert result.correct == 1
        assert result.percentage == 50.0

    def test_results_carry_both_answers(self, store):
        result = ScoringEngine(store).score({2: "B"})

        data = result.results[0].to_dict()
        assert data["userAnswer"] == "B"
        assert data["correctAnswer"] == "C"
        assert data["isCorrect"] is False
        assert data["explanation"] == "C is right"

    def test_ascending_id_order(self, store):
        result = ScoringEngine(store).score({"2": "C", "1": "A"})
        assert [r.question.id for r in result.results] == [1, 2]

    def test_string_keys_accepted(self, store):
        assert ScoringEngine(store).score({"1": "A"}).correct == 1

    def test_comparison_is_case_sensitive(self, store):
        result = ScoringEngine(store).score({1: "a"})
        assert result.correct == 0
        assert result.results[0].is_correct is False

    def test_missing_selection_is_incorrect(self, store):
        result = ScoringEngine(store).score({1: None})
        assert result.correct == 0
        assert result.total == 1

    def test_empty_answers(self, store):
        result = ScoringEngine(store).score({})
        assert result.total == 0
        assert result.percentage == 0.0


class TestUnresolvedIds:
    def test_excluded_by_default(self, store):
        """Unknown ids are reported but do not count toward the total."""
        result = ScoringEngine(store).score({1: "A", 99: "B"})

        assert result.total == 1
        assert result.correct == 1
        assert result.percentage == 100.0
        assert result.unresolved_ids == [99]
        assert [r.question.id for r in result.results] == [1]

    def test_counted_when_configured(self, store):
        result = ScoringEngine(store, count_unresolved=True).score({1: "A", 99: "B"})

        assert result.total == 2
        assert result.percentage == 50.0
        assert len(result.results) == 1


class TestInvalidKeys:
    @pytest.mark.parametrize("key", ["abc", "", True])
    def test_rejected(self, store, key):
        with pytest.raises(ValidationError, match="Invalid question id"):
            ScoringEngine(store).score({key: "A"})


def test_to_dict_shape(store):
    data = ScoringEngine(store).score({1: "A", 2: "B", 7: "C"}).to_dict()

    assert data["totalQuestions"] == 2
    assert data["correctAnswers"] == 1
    assert data["score"] == 50.0
    assert data["unresolvedIds"] == [7]
    assert len(data["questionResults"]) == 2
