"""
Unit tests for document parsing and record normalization.

Covers the schema checks that abort an import before any write, the
per-record validation, and the projection of option lists onto slots A-D.
"""

import pytest

from promptquest.core.errors import SchemaError, ValidationError
from promptquest.importing.normalizer import normalize_record, parse_document


class TestParseDocument:
    """Tests for top-level document parsing."""

    def test_returns_question_records(self):
        """Should return the raw records of the questions array."""
        records = parse_document(b'{"questions": [{"question": "Q?"}, {"question": "R?"}]}')
        assert len(records) == 2
        assert records[0]["question"] == "Q?"

    def test_accepts_text_input(self):
        """Should accept str as well as bytes."""
        assert parse_document('{"questions": []}') == []

    def test_invalid_json(self):
        """Unparseable input is a schema error."""
        with pytest.raises(SchemaError, match="Invalid JSON"):
            parse_document(b"{not json")

    def test_missing_questions_array(self):
        """A document without 'questions' is a schema error."""
        with pytest.raises(SchemaError, match="'questions' array not found"):
            parse_document(b'{"items": []}')

    def test_questions_not_a_list(self):
        """'questions' must be an array."""
        with pytest.raises(SchemaError):
            parse_document(b'{"questions": {"question": "Q?"}}')

    def test_root_not_an_object(self):
        """A top-level array is rejected."""
        with pytest.raises(SchemaError, match="expected an object"):
            parse_document(b"[1, 2, 3]")


class TestNormalizeRecord:
    """Tests for converting raw records into Questions."""

    def test_full_record(self, make_record):
        """All fields map onto the canonical entity."""
        question = normalize_record(make_record(), 0)

        assert question.id is None
        assert question.text == "Which layer of the OSI model handles routing?"
        assert question.correct_answer == "C"
        assert question.options == {"A": "Physical", "B": "Data Link", "C": "Network", "D": "Transport"}
        assert question.explanation == "Routers operate at the network layer."
        assert question.difficulty == 2
        assert question.area == "Networking"
        assert question.skill == "OSI"
        assert question.degree == "junior"

    def test_missing_option_defaults_to_empty(self, make_record):
        """An option key absent from the list becomes an empty string."""
        record = make_record(options=[
            {"key": "A", "text": "One"},
            {"key": "C", "text": "Three"},
            {"key": "D", "text": "Four"},
        ])
        question = normalize_record(record, 0)

        assert question.option_b == ""
        assert question.options == {"A": "One", "B": "", "C": "Three", "D": "Four"}

    def test_missing_options_list(self, make_record):
        """A record without options still yields four empty slots."""
        record = make_record()
        del record["options"]
        question = normalize_record(record, 0)

        assert question.options == {"A": "", "B": "", "C": "", "D": ""}

    def test_option_order_does_not_matter(self, make_record):
        """Options are placed by key, not by position."""
        record = make_record(options=[
            {"key": "D", "text": "Four"},
            {"key": "A", "text": "One"},
        ])
        question = normalize_record(record, 0)

        assert question.option_a == "One"
        assert question.option_d == "Four"

    def test_unknown_option_key_ignored(self, make_record):
        """Keys outside A-D are dropped."""
        record = make_record(options=[{"key": "E", "text": "Five"}, {"key": "a", "text": "One"}])
        question = normalize_record(record, 0)

        assert question.options == {"A": "One", "B": "", "C": "", "D": ""}

    def test_answer_and_degree_normalized(self, make_record):
        """Answer letters are upper-cased and degrees lower-cased."""
        question = normalize_record(make_record(answer=" b ", degree="Senior"), 0)

        assert question.correct_answer == "B"
        assert question.degree == "senior"

    def test_numeric_string_difficulty(self, make_record):
        """Numeric strings are accepted for difficulty."""
        assert normalize_record(make_record(difficulty="4"), 0).difficulty == 4

    @pytest.mark.parametrize("difficulty", [True, False])
    def test_boolean_difficulty_rejected(self, make_record, difficulty):
        """JSON booleans are a type error, never read as 1 or 0."""
        with pytest.raises(ValidationError, match="valid integer") as exc_info:
            normalize_record(make_record(difficulty=difficulty), 0)
        assert exc_info.value.field == "difficulty"

    def test_padded_numeric_string_difficulty(self, make_record):
        assert normalize_record(make_record(difficulty=" 5 "), 0).difficulty == 5

    @pytest.mark.parametrize(
        "field",
        ["question", "answer", "explanation", "difficulty", "area", "skill", "degree"],
    )
    def test_missing_required_field(self, make_record, field):
        """Every required scalar field must be present."""
        record = make_record()
        del record[field]

        with pytest.raises(ValidationError) as exc_info:
            normalize_record(record, 3)

        assert exc_info.value.field == field
        assert exc_info.value.record_index == 3
        assert "Record 3" in str(exc_info.value)

    def test_blank_question_text(self, make_record):
        """Whitespace-only question text counts as blank."""
        with pytest.raises(ValidationError, match="must not be blank"):
            normalize_record(make_record(question="   "), 0)

    def test_empty_explanation_allowed(self, make_record):
        """Explanation must be present but may be empty."""
        assert normalize_record(make_record(explanation=""), 0).explanation == ""

    @pytest.mark.parametrize("difficulty", [0, 6, 2.5, "hard"])
    def test_invalid_difficulty(self, make_record, difficulty):
        """Difficulty must be an integer between 1 and 5."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_record(make_record(difficulty=difficulty), 0)
        assert exc_info.value.field == "difficulty"

    def test_invalid_answer_letter(self, make_record):
        """Answer must name one of the four slots."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_record(make_record(answer="E"), 0)
        assert exc_info.value.field == "answer"

    def test_invalid_degree(self, make_record):
        """Degree must be junior, mid or senior."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_record(make_record(degree="principal"), 0)
        assert exc_info.value.field == "degree"

    def test_malformed_option_entry(self, make_record):
        """Option entries need both key and text."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_record(make_record(options=[{"key": "A"}]), 0)
        assert exc_info.value.field == "options"

    def test_record_not_an_object(self):
        """Non-object records are rejected."""
        with pytest.raises(ValidationError, match="expected an object"):
            normalize_record(["question"], 1)
