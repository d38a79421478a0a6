"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import json
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (API + SQLite)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a throwaway SQLite file, startup import disabled."""
    from config import Settings

    return Settings(
        _env_file=None,
        storage_backend="relational",
        database_url=f"sqlite:///{tmp_path / 'db' / 'promptquest.db'}",
        json_file_path=str(tmp_path / "input" / "questions.json"),
        auto_initialize=False,
        clear_on_startup=False,
        score_count_unresolved=False,
    )


@pytest.fixture
def relational_store(test_settings):
    """Relational store on a fresh SQLite file."""
    from promptquest.db.database import create_db_engine
    from promptquest.store.relational import RelationalQuestionStore

    engine = create_db_engine(test_settings.database_url)
    yield RelationalQuestionStore(engine)
    engine.dispose()


@pytest.fixture
def quiz_bank(relational_store, test_settings):
    """QuizBank wired to the relational test store."""
    from promptquest.services import QuizBank

    return QuizBank(relational_store, test_settings)


@pytest.fixture
def make_record():
    """Factory for raw question records as they appear in a document."""

    def _make(**overrides):
        record = {
            "question": "Which layer of the OSI model handles routing?",
            "answer": "C",
            "explanation": "Routers operate at the network layer.",
            "difficulty": 2,
            "area": "Networking",
            "skill": "OSI",
            "degree": "junior",
            "options": [
                {"key": "A", "text": "Physical"},
                {"key": "B", "text": "Data Link"},
                {"key": "C", "text": "Network"},
                {"key": "D", "text": "Transport"},
            ],
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def make_document(make_record):
    """Factory for encoded question bank documents."""

    def _make(records=None, count=3):
        if records is None:
            records = [make_record(question=f"Question {i + 1}?") for i in range(count)]
        return json.dumps({"questions": records}).encode("utf-8")

    return _make


@pytest.fixture
def mixed_records(make_record):
    """Records spread over several skills, areas, degrees and difficulties."""
    return [
        make_record(question="Python list comprehension?", skill="Python", area="Backend", degree="junior", difficulty=1, answer="A"),
        make_record(question="Python GIL?", skill="Python", area="Backend", degree="senior", difficulty=4, answer="B"),
        make_record(question="Python decorators?", skill="python", area="backend", degree="mid", difficulty=3, answer="C"),
        make_record(question="SQL joins?", skill="SQL", area="Data", degree="junior", difficulty=2, answer="D"),
        make_record(question="SQL window functions?", skill="SQL", area="Data", degree="mid", difficulty=3, answer="A"),
        make_record(question="Docker layers?", skill="Docker", area="DevOps", degree="mid", difficulty=2, answer="B"),
        make_record(question="Kubernetes pods?", skill="Kubernetes", area="DevOps", degree="senior", difficulty=5, answer="C"),
    ]
