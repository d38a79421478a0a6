"""
Question Store.

One storage abstraction, two interchangeable backends:

    RelationalQuestionStore  - SQLAlchemy (SQLite by default), transactional
    WarehouseQuestionStore   - BigQuery, append-oriented, eventually consistent

Example:
    from config import get_settings
    from promptquest.store import create_store

    store = create_store(get_settings())
    questions = store.find_random(10, QuestionFilters(skill="python"))
"""

from .base import QuestionStore
from .factory import create_store
from .models import (
    DEGREES,
    DISTINCT_FIELDS,
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    OPTION_KEYS,
    Question,
    QuestionFilters,
)

__all__ = [
    "QuestionStore",
    "create_store",
    "Question",
    "QuestionFilters",
    # Constants
    "OPTION_KEYS",
    "DEGREES",
    "DISTINCT_FIELDS",
    "MIN_DIFFICULTY",
    "MAX_DIFFICULTY",
]
