# SQLAlchemy models
from .base import Base
from .question import QuestionRecord

__all__ = [
    "Base",
    "QuestionRecord",
]
