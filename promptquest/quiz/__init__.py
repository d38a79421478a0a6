"""Quiz delivery: random sampling, answer scoring and bank statistics."""

from .sampling import SamplingEngine
from .scoring import QuestionResult, ScoreResult, ScoringEngine
from .stats import QuestionBankStats, collect_stats

__all__ = [
    "SamplingEngine",
    "ScoringEngine",
    "ScoreResult",
    "QuestionResult",
    "QuestionBankStats",
    "collect_stats",
]
