"""
PromptQuest question bank.

Imports a JSON question bank, stores it in SQLite or BigQuery, and serves
randomized quizzes and answer scoring.
"""

__version__ = "1.0.0"
