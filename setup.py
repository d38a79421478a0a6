"""
Setup script for promptquest.

PromptQuest is a multiple-choice question bank. It serves three roles:

1. Content Pipeline - Import JSON question banks into SQLite or BigQuery
2. Quiz Service - Random, filtered question subsets over HTTP
3. Scoring - Check submitted answers against the stored correct answers

The 'promptquest' command is the CLI entry point; the HTTP API runs via
'promptquest serve'.
"""

from setuptools import find_packages, setup

setup(
    name="promptquest",
    version="1.0.0",
    description="Quiz question bank: JSON import, SQLite/BigQuery storage, random quizzes and scoring",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="PromptQuest",
    packages=find_packages(include=["promptquest", "promptquest.*"]),
    py_modules=["config"],
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.12.0",
        "rich>=13.0.0",
        # Database
        "sqlalchemy>=2.0.0",
        # Warehouse
        "google-cloud-bigquery>=3.11.0",
        "google-auth>=2.0.0",
        # Config & Validation
        "pydantic>=2.4.0",
        "pydantic-settings>=2.0.0",
        # API
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "httpx>=0.25.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "promptquest=promptquest.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="quiz question-bank bigquery sqlite education",
)
