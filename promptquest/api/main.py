"""
FastAPI application for PromptQuest.

Provides REST API for:
- Quiz delivery (all questions, random subsets, answer checking)
- Question bank administration (import, reset, clear, statistics)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from config import Settings, get_settings
from promptquest import __version__
from promptquest.api.dependencies import register_error_handlers
from promptquest.api.routers import admin_router, quiz_router
from promptquest.bootstrap import initialize_question_bank
from promptquest.core.errors import QuizBankError
from promptquest.services import QuizBank


def create_app(
    bank: QuizBank | None = None,
    settings: Settings | None = None,
    initialize: bool | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        bank: Pre-built QuizBank (default: built from settings at startup)
        settings: Application settings (default: cached settings)
        initialize: Run the startup import (default: settings.auto_initialize)
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown events."""
        # Startup
        logger.info("Starting PromptQuest service...")
        if app.state.bank is None:
            app.state.bank = QuizBank.from_settings(settings)

        run_init = settings.auto_initialize if initialize is None else initialize
        if run_init:
            initialize_question_bank(app.state.bank, settings)
        logger.info(f"Service started on {settings.api_host}:{settings.api_port}")

        yield

        # Shutdown
        logger.info("Shutting down PromptQuest service...")

    app = FastAPI(
        title="PromptQuest",
        description="Multiple-choice question bank: JSON import, random quizzes and scoring.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.bank = bank

    # Quiz frontend is served from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(quiz_router.router, prefix="/api/quiz", tags=["Quiz"])
    app.include_router(admin_router.router, prefix="/api/admin", tags=["Admin"])

    @app.get("/health", tags=["System"])
    def health() -> dict[str, Any]:
        """Service and storage backend health."""
        status = {"status": "ok", "backend": settings.storage_backend, "version": __version__}
        current = app.state.bank
        if current is None:
            status["status"] = "starting"
            return status
        try:
            status["totalQuestions"] = current.store.count_all()
        except QuizBankError as e:
            status["status"] = "degraded"
            status["error"] = str(e)
        return status

    return app


app = create_app()
