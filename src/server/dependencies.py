"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Header, HTTPException

from src.daylog.config import Config
from src.daylog.logger import setup_logger
from src.daylog.ollama_client import OllamaClient
from src.ledger import (
    ActivityRecord,
    ActivityRepository,
    BudgetExceeded,
    LedgerError,
    LedgerService,
    NotFound,
    Rollup,
    StorageFailure,
    SummarizerFailure,
    ValidationError,
    category_highlight,
    dominant_category,
)
from src.mood import MoodSummarizer

from .schemas import ActivityResponse, ActivitySummaryResponse, CategoryHighlight

logger = logging.getLogger(__name__)

config = Config.from_yaml()
setup_logger(log_level=config.log_level, log_file=config.log_file)


@lru_cache(maxsize=1)
def get_ledger_service() -> LedgerService:
    """Singleton LedgerService; one lock registry per process."""
    repository = ActivityRepository(db_path=config.ledger.resolved_db_path())
    return LedgerService(repository)


@lru_cache(maxsize=1)
def get_mood_summarizer() -> MoodSummarizer:
    """Lazily create a singleton MoodSummarizer."""
    client = OllamaClient(
        host=config.ollama.host,
        model=config.ollama.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )
    return MoodSummarizer(ollama_client=client)


def get_owner_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Owner of the request, as asserted by the authentication layer in front of the API."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()


def to_http_exception(exc: LedgerError) -> HTTPException:
    """Map a ledger error kind to its HTTP status."""
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=400,
            detail={"error": "Invalid activity data", "fields": exc.errors},
        )
    if isinstance(exc, BudgetExceeded):
        return HTTPException(
            status_code=409,
            detail={"error": str(exc), "available_minutes": exc.available},
        )
    if isinstance(exc, NotFound):
        return HTTPException(status_code=404, detail="Activity not found")
    if isinstance(exc, SummarizerFailure):
        return HTTPException(status_code=502, detail=SummarizerFailure.user_message)
    if isinstance(exc, StorageFailure):
        logger.error("Storage failure: %s", exc)
        return HTTPException(status_code=500, detail="Activity storage unavailable")
    logger.error("Unhandled ledger error: %s", exc)
    return HTTPException(status_code=500, detail=str(exc))


def serialize_activity(record: ActivityRecord) -> ActivityResponse:
    """Convert domain ActivityRecord to API response."""
    return ActivityResponse(
        id=record.id,
        name=record.name,
        category=record.category,
        duration=record.duration_minutes,
        date=record.date,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def serialize_rollup(date: str, rollup: Rollup) -> ActivitySummaryResponse:
    """Convert a Rollup to the summary response, category keys as plain names."""
    top = dominant_category(rollup)
    label, tip = category_highlight(top)
    return ActivitySummaryResponse(
        date=date,
        total_minutes=rollup.total_minutes,
        remaining_minutes=rollup.remaining_minutes,
        completion_percent=rollup.completion_percent,
        per_category_minutes={
            category.value: minutes
            for category, minutes in rollup.per_category_minutes.items()
        },
        dominant_category=top,
        highlight=CategoryHighlight(label=label, tip=tip),
    )
