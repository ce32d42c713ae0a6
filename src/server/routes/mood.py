"""Mood analysis endpoints."""

from __future__ import annotations

import asyncio
import logging

from fastapi import Depends, FastAPI, HTTPException, Query

from src.ledger import LedgerError
from src.ledger.models import parse_category
from src.mood import MoodActivity

from ..dependencies import (
    get_ledger_service,
    get_mood_summarizer,
    get_owner_id,
    to_http_exception,
)
from ..schemas import MoodRequest, MoodResponse

logger = logging.getLogger(__name__)


def register_mood_routes(app: FastAPI) -> None:
    """Register mood summary endpoints."""

    @app.post("/api/mood", response_model=MoodResponse)
    async def analyze_mood(
        request: MoodRequest,
        owner_id: str = Depends(get_owner_id),
    ) -> MoodResponse:
        """Analyze the submitted activities, in the order given."""
        summarizer = get_mood_summarizer()
        try:
            activities = [
                MoodActivity(
                    name=item.name,
                    category=parse_category(item.category),
                    duration_minutes=item.duration,
                )
                for item in request.activities
            ]
            mood = await asyncio.to_thread(summarizer.summarize, activities)
            return MoodResponse(mood=mood)
        except LedgerError as exc:
            raise to_http_exception(exc) from exc
        except Exception as exc:
            logger.exception("Mood analysis failed: %s", exc)
            raise HTTPException(status_code=500, detail="Mood analysis failed") from exc

    @app.get("/api/mood", response_model=MoodResponse)
    async def analyze_mood_for_date(
        date: str = Query(..., description="ISO date (YYYY-MM-DD)"),
        owner_id: str = Depends(get_owner_id),
    ) -> MoodResponse:
        """Analyze the owner's stored activities for a date."""
        service = get_ledger_service()
        summarizer = get_mood_summarizer()
        try:
            records = await asyncio.to_thread(service.list_by_date, owner_id, date)
            mood = await asyncio.to_thread(summarizer.summarize, records)
            return MoodResponse(mood=mood)
        except LedgerError as exc:
            raise to_http_exception(exc) from exc
        except Exception as exc:
            logger.exception("Mood analysis failed: %s", exc)
            raise HTTPException(status_code=500, detail="Mood analysis failed") from exc
