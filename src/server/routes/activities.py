"""Activity ledger endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Query

from src.ledger import ActivityPatch, LedgerError

from ..dependencies import (
    get_ledger_service,
    get_owner_id,
    serialize_activity,
    serialize_rollup,
    to_http_exception,
)
from ..schemas import (
    ActivityCreateRequest,
    ActivityResponse,
    ActivitySummaryResponse,
    ActivityUpdateRequest,
    DeleteResponse,
)

logger = logging.getLogger(__name__)


def register_activity_routes(app: FastAPI) -> None:
    """Register activity CRUD and rollup endpoints."""

    @app.get("/api/activities", response_model=List[ActivityResponse])
    async def list_activities(
        date: str = Query(..., description="ISO date (YYYY-MM-DD)"),
        owner_id: str = Depends(get_owner_id),
    ) -> List[ActivityResponse]:
        """List the owner's activities for a date, oldest first."""
        service = get_ledger_service()
        try:
            records = await asyncio.to_thread(service.list_by_date, owner_id, date)
            return [serialize_activity(record) for record in records]
        except LedgerError as exc:
            raise to_http_exception(exc) from exc
        except Exception as exc:
            logger.exception("Failed to list activities: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to list activities") from exc

    @app.get("/api/activities/summary", response_model=ActivitySummaryResponse)
    async def summarize_activities(
        date: str = Query(..., description="ISO date (YYYY-MM-DD)"),
        owner_id: str = Depends(get_owner_id),
    ) -> ActivitySummaryResponse:
        """Totals, per-category minutes and progress for a date."""
        service = get_ledger_service()
        try:
            rollup = await asyncio.to_thread(service.aggregate_for_date, owner_id, date)
            return serialize_rollup(date, rollup)
        except LedgerError as exc:
            raise to_http_exception(exc) from exc
        except Exception as exc:
            logger.exception("Failed to summarize activities: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to summarize activities") from exc

    @app.post("/api/activities", response_model=ActivityResponse, status_code=201)
    async def create_activity(
        request: ActivityCreateRequest,
        owner_id: str = Depends(get_owner_id),
    ) -> ActivityResponse:
        """Create a new activity if it fits in the day's budget."""
        service = get_ledger_service()
        try:
            record = await asyncio.to_thread(
                service.add,
                owner_id,
                request.name,
                request.category,
                request.duration,
                request.date,
            )
            return serialize_activity(record)
        except LedgerError as exc:
            raise to_http_exception(exc) from exc
        except Exception as exc:
            logger.exception("Failed to create activity: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to create activity") from exc

    @app.put("/api/activities/{activity_id}", response_model=ActivityResponse)
    async def update_activity(
        activity_id: int,
        request: ActivityUpdateRequest,
        owner_id: str = Depends(get_owner_id),
    ) -> ActivityResponse:
        """Update the supplied fields of an existing activity."""
        service = get_ledger_service()
        patch = ActivityPatch(
            name=request.name,
            category=request.category,
            duration_minutes=request.duration,
            date=request.date,
        )
        try:
            record = await asyncio.to_thread(service.update, owner_id, activity_id, patch)
            return serialize_activity(record)
        except LedgerError as exc:
            raise to_http_exception(exc) from exc
        except Exception as exc:
            logger.exception("Failed to update activity: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to update activity") from exc

    @app.delete("/api/activities/{activity_id}", response_model=DeleteResponse)
    async def delete_activity(
        activity_id: int,
        owner_id: str = Depends(get_owner_id),
    ) -> DeleteResponse:
        """Delete an activity."""
        service = get_ledger_service()
        try:
            await asyncio.to_thread(service.delete, owner_id, activity_id)
            return DeleteResponse(success=True)
        except LedgerError as exc:
            raise to_http_exception(exc) from exc
        except Exception as exc:
            logger.exception("Failed to delete activity: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to delete activity") from exc
