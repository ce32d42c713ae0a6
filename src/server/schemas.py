"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, StrictInt

from src.ledger import Category


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class ActivityResponse(BaseModel):
    """Serialized activity record."""

    id: int
    name: str
    category: Category
    duration: int
    date: str
    created_at: str
    updated_at: str


class ActivityCreateRequest(BaseModel):
    """Request body for creating an activity.

    Values are checked by the ledger itself so that out-of-set categories and
    malformed dates come back as 400 with per-field reasons.
    """

    name: str = Field(..., max_length=200)
    category: str = Field(..., description="Work, Study, Health, Sleep, Leisure or Others")
    duration: StrictInt = Field(..., description="Duration in whole minutes")
    date: str = Field(..., description="ISO date (YYYY-MM-DD)")


class ActivityUpdateRequest(BaseModel):
    """Request body for updating an activity. Omitted fields are left unchanged."""

    name: Optional[str] = Field(default=None, max_length=200)
    category: Optional[str] = Field(default=None)
    duration: Optional[StrictInt] = Field(default=None)
    date: Optional[str] = Field(default=None)


class DeleteResponse(BaseModel):
    success: bool


class CategoryHighlight(BaseModel):
    label: str
    tip: str


class ActivitySummaryResponse(BaseModel):
    """Rollup of one day's activities."""

    date: str
    total_minutes: int
    remaining_minutes: int
    completion_percent: int
    per_category_minutes: Dict[str, int]
    dominant_category: Optional[Category] = None
    highlight: CategoryHighlight


class MoodActivityRequest(BaseModel):
    """One activity submitted for mood analysis. Extra keys (id, date...) are ignored."""

    name: str = Field(..., min_length=1, max_length=200)
    category: str
    duration: StrictInt = Field(..., gt=0)


class MoodRequest(BaseModel):
    """Request body for mood endpoint."""

    activities: List[MoodActivityRequest] = Field(default_factory=list)


class MoodResponse(BaseModel):
    mood: str
