"""
Core data models for the roulette bot.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ListCategory(str, Enum):
    """The two curated lists a roulette spin draws from."""
    BAD = "bad"
    GOOD = "good"


class Film(BaseModel):
    """A film record scraped from a list page."""
    title: str
    url: str
    film_id: Optional[str] = None
    slug: Optional[str] = None
    poster_url: Optional[str] = None


class ListSnapshot(BaseModel):
    """Last good extraction of one list."""
    films: List[Film]
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SelectionResult(BaseModel):
    """Outcome of a single spin."""
    chosen: Film
    lost: bool
    bad_count: int  # configured bad quota
    good_count: int  # configured good quota
    bad_draw: List[Film] = Field(default_factory=list)
    good_draw: List[Film] = Field(default_factory=list)
