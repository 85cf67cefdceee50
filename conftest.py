"""
Shared fixtures for the roleta tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List

import pytest

from core.exceptions import FetchFailed
from core.interfaces import ListSource, PresentationSink
from core.models import Film, SelectionResult


def make_film(n: int, prefix: str = "film") -> Film:
    slug = f"{prefix}-{n}"
    return Film(
        title=f"{prefix.title()} {n}",
        url=f"https://letterboxd.com/film/{slug}",
        film_id=f"{ord(prefix[0])}{n}",
        slug=slug,
    )


def list_page(films: List[Film]) -> str:
    """Render films the way the current Letterboxd list markup does."""
    items = "".join(
        f'<li class="poster-container" data-film-slug="{f.slug}" '
        f'data-film-name="{f.title}" data-film-id="{f.film_id}"></li>'
        for f in films
    )
    return f'<html><body><ul class="poster-list">{items}</ul></body></html>'


class FakeSource(ListSource):
    """In-memory list source counting fetches per list."""

    name = "FakeSource"

    def __init__(self, pages: Dict[str, str]):
        self.pages = dict(pages)
        self.calls: Dict[str, int] = {}
        self.failing: set = set()

    async def fetch(self, list_name: str) -> str:
        self.calls[list_name] = self.calls.get(list_name, 0) + 1
        if list_name in self.failing or list_name not in self.pages:
            raise FetchFailed(f"https://letterboxd.com/user/list/{list_name}/", "HTTP 503")
        return self.pages[list_name]


class RecordingSink(PresentationSink):
    name = "RecordingSink"

    def __init__(self):
        self.results: List[SelectionResult] = []
        self.messages: List[str] = []

    async def handle(self, result: SelectionResult) -> None:
        self.results.append(result)

    async def unavailable(self, message: str) -> None:
        self.messages.append(message)


class Clock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def bad_films() -> List[Film]:
    return [make_film(i, "bad") for i in range(1, 6)]


@pytest.fixture
def good_films() -> List[Film]:
    return [make_film(i, "good") for i in range(1, 6)]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock():
    return Clock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))
