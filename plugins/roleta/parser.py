"""
Letterboxd list parser - extracts film records from a list page.

Letterboxd has changed its list markup more than once, so extraction runs a
cascade of strategies. The first strategy that yields at least one film wins;
results are never merged across strategies.
"""

import logging
from typing import Callable, List, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from core.exceptions import ExtractionFailed
from core.models import Film

from .config import LETTERBOXD_URL


logger = logging.getLogger(__name__)

UNKNOWN_FILM_ID = "unknown"
SNIPPET_LENGTH = 1000


def film_url(slug: str) -> str:
    return f"{LETTERBOXD_URL}/film/{slug}"


def _build_film(slug: Optional[str], title: Optional[str], film_id: Optional[str]) -> Optional[Film]:
    """Return a Film when slug, title and id are all present, else None."""
    if not slug or not title or not film_id or not title.strip():
        return None
    return Film(title=title.strip(), url=film_url(slug), film_id=film_id, slug=slug)


def _from_poster_list(soup: BeautifulSoup) -> List[Film]:
    """Current markup: ``<ul class="poster-list"><li data-film-slug=...>``."""
    films: List[Film] = []
    for node in soup.select("ul.poster-list li[data-film-slug]"):
        try:
            film = _build_film(
                node.get("data-film-slug"),
                node.get("data-film-name"),
                node.get("data-film-id"),
            )
            if film:
                films.append(film)
        except Exception as e:
            logger.debug(f"Skipping malformed poster-list node: {e}")
    return films


def _from_poster_container(soup: BeautifulSoup) -> List[Film]:
    """Older markup: attributes live on ``div.poster`` inside ``li.poster-container``."""
    films: List[Film] = []
    for node in soup.select("li.poster-container"):
        try:
            poster = node.find("div", class_="poster")
            if not isinstance(poster, Tag):
                continue
            film = _build_film(
                poster.get("data-film-slug"),
                poster.get("data-film-name"),
                poster.get("data-film-id"),
            )
            if film:
                films.append(film)
        except Exception as e:
            logger.debug(f"Skipping malformed poster-container node: {e}")
    return films


def _from_film_poster(soup: BeautifulSoup) -> List[Film]:
    """Most permissive: any ``.film-poster``, title from the image alt text.

    A missing id is tolerated and replaced by ``UNKNOWN_FILM_ID``.
    """
    films: List[Film] = []
    for node in soup.select(".film-poster"):
        try:
            slug = node.get("data-film-slug")
            img = node.find("img")
            title = img.get("alt") if isinstance(img, Tag) else None
            if not slug or not title or not title.strip():
                continue
            films.append(
                Film(
                    title=title.strip(),
                    url=film_url(slug),
                    film_id=node.get("data-film-id") or UNKNOWN_FILM_ID,
                    slug=slug,
                )
            )
        except Exception as e:
            logger.debug(f"Skipping malformed film-poster node: {e}")
    return films


STRATEGIES: Tuple[Callable[[BeautifulSoup], List[Film]], ...] = (
    _from_poster_list,
    _from_poster_container,
    _from_film_poster,
)


def _dedupe(films: List[Film]) -> List[Film]:
    """Drop repeated film ids, keeping the first. Sentinel ids are kept as-is."""
    seen = set()
    out: List[Film] = []
    for film in films:
        if film.film_id != UNKNOWN_FILM_ID:
            if film.film_id in seen:
                continue
            seen.add(film.film_id)
        out.append(film)
    return out


def parse_film_list(html: str) -> List[Film]:
    """Parse a Letterboxd list page into films.

    Raises:
        ExtractionFailed: If no strategy recovers a single film.
    """
    soup = BeautifulSoup(html, "html.parser")

    for strategy in STRATEGIES:
        films = strategy(soup)
        if films:
            logger.info(f"Parsed {len(films)} films using {strategy.__name__}")
            return _dedupe(films)
        logger.debug(f"Strategy {strategy.__name__} found no films")

    snippet = html[:SNIPPET_LENGTH]
    logger.error(f"No films found in list page. HTML: {snippet}")
    raise ExtractionFailed(snippet)
