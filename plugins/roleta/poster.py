"""
Poster URL derivation for the chosen film.

Only the film that was actually drawn gets a poster; the URL is built from
its id and slug without touching the network.
"""

from core.models import Film

from .config import POSTER_BASE_URL
from .parser import UNKNOWN_FILM_ID


def poster_url(film_id: str, slug: str, base_url: str = POSTER_BASE_URL) -> str:
    """``<base>/1/2/3/123-slug-0-1000-0-1500-crop.jpg`` for id ``123``."""
    id_path = "/".join(film_id)
    return f"{base_url}/{id_path}/{film_id}-{slug}-0-1000-0-1500-crop.jpg"


def attach_poster(film: Film) -> Film:
    if not film.film_id or not film.slug or film.film_id == UNKNOWN_FILM_ID:
        return film
    return film.model_copy(update={"poster_url": poster_url(film.film_id, film.slug)})
