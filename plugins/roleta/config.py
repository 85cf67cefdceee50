"""
Roleta settings, read from the process environment.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from core.models import ListCategory

LETTERBOXD_URL = "https://letterboxd.com"
POSTER_BASE_URL = "https://a.ltrbxd.com/resized/film-poster"

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept-Language": "pt-BR,pt;q=0.9,en;q=0.8",
}


class RoletaSettings(BaseModel):
    """Which lists to spin and how long to trust them."""
    letterboxd_user: str = Field(min_length=1)
    bad_list: str = Field(min_length=1)
    good_list: str = Field(min_length=1)
    blank_list: str = "bala-de-festim"
    base_url: str = LETTERBOXD_URL
    cache_ttl: float = Field(default=3600.0, gt=0)
    fetch_timeout: float = Field(default=50.0, gt=0)

    @classmethod
    def from_env(cls) -> "RoletaSettings":
        """Build settings from ``LETTERBOXD_USER``, ``LISTA_RUINS``, ``LISTA_BONS`` & co.

        Raises ``pydantic.ValidationError`` when a required variable is missing.
        """
        load_dotenv()
        values = {
            "letterboxd_user": os.getenv("LETTERBOXD_USER", ""),
            "bad_list": os.getenv("LISTA_RUINS", ""),
            "good_list": os.getenv("LISTA_BONS", ""),
        }
        optional = {
            "blank_list": os.getenv("LISTA_FESTIM"),
            "cache_ttl": os.getenv("ROLETA_CACHE_TTL"),
            "fetch_timeout": os.getenv("ROLETA_FETCH_TIMEOUT"),
        }
        values.update({k: v for k, v in optional.items() if v})
        return cls(**values)

    def list_url(self, list_name: str) -> str:
        return f"{self.base_url}/{self.letterboxd_user}/list/{list_name}/"

    def list_name_for(self, category: ListCategory) -> str:
        if category is ListCategory.BAD:
            return self.bad_list
        return self.good_list
