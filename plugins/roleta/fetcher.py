"""
Letterboxd list fetcher - downloads the HTML of a user's list.
"""

import asyncio
import logging
from typing import Mapping, Optional

import aiohttp

from core.exceptions import FetchFailed
from core.infra.http import HttpClient
from core.interfaces import ListSource

from .config import DEFAULT_HEADERS, LETTERBOXD_URL


logger = logging.getLogger(__name__)


class LetterboxdListFetcher(ListSource):
    """Fetches ``<base>/<user>/list/<name>/`` pages from Letterboxd."""

    name = "LetterboxdListFetcher"

    def __init__(
        self,
        user: str,
        *,
        http: Optional[HttpClient] = None,
        base_url: str = LETTERBOXD_URL,
        timeout: float = 50.0,
        headers: Optional[Mapping[str, str]] = None,
    ):
        self.user = user
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = dict(headers or DEFAULT_HEADERS)
        self.http = http or HttpClient(timeout=timeout, default_headers=self.headers)

    def list_url(self, list_name: str) -> str:
        return f"{self.base_url}/{self.user}/list/{list_name}/"

    async def fetch(self, list_name: str) -> str:
        """Fetch one list page - single attempt, no retries."""
        url = self.list_url(list_name)
        try:
            html = await self.http.get_text(url, headers=self.headers, timeout=self.timeout)
        except aiohttp.ClientResponseError as e:
            raise FetchFailed(url, f"HTTP {e.status}") from e
        except asyncio.TimeoutError as e:
            raise FetchFailed(url, f"timed out after {self.timeout:.0f}s") from e
        except aiohttp.ClientError as e:
            raise FetchFailed(url, str(e) or type(e).__name__) from e
        except UnicodeDecodeError as e:
            raise FetchFailed(url, f"undecodable body: {e.reason}") from e

        logger.info(f"Fetched {url} ({len(html)} chars)")
        return html

    async def close(self) -> None:
        await self.http.close()
