"""
http.py – Async HTTP client built on *aiohttp* with per-instance default
          headers and a bounded total timeout.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

import aiohttp

logger = logging.getLogger(__name__)


class HttpClient:
    """
    Thin wrapper over *aiohttp.ClientSession* adding:

    * global & per-request headers (keeps user-agent in one place)
    * a total timeout applied to every request
    * single-attempt requests: non-2xx raises, nothing is retried
    * async context-manager support
    """

    def __init__(
        self,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30.0,
        default_headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._external_session = session
        self._timeout = timeout
        self._own_session: Optional[aiohttp.ClientSession] = None
        self._default_headers: Dict[str, str] = dict(default_headers or {})

    # ---------------------------------------------- #
    # Async context-manager
    async def __aenter__(self) -> "HttpClient":  # noqa: D401
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: D401
        await self.close()

    # ---------------------------------------------- #
    # Session management
    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._external_session:
            return self._external_session
        if self._own_session is None or self._own_session.closed:
            timeout = aiohttp.ClientTimeout(total=self._timeout)
            self._own_session = aiohttp.ClientSession(timeout=timeout)
        return self._own_session

    async def close(self) -> None:
        if self._own_session and not self._own_session.closed:
            await self._own_session.close()
            self._own_session = None

    # ---------------------------------------------- #
    # Internal helpers
    def _merge_headers(self, extra: Mapping[str, str] | None) -> Dict[str, str]:
        merged: Dict[str, str] = {**self._default_headers}
        if extra:
            merged.update(extra)
        return merged

    # ---------------------------------------------- #
    # Public helpers
    async def get_text(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> str:
        """GET *url* and return the body.

        Raises ``aiohttp.ClientResponseError`` on a non-2xx status and lets
        connection errors and ``asyncio.TimeoutError`` propagate. Bytes that
        are invalid for the response charset are replaced, not raised.
        """
        session = await self._ensure_session()
        client_timeout = aiohttp.ClientTimeout(
            total=timeout if timeout is not None else self._timeout
        )
        logger.debug("HTTP GET %s", url)
        async with session.get(
            url, headers=self._merge_headers(headers), timeout=client_timeout
        ) as resp:
            resp.raise_for_status()
            return await resp.text(errors="replace")

