"""
Per-list TTL cache that tolerates source failures.

Each category keeps its own snapshot and its own freshness timestamp.
A failed refresh serves the previous snapshot, however old, or an empty
list when there has never been one.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Mapping, Optional

from core.exceptions import ExtractionFailed, FetchFailed
from core.interfaces import ListSource
from core.models import Film, ListCategory, ListSnapshot

from .parser import parse_film_list


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ListCache:
    """Serves parsed lists, refreshing lazily once a snapshot is older than the TTL."""

    def __init__(
        self,
        source: ListSource,
        list_names: Mapping[ListCategory, str],
        *,
        ttl: float = 3600.0,
        parser: Callable[[str], List[Film]] = parse_film_list,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.source = source
        self.list_names = dict(list_names)
        self.ttl = timedelta(seconds=ttl)
        self.parser = parser
        self.clock = clock
        self._snapshots: Dict[ListCategory, ListSnapshot] = {}

    def snapshot(self, category: ListCategory) -> Optional[ListSnapshot]:
        return self._snapshots.get(category)

    def is_fresh(self, category: ListCategory) -> bool:
        snap = self._snapshots.get(category)
        return snap is not None and self.clock() - snap.fetched_at < self.ttl

    def _store(self, category: ListCategory, snap: ListSnapshot) -> bool:
        # Only a strictly newer, non-empty result may replace what we have.
        current = self._snapshots.get(category)
        if not snap.films:
            return False
        if current is not None and snap.fetched_at <= current.fetched_at:
            logger.debug(f"Discarding older refresh of {category.value} list")
            return False
        self._snapshots[category] = snap
        return True

    def _fallback(self, category: ListCategory) -> List[Film]:
        previous = self._snapshots.get(category)
        return list(previous.films) if previous else []

    async def get_list(self, category: ListCategory) -> List[Film]:
        """Return the films of *category*. Never raises."""
        if self.is_fresh(category):
            return list(self._snapshots[category].films)

        list_name = self.list_names[category]
        try:
            html = await self.source.fetch(list_name)
            films = self.parser(html)
        except (FetchFailed, ExtractionFailed) as e:
            previous = self._snapshots.get(category)
            logger.warning(
                f"Refresh of {category.value} list '{list_name}' failed: {e}; "
                f"serving {'stale snapshot' if previous else 'empty list'}"
            )
            return self._fallback(category)
        except Exception:
            logger.exception(
                f"Unexpected error refreshing {category.value} list '{list_name}'"
            )
            return self._fallback(category)

        if not self._store(category, ListSnapshot(films=films, fetched_at=self.clock())):
            return self._fallback(category)
        logger.info(f"Cached {len(films)} films for {category.value} list '{list_name}'")
        return list(films)
