"""
Roulette orchestrator - one spin per invocation.

Pools are read through the list cache, sampled, and only the chosen film
gets a poster. This is the single place where failures become the message
the user sees.
"""

import asyncio
import logging
import random
from typing import List, Optional

from core.exceptions import InsufficientPool
from core.interfaces import PresentationSink
from core.models import Film, ListCategory, SelectionResult

from .cache import ListCache
from .poster import attach_poster
from .sampler import select


logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "❌ O serviço está instável no momento. Tente novamente mais tarde."


class Roulette:
    """Wires cache, sampler and poster enrichment into one request/response cycle."""

    def __init__(self, cache: ListCache, rng: Optional[random.Random] = None):
        self.cache = cache
        self.rng = rng

    async def _pool(self, category: ListCategory) -> List[Film]:
        try:
            return await self.cache.get_list(category)
        except Exception:
            logger.exception(f"Unexpected error loading {category.value} list")
            return []

    async def spin(self, bullets: int) -> SelectionResult:
        """Run one spin and return the enriched result.

        Raises:
            ValueError: If *bullets* is not an integer.
            InsufficientPool: If either list is unavailable.
        """
        if isinstance(bullets, bool) or not isinstance(bullets, int):
            raise ValueError(f"bullets must be an integer, got {bullets!r}")

        bad_pool, good_pool = await asyncio.gather(
            self._pool(ListCategory.BAD),
            self._pool(ListCategory.GOOD),
        )

        result = select(bad_pool, good_pool, bullets, rng=self.rng)
        return result.model_copy(update={"chosen": attach_poster(result.chosen)})

    async def play(self, bullets: int, sink: PresentationSink) -> Optional[SelectionResult]:
        """Spin and hand the outcome to *sink*; never raises."""
        try:
            result = await self.spin(bullets)
        except InsufficientPool as e:
            logger.warning(f"Roulette unavailable: {e}")
            await self._unavailable(sink)
            return None
        except Exception:
            logger.exception("Roulette spin failed")
            await self._unavailable(sink)
            return None

        try:
            await sink.handle(result)
        except Exception:
            logger.exception(f"Sink {sink.name} failed to render result")
            await self._unavailable(sink)
            return None

        logger.info(
            f"Spin with {result.bad_count} bullet(s): '{result.chosen.title}' "
            f"({'lost' if result.lost else 'survived'})"
        )
        return result

    async def _unavailable(self, sink: PresentationSink) -> None:
        try:
            await sink.unavailable(UNAVAILABLE_MESSAGE)
        except Exception:
            logger.exception(f"Sink {sink.name} failed to render unavailability message")
