"""
Two-pool roulette draw.

``bullets`` films are drawn from the bad pool and ``6 - bullets`` from the
good pool, without replacement. The final pick is uniform over everything
drawn, so when a pool is smaller than its quota the odds follow what was
actually drawn rather than the configured quota.
"""

import logging
import random
from typing import List, Optional, Sequence, TypeVar

from core.exceptions import InsufficientPool
from core.models import Film, SelectionResult


logger = logging.getLogger(__name__)

CHAMBERS = 6
MIN_BULLETS = 1
MAX_BULLETS = 5

T = TypeVar("T")


def clamp_bullets(bullets: int) -> int:
    return max(MIN_BULLETS, min(MAX_BULLETS, bullets))


def draw_without_replacement(pool: Sequence[T], count: int, rng: random.Random) -> List[T]:
    """Draw up to *count* distinct elements, one uniform index at a time."""
    remaining = list(pool)
    drawn: List[T] = []
    for _ in range(min(count, len(remaining))):
        drawn.append(remaining.pop(rng.randrange(len(remaining))))
    return drawn


def select(
    bad_pool: Sequence[Film],
    good_pool: Sequence[Film],
    bad_quota: int,
    rng: Optional[random.Random] = None,
) -> SelectionResult:
    """Spin the cylinder.

    Raises:
        InsufficientPool: If either pool is empty.
    """
    if not bad_pool or not good_pool:
        raise InsufficientPool(len(bad_pool), len(good_pool))

    rng = rng or random.Random()
    bad_quota = clamp_bullets(bad_quota)
    good_quota = CHAMBERS - bad_quota

    bad_draw = draw_without_replacement(bad_pool, bad_quota, rng)
    good_draw = draw_without_replacement(good_pool, good_quota, rng)

    combined = bad_draw + good_draw
    index = rng.randrange(len(combined))
    lost = index < len(bad_draw)

    logger.debug(
        f"Drew {len(bad_draw)} bad + {len(good_draw)} good, picked #{index} (lost={lost})"
    )
    return SelectionResult(
        chosen=combined[index],
        lost=lost,
        bad_count=bad_quota,
        good_count=good_quota,
        bad_draw=bad_draw,
        good_draw=good_draw,
    )
