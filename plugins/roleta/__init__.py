"""Roleta plugin – Letterboxd film roulette.

* :func:`parse_film_list`        – list page HTML -> films
* :class:`LetterboxdListFetcher` – downloads list pages
* :class:`ListCache`             – per-list TTL cache with stale fallback
* :func:`select`                 – two-pool draw deciding win/lose
* :class:`Roulette`              – one spin, end to end

The Discord commands live in :mod:`plugins.roleta.discord` and are loaded
through ``commands.yml``.
"""

from .cache import ListCache                     # noqa: F401
from .fetcher import LetterboxdListFetcher       # noqa: F401
from .parser import parse_film_list              # noqa: F401
from .poster import attach_poster                # noqa: F401
from .roulette import Roulette                   # noqa: F401
from .sampler import select                      # noqa: F401
