"""
Error taxonomy for the roulette plugin.

Fetch and extraction failures are soft: the list cache catches them and
falls back to the last good snapshot. Only an empty pool (or something
unexpected) reaches the orchestrator, which turns it into one fixed message.
"""

from __future__ import annotations


class RoletaError(Exception):
    """Base class for every error raised by the roulette components."""


class FetchFailed(RoletaError):
    """Network error, timeout or non-success response from the list source."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class ExtractionFailed(RoletaError):
    """No film could be recovered from a list page."""

    def __init__(self, snippet: str):
        self.snippet = snippet
        super().__init__("No films found in list page")


class InsufficientPool(RoletaError):
    """One or both pools are empty after cache resolution."""

    def __init__(self, bad_size: int, good_size: int):
        self.bad_size = bad_size
        self.good_size = good_size
        super().__init__(
            f"Cannot draw from empty pool (bad={bad_size}, good={good_size})"
        )
