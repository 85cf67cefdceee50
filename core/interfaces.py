"""
Core interfaces for the roulette bot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from discord.ext.commands import Bot

from .models import SelectionResult


class ListSource(ABC):
    """Abstract base class for list sources.

    A list source returns the raw HTML of a named list; parsing is left to
    the caller.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this source."""
        pass

    @abstractmethod
    async def fetch(self, list_name: str) -> str:
        """Return the raw HTML for *list_name* or raise ``FetchFailed``."""
        pass


class PresentationSink(ABC):
    """Abstract base class for result sinks.

    Sinks render a finished spin to the end user, or a fixed message when
    the spin could not be served.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this sink."""
        pass

    @abstractmethod
    async def handle(self, result: SelectionResult) -> None:
        """Render a selection result."""
        pass

    @abstractmethod
    async def unavailable(self, message: str) -> None:
        """Render the unavailability message."""
        pass


class DiscordCommands(ABC):
    """Interface for plugin Discord command registration."""

    @abstractmethod
    def register(self, bot: Bot) -> None:
        """Register all commands for this plugin on the given bot.

        The bot instance can be used to access shared resources
        like the HTTP client attached to it during initialization.
        """
        pass

    async def setup(self, bot: Bot) -> None:
        """Optional asynchronous setup method for the plugin.

        This method is called once when the plugin is loaded.
        Plugins can use this to build long-lived objects (caches, clients)
        and attach them to the bot instance if needed.
        """
        pass
