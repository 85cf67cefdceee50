from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import discord
from discord import app_commands

from core.infra.http import HttpClient
from core.interfaces import DiscordCommands, PresentationSink
from core.models import ListCategory, SelectionResult

from .cache import ListCache
from .config import RoletaSettings
from .fetcher import LetterboxdListFetcher
from .roulette import UNAVAILABLE_MESSAGE, Roulette

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

LOST_COLOR = 0xFF0000
SURVIVED_COLOR = 0x00FF00


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def build_embed(result: SelectionResult) -> discord.Embed:
    """Render a spin as an embed: red when the film came from the bad list."""
    film = result.chosen
    embed = discord.Embed(
        title=f"🎯 {film.title}",
        url=film.url,
        color=LOST_COLOR if result.lost else SURVIVED_COLOR,
    )
    embed.add_field(
        name="💀 Você perdeu!" if result.lost else "🎉 Você sobreviveu!",
        value=(
            f"Configuração: {_plural(result.bad_count, 'ruim', 'ruins')} | "
            f"{_plural(result.good_count, 'bom', 'bons')}"
        ),
    )
    if film.poster_url:
        embed.set_image(url=film.poster_url)
    return embed


class InteractionSink(PresentationSink):
    """Sends the spin back as a follow-up to a deferred interaction."""

    name = "InteractionSink"

    def __init__(self, interaction: discord.Interaction):
        self.interaction = interaction

    async def handle(self, result: SelectionResult) -> None:
        await self.interaction.followup.send(embed=build_embed(result))

    async def unavailable(self, message: str) -> None:
        await self.interaction.followup.send(content=message)


class RoletaDiscordCommands(DiscordCommands):
    def __init__(self, settings: Optional[RoletaSettings] = None):
        self.settings = settings
        self.roulette: Optional[Roulette] = None

    async def setup(self, bot: Bot) -> None:
        if self.settings is None:
            self.settings = RoletaSettings.from_env()

        http_client = getattr(bot, "http_client", None) or HttpClient(timeout=self.settings.fetch_timeout)
        fetcher = LetterboxdListFetcher(
            self.settings.letterboxd_user,
            http=http_client,
            base_url=self.settings.base_url,
            timeout=self.settings.fetch_timeout,
        )
        cache = ListCache(
            fetcher,
            {
                ListCategory.BAD: self.settings.list_name_for(ListCategory.BAD),
                ListCategory.GOOD: self.settings.list_name_for(ListCategory.GOOD),
            },
            ttl=self.settings.cache_ttl,
        )
        self.roulette = Roulette(cache)
        setattr(bot, "roleta", self.roulette)
        logger.info(
            f"Roleta ready for {self.settings.letterboxd_user}: "
            f"bad='{self.settings.bad_list}', good='{self.settings.good_list}'"
        )

    def register(self, bot: Bot) -> None:
        @bot.tree.command(name="roleta", description="Gira o Tambor")
        @app_commands.describe(balas="Número de filmes ruins (1-5)")
        async def roleta_command(
            interaction: discord.Interaction,
            balas: app_commands.Range[int, 1, 5],
        ):
            await interaction.response.defer(thinking=True)
            roulette = self.roulette or getattr(bot, "roleta", None)
            sink = InteractionSink(interaction)
            if roulette is None:
                logger.error("Roleta command invoked before plugin setup")
                await sink.unavailable(UNAVAILABLE_MESSAGE)
                return
            await roulette.play(balas, sink)

        @bot.tree.command(name="festim", description="Mostra lista de filmes que são de festim")
        async def festim_command(interaction: discord.Interaction):
            settings = self.settings or RoletaSettings.from_env()
            await interaction.response.send_message(settings.list_url(settings.blank_list))
