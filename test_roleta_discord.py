"""
Tests for the Discord presentation layer and command registration.
"""

from types import SimpleNamespace
from unittest import mock

import discord
from discord.ext import commands

from conftest import make_film
from core.models import SelectionResult
from plugins.roleta.config import RoletaSettings
from plugins.roleta.discord import (
    LOST_COLOR,
    SURVIVED_COLOR,
    InteractionSink,
    RoletaDiscordCommands,
    build_embed,
)
from plugins.roleta.poster import attach_poster
from plugins.roleta.roulette import Roulette


SETTINGS = RoletaSettings(letterboxd_user="xenohart", bad_list="ruins", good_list="bons")


def _result(lost, bad_count=3, poster=True):
    film = make_film(3, "bad" if lost else "good")
    if poster:
        film = attach_poster(film)
    return SelectionResult(chosen=film, lost=lost, bad_count=bad_count, good_count=6 - bad_count)


def test_lost_embed():
    embed = build_embed(_result(lost=True))

    assert embed.title == "🎯 Bad 3"
    assert embed.url == "https://letterboxd.com/film/bad-3"
    assert embed.color.value == LOST_COLOR
    assert embed.fields[0].name == "💀 Você perdeu!"
    assert embed.fields[0].value == "Configuração: 3 ruins | 3 bons"
    assert embed.image.url.endswith("-0-1000-0-1500-crop.jpg")


def test_survived_embed_without_poster():
    embed = build_embed(_result(lost=False, poster=False))

    assert embed.color.value == SURVIVED_COLOR
    assert embed.fields[0].name == "🎉 Você sobreviveu!"
    assert embed.image.url is None


def test_configuration_summary_uses_singular():
    assert build_embed(_result(lost=True, bad_count=1)).fields[0].value == "Configuração: 1 ruim | 5 bons"
    assert build_embed(_result(lost=True, bad_count=5)).fields[0].value == "Configuração: 5 ruins | 1 bom"


async def test_interaction_sink_sends_followups():
    interaction = mock.Mock()
    interaction.followup.send = mock.AsyncMock()
    sink = InteractionSink(interaction)

    await sink.handle(_result(lost=True))
    await sink.unavailable("indisponível")

    first, second = interaction.followup.send.await_args_list
    assert isinstance(first.kwargs["embed"], discord.Embed)
    assert second.kwargs == {"content": "indisponível"}


async def test_setup_attaches_roulette_to_bot():
    bot = SimpleNamespace(http_client=None)
    plugin = RoletaDiscordCommands(settings=SETTINGS)

    await plugin.setup(bot)

    assert isinstance(bot.roleta, Roulette)
    assert bot.roleta is plugin.roulette
    assert bot.roleta.cache.ttl.total_seconds() == 3600


async def test_register_adds_slash_commands():
    bot = commands.Bot(command_prefix="!", intents=discord.Intents.default())
    plugin = RoletaDiscordCommands(settings=SETTINGS)

    plugin.register(bot)

    names = {c.name for c in bot.tree.get_commands()}
    assert names == {"roleta", "festim"}
    roleta = bot.tree.get_command("roleta")
    balas = roleta.parameters[0]
    assert balas.name == "balas"
    assert (balas.min_value, balas.max_value) == (1, 5)
