"""
Discord bot host for plugin slash commands.

Plugins are listed in a YAML manifest (``commands.yml``) as
``plugin_name.ClassName`` and live in ``plugins/<plugin_name>/discord.py``.
Each one gets an optional async ``setup`` and then ``register``s its commands.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import discord
import yaml
from discord.ext import commands

from dotenv import load_dotenv

from ..interfaces import DiscordCommands

from .http import HttpClient

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────────────
# Configuration
# ──────────────────────────────────────────────────────────────────────────

load_dotenv()  # Load variables from a .env file if present

GUILD_ID: Optional[int] = int(os.getenv("GUILD_ID")) if os.getenv("GUILD_ID") else None


def load_commands_config(config_path: str = "commands.yml") -> List[str]:
    """Load the list of plugin command classes from a YAML manifest."""
    path = Path(config_path)

    if not path.exists():
        logger.warning(f"Commands config file not found: {config_path}")
        return []

    with path.open() as f:
        data = yaml.safe_load(f) or {}

    entries = data.get("discord_commands")
    if not entries:
        logger.error(f"No 'discord_commands' key found in {config_path}")
        return []

    return [str(entry) for entry in entries]


# ──────────────────────────────────────────────────────────────────────────
# Bot implementation
# ──────────────────────────────────────────────────────────────────────────

class RoletaBot(commands.Bot):
    """Slash-command-only bot hosting the plugin commands."""

    def __init__(
        self,
        command_paths: List[str],
        *,
        guild_id: Optional[int] = GUILD_ID,
        **kwargs,
    ):  # noqa: D401
        intents = discord.Intents.default()  # Slash‑command‑only bot

        super().__init__(command_prefix="!", intents=intents, **kwargs)

        self.command_paths = command_paths
        self.guild_id = guild_id
        self.http_client: Optional[HttpClient] = None
        self.plugins: Dict[str, DiscordCommands] = {}

    # ────────────────────────────────────────
    # Discord lifecycle hooks
    # ────────────────────────────────────────

    async def setup_hook(self):
        """Runs at startup before connecting to the gateway."""

        # One HttpClient per bot, shared by every plugin
        self.http_client = HttpClient()
        logger.info("HttpClient initialized and attached to bot as http_client.")

        self.plugins = await load_and_register_plugin_commands(self, self.command_paths)

        registered_commands = [c.name for c in self.tree.get_commands()]
        logger.info(f"Commands registered in tree before sync: {registered_commands}")

        # ── Sync commands ───────────────────
        try:
            # With GUILD_ID set, copy the global commands to that guild so
            # they appear instantly instead of after global propagation.
            if self.guild_id:
                guild_obj = discord.Object(id=self.guild_id)
                self.tree.copy_global_to(guild=guild_obj)
                synced = await self.tree.sync(guild=guild_obj)
                logger.info("Synced %d command(s) to guild %s", len(synced), self.guild_id)
            else:
                synced = await self.tree.sync()
                logger.info("Synced %d global command(s)", len(synced))

        except Exception as exc:  # pragma: no cover - startup debug
            logger.exception("Failed to sync commands: %s", exc)

    async def on_ready(self):
        logger.info(f"Ready! Logged in as {self.user}")

    async def on_error(self, event_method: str, *args: Any, **kwargs: Any) -> None:
        logger.exception(f"Unhandled exception in {event_method}")

    async def close(self):
        """Properly close down the bot and its resources."""
        if self.http_client:
            await self.http_client.close()
            logger.info("HttpClient closed.")
        await super().close()  # Call discord.py's Bot.close()
        logger.info("Bot has been closed.")


# ──────────────────────────────────────────────────────────────────────────
# Plugin command loading
# ──────────────────────────────────────────────────────────────────────────

async def load_and_register_plugin_commands(
    bot: commands.Bot, command_paths: List[str]
) -> Dict[str, DiscordCommands]:
    """
    Loads Discord command classes listed in the manifest and registers them.

    A plugin that fails to import or set up is logged and skipped; the
    remaining plugins still load.
    """
    loaded: Dict[str, DiscordCommands] = {}

    for discord_command_path in command_paths:
        if discord_command_path in loaded:
            logger.debug(f"Discord command class {discord_command_path} already registered, skipping.")
            continue

        # Format "plugin_name.ClassName" -> plugins.<plugin_name>.discord
        if "." not in discord_command_path:
            logger.error(f"Invalid command path '{discord_command_path}', expected 'plugin_name.ClassName'")
            continue
        plugin_name, class_name = discord_command_path.split(".", 1)

        try:
            module_path = f"plugins.{plugin_name}.discord"

            module = importlib.import_module(module_path)
            command_class = getattr(module, class_name)

            if not (inspect.isclass(command_class) and issubclass(command_class, DiscordCommands)):
                logger.warning(f"Class {discord_command_path} does not implement DiscordCommands interface.")
                continue

            instance = command_class()

            # ── optional async setup hook ─────────────────────────────
            setup_fn = instance.setup
            if inspect.iscoroutinefunction(setup_fn):
                await setup_fn(bot)
            else:
                setup_fn(bot)

            # ── register slash-commands ───────────────────────────────
            instance.register(bot)
            loaded[discord_command_path] = instance
            logger.info("Successfully registered Discord commands from %s", discord_command_path)
        except ImportError as e:
            logger.error(f"Failed to import module for {discord_command_path}: {e}")
        except AttributeError as e:
            logger.error(f"Failed to find class for {discord_command_path}: {e}")
        except Exception as e:
            logger.error(f"Failed to load or register Discord commands from {discord_command_path}: {e}", exc_info=True)

    return loaded
