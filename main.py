"""
Main entry point for the roleta Discord bot.
"""

import asyncio
import logging
import os
import sys
import signal
from dotenv import load_dotenv

# Add project root to PYTHONPATH so imports work when running this script directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core.infra.discord_bot import RoletaBot, load_commands_config


async def main():
    """Main entry point: load config, start the bot, wait for a shutdown signal."""
    # Load .env file
    load_dotenv()

    # Setup logging
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s"
    )
    logger = logging.getLogger(__name__)

    discord_token = os.getenv("DISCORD_TOKEN")
    logger.info("Discord token: %s", "set" if discord_token else "not set")
    if not discord_token:
        logger.error("DISCORD_TOKEN is not set. Exiting.")
        return

    # Load command manifest
    config_file = os.getenv("BOT_COMMANDS_CONFIG", "commands.yml")
    command_paths = load_commands_config(config_file)
    if not command_paths:
        logger.error(f"No Discord commands configured in {config_file}. Exiting.")
        return

    logger.info(f"Loaded {len(command_paths)} command plugin(s): {command_paths}")

    # Setup graceful shutdown
    stop_event = asyncio.Event()

    def signal_handler():
        logger.info("Received shutdown signal")
        stop_event.set()

    # Register signal handlers
    for sig in (signal.SIGTERM, signal.SIGINT):
        asyncio.get_running_loop().add_signal_handler(sig, signal_handler)

    bot = RoletaBot(command_paths)
    bot_task = asyncio.create_task(bot.start(discord_token))

    try:
        # Wait for shutdown signal or the bot stopping on its own
        await asyncio.wait(
            [asyncio.create_task(stop_event.wait()), bot_task],
            return_when=asyncio.FIRST_COMPLETED,
        )
        if bot_task.done() and not bot_task.cancelled() and bot_task.exception():
            logger.error(f"Discord bot stopped: {bot_task.exception()}")
    finally:
        logger.info("Shutting down...")

        if not bot.is_closed():
            await bot.close()

        if not bot_task.done():
            bot_task.cancel()
            try:
                await bot_task
            except asyncio.CancelledError:
                pass

        logger.info("Shutdown complete")


def run_bot():
    """Entry point that can be called from other scripts."""
    asyncio.run(main())


if __name__ == "__main__":
    run_bot()
