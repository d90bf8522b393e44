"""Entry point for running the bot with `python -m troopstats`."""

import logging
import sys

from .config import Config

logger = logging.getLogger("troopstats")


def configure_logging(debug: bool) -> None:
    """Set up root logging, at DEBUG when `debug` is set."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main() -> int:
    """Start the troop stats bot; returns a process exit code."""
    config = Config.from_env()
    configure_logging(config.debug_log)

    if not config.bot_token:
        logger.error("DISCORD_BOT_TOKEN is not set; cannot log in to Discord")
        return 1

    if config.player_colors:
        logger.info(f"Coloring {len(config.player_colors)} players")

    # Deferred so the bot object is created after logging is configured
    from .bot import run

    run(config.bot_token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
