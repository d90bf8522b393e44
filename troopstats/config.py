"""Configuration management for the Troop Stats bot."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

# Discord's ansi code block palette: foreground SGR codes
ANSI_COLORS: dict[str, int] = {
    "gray": 30,
    "grey": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "pink": 35,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
}


def _parse_color_map(value: str) -> dict[str, str]:
    """Parse 'Name=color,Name=color' into a mapping, logging invalid pairs."""
    if not value:
        return {}
    result = {}
    for item in value.split(","):
        if not (stripped := item.strip()):
            continue
        name, sep, color = stripped.partition("=")
        name, color = name.strip(), color.strip().lower()
        if not sep or not name:
            logger.warning(f"Invalid player color in config: {stripped}")
            continue
        if color not in ANSI_COLORS:
            logger.warning(f"Unknown color {color!r} for player {name}")
            continue
        result[name] = color
    return result


@dataclass(frozen=True)
class Config:
    """Bot configuration loaded from environment variables."""

    bot_token: str
    player_colors: dict[str, str] = field(default_factory=dict)
    command_prefix: str = "!"
    debug_log: bool = False

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables."""
        return cls(
            bot_token=os.getenv("DISCORD_BOT_TOKEN", ""),
            player_colors=_parse_color_map(os.getenv("PLAYER_COLORS", "")),
            command_prefix=os.getenv("COMMAND_PREFIX", "!") or "!",
            debug_log=os.getenv("DEBUG_LOG", "false").lower() in ("true", "1", "yes"),
        )
