"""Discord bot setup and command handlers."""

from __future__ import annotations

import logging

import discord
from discord.ext import commands

from .config import Config
from .formatters import build_embed
from .reports import build_report, is_log_attachment, read_log_attachment

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please paste your log first!"
UNREADABLE_ATTACHMENT_MESSAGE = (
    "Could not read the attached log. Attach a UTF-8 `.txt` or `.log` file."
)


def create_bot() -> commands.Bot:
    """Create and configure the Discord bot."""
    intents = discord.Intents.default()
    intents.message_content = True
    config = Config.from_env()
    return commands.Bot(command_prefix=config.command_prefix, intents=intents)


bot = create_bot()


@bot.command()
async def ping(ctx: commands.Context) -> None:
    """Simple ping command for testing."""
    await ctx.send("pong")


@bot.command(name="stats")
async def stats(ctx: commands.Context, *, log: str = "") -> None:
    """Summarize a pasted or attached game log as a per-player stats table."""
    text = log
    logs = [a for a in ctx.message.attachments if is_log_attachment(a)]
    if logs:
        attachment_text = await read_log_attachment(logs[0])
        if attachment_text is None:
            await ctx.send(UNREADABLE_ATTACHMENT_MESSAGE)
            return
        text = attachment_text

    if not text or not text.strip():
        await ctx.send(EMPTY_INPUT_MESSAGE)
        return

    config = Config.from_env()
    rows, columns = build_report(text)
    embed, file = build_embed(rows, columns, config.player_colors)

    if file is not None:
        await ctx.send(embed=embed, file=file)
    else:
        await ctx.send(embed=embed)


@bot.event
async def on_ready() -> None:
    """Log when the bot is ready."""
    if bot.user:
        logger.info(f"Logged in as {bot.user} (id: {bot.user.id})")


@bot.event
async def on_command_error(ctx: commands.Context, error: commands.CommandError) -> None:
    """Log command failures and tell the user something went wrong."""
    if isinstance(error, commands.CommandNotFound):
        return
    logger.error(f"Command {ctx.command} failed: {error!r}")
    await ctx.send("Something went wrong while building the report.")


def run(token: str) -> None:
    """Run the bot with the given token."""
    bot.run(token)
