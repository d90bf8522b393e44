"""Formatting utilities for stats tables and Discord embeds."""

from __future__ import annotations

import io
import math
from collections.abc import Mapping, Sequence

import discord

from .config import ANSI_COLORS
from .models import Column, DisplayRow

EMBED_DESCRIPTION_LIMIT = 4096
NO_EVENTS_TEXT = "No combat or troop events found in the log."
REPORT_FILENAME = "troop_stats.txt"


def format_kd(value: float) -> str:
    """
    Format a kill/death ratio for display.

    Args:
        value: The ratio; int 0 marks a scope with no kills, math.inf kills
            without losses.

    Returns:
        'Infinity', '0', 'NaN', or the ratio with two decimals like '2.50'.
    """
    if isinstance(value, int):
        return str(value)
    if value == math.inf:
        return "Infinity"
    if math.isnan(value):
        return "NaN"
    return f"{value:.2f}"


def format_cell(value: str | int | float) -> str:
    """Format a single row value as cell text."""
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        return format_kd(value)
    return str(value)


def colorize(text: str, color: str | None) -> str:
    """Wrap text in an ANSI color escape, or return it unchanged."""
    code = ANSI_COLORS.get(color or "")
    if code is None:
        return text
    return f"\x1b[{code}m{text}\x1b[0m"


def render_table(
    rows: Sequence[DisplayRow],
    columns: Sequence[Column],
    colors: Mapping[str, str] | None = None,
) -> str:
    """
    Render rows as a monospace table.

    The first column is left-aligned, the rest right-aligned. A cell is
    colored when its text is a key of `colors`. Colors are applied after
    padding so escape codes do not shift the columns.

    Args:
        rows: Rows to render, already sorted.
        columns: Column headers, one per row value.
        colors: Optional mapping of cell text -> color name.

    Returns:
        The table as a single newline-joined string.
    """
    colors = colors or {}
    header = [c.label for c in columns]
    body = [[format_cell(v) for v in row.as_tuple()] for row in rows]

    widths = [len(label) for label in header]
    for cells in body:
        for i, cell in enumerate(cells):
            widths[i] = max(widths[i], len(cell))

    def pad(i: int, text: str) -> str:
        return text.ljust(widths[i]) if i == 0 else text.rjust(widths[i])

    lines = [
        " | ".join(pad(i, label) for i, label in enumerate(header)),
        "-+-".join("-" * w for w in widths),
    ]
    for cells in body:
        lines.append(
            " | ".join(
                colorize(pad(i, cell), colors.get(cell)) for i, cell in enumerate(cells)
            )
        )
    return "\n".join(lines)


def build_legend(columns: Sequence[Column]) -> str:
    """Build the column legend shown in place of header tooltips."""
    return "\n".join(f"**{c.label}**: {c.tooltip}" for c in columns)


def build_embed(
    rows: Sequence[DisplayRow],
    columns: Sequence[Column],
    colors: Mapping[str, str] | None = None,
) -> tuple[discord.Embed, discord.File | None]:
    """
    Build a Discord embed for a stats report.

    Tables that do not fit in the embed description are returned as a
    text file attachment instead.

    Args:
        rows: Rows to display.
        columns: Column headers.
        colors: Optional mapping of cell text -> color name.

    Returns:
        The embed, and a file to attach alongside it or None.
    """
    embed = discord.Embed(title="Troop Stats", color=discord.Color.blurple())
    file = None

    if not rows:
        embed.description = NO_EVENTS_TEXT
        return embed, file

    table = render_table(rows, columns, colors)
    block = f"```ansi\n{table}\n```"
    if len(block) <= EMBED_DESCRIPTION_LIMIT:
        embed.description = block
    else:
        plain = render_table(rows, columns)
        file = discord.File(io.BytesIO(plain.encode("utf-8")), filename=REPORT_FILENAME)
        embed.description = f"Table too large to display, see `{REPORT_FILENAME}`."

    embed.add_field(name="Columns", value=build_legend(columns), inline=False)
    embed.set_footer(text=f"{len(rows)} players")
    return embed, file
