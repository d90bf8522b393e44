"""Report building with caching, and log attachment loading."""

from __future__ import annotations

import hashlib
import logging

import discord
from cachetools import TTLCache

from .models import Column, DisplayRow
from .stats import run_report

logger = logging.getLogger(__name__)

# Cache built reports for 10 minutes, max 256 entries
_report_cache: TTLCache[str, tuple[tuple[DisplayRow, ...], tuple[Column, ...]]] = (
    TTLCache(maxsize=256, ttl=600)
)

LOG_EXTENSIONS = (".txt", ".log")

# Discord attachments larger than this are not read
MAX_ATTACHMENT_BYTES = 2_000_000


def _cache_key(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def build_report(text: str) -> tuple[tuple[DisplayRow, ...], tuple[Column, ...]]:
    """
    Build the stats report for a log, reusing a cached result when possible.

    Args:
        text: Raw, non-blank log text.

    Returns:
        The sorted rows and their column headers.
    """
    key = _cache_key(text)
    if cached := _report_cache.get(key):
        logger.debug(f"Report cache hit for {key[:12]}")
        return cached

    rows, columns = run_report(text)
    report = (tuple(rows), columns)
    _report_cache[key] = report
    return report


def is_log_attachment(attachment: discord.Attachment) -> bool:
    """Check whether an attachment looks like a plain-text game log."""
    return attachment.filename.lower().endswith(LOG_EXTENSIONS)


async def read_log_attachment(attachment: discord.Attachment) -> str | None:
    """
    Download and decode a log attachment.

    Args:
        attachment: The Discord message attachment.

    Returns:
        The decoded text, or None if the attachment could not be used.
    """
    if not is_log_attachment(attachment):
        logger.info(f"Skipping non-log attachment {attachment.filename}")
        return None

    if attachment.size > MAX_ATTACHMENT_BYTES:
        logger.warning(
            f"Attachment {attachment.filename} too large ({attachment.size} bytes)"
        )
        return None

    try:
        data = await attachment.read()
    except discord.HTTPException as e:
        logger.error(f"Error downloading attachment {attachment.filename}: {e!r}")
        return None

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.error(f"Attachment {attachment.filename} is not UTF-8 text: {e!r}")
        return None
