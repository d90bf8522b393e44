"""Game log line parsing and aggregation."""

from __future__ import annotations

import logging
import math
import re
from collections import Counter

from .models import (
    UNKNOWN_ATTACKER,
    UNKNOWN_DEFENDER,
    CombatAggregate,
    CombatEvent,
    LineEvent,
    TroopGainEvent,
    Unrecognized,
)

logger = logging.getLogger(__name__)

LINE_SPLIT_RE = re.compile(r"\r?\n")

# "... killing 5 losing 2" - one or two digit counts only
KILLING_RE = re.compile(r"killing\s(\d{1,2})")
LOSING_RE = re.compile(r"losing\s(\d{1,2})")

# Parenthesised token, e.g. "(Alice)" or "(north-ridge)"
PAREN_NAME_RE = re.compile(r"\(([a-zA-Z0-9_-]+)\)")

LEADING_DIGITS_RE = re.compile(r"\d+")


def split_lines(text: str) -> list[str]:
    """
    Split log text on LF or CRLF line endings.

    Args:
        text: Raw log text.

    Returns:
        Every line, empty ones included.
    """
    return LINE_SPLIT_RE.split(text)


def _last_paren_name(segment: str, fallback: str) -> str:
    """Return the last parenthesised name in a segment, or the fallback."""
    names = PAREN_NAME_RE.findall(segment)
    return names[-1] if names else fallback


def parse_troop_count(token: str | None) -> int | None:
    """
    Read a troop count from the leading digits of a token.

    Args:
        token: The token expected to hold the count.

    Returns:
        The count, or None if the token is missing or does not start with a digit.
    """
    if token is None:
        return None
    if match := LEADING_DIGITS_RE.match(token):
        return int(match.group())
    return None


def parse_combat_line(line: str) -> CombatEvent | None:
    """
    Parse a line like 'Alice (X) attacked Bob (Y) killing 5 losing 2'.

    The last parenthesised token before 'attacked' is the attacker and the
    last one after it is the defender. Territory names may also appear in
    parentheses, so earlier tokens are ignored.

    Args:
        line: A single log line.

    Returns:
        A CombatEvent, or None if the line is not a complete combat line.
    """
    if "attacked" not in line:
        return None

    killing = KILLING_RE.search(line)
    losing = LOSING_RE.search(line)
    if not killing or not losing:
        return None

    segments = line.split("attacked")
    left, right = segments[0], segments[1]

    return CombatEvent(
        attacker=_last_paren_name(left, UNKNOWN_ATTACKER),
        defender=_last_paren_name(right, UNKNOWN_DEFENDER),
        killed=int(killing.group(1)),
        lost=int(losing.group(1)),
    )


def parse_troop_line(line: str) -> TroopGainEvent | None:
    """
    Parse a line like 'Bob received 3 troops'.

    The grammar is positional: first token is the player, third token the
    count. Lines with other word orders are not rejected and will misparse.

    Args:
        line: A single log line.

    Returns:
        A TroopGainEvent, or None if the line is not a troop-gain line.
    """
    if "received" not in line or "troop" not in line:
        return None

    tokens = line.split()
    count_token = tokens[2] if len(tokens) > 2 else None
    return TroopGainEvent(player=tokens[0], troops=parse_troop_count(count_token))


LINE_CLASSIFIERS = (parse_combat_line, parse_troop_line)


def classify_line(line: str) -> LineEvent:
    """
    Classify a single log line.

    Classifiers are tried in order; the first match wins.

    Args:
        line: A single non-empty log line.

    Returns:
        A CombatEvent, TroopGainEvent, or Unrecognized.
    """
    for classifier in LINE_CLASSIFIERS:
        if (event := classifier(line)) is not None:
            return event
    return Unrecognized(line=line)


def apply_event(aggregate: CombatAggregate, event: LineEvent) -> None:
    """
    Fold one classified line into the aggregate.

    Both combat participants get attack and defend entries, even though only
    one role is exercised by the event.

    Args:
        aggregate: The aggregate to update in place.
        event: The classified line.
    """
    if isinstance(event, CombatEvent):
        attacker_atk = aggregate.attack_tally(event.attacker)
        aggregate.defend_tally(event.attacker)
        aggregate.attack_tally(event.defender)
        defender_def = aggregate.defend_tally(event.defender)

        attacker_atk.add(killed=event.killed, lost=event.lost)
        # The defender killed what the attacker lost, and lost what it killed
        defender_def.add(killed=event.lost, lost=event.killed)

    elif isinstance(event, TroopGainEvent):
        if event.troops is None:
            logger.debug(f"Unreadable troop count for {event.player!r}")
            aggregate.add_troops(event.player, math.nan)
        else:
            aggregate.add_troops(event.player, event.troops)


def parse_log(text: str) -> CombatAggregate:
    """
    Parse a whole game log into per-player statistics.

    Empty lines are skipped; lines matching neither shape are ignored.

    Args:
        text: Raw log text.

    Returns:
        A fresh CombatAggregate for this log.
    """
    aggregate = CombatAggregate()
    kinds: Counter[str] = Counter()

    for line in split_lines(text):
        if not line:
            continue
        event = classify_line(line)
        kinds[type(event).__name__] += 1
        if isinstance(event, Unrecognized):
            logger.debug(f"Ignoring unrecognized line: {line!r}")
            continue
        apply_event(aggregate, event)

    logger.debug(
        f"Parsed {sum(kinds.values())} lines: {kinds['CombatEvent']} combat, "
        f"{kinds['TroopGainEvent']} troop gain, {kinds['Unrecognized']} unrecognized"
    )
    return aggregate
