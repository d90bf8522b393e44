"""Derived statistics and report row building."""

from __future__ import annotations

import logging
import math

from .models import COLUMNS, CombatAggregate, CombatTally, Column, DisplayRow
from .parsers import parse_log

logger = logging.getLogger(__name__)


def kd_ratio(killed: int, lost: int) -> float:
    """
    Compute a kill/death ratio.

    No kills reports 0 even with no losses; kills without losses report
    infinity.

    Args:
        killed: Troops killed in the scope.
        lost: Troops lost in the scope.

    Returns:
        int 0 for no kills, math.inf, or killed / lost rounded to 2 decimal
        places (a float, even when it rounds to 0.0).
    """
    if killed == 0:
        return 0
    if lost == 0:
        return math.inf
    return round(killed / lost, 2)


def build_rows(aggregate: CombatAggregate) -> list[DisplayRow]:
    """
    Build one display row per player, sorted by name.

    Args:
        aggregate: Parsed per-player statistics.

    Returns:
        Rows for every player found in any of the aggregate's maps.
    """
    rows = []
    for name in aggregate.player_names():
        atk = aggregate.attack.get(name, CombatTally())
        dfn = aggregate.defend.get(name, CombatTally())
        total_killed = atk.killed + dfn.killed
        total_lost = atk.lost + dfn.lost

        rows.append(
            DisplayRow(
                name=name,
                gained=aggregate.troops_gained.get(name, 0),
                total_killed=total_killed,
                total_lost=total_lost,
                overall_kd=kd_ratio(total_killed, total_lost),
                attack_killed=atk.killed,
                attack_lost=atk.lost,
                attack_kd=kd_ratio(atk.killed, atk.lost),
                defend_killed=dfn.killed,
                defend_lost=dfn.lost,
                defend_kd=kd_ratio(dfn.killed, dfn.lost),
            )
        )
    return rows


def run_report(text: str) -> tuple[list[DisplayRow], tuple[Column, ...]]:
    """
    Parse a game log and build its summary table.

    Callers are expected to reject blank input before calling this.

    Args:
        text: Raw log text.

    Returns:
        The sorted rows and the column headers they line up with.
    """
    rows = build_rows(parse_log(text))
    logger.info(f"Built report with {len(rows)} players")
    return rows, COLUMNS
