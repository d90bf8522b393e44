"""Troop Stats - per-player combat statistics from strategy game logs."""

from .config import Config
from .models import (
    COLUMNS,
    Column,
    CombatAggregate,
    CombatEvent,
    CombatTally,
    DisplayRow,
    TroopGainEvent,
    Unrecognized,
)
from .parsers import classify_line, parse_log
from .stats import build_rows, kd_ratio, run_report

__all__ = [
    "COLUMNS",
    "Column",
    "CombatAggregate",
    "CombatEvent",
    "CombatTally",
    "Config",
    "DisplayRow",
    "TroopGainEvent",
    "Unrecognized",
    "build_rows",
    "classify_line",
    "kd_ratio",
    "parse_log",
    "run_report",
]

__version__ = "1.0.0"
