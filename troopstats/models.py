"""Data models for combat log aggregation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

UNKNOWN_ATTACKER = "UnknownA"
UNKNOWN_DEFENDER = "UnknownB"


@dataclass
class CombatTally:
    """Killed/lost counters for one player in one role (attacking or defending)."""

    killed: int = 0
    lost: int = 0

    def add(self, killed: int, lost: int) -> None:
        """Add kills and losses to this tally."""
        self.killed += killed
        self.lost += lost


@dataclass
class CombatAggregate:
    """
    Per-player statistics accumulated from a single log.

    Attributes:
        attack: Maps player -> tally of combat the player initiated.
        defend: Maps player -> tally of combat the player was attacked in.
        troops_gained: Maps player -> troops awarded outside of combat.
    """

    attack: dict[str, CombatTally] = field(default_factory=dict)
    defend: dict[str, CombatTally] = field(default_factory=dict)
    troops_gained: dict[str, float] = field(default_factory=dict)

    def attack_tally(self, name: str) -> CombatTally:
        """Return the attack tally for a player, creating it at zero if missing."""
        if name not in self.attack:
            self.attack[name] = CombatTally()
        return self.attack[name]

    def defend_tally(self, name: str) -> CombatTally:
        """Return the defend tally for a player, creating it at zero if missing."""
        if name not in self.defend:
            self.defend[name] = CombatTally()
        return self.defend[name]

    def add_troops(self, name: str, count: float) -> None:
        """
        Add gained troops to a player's running total.

        An unreadable count (nan) poisons the total, and the next readable
        count replaces a poisoned or zero total.
        """
        current = self.troops_gained.get(name)
        if not current or math.isnan(current):
            self.troops_gained[name] = count
        else:
            self.troops_gained[name] = current + count

    def player_names(self) -> list[str]:
        """Return every player seen in any map, sorted by code point."""
        return sorted(set(self.attack) | set(self.defend) | set(self.troops_gained))


@dataclass(frozen=True)
class CombatEvent:
    """One attack: the attacker killed `killed` troops and lost `lost` troops."""

    attacker: str
    defender: str
    killed: int
    lost: int


@dataclass(frozen=True)
class TroopGainEvent:
    """A non-combat troop award. `troops` is None when the count was unreadable."""

    player: str
    troops: int | None


@dataclass(frozen=True)
class Unrecognized:
    """A line that matched neither known shape."""

    line: str


LineEvent = Union[CombatEvent, TroopGainEvent, Unrecognized]


@dataclass(frozen=True)
class DisplayRow:
    """A single player's row in the summary table."""

    name: str
    gained: float
    total_killed: int
    total_lost: int
    overall_kd: float
    attack_killed: int
    attack_lost: int
    attack_kd: float
    defend_killed: int
    defend_lost: int
    defend_kd: float

    def as_tuple(self) -> tuple:
        """Return the row values in column order."""
        return (
            self.name,
            self.gained,
            self.total_killed,
            self.total_lost,
            self.overall_kd,
            self.attack_killed,
            self.attack_lost,
            self.attack_kd,
            self.defend_killed,
            self.defend_lost,
            self.defend_kd,
        )


@dataclass(frozen=True)
class Column:
    """A table column header and its hover/legend text."""

    label: str
    tooltip: str


COLUMNS: tuple[Column, ...] = (
    Column("Name", "Player's username"),
    Column(
        "Troops Gained",
        "Total number of troops gained (from area bonus or card turn-ins)",
    ),
    Column("Killed", "Total number of opponent's troops each player has killed"),
    Column("Lost", "Total number of troops each player has lost"),
    Column("KD", "Kill/Death ratio = Killed / Lost"),
    Column(
        "Killed Attacking",
        "Total number of troops each player has killed while attacking",
    ),
    Column(
        "Lost Attacking",
        "Total number of troops each player has lost while attacking",
    ),
    Column("Attack KD", "Attack KD = Killed Attacking / Lost Attacking"),
    Column(
        "Killed Defending",
        "Total number of opponent's troops killed while defending",
    ),
    Column(
        "Lost Defending",
        "Total number of troops each player has lost while defending",
    ),
    Column("Defense KD", "Defense KD = Killed Defending / Lost Defending"),
)
