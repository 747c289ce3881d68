# cellarena/models/entities.py
"""Game entity models and data classes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


@dataclass
class Pellet:
    """Represents a food pellet in the game."""

    x: float
    y: float
    mass: float
    color: str


@dataclass
class Bot:
    """Represents an autonomous bot cell."""

    x: float
    y: float
    mass: float
    color: str
    heading: float  # radians
    timer: float  # seconds until the next wander turn


@dataclass
class Player:
    """Represents the player-controlled cell."""

    x: float
    y: float
    mass: float
    color: str
    vx: float = 0.0
    vy: float = 0.0
    boost: float = 0.0  # seconds of boost left


class Outcome(Enum):
    """Result of an overlapping player/bot pair."""

    PLAYER_EATS_BOT = "player_eats_bot"
    BOT_EATS_PLAYER = "bot_eats_player"
    BOUNCE = "bounce"


@dataclass
class TickReport:
    """What happened during one simulation tick."""

    dt: float = 0.0
    skipped: bool = False
    pellets_eaten_by_player: int = 0
    pellets_eaten_by_bots: int = 0
    outcomes: List[Outcome] = field(default_factory=list)
    pellets_spawned: int = 0
    bots_spawned: int = 0

    @property
    def player_resets(self) -> int:
        return self.outcomes.count(Outcome.BOT_EATS_PLAYER)

    @property
    def bots_eaten(self) -> int:
        return self.outcomes.count(Outcome.PLAYER_EATS_BOT)
