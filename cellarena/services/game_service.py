# cellarena/services/game_service.py
"""Core game logic and state management."""

import logging
import random
from dataclasses import asdict
from typing import Dict, List, Optional, Tuple

from cellarena.config.settings import PLAYER_COLOR, ArenaConfig
from cellarena.models.entities import Bot, Outcome, Pellet, Player, TickReport
from cellarena.services import bot_policy, collisions, movement, population
from cellarena.utils.helpers import display_mass, mass_to_radius, render_radius

logger = logging.getLogger(__name__)


class GameService:
    """Owns one arena session and advances it tick by tick.

    Every entity lives here for the whole session. Presentation code reads
    dictionary snapshots and feeds input back through ``tick``.
    """

    def __init__(self, config: Optional[ArenaConfig] = None, rng: Optional[random.Random] = None):
        self.config = (config or ArenaConfig()).validate()
        self.rng = rng or random.Random()

        self.pellets: List[Pellet] = []
        self.bots: List[Bot] = []
        self.player = self._create_player()

        self.ticks = 0
        self.elapsed = 0.0
        self.bots_eaten = 0
        self.player_resets = 0

        self._initialize_world()

    def _initialize_world(self):
        """Seed the world with its target pellet and bot counts."""
        population.replenish_pellets(self.pellets, self.rng, self.config)
        population.replenish_bots(self.bots, self.rng, self.config)
        logger.info(
            "Arena %sx%s seeded with %d pellets and %d bots",
            self.config.world_width,
            self.config.world_height,
            len(self.pellets),
            len(self.bots),
        )

    def _create_player(self) -> Player:
        """Create the player in the middle of the world."""
        return Player(
            x=self.config.world_width / 2,
            y=self.config.world_height / 2,
            mass=self.config.start_mass,
            color=PLAYER_COLOR,
        )

    def tick(
        self,
        elapsed_time: float,
        pointer_target: Tuple[float, float],
        boost_trigger: bool = False,
        paused: bool = False,
    ) -> TickReport:
        """Advance the session by one frame.

        ``pointer_target`` is in world coordinates. A paused tick changes
        nothing. So does a zero-length one, apart from arming the boost.
        """
        if paused:
            return TickReport(skipped=True)

        if boost_trigger:
            movement.trigger_boost(self.player, self.config)

        dt = movement.cap_dt(elapsed_time, self.config.max_dt)
        report = TickReport(dt=dt)
        if dt == 0:
            report.skipped = True
            return report

        movement.move_player(self.player, pointer_target, dt, self.config)
        report.pellets_eaten_by_player = collisions.eat_pellets(
            self.player, self.pellets, 1.0, self.config
        )

        self._update_bots(dt, report)

        report.pellets_spawned = population.replenish_pellets(self.pellets, self.rng, self.config)
        report.bots_spawned = population.replenish_bots(self.bots, self.rng, self.config)

        self.ticks += 1
        self.elapsed += dt
        self.bots_eaten += report.bots_eaten
        self.player_resets += report.player_resets
        return report

    def _update_bots(self, dt: float, report: TickReport):
        """Steer, move, feed and collide every bot against the player."""
        # Reverse order so an eaten bot can be deleted in place.
        for i in range(len(self.bots) - 1, -1, -1):
            bot = self.bots[i]

            bot_policy.update_heading(bot, self.player, dt, self.rng, self.config)
            movement.move_bot(bot, dt, self.config)

            report.pellets_eaten_by_bots += collisions.eat_pellets(
                bot, self.pellets, self.config.bot_pellet_gain, self.config
            )

            outcome = collisions.resolve_player_vs_bot(self.player, bot, dt, self.config)
            if outcome is None:
                continue
            report.outcomes.append(outcome)
            if outcome is Outcome.PLAYER_EATS_BOT:
                del self.bots[i]

    # Getter methods for game state
    def _cell_dict(self, cell) -> dict:
        data = asdict(cell)
        data["radius"] = mass_to_radius(cell.mass, self.config.radius_factor)
        data["renderRadius"] = render_radius(cell.mass, self.config.radius_factor)
        return data

    def get_player(self) -> dict:
        """Get the player as a dictionary."""
        return self._cell_dict(self.player)

    def get_all_pellets(self) -> List[dict]:
        """Get all pellets as dictionaries."""
        return [asdict(pellet) for pellet in self.pellets]

    def get_all_bots(self) -> List[dict]:
        """Get all bots as dictionaries."""
        return [self._cell_dict(bot) for bot in self.bots]

    def get_state(self) -> Dict[str, object]:
        """Everything a renderer needs for one frame."""
        return {
            "player": self.get_player(),
            "pellets": self.get_all_pellets(),
            "bots": self.get_all_bots(),
            "displayMass": display_mass(self.player.mass),
        }

    def get_stats(self) -> Dict[str, object]:
        return {
            "ticks": self.ticks,
            "elapsed": self.elapsed,
            "totalPellets": len(self.pellets),
            "totalBots": len(self.bots),
            "playerMass": self.player.mass,
            "botsEaten": self.bots_eaten,
            "playerResets": self.player_resets,
        }
