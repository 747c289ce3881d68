# cellarena/config/settings.py
"""Game configuration constants and settings."""

import os
from dataclasses import dataclass
from typing import Tuple

# World settings
WORLD_WIDTH = 3000
WORLD_HEIGHT = 3000
GRID_SIZE = 50

# Mass to radius law: radius = RADIUS_FACTOR * sqrt(mass)
RADIUS_FACTOR = 2.5
MIN_RENDER_RADIUS = 6
PELLET_RENDER_RADIUS = 3

# Pellet settings
FOOD_COUNT = 350
PELLET_MIN_MASS = 2
PELLET_MAX_MASS = 6
PELLET_EAT_MARGIN = 3
BOT_PELLET_GAIN = 0.9  # bots only keep 90% of a pellet

# Bot settings
BOT_COUNT = 6
BOT_MIN_MASS = 80
BOT_MAX_MASS = 260
BOT_SPAWN_INSET = 200
BOT_BASE_SPEED = 230
BOT_SIZE_DRAG = 0.12
BOT_INITIAL_TIMER = (1.0, 3.0)
BOT_WANDER_TIMER = (1.2, 2.5)
BOT_WANDER_TURN = 1.0  # radians, either way
BOT_SIGHT_RANGE = 600
BOT_FLEE_RATIO = 1.2  # player.mass / bot.mass above this: flee
BOT_CHASE_RATIO = 0.8  # player.mass / bot.mass below this: chase
BOT_FLEE_JITTER = 0.2
BOT_CHASE_JITTER = 0.1

# Player settings
START_MASS = 100
PLAYER_COLOR = "#4caf50"
PLAYER_BASE_SPEED = 260
PLAYER_SIZE_DRAG = 0.15
BOOST_MULTIPLIER = 1.8
BOOST_DURATION = 0.25  # seconds

# Player vs bot
DOMINANCE_RATIO = 1.15
BOT_ABSORB_FRACTION = 0.8
BOUNCE_PUSH = 40  # units per second

# Timing
MAX_DT = 0.033
CAMERA_SMOOTHING = 0.1
MASS_DISPLAY_DIVISOR = 10

# Server settings
UPDATE_RATE = 60  # ticks per second
HOST = os.getenv("CELLARENA_HOST", "0.0.0.0")
PORT = int(os.getenv("CELLARENA_PORT", "8000"))


@dataclass
class ArenaConfig:
    """Tunable values one simulation session is built from."""

    world_width: float = WORLD_WIDTH
    world_height: float = WORLD_HEIGHT
    food_count: int = FOOD_COUNT
    bot_count: int = BOT_COUNT

    radius_factor: float = RADIUS_FACTOR
    pellet_min_mass: float = PELLET_MIN_MASS
    pellet_max_mass: float = PELLET_MAX_MASS
    pellet_eat_margin: float = PELLET_EAT_MARGIN
    bot_pellet_gain: float = BOT_PELLET_GAIN

    bot_min_mass: float = BOT_MIN_MASS
    bot_max_mass: float = BOT_MAX_MASS
    bot_spawn_inset: float = BOT_SPAWN_INSET
    bot_base_speed: float = BOT_BASE_SPEED
    bot_size_drag: float = BOT_SIZE_DRAG
    bot_sight_range: float = BOT_SIGHT_RANGE
    bot_flee_ratio: float = BOT_FLEE_RATIO
    bot_chase_ratio: float = BOT_CHASE_RATIO
    bot_flee_jitter: float = BOT_FLEE_JITTER
    bot_chase_jitter: float = BOT_CHASE_JITTER
    bot_initial_timer: Tuple[float, float] = BOT_INITIAL_TIMER
    bot_wander_timer: Tuple[float, float] = BOT_WANDER_TIMER
    bot_wander_turn: float = BOT_WANDER_TURN

    start_mass: float = START_MASS
    player_base_speed: float = PLAYER_BASE_SPEED
    player_size_drag: float = PLAYER_SIZE_DRAG
    boost_multiplier: float = BOOST_MULTIPLIER
    boost_duration: float = BOOST_DURATION

    dominance_ratio: float = DOMINANCE_RATIO
    bot_absorb_fraction: float = BOT_ABSORB_FRACTION
    bounce_push: float = BOUNCE_PUSH

    max_dt: float = MAX_DT

    def validate(self) -> "ArenaConfig":
        """Raise ValueError when the values cannot describe a playable world."""
        if self.world_width <= 0 or self.world_height <= 0:
            raise ValueError("world extents must be positive")
        if self.food_count < 0 or self.bot_count < 0:
            raise ValueError("population targets cannot be negative")
        if self.pellet_min_mass <= 0 or self.pellet_min_mass > self.pellet_max_mass:
            raise ValueError("pellet mass range must be positive and ordered")
        if self.bot_min_mass <= 0 or self.bot_min_mass > self.bot_max_mass:
            raise ValueError("bot mass range must be positive and ordered")
        if self.start_mass <= 0:
            raise ValueError("start mass must be positive")
        if 2 * self.bot_spawn_inset > min(self.world_width, self.world_height):
            raise ValueError("bot spawn inset does not fit inside the world")
        for low, high in (self.bot_initial_timer, self.bot_wander_timer):
            if low <= 0 or low > high:
                raise ValueError("bot timer ranges must be positive and ordered")
        if self.max_dt <= 0:
            raise ValueError("max_dt must be positive")
        return self


DEFAULT_CONFIG = ArenaConfig()


def get_game_config(config: ArenaConfig = DEFAULT_CONFIG):
    """Get the complete game configuration as a dictionary."""
    return {
        "worldWidth": config.world_width,
        "worldHeight": config.world_height,
        "gridSize": GRID_SIZE,
        "foodCount": config.food_count,
        "botCount": config.bot_count,
        "radiusFactor": config.radius_factor,
        "minRenderRadius": MIN_RENDER_RADIUS,
        "pelletRenderRadius": PELLET_RENDER_RADIUS,
        "startMass": config.start_mass,
        "playerColor": PLAYER_COLOR,
        "boostDuration": config.boost_duration,
        "boostMultiplier": config.boost_multiplier,
        "massDisplayDivisor": MASS_DISPLAY_DIVISOR,
        "updateRate": UPDATE_RATE,
    }
