# cellarena/services/population.py
"""Spawning pellets and bots and keeping their counts topped up."""

import math
import random
from typing import List

from cellarena.config.settings import ArenaConfig
from cellarena.models.entities import Bot, Pellet
from cellarena.utils.helpers import mass_to_radius, random_hsl


def spawn_pellet(rng: random.Random, config: ArenaConfig) -> Pellet:
    """Spawn a single pellet at a random position inside the border."""
    mass = rng.uniform(config.pellet_min_mass, config.pellet_max_mass)
    radius = mass_to_radius(mass, config.radius_factor)
    return Pellet(
        x=rng.uniform(radius, config.world_width - radius),
        y=rng.uniform(radius, config.world_height - radius),
        mass=mass,
        color=random_hsl(rng, 70, 60),
    )


def spawn_bot(rng: random.Random, config: ArenaConfig) -> Bot:
    """Spawn a bot away from the border so it is not clamped on arrival."""
    inset = config.bot_spawn_inset
    return Bot(
        x=rng.uniform(inset, config.world_width - inset),
        y=rng.uniform(inset, config.world_height - inset),
        mass=rng.uniform(config.bot_min_mass, config.bot_max_mass),
        color=random_hsl(rng, 65, 55),
        heading=rng.uniform(0, math.pi * 2),
        timer=rng.uniform(*config.bot_initial_timer),
    )


def replenish_pellets(pellets: List[Pellet], rng: random.Random, config: ArenaConfig) -> int:
    """Spawn the pellet deficit; returns how many were added."""
    missing = max(0, config.food_count - len(pellets))
    for _ in range(missing):
        pellets.append(spawn_pellet(rng, config))
    return missing


def replenish_bots(bots: List[Bot], rng: random.Random, config: ArenaConfig) -> int:
    """Spawn the bot deficit; returns how many were added."""
    missing = max(0, config.bot_count - len(bots))
    for _ in range(missing):
        bots.append(spawn_bot(rng, config))
    return missing
