"""Pytest configuration and fixtures for arena tests."""

import random

import pytest

from cellarena.config.settings import ArenaConfig
from cellarena.services.game_service import GameService


class FixedRandom(random.Random):
    """Random source whose uniform() always lands at a fixed fraction of the range."""

    def __init__(self, fraction=0.5):
        super().__init__(0)
        self.fraction = fraction

    def uniform(self, a, b):
        return a + (b - a) * self.fraction

    def randrange(self, start, stop=None, step=1):
        return start


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def fixed_rng():
    return FixedRandom()


@pytest.fixture
def empty_config():
    """A small world with no food or bots, so tests place entities by hand."""
    return ArenaConfig(
        world_width=1000,
        world_height=1000,
        food_count=0,
        bot_count=0,
        bot_spawn_inset=100,
    )


@pytest.fixture
def small_config():
    return ArenaConfig(
        world_width=800,
        world_height=800,
        food_count=120,
        bot_count=8,
        bot_spawn_inset=100,
    )


@pytest.fixture
def empty_game(empty_config, fixed_rng):
    return GameService(empty_config, fixed_rng)


@pytest.fixture
def game(small_config, seeded_rng):
    return GameService(small_config, seeded_rng)
