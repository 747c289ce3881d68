# cellarena/services/bot_policy.py
"""Bot steering: periodic wander plus flee/chase when the player is near."""

import math
import random

from cellarena.config.settings import ArenaConfig
from cellarena.models.entities import Bot, Player
from cellarena.utils.helpers import dist2


def wander(bot: Bot, dt: float, rng: random.Random, config: ArenaConfig):
    """Count the wander timer down and turn a random amount when it runs out."""
    bot.timer -= dt
    if bot.timer <= 0:
        bot.timer = rng.uniform(*config.bot_wander_timer)
        bot.heading += rng.uniform(-config.bot_wander_turn, config.bot_wander_turn)


def react_to_player(bot: Bot, player: Player, rng: random.Random, config: ArenaConfig) -> str:
    """Point the bot away from or at a nearby player.

    Returns "flee", "chase" or "wander". The wander timer is left alone.
    """
    if dist2(bot.x, bot.y, player.x, player.y) >= config.bot_sight_range ** 2:
        return "wander"

    size_ratio = player.mass / bot.mass
    if size_ratio > config.bot_flee_ratio:
        bot.heading = math.atan2(bot.y - player.y, bot.x - player.x) + rng.uniform(
            -config.bot_flee_jitter, config.bot_flee_jitter
        )
        return "flee"
    if size_ratio < config.bot_chase_ratio:
        bot.heading = math.atan2(player.y - bot.y, player.x - bot.x) + rng.uniform(
            -config.bot_chase_jitter, config.bot_chase_jitter
        )
        return "chase"
    return "wander"


def update_heading(
    bot: Bot, player: Player, dt: float, rng: random.Random, config: ArenaConfig
) -> str:
    wander(bot, dt, rng, config)
    return react_to_player(bot, player, rng, config)
