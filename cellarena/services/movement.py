# cellarena/services/movement.py
"""Movement integration: speed law, boost and world clamping."""

import math
from typing import Tuple

from cellarena.config.settings import ArenaConfig
from cellarena.models.entities import Bot, Player
from cellarena.utils.helpers import clamp_to_world, mass_to_radius, unit_vector


def cap_dt(elapsed_time: float, max_dt: float) -> float:
    """Bound one tick's time step; negative host time counts as zero."""
    return min(max_dt, max(0.0, elapsed_time))


def speed_for(mass: float, base_speed: float, size_drag: float, radius_factor: float) -> float:
    """Speed falls off with radius, so bigger cells are always slower."""
    return base_speed / (1 + mass_to_radius(mass, radius_factor) * size_drag)


def player_speed(player: Player, config: ArenaConfig) -> float:
    speed = speed_for(
        player.mass, config.player_base_speed, config.player_size_drag, config.radius_factor
    )
    if player.boost > 0:
        speed *= config.boost_multiplier
    return speed


def bot_speed(bot: Bot, config: ArenaConfig) -> float:
    return speed_for(bot.mass, config.bot_base_speed, config.bot_size_drag, config.radius_factor)


def trigger_boost(player: Player, config: ArenaConfig):
    """(Re)start the boost countdown. Triggers never stack."""
    player.boost = config.boost_duration


def clamp_entity(entity, config: ArenaConfig):
    """Pull an entity back so its whole circle lies inside the world."""
    radius = mass_to_radius(entity.mass, config.radius_factor)
    entity.x, entity.y = clamp_to_world(
        entity.x, entity.y, radius, config.world_width, config.world_height
    )


def move_player(
    player: Player, pointer_target: Tuple[float, float], dt: float, config: ArenaConfig
):
    """Steer the player toward the pointer, then fade the boost."""
    dx = pointer_target[0] - player.x
    dy = pointer_target[1] - player.y
    # Pointer on top of the player: hold still.
    ux, uy = unit_vector(dx, dy, default=(0.0, 0.0))

    speed = player_speed(player, config)
    player.vx = ux * speed
    player.vy = uy * speed

    player.x += player.vx * dt
    player.y += player.vy * dt
    clamp_entity(player, config)

    player.boost = max(0.0, player.boost - dt)


def move_bot(bot: Bot, dt: float, config: ArenaConfig):
    speed = bot_speed(bot, config)
    bot.x += math.cos(bot.heading) * speed * dt
    bot.y += math.sin(bot.heading) * speed * dt
    clamp_entity(bot, config)
