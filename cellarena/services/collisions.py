# cellarena/services/collisions.py
"""Collision and consumption rules between cells and pellets."""

import logging
from typing import List, Optional

from cellarena.config.settings import ArenaConfig
from cellarena.models.entities import Bot, Outcome, Pellet, Player
from cellarena.services.movement import clamp_entity
from cellarena.utils.helpers import dist2, mass_to_radius, unit_vector

logger = logging.getLogger(__name__)


def eat_pellets(eater, pellets: List[Pellet], gain: float, config: ArenaConfig) -> int:
    """Let ``eater`` swallow every pellet it overlaps.

    Each pellet adds ``gain * pellet.mass`` to the eater. Eaten pellets are
    removed from ``pellets`` in place and a grown eater is pulled back inside
    the world. Returns how many were eaten.
    """
    reach = mass_to_radius(eater.mass, config.radius_factor) + config.pellet_eat_margin
    reach2 = reach * reach
    eaten = 0
    # Walk backwards so deleting never skips a pellet.
    for i in range(len(pellets) - 1, -1, -1):
        pellet = pellets[i]
        if dist2(eater.x, eater.y, pellet.x, pellet.y) <= reach2:
            eater.mass += pellet.mass * gain
            del pellets[i]
            eaten += 1
    if eaten:
        clamp_entity(eater, config)
    return eaten


def reset_player(player: Player, config: ArenaConfig):
    """Send a defeated player back to the centre at baseline mass."""
    player.x = config.world_width / 2
    player.y = config.world_height / 2
    player.mass = config.start_mass
    player.vx = 0.0
    player.vy = 0.0
    player.boost = 0.0


def overlaps(player: Player, bot: Bot, config: ArenaConfig) -> bool:
    reach = mass_to_radius(player.mass, config.radius_factor) + mass_to_radius(
        bot.mass, config.radius_factor
    )
    return dist2(player.x, player.y, bot.x, bot.y) <= reach * reach


def classify(player_mass: float, bot_mass: float, dominance_ratio: float) -> Outcome:
    """Decide an overlap purely from the two masses."""
    if player_mass > bot_mass * dominance_ratio:
        return Outcome.PLAYER_EATS_BOT
    if bot_mass > player_mass * dominance_ratio:
        return Outcome.BOT_EATS_PLAYER
    return Outcome.BOUNCE


def bounce(player: Player, bot: Bot, dt: float, config: ArenaConfig):
    """Nudge a near-equal pair apart along the line between their centres.

    Both offsets come from the positions before either moves.
    """
    ux, uy = unit_vector(bot.x - player.x, bot.y - player.y)
    step = config.bounce_push * dt
    player.x -= ux * step
    player.y -= uy * step
    bot.x += ux * step
    bot.y += uy * step
    clamp_entity(player, config)
    clamp_entity(bot, config)


def resolve_player_vs_bot(
    player: Player, bot: Bot, dt: float, config: ArenaConfig
) -> Optional[Outcome]:
    """Apply the player/bot rule to one pair.

    Returns None when they do not touch. On PLAYER_EATS_BOT the caller must
    drop the bot from its collection.
    """
    if not overlaps(player, bot, config):
        return None

    outcome = classify(player.mass, bot.mass, config.dominance_ratio)
    if outcome is Outcome.PLAYER_EATS_BOT:
        player.mass += bot.mass * config.bot_absorb_fraction
        clamp_entity(player, config)
        logger.debug("Player ate bot of mass %.1f, now %.1f", bot.mass, player.mass)
    elif outcome is Outcome.BOT_EATS_PLAYER:
        logger.debug(
            "Bot of mass %.1f ate player of mass %.1f, resetting", bot.mass, player.mass
        )
        reset_player(player, config)
    else:
        bounce(player, bot, dt, config)
    return outcome

