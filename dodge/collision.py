"""
Player vs bullet collision (AABB, one hit per frame)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .bullets import Bullet
from .configs.game_config import HITBOX_CONFIG
from .entities import Entity
from .player import Player
from .utils import Bounds, inset_bounds, aabb_overlap


@dataclass
class Hit:
    bullet: Bullet
    fatal: bool


def player_hitbox(player: Entity, config: dict = HITBOX_CONFIG) -> Bounds:
    side = config["player_side_padding"]
    return inset_bounds(player, side, side, side, config["player_bottom_padding"])


def bullet_hitbox(bullet: Entity, config: dict = HITBOX_CONFIG) -> Bounds:
    pad = config["bullet_padding"]
    return inset_bounds(bullet, pad, pad, pad, pad)


def check_collisions(
    player: Player,
    bullets: Iterable[Bullet],
    config: dict = HITBOX_CONFIG,
) -> Optional[Hit]:
    """
    Find the first active bullet overlapping the player's hitbox.

    The bullet is consumed and player.hit() is called; scanning stops there,
    so at most one hit lands per call. Nothing is checked while the player
    is invincible.
    """
    if player.state.is_invincible:
        return None

    box = player_hitbox(player.state, config)
    for bullet in bullets:
        if not bullet.is_active:
            continue
        if aabb_overlap(box, bullet_hitbox(bullet.state, config)):
            bullet.deactivate()
            return Hit(bullet=bullet, fatal=player.hit())
    return None
