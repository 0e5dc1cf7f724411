"""
Enemy instance creation.

Turns an archetype id + level into the EnemyData carried by a floor entity.
"""

import logging
from typing import Optional

from world.entities import ENEMY, MODE_PATROL, MODE_STATIC, BehaviorState, EnemyData, Entity, Position

from .registry import ENEMY_ARCHETYPES, resolve_archetype
from .scaling import compute_scaled_stats

logger = logging.getLogger("crawlcore.enemies")


def create_enemy_data(type_id: Optional[str], level: int, spawn_pos: Position) -> EnemyData:
    """
    Build scaled enemy attributes for ``type_id`` at ``level``.

    Unknown ids are built as goblins.
    """
    if type_id not in ENEMY_ARCHETYPES:
        logger.debug("Unknown enemy type %r, falling back to default archetype", type_id)
    arch = resolve_archetype(type_id)
    stats = compute_scaled_stats(arch, level)

    return EnemyData(
        type_id=arch.id,
        level=level,
        hp=stats.hp,
        max_hp=stats.max_hp,
        damage=stats.damage,
        armor=stats.armor,
        xp_value=stats.xp_value,
        spawn_pos=spawn_pos,
        state=BehaviorState(
            mode=MODE_STATIC if arch.is_static else MODE_PATROL,
            last_hp=stats.hp,
        ),
    )


def create_enemy(entity_id: str, type_id: Optional[str], level: int, pos: Position) -> Entity:
    return Entity(id=entity_id, kind=ENEMY, pos=pos, data=create_enemy_data(type_id, level, pos))
