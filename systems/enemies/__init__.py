"""
Enemy system module.

This module provides enemy archetypes, their scaling and spawn selection,
and the factory that builds enemy instances for a floor.

All public APIs are exported from this module.
"""

from .types import (
    ATTACK_AOE, ATTACK_MELEE, ATTACK_RANGED,
    MOVE_CHASE, MOVE_MAINTAIN_DISTANCE, MOVE_PATROL, MOVE_STATIC, MOVE_TELEPORT,
    EnemyAbility, EnemyAbilityContext, EnemyAbilityResult, EnemyArchetype,
    EnemyStats, VisualEffect,
)
from .registry import (
    DEFAULT_ARCHETYPE_ID, ENEMY_ARCHETYPES,
    get_archetype, register_archetype, resolve_archetype,
)
from .scaling import compute_scaled_stats, default_scaling
from .selection import (
    SPAWN_POOLS, choose_archetype_for_floor, select_enemy_type,
    tier_for_floor, weighted_choice,
)
from .factory import create_enemy, create_enemy_data

# Register all definitions on import
from .definitions import register_all_definitions
register_all_definitions()

__all__ = [
    "ATTACK_AOE",
    "ATTACK_MELEE",
    "ATTACK_RANGED",
    "MOVE_CHASE",
    "MOVE_MAINTAIN_DISTANCE",
    "MOVE_PATROL",
    "MOVE_STATIC",
    "MOVE_TELEPORT",
    "EnemyAbility",
    "EnemyAbilityContext",
    "EnemyAbilityResult",
    "EnemyArchetype",
    "EnemyStats",
    "VisualEffect",
    "DEFAULT_ARCHETYPE_ID",
    "ENEMY_ARCHETYPES",
    "get_archetype",
    "register_archetype",
    "resolve_archetype",
    "compute_scaled_stats",
    "default_scaling",
    "SPAWN_POOLS",
    "choose_archetype_for_floor",
    "select_enemy_type",
    "tier_for_floor",
    "weighted_choice",
    "create_enemy",
    "create_enemy_data",
]
