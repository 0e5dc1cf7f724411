"""
Enemy stat scaling functions.

Handles scaling enemy stats based on level (the floor number at spawn time).
"""

from .types import EnemyArchetype, EnemyStats

HP_PER_LEVEL = 2
LEVELS_PER_DAMAGE = 2
LEVELS_PER_ARMOR = 5
XP_PER_LEVEL = 5


def default_scaling(base: EnemyStats, level: int) -> EnemyStats:
    """Linear scaling: +2 hp per level, +1 damage every 2, +1 armor every 5."""
    hp = base.hp + HP_PER_LEVEL * level
    return EnemyStats(
        hp=hp,
        max_hp=hp,
        damage=base.damage + level // LEVELS_PER_DAMAGE,
        armor=base.armor + level // LEVELS_PER_ARMOR,
        xp_value=XP_PER_LEVEL * level,
    )


def base_stats(arch: EnemyArchetype) -> EnemyStats:
    return EnemyStats(
        hp=arch.base_hp,
        max_hp=arch.base_hp,
        damage=arch.base_damage,
        armor=arch.base_armor,
        xp_value=XP_PER_LEVEL,
    )


def compute_scaled_stats(arch: EnemyArchetype, level: int) -> EnemyStats:
    """Scale an archetype's stats for ``level`` using its own rule if it has one."""
    scale = arch.scale_stats or default_scaling
    return scale(base_stats(arch), level)
