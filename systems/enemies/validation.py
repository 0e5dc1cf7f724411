"""
Validation and integrity checking for the enemy system.

Provides functions to validate that all registered archetypes and the spawn
pools are consistent.
"""

from typing import Dict, List

from .registry import ENEMY_ARCHETYPES
from .selection import SPAWN_POOLS
from .types import (
    ATTACK_AOE, ATTACK_MELEE, ATTACK_RANGED,
    MOVE_CHASE, MOVE_MAINTAIN_DISTANCE, MOVE_PATROL, MOVE_STATIC, MOVE_TELEPORT,
    EnemyArchetype,
)

MOVEMENT_PATTERNS = (MOVE_STATIC, MOVE_PATROL, MOVE_CHASE, MOVE_MAINTAIN_DISTANCE, MOVE_TELEPORT)
ATTACK_PATTERNS = (ATTACK_MELEE, ATTACK_RANGED, ATTACK_AOE)


def validate_archetype(arch: EnemyArchetype) -> List[str]:
    errors = []

    if not arch.name or not arch.name.strip():
        errors.append("Missing or empty name")

    if arch.base_hp <= 0:
        errors.append(f"Invalid base_hp: {arch.base_hp} (must be > 0)")

    if arch.base_damage < 0:
        errors.append(f"Invalid base_damage: {arch.base_damage} (must be >= 0)")

    if arch.base_armor < 0:
        errors.append(f"base_armor cannot be negative: {arch.base_armor}")

    if arch.movement_pattern not in MOVEMENT_PATTERNS:
        errors.append(f"Unknown movement_pattern: {arch.movement_pattern!r}")

    if arch.attack_pattern not in ATTACK_PATTERNS:
        errors.append(f"Unknown attack_pattern: {arch.attack_pattern!r}")

    if arch.attack_range < 1:
        errors.append(f"attack_range must be >= 1, got {arch.attack_range}")

    if arch.aggro_range < 0:
        errors.append(f"aggro_range cannot be negative: {arch.aggro_range}")

    if arch.move_speed < 0:
        errors.append(f"move_speed cannot be negative: {arch.move_speed}")

    # Static movers must not be given a speed, and movers need one
    if arch.movement_pattern == MOVE_STATIC and arch.move_speed != 0:
        errors.append("Static archetype should have move_speed 0")
    if arch.movement_pattern != MOVE_STATIC and arch.move_speed == 0:
        errors.append("Moving archetype has move_speed 0")

    for ability in arch.abilities:
        if ability.turn_interval < 1:
            errors.append(f"Ability '{ability.id}' has turn_interval < 1")

    return errors


def validate_all_archetypes() -> Dict[str, List[str]]:
    """
    Validate all registered archetypes.

    Returns:
        Dict mapping archetype_id to list of errors (empty list if valid)
    """
    return {arch_id: validate_archetype(arch) for arch_id, arch in ENEMY_ARCHETYPES.items()}


def validate_spawn_pools() -> Dict[int, List[str]]:
    """Every pool must be non-empty, positively weighted and name registered archetypes."""
    results = {}
    for tier, pool in SPAWN_POOLS.items():
        errors = []
        if not pool:
            errors.append("Spawn pool is empty")
        for arch_id, weight in pool:
            if arch_id not in ENEMY_ARCHETYPES:
                errors.append(f"Archetype '{arch_id}' not found in registry")
            if weight <= 0:
                errors.append(f"Archetype '{arch_id}' has non-positive weight {weight}")
        results[tier] = errors
    return results
