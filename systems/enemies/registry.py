"""
Enemy registry system.

Manages the global registry of enemy archetypes.
"""

from typing import Dict, Optional

from .types import EnemyArchetype

# Global registry
ENEMY_ARCHETYPES: Dict[str, EnemyArchetype] = {}

# Used for enemies whose type id is missing or unknown
DEFAULT_ARCHETYPE_ID = "goblin"


def register_archetype(arch: EnemyArchetype) -> EnemyArchetype:
    """Register an enemy archetype."""
    ENEMY_ARCHETYPES[arch.id] = arch
    return arch


def get_archetype(arch_id: str) -> EnemyArchetype:
    """Get an enemy archetype by ID."""
    return ENEMY_ARCHETYPES[arch_id]


def resolve_archetype(arch_id: Optional[str]) -> EnemyArchetype:
    """Like get_archetype, but unknown or missing ids fall back to the goblin."""
    if arch_id and arch_id in ENEMY_ARCHETYPES:
        return ENEMY_ARCHETYPES[arch_id]
    return ENEMY_ARCHETYPES[DEFAULT_ARCHETYPE_ID]
