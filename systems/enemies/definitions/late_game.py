"""
Late game enemy archetypes (floor 5+).
"""

from ..types import ATTACK_MELEE, MOVE_TELEPORT, EnemyArchetype
from ..registry import register_archetype


def register_late_game_archetypes() -> None:
    """Register all late game enemy archetypes."""

    register_archetype(
        EnemyArchetype(
            id="ghost",
            name="Ghost",
            description="Teleports towards the player unpredictably",
            icon="\U0001F47B",
            base_hp=6,
            base_damage=6,
            base_armor=0,
            xp_multiplier=1.4,
            movement_pattern=MOVE_TELEPORT,
            attack_pattern=ATTACK_MELEE,
            attack_range=1,
            move_speed=1,
            aggro_range=6,
        )
    )
