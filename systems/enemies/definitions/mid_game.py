"""
Mid game enemy archetypes.

Heavier hitters and the first spellcaster, from floor 3 onwards.
"""

from ..abilities import FIREBALL
from ..types import ATTACK_MELEE, ATTACK_RANGED, MOVE_CHASE, MOVE_MAINTAIN_DISTANCE, EnemyArchetype
from ..registry import register_archetype


def register_mid_game_archetypes() -> None:
    """Register all mid game enemy archetypes."""

    register_archetype(
        EnemyArchetype(
            id="brute",
            name="Brute",
            description="Slow but powerful melee enemy",
            icon="\U0001F4AA",
            base_hp=15,
            base_damage=10,
            base_armor=2,
            xp_multiplier=1.3,
            movement_pattern=MOVE_CHASE,
            attack_pattern=ATTACK_MELEE,
            attack_range=1,
            move_speed=0.5,  # every other turn
            aggro_range=3,
        )
    )

    register_archetype(
        EnemyArchetype(
            id="mage",
            name="Mage",
            description="Spellcaster that uses abilities every few turns",
            icon="\U0001F9D9",
            base_hp=4,
            base_damage=3,
            base_armor=0,
            xp_multiplier=1.5,
            movement_pattern=MOVE_MAINTAIN_DISTANCE,
            attack_pattern=ATTACK_RANGED,
            attack_range=3,
            move_speed=1,
            aggro_range=4,
            abilities=[FIREBALL],
        )
    )
