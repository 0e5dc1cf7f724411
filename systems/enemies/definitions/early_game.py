"""
Early game enemy archetypes.

These are the basic enemies that appear from the first floor onwards.
"""

from settings import DEFAULT_AGGRO_RANGE

from ..types import ATTACK_MELEE, ATTACK_RANGED, MOVE_MAINTAIN_DISTANCE, MOVE_PATROL, MOVE_STATIC, EnemyArchetype
from ..registry import register_archetype


def register_early_game_archetypes() -> None:
    """Register all early game enemy archetypes."""

    # --- Floor 1-2: fodder ------------------------------------------------

    register_archetype(
        EnemyArchetype(
            id="goblin",
            name="Goblin",
            description="Weak melee enemy that patrols its territory",
            icon="\U0001F479",
            base_hp=5,
            base_damage=5,
            base_armor=0,
            xp_multiplier=1.0,
            movement_pattern=MOVE_PATROL,
            attack_pattern=ATTACK_MELEE,
            attack_range=1,
            move_speed=1,
            aggro_range=DEFAULT_AGGRO_RANGE,
        )
    )

    register_archetype(
        EnemyArchetype(
            id="turret",
            name="Turret",
            description="Stationary enemy that fires projectiles",
            icon="\U0001F52B",
            base_hp=8,
            base_damage=8,
            base_armor=1,
            xp_multiplier=1.1,
            movement_pattern=MOVE_STATIC,
            attack_pattern=ATTACK_RANGED,
            attack_range=5,
            move_speed=0,  # never moves
            aggro_range=6,
        )
    )

    register_archetype(
        EnemyArchetype(
            id="archer",
            name="Archer",
            description="Ranged enemy that keeps its distance",
            icon="\U0001F3F9",
            base_hp=3,
            base_damage=7,
            base_armor=0,
            xp_multiplier=1.2,
            movement_pattern=MOVE_MAINTAIN_DISTANCE,
            attack_pattern=ATTACK_RANGED,
            attack_range=4,
            move_speed=1,
            aggro_range=5,
        )
    )
