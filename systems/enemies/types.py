"""
Enemy type definitions.

Contains the core dataclasses for enemy archetypes and their abilities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional

from world.entities import Position

if TYPE_CHECKING:
    from world.entities import EnemyData, Entity
    from world.game_map import Floor


# Movement patterns
MOVE_STATIC = "static"                        # never moves
MOVE_PATROL = "patrol"                        # wanders near spawn, chases once aggroed
MOVE_CHASE = "chase"                          # pursues the player
MOVE_MAINTAIN_DISTANCE = "maintain-distance"  # holds at attack range
MOVE_TELEPORT = "teleport"                    # blinks towards the player

# Attack patterns
ATTACK_MELEE = "melee"
ATTACK_RANGED = "ranged"
ATTACK_AOE = "aoe"


@dataclass(frozen=True)
class EnemyStats:
    hp: int
    max_hp: int
    damage: int
    armor: int
    xp_value: int


@dataclass(frozen=True)
class VisualEffect:
    """What the presentation layer should draw for an ability."""
    type: str                       # "projectile" | "aoe" | "buff" | "teleport"
    from_pos: Position
    to_pos: Optional[Position] = None
    radius: Optional[int] = None
    icon: str = ""


@dataclass
class EnemyAbilityContext:
    floor: "Floor"
    enemy: "Entity"
    enemy_data: "EnemyData"
    player_pos: Position
    turn: int


@dataclass
class EnemyAbilityResult:
    player_damage: int = 0
    visual_effect: Optional[VisualEffect] = None


@dataclass(frozen=True)
class EnemyAbility:
    """
    Scripted enemy ability fired every ``turn_interval`` turns while the
    enemy is following the player.
    """
    id: str
    name: str
    description: str
    icon: str
    turn_interval: int
    execute: Callable[[EnemyAbilityContext], EnemyAbilityResult]


@dataclass
class EnemyArchetype:
    """
    Defines a *type* of enemy that can appear on a floor.

    - id:               stable internal id (used for lookups)
    - name / icon:      display data for the presentation layer
    - base_*:           stats before level scaling
    - xp_multiplier:    relative xp worth
    - movement_pattern: how it moves once aggroed (see MOVE_*)
    - attack_pattern:   melee / ranged / aoe
    - attack_range:     Manhattan distance it can attack from
    - move_speed:       1 = every turn, 0.5 = every other turn, 0 = never
    - aggro_range:      Manhattan distance at which it starts following
    - abilities:        cooldown abilities fired while following
    - scale_stats:      optional per-type replacement for default scaling
    """
    id: str
    name: str
    description: str
    icon: str

    base_hp: int
    base_damage: int
    base_armor: int
    xp_multiplier: float

    movement_pattern: str
    attack_pattern: str
    attack_range: int
    move_speed: float
    aggro_range: int

    abilities: List[EnemyAbility] = field(default_factory=list)
    immunities: List[str] = field(default_factory=list)
    scale_stats: Optional[Callable[[EnemyStats, int], EnemyStats]] = None

    @property
    def is_static(self) -> bool:
        return self.movement_pattern == MOVE_STATIC
