# world/entities.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple, Union

Position = Tuple[int, int]

# Entity kinds
ENEMY = "enemy"
ITEM = "item"
RELIC = "relic"
NPC = "npc"

# Enemy behaviour modes
MODE_STATIC = "static"
MODE_PATROL = "patrol"
MODE_FOLLOW = "follow"


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class BehaviorState:
    """
    Per-enemy AI bookkeeping.

    - mode:              "static" | "patrol" | "follow" ("follow" is sticky)
    - last_hp:           hp seen at the end of the enemy's previous turn,
                         used to notice damage taken in between
    - ability_last_used: ability id -> turn it last fired
    - last_move_turn:    turn of the last move attempt (slow movers)
    """
    mode: str = MODE_PATROL
    last_hp: Optional[int] = None
    ability_last_used: Dict[str, int] = field(default_factory=dict)
    last_move_turn: int = 0

    def copy(self) -> "BehaviorState":
        return replace(self, ability_last_used=dict(self.ability_last_used))


@dataclass
class EnemyData:
    """Combat attributes of one enemy instance."""
    type_id: str
    level: int
    hp: int
    max_hp: int
    damage: int
    armor: int
    xp_value: int = 0
    spawn_pos: Optional[Position] = None
    state: BehaviorState = field(default_factory=BehaviorState)

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def copy(self) -> "EnemyData":
        return replace(self, state=self.state.copy())


@dataclass
class Entity:
    """
    Something that occupies a grid cell: enemy, item, relic or npc.

    ``data`` holds an EnemyData for enemies and a free-form dict otherwise.
    """
    id: str
    kind: str
    pos: Position
    data: Union[EnemyData, Dict[str, Any]] = field(default_factory=dict)

    @property
    def x(self) -> int:
        return self.pos[0]

    @property
    def y(self) -> int:
        return self.pos[1]

    @property
    def enemy(self) -> Optional[EnemyData]:
        return self.data if isinstance(self.data, EnemyData) else None

    def copy(self) -> "Entity":
        if isinstance(self.data, EnemyData):
            return replace(self, data=self.data.copy())
        return replace(self, data=dict(self.data))


@dataclass(frozen=True)
class Interaction:
    """
    Presentation hint produced by a turn: what happened and where.

    type: "enemy-aggro" | "enemy-attack" | "attack" | "bump" | "ability"
    """
    type: str
    target_pos: Position
    attacker_id: Optional[str] = None
    enemy_ids: Tuple[str, ...] = ()
    ability_id: Optional[str] = None
