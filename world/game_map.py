# world/game_map.py

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from settings import FLOOR_VERSION
from world.entities import Entity, Position
from world.tiles import FLOOR_TILE, Tile


@dataclass
class Floor:
    """
    A single dungeon floor.

    Tiles are stored row-major (index = y * width + x). The entity list
    order matters: the enemy turn processes enemies in this order.
    """
    width: int
    height: int
    seed: str
    tiles: List[Tile]
    entities: List[Entity]
    entrance: Position
    exit: Position
    generated_at: str = ""
    version: str = FLOOR_VERSION

    # ------------------------------------------------------------------
    # Tile helpers
    # ------------------------------------------------------------------

    def in_bounds(self, pos: Position) -> bool:
        """Return True if the tile coordinate is inside the map."""
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def index_of(self, pos: Position) -> int:
        return pos[1] * self.width + pos[0]

    def tile_at(self, pos: Position) -> Optional[Tile]:
        if not self.in_bounds(pos):
            return None
        return self.tiles[self.index_of(pos)]

    def is_walkable(self, pos: Position) -> bool:
        """Outside the map = not walkable."""
        tile = self.tile_at(pos)
        return tile is not None and tile.walkable

    def set_tile(self, pos: Position, tile: Tile) -> None:
        self.tiles[self.index_of(pos)] = tile

    # ------------------------------------------------------------------
    # Entity helpers
    # ------------------------------------------------------------------

    def entity_at(self, pos: Position) -> Optional[Entity]:
        for ent in self.entities:
            if ent.pos == pos:
                return ent
        return None

    def get_entity(self, entity_id: str) -> Optional[Entity]:
        for ent in self.entities:
            if ent.id == entity_id:
                return ent
        return None

    def enemies(self) -> List[Entity]:
        return [e for e in self.entities if e.enemy is not None]

    def with_entities(self, entities: List[Entity]) -> "Floor":
        """Shallow copy of this floor with a different entity list."""
        return replace(self, entities=list(entities))

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self, include_timestamp: bool = True) -> Dict[str, Any]:
        """
        Plain-data view of the floor. With include_timestamp=False two floors
        generated from the same seed and config compare equal.
        """
        data: Dict[str, Any] = {
            "width": self.width,
            "height": self.height,
            "seed": self.seed,
            "tiles": [[t.kind, t.walkable] for t in self.tiles],
            "entities": [_entity_to_dict(e) for e in self.entities],
            "entrance": list(self.entrance),
            "exit": list(self.exit),
            "version": self.version,
        }
        if include_timestamp:
            data["generated_at"] = self.generated_at
        return data


def _entity_to_dict(ent: Entity) -> Dict[str, Any]:
    enemy = ent.enemy
    if enemy is None:
        payload: Dict[str, Any] = dict(ent.data)
    else:
        payload = {
            "type_id": enemy.type_id,
            "level": enemy.level,
            "hp": enemy.hp,
            "max_hp": enemy.max_hp,
            "damage": enemy.damage,
            "armor": enemy.armor,
            "xp_value": enemy.xp_value,
            "spawn_pos": list(enemy.spawn_pos) if enemy.spawn_pos else None,
            "state": {
                "mode": enemy.state.mode,
                "last_hp": enemy.state.last_hp,
                "ability_last_used": dict(enemy.state.ability_last_used),
                "last_move_turn": enemy.state.last_move_turn,
            },
        }
    return {"id": ent.id, "kind": ent.kind, "pos": list(ent.pos), "data": payload}


def open_floor(
    width: int,
    height: int,
    *,
    seed: str = "open",
    entrance: Position = (0, 0),
    exit: Optional[Position] = None,
    entities: Optional[List[Entity]] = None,
) -> Floor:
    """All-floor map without walls. Handy for tests and fallbacks."""
    return Floor(
        width=width,
        height=height,
        seed=seed,
        tiles=[FLOOR_TILE for _ in range(width * height)],
        entities=list(entities or []),
        entrance=entrance,
        exit=exit if exit is not None else (width - 1, height - 1),
    )
