# world/templates.py

"""
Hand-made floor layouts that can replace a procedurally generated floor.

Layout legend:
    '#' wall    '.' floor    'E' entrance    'X' exit
    'S' floor tile with the shopkeeper standing on it
Unknown characters read as floor; missing characters (short rows) as wall.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from world.entities import NPC, Entity, Position
from world.game_map import Floor
from world.tiles import ENTRANCE_TILE, EXIT_TILE, FLOOR_TILE, WALL_TILE, Tile


@dataclass(frozen=True)
class FloorTemplate:
    id: str
    name: str
    description: str
    width: int
    height: int
    layout: Tuple[str, ...]
    spawn_chance: float
    min_floor: Optional[int] = None
    max_floor: Optional[int] = None
    # Only spawn on floors that are a multiple of this (0 = any floor)
    floor_interval: int = 0


FLOOR_TEMPLATES: Dict[str, FloorTemplate] = {
    "shop": FloorTemplate(
        id="shop",
        name="Shop Floor",
        description="A safe floor with a merchant",
        width=5,
        height=5,
        layout=(
            "#####",
            "#...#",
            "E.S.X",
            "#...#",
            "#####",
        ),
        spawn_chance=0.75,
        min_floor=5,
        floor_interval=5,
    ),
}


def should_spawn_template(template: FloorTemplate, floor_number: int, draw: float) -> bool:
    """True if ``template`` is eligible for ``floor_number`` and ``draw`` wins the roll."""
    if template.min_floor is not None and floor_number < template.min_floor:
        return False
    if template.max_floor is not None and floor_number > template.max_floor:
        return False
    if template.floor_interval and floor_number % template.floor_interval != 0:
        return False
    return draw < template.spawn_chance


def pick_template(floor_number: int, draw: float) -> Optional[FloorTemplate]:
    """First template (in registration order) that spawns for this draw, if any."""
    for template in FLOOR_TEMPLATES.values():
        if should_spawn_template(template, floor_number, draw):
            return template
    return None


def template_to_floor(template: FloorTemplate, seed: str, floor_number: int = 1) -> Floor:
    tiles: List[Tile] = []
    entities: List[Entity] = []
    entrance: Optional[Position] = None
    exit_pos: Optional[Position] = None

    for y in range(template.height):
        row = template.layout[y] if y < len(template.layout) else ""
        for x in range(template.width):
            char = row[x] if x < len(row) else "#"
            if char == "#":
                tiles.append(WALL_TILE)
            elif char == "E":
                tiles.append(ENTRANCE_TILE)
                entrance = (x, y)
            elif char == "X":
                tiles.append(EXIT_TILE)
                exit_pos = (x, y)
            elif char == "S":
                tiles.append(FLOOR_TILE)
                entities.append(
                    Entity(
                        id=f"shopkeeper-{seed}",
                        kind=NPC,
                        pos=(x, y),
                        data={"npc_type": "shopkeeper", "floor": floor_number},
                    )
                )
            else:
                tiles.append(FLOOR_TILE)

    mid_row = template.height // 2
    if entrance is None:
        entrance = (0, mid_row)
        tiles[mid_row * template.width] = ENTRANCE_TILE
    if exit_pos is None:
        exit_pos = (template.width - 1, mid_row)
        tiles[mid_row * template.width + template.width - 1] = EXIT_TILE

    return Floor(
        width=template.width,
        height=template.height,
        seed=seed,
        tiles=tiles,
        entities=entities,
        entrance=entrance,
        exit=exit_pos,
        generated_at=datetime.now().isoformat(),
    )
