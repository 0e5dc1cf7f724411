# world/tiles.py

from dataclasses import dataclass


# Tile kinds
FLOOR = "floor"
WALL = "wall"
ENTRANCE = "entrance"
EXIT = "exit"
TRAP = "trap"
CHEST = "chest"      # container
DOOR = "door"
WATER = "water"      # hazard

TILE_KINDS = (FLOOR, WALL, ENTRANCE, EXIT, TRAP, CHEST, DOOR, WATER)


@dataclass(frozen=True)
class Tile:
    """Basic tile definition. Walls are the only kind that blocks movement."""
    kind: str
    walkable: bool


def make_tile(kind: str) -> Tile:
    return Tile(kind=kind, walkable=kind != WALL)


FLOOR_TILE = make_tile(FLOOR)
WALL_TILE = make_tile(WALL)
ENTRANCE_TILE = make_tile(ENTRANCE)
EXIT_TILE = make_tile(EXIT)
TRAP_TILE = make_tile(TRAP)
