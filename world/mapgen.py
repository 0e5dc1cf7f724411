# world/mapgen.py

import logging
from datetime import datetime
from typing import List, Optional, Set, Tuple

from systems.enemies import create_enemy, select_enemy_type
from telemetry.logger import telemetry
from world.entities import ITEM, Entity, Position, manhattan
from world.game_map import Floor
from world.generation.config import GenerationConfig
from world.path import carve_path
from world.rng import Seed, create_rng
from world.templates import pick_template, template_to_floor
from world.tiles import ENTRANCE, ENTRANCE_TILE, EXIT, EXIT_TILE, FLOOR_TILE, WALL, WALL_TILE, Tile
from world.validation import validate_floor

logger = logging.getLogger("crawlcore.mapgen")


def _clamp_to_grid(pos: Position, width: int, height: int) -> Position:
    return min(max(pos[0], 0), width - 1), min(max(pos[1], 0), height - 1)


def _farthest_corner(pos: Position, width: int, height: int) -> Position:
    corners = [(0, 0), (width - 1, 0), (0, height - 1), (width - 1, height - 1)]
    # max() keeps the first of equally distant corners
    return max(corners, key=lambda c: manhattan(c, pos))


def _resolve_endpoints(config: GenerationConfig) -> Tuple[Position, Position]:
    """
    Entrance and exit for this config, kept inside the grid and apart.

    When the exit ends up on the entrance (a carried-over entrance on the
    default exit cell, or two explicit cells that clamp together) the exit
    moves to the mirrored cell on the other edge, or the farthest corner.
    """
    w, h = config.width, config.height
    entrance = _clamp_to_grid(config.resolved_entrance(), w, h)
    exit_pos = _clamp_to_grid(config.resolved_exit(), w, h)
    if entrance != config.resolved_entrance() or exit_pos != config.resolved_exit():
        logger.debug("Clamped floor endpoints into a %dx%d grid", w, h)

    if exit_pos == entrance:
        logger.debug("Exit %s clashes with the entrance, relocating", exit_pos)
        exit_pos = (w - 1 - entrance[0], entrance[1])
        if exit_pos == entrance:
            exit_pos = _farthest_corner(entrance, w, h)
    return entrance, exit_pos


def _occupied(entities: List[Entity], pos: Position) -> bool:
    return any(e.pos == pos for e in entities)


def generate_floor(seed: Seed, config: Optional[GenerationConfig] = None) -> Floor:
    """
    Build a complete floor from ``seed``.

    Every random decision draws from one stream in a fixed order:
    template roll (only when ``use_template`` is set), path, walls, chests,
    then enemies (a placement draw per enemy plus an archetype draw for each
    enemy actually placed). The same seed and config therefore always give
    the same floor; only ``generated_at`` differs between runs.

    If the finished floor is not solvable every wall is cleared. Raises
    ConfigError only for configs no floor can be built from.
    """
    if config is None:
        config = GenerationConfig()
    config.validate()
    rng = create_rng(seed)
    seed_str = str(seed)

    if config.use_template:
        template = pick_template(config.floor_number, rng())
        if template is not None:
            floor = template_to_floor(template, seed_str, config.floor_number)
            logger.info("Floor %d uses template %r (seed=%s)", config.floor_number, template.id, seed_str)
            telemetry.log(
                "floor_generated",
                seed=seed_str,
                floor_number=config.floor_number,
                template=template.id,
                width=floor.width,
                height=floor.height,
                enemies=0,
                chests=0,
                fallback=False,
            )
            return floor

    width, height = config.width, config.height
    entrance, exit_pos = _resolve_endpoints(config)

    path = carve_path(entrance, exit_pos, width, height, rng, config.min_path_length)
    path_cells: Set[Position] = set(path)

    tiles: List[Tile] = [FLOOR_TILE for _ in range(width * height)]
    tiles[entrance[1] * width + entrance[0]] = ENTRANCE_TILE
    tiles[exit_pos[1] * width + exit_pos[0]] = EXIT_TILE

    # Walls: every cell off the path rolls once, in row-major order
    for i in range(len(tiles)):
        pos = (i % width, i // width)
        if pos == entrance or pos == exit_pos or pos in path_cells:
            continue
        if rng() < config.wall_density:
            tiles[i] = WALL_TILE

    entities: List[Entity] = []

    # Chests go on open cells off the path
    chest_cells = [
        (i % width, i // width)
        for i, t in enumerate(tiles)
        if t.walkable and (i % width, i // width) not in path_cells
    ]
    for c in range(config.chest_budget):
        if not chest_cells:
            break
        pos = chest_cells[rng.randrange(len(chest_cells))]
        if _occupied(entities, pos):
            continue
        entities.append(Entity(id=f"chest-{c}", kind=ITEM, pos=pos, data={"chest": True}))

    # Enemies keep their distance from the entrance
    enemy_cells = [
        (i % width, i // width)
        for i, t in enumerate(tiles)
        if t.walkable
        and t.kind not in (ENTRANCE, EXIT)
        and manhattan((i % width, i // width), entrance) >= 2
    ]
    for e in range(config.enemy_budget):
        if not enemy_cells:
            break
        pos = enemy_cells[rng.randrange(len(enemy_cells))]
        if _occupied(entities, pos):
            continue
        type_id = select_enemy_type(config.floor_number, rng)
        entities.append(create_enemy(f"enemy-{e}", type_id, config.floor_number, pos))

    floor = Floor(
        width=width,
        height=height,
        seed=seed_str,
        tiles=tiles,
        entities=entities,
        entrance=entrance,
        exit=exit_pos,
        generated_at=datetime.now().isoformat(),
    )

    result = validate_floor(floor)
    fallback = not result.solvable
    if fallback:
        logger.info("Floor %s not solvable (%s); clearing walls", seed_str, ", ".join(result.errors))
        floor.tiles = [FLOOR_TILE if t.kind == WALL else t for t in floor.tiles]
    elif result.errors:
        logger.warning("Floor %s failed validation: %s", seed_str, ", ".join(result.errors))

    telemetry.log(
        "floor_generated",
        seed=seed_str,
        floor_number=config.floor_number,
        template=None,
        width=width,
        height=height,
        enemies=sum(1 for ent in entities if ent.enemy is not None),
        chests=sum(1 for ent in entities if ent.kind == ITEM),
        fallback=fallback,
    )
    return floor
