# world/path.py

import logging
from typing import List, Set

from world.entities import Position, manhattan
from world.rng import SeededRng

logger = logging.getLogger("crawlcore.path")

# Chance per step of letting worse-ranked neighbours into the pool
DETOUR_CHANCE = 0.15
TOP_CANDIDATES = 3


def _within_bounds(p: Position, width: int, height: int) -> bool:
    return 0 <= p[0] < width and 0 <= p[1] < height


def _neighbors(p: Position) -> List[Position]:
    x, y = p
    return [(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)]


def _straight_line(start: Position, end: Position) -> List[Position]:
    """L-shaped connector: walk along x first, then y. Excludes ``start``."""
    steps: List[Position] = []
    x, y = start
    while (x, y) != end:
        if x < end[0]:
            x += 1
        elif x > end[0]:
            x -= 1
        elif y < end[1]:
            y += 1
        else:
            y -= 1
        steps.append((x, y))
    return steps


def carve_path(
    entrance: Position,
    exit: Position,
    width: int,
    height: int,
    rng: SeededRng,
    min_length: int = 3,
) -> List[Position]:
    """
    Biased random walk from ``entrance`` to ``exit``.

    Each step ranks the in-bounds orthogonal neighbours by Manhattan distance
    to the exit and picks among the best few, sometimes (DETOUR_CHANCE)
    allowing the rest as well. Unvisited cells are preferred. If the walk
    does not arrive within width*height*4 steps an L-shaped connector
    finishes the job. Short paths are padded with random single steps until
    they reach ``min_length``.

    The result always starts at ``entrance`` and is never empty.
    """
    path: List[Position] = [entrance]
    visited: Set[Position] = {entrance}
    current = entrance

    max_steps = width * height * 4
    steps = 0

    while current != exit and steps < max_steps:
        steps += 1
        cand = [n for n in _neighbors(current) if _within_bounds(n, width, height)]
        if not cand:
            break
        # stable sort keeps E/W/S/N order among equally good moves
        cand.sort(key=lambda n: manhattan(n, exit))

        top_k = max(1, min(TOP_CANDIDATES, len(cand)))
        choice_pool = cand[:top_k]

        if rng() < DETOUR_CHANCE and len(cand) > top_k:
            choice_pool.extend(cand[top_k:])

        unvisited = [c for c in choice_pool if c not in visited]
        pool = unvisited if unvisited else choice_pool
        nxt = pool[rng.randrange(len(pool))]

        path.append(nxt)
        visited.add(nxt)
        current = nxt

    if current != exit:
        logger.debug(
            "path walk from %s did not reach %s in %d steps; using straight connector",
            entrance, exit, steps,
        )
        path.extend(_straight_line(current, exit))

    # Pad with detours so short floors still get some corridor to walk
    while len(path) < min_length:
        last = path[-1]
        cand = [n for n in _neighbors(last) if _within_bounds(n, width, height)]
        if not cand:
            break
        path.append(cand[rng.randrange(len(cand))])

    return path
