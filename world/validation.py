# world/validation.py

"""Post-generation solvability checks for a floor."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Set

from world.entities import Position
from world.game_map import Floor

EXIT_NOT_REACHABLE = "exit-not-reachable"
ENTITY_OVERLAP = "entity-overlap"


@dataclass
class ValidationResult:
    solvable: bool
    errors: List[str] = field(default_factory=list)


def _neighbors(p: Position) -> List[Position]:
    x, y = p
    return [(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)]


def exit_reachable(floor: Floor) -> bool:
    """Breadth-first search from the entrance over walkable tiles."""
    queue: Deque[Position] = deque([floor.entrance])
    seen: Set[Position] = {floor.entrance}

    while queue:
        cur = queue.popleft()
        if cur == floor.exit:
            return True
        for n in _neighbors(cur):
            if n in seen or not floor.is_walkable(n):
                continue
            seen.add(n)
            queue.append(n)
    return False


def validate_floor(floor: Floor) -> ValidationResult:
    """
    Report whether the exit can be reached from the entrance, plus one
    ``entity-overlap:x,y`` error for every entity sharing a cell with an
    earlier one.
    """
    errors: List[str] = []
    solvable = exit_reachable(floor)
    if not solvable:
        errors.append(EXIT_NOT_REACHABLE)

    occupied: Set[Position] = set()
    for ent in floor.entities:
        if ent.pos in occupied:
            errors.append(f"{ENTITY_OVERLAP}:{ent.pos[0]},{ent.pos[1]}")
        occupied.add(ent.pos)

    return ValidationResult(solvable=solvable, errors=errors)
