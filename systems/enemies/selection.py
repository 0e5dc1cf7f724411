"""
Enemy selection and choice functions.

Handles picking an archetype for a floor from the per-tier spawn pools.
Every pick consumes exactly one draw from the caller's RNG stream.
"""

from typing import Callable, Dict, List, Sequence, Tuple

from .registry import DEFAULT_ARCHETYPE_ID, ENEMY_ARCHETYPES
from .types import EnemyArchetype

# floor tier -> [(archetype id, weight)]
SPAWN_POOLS: Dict[int, List[Tuple[str, int]]] = {
    1: [("goblin", 70), ("turret", 30)],
    2: [("goblin", 50), ("archer", 30), ("turret", 20)],
    3: [("goblin", 40), ("archer", 25), ("brute", 20), ("turret", 15)],
    4: [("goblin", 30), ("archer", 25), ("brute", 20), ("mage", 15), ("turret", 10)],
    5: [
        ("goblin", 20), ("archer", 25), ("brute", 20),
        ("mage", 20), ("ghost", 10), ("turret", 5),
    ],
}

MAX_POOL_TIER = max(SPAWN_POOLS)


def tier_for_floor(floor_number: int) -> int:
    """Floors past the last defined tier reuse the highest pool."""
    return max(1, min(floor_number, MAX_POOL_TIER))


def weighted_choice(items: Sequence[Tuple[str, int]], draw: float) -> str:
    """
    Walk the cumulative weights with ``draw * total``.

    Returns the first item at which the running remainder drops to zero or
    below, or the last item if rounding leaves something over.
    """
    if not items:
        raise ValueError("Cannot choose from an empty spawn pool.")

    total = sum(weight for _, weight in items)
    remaining = draw * total
    for item_id, weight in items:
        remaining -= weight
        if remaining <= 0:
            return item_id
    return items[-1][0]


def select_enemy_type(floor_number: int, rng: Callable[[], float]) -> str:
    """Pick an archetype id for ``floor_number`` using one RNG draw."""
    pool = SPAWN_POOLS[tier_for_floor(floor_number)]
    return weighted_choice(pool, rng())


def choose_archetype_for_floor(floor_number: int, rng: Callable[[], float]) -> EnemyArchetype:
    arch_id = select_enemy_type(floor_number, rng)
    return ENEMY_ARCHETYPES.get(arch_id) or ENEMY_ARCHETYPES[DEFAULT_ARCHETYPE_ID]
