"""
Floor management system.

Handles per-floor seeds and configs, generation, and caching.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from systems.stats import PlayerStats
from world.entities import Position
from world.game_map import Floor
from world.generation.config import GenerationConfig
from world.mapgen import generate_floor

logger = logging.getLogger("crawlcore.floors")

FLOOR_WIDTH = 5
FLOOR_HEIGHT = 5
FLOOR_WALL_DENSITY = 0.5
FLOOR_CHEST_BUDGET = 2
FLOOR_MIN_PATH_LENGTH = 5


class FloorManager:
    """
    Manages the floors of one run: seeding, generation, and caching.

    Responsibilities:
    - Derive each floor's seed from the run seed
    - Build each floor's generation config (difficulty grows with depth)
    - Chain floors: a floor's entrance is the previous floor's exit
    - Cache generated floors for reuse
    """

    def __init__(self, run_seed: str, starting_floor: int = 1) -> None:
        """
        Initialize the floor manager.

        Args:
            run_seed: Seed for the whole run; floor seeds derive from it
            starting_floor: The initial floor number (default: 1)
        """
        self.run_seed: str = str(run_seed)
        self.floor: int = starting_floor
        self.floors: Dict[int, Floor] = {}  # Cache of generated floors

    def seed_for(self, floor_index: int) -> str:
        return f"{self.run_seed}-floor-{floor_index}"

    def config_for(self, floor_index: int, entrance: Optional[Position] = None) -> GenerationConfig:
        """
        Generation config for a floor.

        Args:
            floor_index: The floor number
            entrance: Where the floor starts (usually the previous exit)

        Returns:
            GenerationConfig for that depth
        """
        return GenerationConfig(
            width=FLOOR_WIDTH,
            height=FLOOR_HEIGHT,
            wall_density=FLOOR_WALL_DENSITY,
            enemy_budget=3 + floor_index // 2,
            chest_budget=FLOOR_CHEST_BUDGET,
            min_path_length=FLOOR_MIN_PATH_LENGTH,
            entrance=entrance,
            use_template=True,
            floor_number=floor_index,
        )

    def get_or_generate_floor(
        self,
        floor_index: int,
        entrance: Optional[Position] = None,
    ) -> Tuple[Floor, bool]:
        """
        Get a floor from cache or generate it if it doesn't exist.

        Args:
            floor_index: The floor number to get or generate
            entrance: Entrance for a new floor; when omitted the exit of the
                cached floor above is used, if there is one

        Returns:
            Tuple of (Floor, is_newly_created)
        """
        floor = self.floors.get(floor_index)
        if floor is not None:
            return floor, False

        if entrance is None:
            previous = self.floors.get(floor_index - 1)
            if previous is not None:
                entrance = previous.exit

        floor = generate_floor(self.seed_for(floor_index), self.config_for(floor_index, entrance))
        self.floors[floor_index] = floor
        logger.debug("Generated floor %d (seed=%s)", floor_index, floor.seed)
        return floor, True

    def get_floor(self, floor_index: int) -> Optional[Floor]:
        """
        Get a floor from cache if it exists.

        Args:
            floor_index: The floor number to get

        Returns:
            Floor if found, None otherwise
        """
        return self.floors.get(floor_index)

    def has_floor(self, floor_index: int) -> bool:
        """Check if a floor has been generated and cached."""
        return floor_index in self.floors

    def store_floor(self, floor_index: int, floor: Floor) -> None:
        """Replace the cached state of a floor (after turns were played on it)."""
        self.floors[floor_index] = floor

    def current_floor(self) -> Floor:
        floor, _ = self.get_or_generate_floor(self.floor)
        return floor

    def next_floor(self) -> Floor:
        """
        Advance to the floor below. Its entrance is the current floor's exit.
        """
        current = self.current_floor()
        self.floor += 1
        floor, _ = self.get_or_generate_floor(self.floor, entrance=current.exit)
        logger.info("Entered floor %d", self.floor)
        return floor


def heal_on_floor_climb(hp: int, stats: PlayerStats) -> int:
    """HP after reaching a new floor: per-floor healing, capped at max HP."""
    return min(stats.max_hp, hp + stats.hp_per_floor)
