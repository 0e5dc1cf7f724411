"""
Unit tests for the FloorManager class.
"""

import pytest
from engine.managers.floor_manager import FloorManager, heal_on_floor_climb
from systems.stats import PlayerStats
from world.game_map import Floor
from world.validation import validate_floor


class TestFloorManager:
    """Tests for FloorManager."""

    def test_floor_manager_initialization(self, floor_manager):
        """Test that FloorManager initializes correctly."""
        assert floor_manager.floor == 1
        assert floor_manager.floors == {}
        assert floor_manager.run_seed == "test-run"

    def test_floor_manager_custom_starting_floor(self):
        """Test FloorManager with custom starting floor."""
        manager = FloorManager("run", starting_floor=5)
        assert manager.floor == 5

    def test_seed_for(self, floor_manager):
        assert floor_manager.seed_for(3) == "test-run-floor-3"

    def test_config_for(self, floor_manager):
        """Budgets grow with depth; the rest is fixed."""
        config = floor_manager.config_for(4)
        assert (config.width, config.height) == (5, 5)
        assert config.wall_density == 0.5
        assert config.enemy_budget == 5
        assert config.chest_budget == 2
        assert config.min_path_length == 5
        assert config.use_template is True
        assert config.floor_number == 4
        assert floor_manager.config_for(1).enemy_budget == 3
        assert floor_manager.config_for(9).enemy_budget == 7

    def test_has_floor(self, floor_manager):
        """Test checking if a floor exists."""
        assert floor_manager.has_floor(1) is False
        floor_manager.get_or_generate_floor(1)
        assert floor_manager.has_floor(1) is True
        assert floor_manager.has_floor(5) is False

    def test_get_or_generate_floor_creates_new(self, floor_manager):
        """Test that get_or_generate_floor creates new floors."""
        floor, newly_created = floor_manager.get_or_generate_floor(1)
        assert newly_created is True
        assert isinstance(floor, Floor)
        assert floor.seed == "test-run-floor-1"
        assert validate_floor(floor).solvable is True
        assert len(floor_manager.floors) == 1

    def test_get_or_generate_floor_reuses_existing(self, floor_manager):
        """Test that get_or_generate_floor reuses existing floors."""
        first, created1 = floor_manager.get_or_generate_floor(1)
        second, created2 = floor_manager.get_or_generate_floor(1)
        assert created1 is True
        assert created2 is False
        assert first is second

    def test_get_floor_returns_existing(self, floor_manager):
        """Test get_floor returns existing floor or None."""
        assert floor_manager.get_floor(1) is None
        floor_manager.get_or_generate_floor(1)
        assert isinstance(floor_manager.get_floor(1), Floor)

    def test_store_floor(self, floor_manager):
        floor, _ = floor_manager.get_or_generate_floor(1)
        emptied = floor.with_entities([])
        floor_manager.store_floor(1, emptied)
        assert floor_manager.get_floor(1) is emptied

    def test_next_floor_chains_entrance(self, floor_manager):
        first = floor_manager.current_floor()
        second = floor_manager.next_floor()
        third = floor_manager.next_floor()
        assert floor_manager.floor == 3
        assert second.entrance == first.exit
        assert third.entrance == second.exit
        for floor in (first, second, third):
            assert floor.entrance != floor.exit
            assert validate_floor(floor).solvable is True

    def test_runs_are_reproducible(self):
        a = FloorManager("same-run")
        b = FloorManager("same-run")
        for _ in range(3):
            fa = a.next_floor()
            fb = b.next_floor()
            assert fa.to_dict(include_timestamp=False) == fb.to_dict(include_timestamp=False)


class TestHealOnFloorClimb:
    """Tests for vitality healing."""

    def test_no_charms(self):
        assert heal_on_floor_climb(40, PlayerStats()) == 40

    def test_heal(self):
        assert heal_on_floor_climb(40, PlayerStats(hp_per_floor=10)) == 50

    def test_capped_at_max(self):
        assert heal_on_floor_climb(98, PlayerStats(max_hp=100, hp_per_floor=5)) == 100
