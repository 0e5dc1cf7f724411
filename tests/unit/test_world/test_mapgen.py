"""
Unit tests for procedural floor generation.
"""

import pytest

import world.mapgen as mapgen
from engine.error_handler import ConfigError
from systems.enemies import SPAWN_POOLS
from world.entities import ITEM, MODE_PATROL, MODE_STATIC, NPC, manhattan
from world.generation.config import GenerationConfig
from world.mapgen import generate_floor
from world.tiles import ENTRANCE, EXIT, WALL
from world.validation import EXIT_NOT_REACHABLE, ValidationResult, validate_floor

SEEDS = ["alpha", "beta", "gamma", "delta", "epsilon", "zeta", "eta", "theta"]


class TestGenerateFloor:
    """Tests for generate_floor."""

    @pytest.mark.parametrize("seed", SEEDS)
    def test_floor_is_solvable(self, seed):
        floor = generate_floor(seed, GenerationConfig(width=7, height=7, wall_density=0.6))
        assert validate_floor(floor).solvable is True

    @pytest.mark.parametrize("seed", SEEDS)
    def test_entrance_and_exit(self, seed):
        floor = generate_floor(seed, GenerationConfig(width=6, height=4))
        assert floor.entrance != floor.exit
        assert floor.tile_at(floor.entrance).kind == ENTRANCE
        assert floor.tile_at(floor.exit).kind == EXIT
        assert floor.is_walkable(floor.entrance)
        assert floor.is_walkable(floor.exit)

    def test_same_seed_same_floor(self):
        config = GenerationConfig(width=8, height=6, wall_density=0.3, enemy_budget=4, chest_budget=2)
        first = generate_floor("replay", config)
        second = generate_floor("replay", config)
        assert first.to_dict(include_timestamp=False) == second.to_dict(include_timestamp=False)

    def test_different_seeds_usually_differ(self):
        config = GenerationConfig(width=8, height=8, wall_density=0.4)
        layouts = {
            tuple(t.kind for t in generate_floor(seed, config).tiles) for seed in SEEDS
        }
        assert len(layouts) > 1

    def test_floor_metadata(self):
        floor = generate_floor("meta", GenerationConfig())
        assert floor.seed == "meta"
        assert floor.width == 5 and floor.height == 5
        assert len(floor.tiles) == 25
        assert floor.generated_at
        assert floor.version

    @pytest.mark.parametrize("seed", SEEDS)
    def test_no_entities_share_a_cell(self, seed):
        config = GenerationConfig(width=5, height=5, enemy_budget=8, chest_budget=4)
        floor = generate_floor(seed, config)
        positions = [e.pos for e in floor.entities]
        assert len(positions) == len(set(positions))

    @pytest.mark.parametrize("seed", SEEDS)
    def test_budgets_are_upper_bounds(self, seed):
        config = GenerationConfig(width=6, height=6, enemy_budget=3, chest_budget=2)
        floor = generate_floor(seed, config)
        assert len(floor.enemies()) <= 3
        assert sum(1 for e in floor.entities if e.kind == ITEM) <= 2

    @pytest.mark.parametrize("seed", SEEDS)
    def test_enemies_start_idle(self, seed):
        floor = generate_floor(seed, GenerationConfig(width=7, height=7, enemy_budget=6, floor_number=5))
        assert floor.enemies()
        for ent in floor.enemies():
            assert ent.enemy.state.mode in (MODE_STATIC, MODE_PATROL)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_enemies_keep_away_from_entrance(self, seed):
        floor = generate_floor(seed, GenerationConfig(width=6, height=6, enemy_budget=6))
        for ent in floor.enemies():
            assert manhattan(ent.pos, floor.entrance) >= 2
            assert ent.pos != floor.exit
            assert floor.is_walkable(ent.pos)

    def test_enemies_match_floor_pool_and_level(self):
        pool_ids = {arch_id for arch_id, _ in SPAWN_POOLS[1]}
        for seed in SEEDS:
            floor = generate_floor(seed, GenerationConfig(width=6, height=6, enemy_budget=5, floor_number=1))
            for ent in floor.enemies():
                assert ent.enemy.type_id in pool_ids
                assert ent.enemy.level == 1
                assert ent.enemy.spawn_pos == ent.pos

    def test_chests_are_walkable_and_off_endpoints(self):
        for seed in SEEDS:
            floor = generate_floor(seed, GenerationConfig(width=6, height=6, chest_budget=3))
            for ent in floor.entities:
                if ent.kind == ITEM:
                    assert floor.is_walkable(ent.pos)
                    assert ent.pos not in (floor.entrance, floor.exit)

    def test_full_wall_density_is_still_solvable(self):
        floor = generate_floor("walls", GenerationConfig(width=7, height=7, wall_density=1.0))
        assert validate_floor(floor).solvable is True
        assert any(t.kind == WALL for t in floor.tiles)

    def test_zero_budgets(self):
        config = GenerationConfig(width=5, height=5, enemy_budget=0, chest_budget=0)
        assert generate_floor("empty", config).entities == []

    def test_unsolvable_result_clears_walls(self, monkeypatch):
        monkeypatch.setattr(
            mapgen, "validate_floor",
            lambda floor: ValidationResult(solvable=False, errors=[EXIT_NOT_REACHABLE]),
        )
        floor = generate_floor("fallback", GenerationConfig(width=6, height=6, wall_density=0.9))
        assert not any(t.kind == WALL for t in floor.tiles)

    def test_invalid_config_raises(self):
        with pytest.raises(ConfigError):
            generate_floor("bad", GenerationConfig(width=0, height=5))

    def test_default_config_when_none(self):
        floor = generate_floor("defaults")
        assert (floor.width, floor.height) == (5, 5)


class TestEndpoints:
    """Tests for entrance/exit resolution."""

    def test_default_endpoints(self):
        floor = generate_floor("ends", GenerationConfig(width=7, height=5))
        assert floor.entrance == (0, 2)
        assert floor.exit == (6, 2)

    def test_explicit_endpoints(self):
        floor = generate_floor("ends", GenerationConfig(width=6, height=6, entrance=(1, 1), exit=(4, 5)))
        assert floor.entrance == (1, 1)
        assert floor.exit == (4, 5)

    def test_entrance_on_default_exit_mirrors(self):
        """A carried-over entrance on the right edge pushes the exit to the left edge."""
        floor = generate_floor("carry", GenerationConfig(width=5, height=5, entrance=(4, 2)))
        assert floor.entrance == (4, 2)
        assert floor.exit == (0, 2)
        assert validate_floor(floor).solvable is True

    def test_entrance_elsewhere_keeps_default_exit(self):
        config = GenerationConfig(width=5, height=5, entrance=(2, 2))
        assert generate_floor("mid", config).exit == (4, 2)

    def test_clash_on_one_column_floor(self):
        floor = generate_floor("narrow", GenerationConfig(width=1, height=4))
        assert floor.entrance == (0, 2)
        assert floor.exit != floor.entrance
        assert floor.exit in ((0, 0), (0, 3))

    def test_explicit_exit_clamped_onto_entrance_moves(self):
        floor = generate_floor("clash", GenerationConfig(width=5, height=5, entrance=(4, 2), exit=(9, 2)))
        assert floor.entrance == (4, 2)
        assert floor.exit == (0, 2)
        assert floor.tile_at(floor.entrance).kind == ENTRANCE
        assert floor.tile_at(floor.exit).kind == EXIT
        assert validate_floor(floor).solvable is True

    def test_identical_explicit_endpoints_rejected(self):
        with pytest.raises(ConfigError):
            generate_floor("same", GenerationConfig(width=5, height=5, entrance=(1, 1), exit=(1, 1)))

    def test_out_of_grid_endpoints_are_clamped(self):
        floor = generate_floor("clamp", GenerationConfig(width=5, height=5, entrance=(-3, 9), exit=(12, 0)))
        assert floor.entrance == (0, 4)
        assert floor.exit == (4, 0)


class TestTemplates:
    """Tests for template selection during generation."""

    def test_template_never_used_early(self):
        config = GenerationConfig(use_template=True, floor_number=3)
        for seed in SEEDS:
            floor = generate_floor(seed, config)
            assert not any(e.kind == NPC for e in floor.entities)

    def test_shop_floor_appears_on_floor_five(self):
        config = GenerationConfig(use_template=True, floor_number=5)
        floors = [generate_floor(f"shop-{i}", config) for i in range(20)]
        shops = [f for f in floors if any(e.kind == NPC for e in f.entities)]
        assert shops
        for floor in shops:
            assert floor.enemies() == []
            assert validate_floor(floor).solvable is True

    def test_template_roll_is_deterministic(self):
        config = GenerationConfig(use_template=True, floor_number=10)
        first = generate_floor("tmpl", config)
        second = generate_floor("tmpl", config)
        assert first.to_dict(include_timestamp=False) == second.to_dict(include_timestamp=False)
