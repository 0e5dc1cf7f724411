"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test files.
"""

import pytest

from world.entities import BehaviorState
from world.game_map import open_floor
from world.tiles import WALL_TILE


@pytest.fixture
def make_floor():
    """
    Build an open floor, optionally with walls.

    Usage: make_floor(5, 5, walls=[(2, 2)], entities=[...], seed="s")
    """
    def _make(width=5, height=5, walls=(), entities=None, seed="test-floor", entrance=(0, 0), exit=None):
        floor = open_floor(width, height, seed=seed, entrance=entrance, exit=exit, entities=entities)
        for pos in walls:
            floor.set_tile(pos, WALL_TILE)
        return floor
    return _make


@pytest.fixture
def make_enemy():
    """
    Create enemies for testing.

    Usage: make_enemy("e1", "goblin", (2, 2), mode="follow", hp=10)
    """
    from systems.enemies import create_enemy

    def _make(entity_id, type_id="goblin", pos=(2, 2), level=1, mode=None, **overrides):
        ent = create_enemy(entity_id, type_id, level, pos)
        data = ent.enemy
        for key, value in overrides.items():
            setattr(data, key, value)
        if mode is not None:
            data.state = BehaviorState(mode=mode)
        data.state.last_hp = data.hp
        return ent
    return _make


@pytest.fixture
def player_stats():
    """
    Create a sample PlayerStats for testing.
    """
    from systems.stats import PlayerStats
    return PlayerStats()


@pytest.fixture
def sample_items():
    """
    A small item catalog independent of data/items.json.
    """
    from systems.inventory import ABILITY_GRANTING, CONSUMABLE, PASSIVE, RELIC, ItemCatalog, ItemDef
    return ItemCatalog([
        ItemDef(id="healing-potion", name="Healing Potion", kind=CONSUMABLE, heal_hp=20),
        ItemDef(id="mana-potion", name="Mana Potion", kind=CONSUMABLE, restore_mp=20),
        ItemDef(id="iron-plate", name="Iron Plate", kind=PASSIVE, stats={"armor": 5}),
        ItemDef(id="sharp-blade", name="Sharp Blade", kind=PASSIVE, stats={"weapon_damage": 10}),
        ItemDef(id="mana-crystal", name="Mana Crystal", kind=PASSIVE, stats={"max_mp": 15, "spell_damage": 5}),
        ItemDef(id="heart-amulet", name="Heart Amulet", kind=PASSIVE, stats={"max_hp": 20}),
        ItemDef(id="vitality-charm", name="Vitality Charm", kind=RELIC),
        ItemDef(id="fireball-tome", name="Tome of Fire", kind=ABILITY_GRANTING, ability_id="fireball"),
        ItemDef(id="shockwave-tome", name="Tome of Tremors", kind=ABILITY_GRANTING, ability_id="shockwave"),
        ItemDef(id="teleport-orb", name="Teleport Orb", kind=ABILITY_GRANTING, ability_id="teleport"),
    ])


@pytest.fixture
def floor_manager():
    """
    Create a FloorManager for testing.
    """
    from engine.managers.floor_manager import FloorManager
    return FloorManager("test-run", starting_floor=1)
