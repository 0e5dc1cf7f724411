"""
Unit tests for the inventory system.
"""

import json

import pytest
from engine.error_handler import ContentError
from systems.inventory import (
    ItemCatalog,
    ability_bar,
    add_item,
    default_catalog,
    empty_inventory,
    first_empty_slot,
    get_item_at,
    get_item_def,
    inventory_count,
    remove_item,
    use_item,
)
from systems.abilities import ABILITIES


class TestSlots:
    """Tests for slot operations."""

    def test_empty_inventory(self):
        inventory = empty_inventory()
        assert len(inventory) == 25
        assert inventory_count(inventory) == 0
        assert first_empty_slot(inventory) == 0

    def test_add_fills_first_empty_slot(self, sample_items):
        potion = sample_items("healing-potion")
        inventory = list(empty_inventory())
        inventory[0] = sample_items("iron-plate")
        inventory = add_item(tuple(inventory), potion)
        assert inventory[1] is potion
        assert inventory_count(inventory) == 2

    def test_add_to_full(self, sample_items):
        full = tuple(sample_items("iron-plate") for _ in range(25))
        assert add_item(full, sample_items("healing-potion")) is None

    def test_remove(self, sample_items):
        inventory = add_item(empty_inventory(), sample_items("iron-plate"))
        assert inventory_count(remove_item(inventory, 0)) == 0
        # original untouched
        assert inventory_count(inventory) == 1

    @pytest.mark.parametrize("slot", [-1, 25, 100])
    def test_out_of_range_slots(self, slot, sample_items):
        inventory = add_item(empty_inventory(), sample_items("iron-plate"))
        assert remove_item(inventory, slot) == inventory
        assert get_item_at(inventory, slot) is None
        outcome = use_item(inventory, slot, 50, 10)
        assert outcome.used is False
        assert outcome.inventory == inventory

    def test_get_item_at(self, sample_items):
        inventory = add_item(empty_inventory(), sample_items("sharp-blade"))
        assert get_item_at(inventory, 0).id == "sharp-blade"
        assert get_item_at(inventory, 1) is None


class TestUseItem:
    """Tests for consumables."""

    def test_healing_potion(self, sample_items):
        inventory = add_item(empty_inventory(), sample_items("healing-potion"))
        outcome = use_item(inventory, 0, 50, 10)
        assert outcome.used is True
        assert outcome.hp == 70
        assert outcome.mp == 10
        assert inventory_count(outcome.inventory) == 0

    def test_mana_potion(self, sample_items):
        inventory = add_item(empty_inventory(), sample_items("mana-potion"))
        outcome = use_item(inventory, 0, 50, 10)
        assert outcome.mp == 30

    def test_passive_items_cannot_be_used(self, sample_items):
        inventory = add_item(empty_inventory(), sample_items("iron-plate"))
        outcome = use_item(inventory, 0, 50, 10)
        assert outcome.used is False
        assert outcome.inventory == inventory

    def test_empty_slot(self):
        assert use_item(empty_inventory(), 3, 1, 1).used is False


class TestAbilityBar:
    """Tests for abilities granted by items."""

    def test_bar_from_items(self, sample_items):
        inventory = empty_inventory()
        for item_id in ("iron-plate", "teleport-orb", "fireball-tome", "teleport-orb"):
            inventory = add_item(inventory, sample_items(item_id))
        bar = ability_bar(inventory, tuple(ABILITIES))
        assert len(bar) == 8
        assert bar[:3] == ("teleport", "fireball", None)

    def test_unknown_abilities_skipped(self, sample_items):
        inventory = add_item(empty_inventory(), sample_items("shockwave-tome"))
        assert ability_bar(inventory, ("fireball",)) == (None,) * 8

    def test_bar_is_capped(self, sample_items):
        inventory = empty_inventory()
        for item_id in ("fireball-tome", "shockwave-tome", "teleport-orb"):
            inventory = add_item(inventory, sample_items(item_id))
        assert ability_bar(inventory, tuple(ABILITIES), slots=2) == ("fireball", "shockwave")


class TestItemCatalog:
    """Tests for loading item definitions."""

    def test_bundled_catalog(self):
        catalog = default_catalog()
        assert len(catalog) >= 8
        assert get_item_def("healing-potion").heal_hp == 20
        assert get_item_def("sharp-blade").stats == {"weapon_damage": 10}
        assert get_item_def("teleport-orb").ability_id == "teleport"
        assert get_item_def("missing") is None

    def test_bundled_catalog_uses_known_stats_and_abilities(self):
        from systems.stats import STAT_KEYS
        for item in default_catalog().all_items():
            assert set(item.stats) <= set(STAT_KEYS)
            if item.ability_id is not None:
                assert item.ability_id in ABILITIES

    def test_from_file_list_form(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text(json.dumps([{"id": "rock", "kind": "passive", "stats": {"armor": "1"}}]), encoding="utf-8")
        catalog = ItemCatalog.from_file(path)
        assert catalog("rock").stats == {"armor": 1}
        assert catalog("rock").name == "rock"

    def test_missing_file_is_empty(self, tmp_path):
        assert len(ItemCatalog.from_file(tmp_path / "nope.json")) == 0

    def test_bad_kind_raises(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text(json.dumps({"items": [{"id": "x", "kind": "weapon"}]}), encoding="utf-8")
        with pytest.raises(ContentError):
            ItemCatalog.from_file(path)

    def test_missing_id_raises(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text(json.dumps({"items": [{"kind": "passive"}]}), encoding="utf-8")
        with pytest.raises(ContentError):
            ItemCatalog.from_file(path)
