"""
Unit tests for damage resolution.
"""

from systems.combat import (
    PLAYER_ID,
    apply_damage,
    resolve_attack,
    resolve_enemy_attacks,
    resolve_player_attack,
)
from world.ai import AttackIntent
from world.entities import NPC, Entity


class TestResolveAttack:
    """Tests for the damage formula."""

    def test_armor_reduces_damage(self):
        assert resolve_attack(15, 5) == 10

    def test_minimum_damage(self):
        assert resolve_attack(10, 8) == 5
        assert resolve_attack(3, 0) == 5
        assert resolve_attack(0, 50) == 5

    def test_custom_minimum(self):
        assert resolve_attack(1, 10, minimum=0) == 0


class TestApplyDamage:
    """Tests for applying damage to entity lists."""

    def test_damage_and_removal(self, make_enemy):
        a = make_enemy("a", "goblin", (0, 0))
        b = make_enemy("b", "brute", (1, 0))
        c = make_enemy("c", "goblin", (2, 0))
        entities, hit, killed = apply_damage([a, b, c], {"a": 100, "b": 3})
        assert [e.id for e in entities] == ["b", "c"]
        assert hit == ["a", "b"]
        assert killed == ["a"]
        assert entities[0].enemy.hp == b.enemy.hp - 3
        assert entities[1] is c

    def test_inputs_are_not_modified(self, make_enemy):
        a = make_enemy("a", "brute", (0, 0))
        hp = a.enemy.hp
        apply_damage([a], {"a": 5})
        assert a.enemy.hp == hp

    def test_non_enemies_are_ignored(self):
        npc = Entity(id="n", kind=NPC, pos=(0, 0), data={"npc_type": "shopkeeper"})
        entities, hit, killed = apply_damage([npc], {"n": 50})
        assert entities == [npc]
        assert hit == [] and killed == []


class TestPlayerAttack:
    """Tests for bump attacks."""

    def test_kill(self, make_floor, make_enemy):
        goblin = make_enemy("g", "goblin", (1, 0))
        floor = make_floor(3, 1, entities=[goblin])
        outcome = resolve_player_attack(floor, "g", 15, player_pos=(0, 0))
        assert outcome.entities == []
        assert outcome.event.kind == "melee"
        assert outcome.event.source_id == PLAYER_ID
        assert outcome.event.target_id == "g"
        assert outcome.event.amount == 15
        assert outcome.event.killed is True
        assert outcome.event.from_pos == (0, 0)
        assert outcome.event.to_pos == (1, 0)

    def test_wound(self, make_floor, make_enemy):
        brute = make_enemy("b", "brute", (1, 0))
        floor = make_floor(3, 1, entities=[brute])
        outcome = resolve_player_attack(floor, "b", 15)
        assert outcome.event.amount == 13
        assert outcome.event.killed is False
        assert outcome.entities[0].enemy.hp == brute.enemy.hp - 13
        # floor untouched
        assert floor.get_entity("b").enemy.hp == brute.enemy.hp

    def test_missing_target(self, make_floor):
        npc = Entity(id="n", kind=NPC, pos=(1, 0))
        floor = make_floor(3, 1, entities=[npc])
        assert resolve_player_attack(floor, "n", 15) is None
        assert resolve_player_attack(floor, "ghost-id", 15) is None


class TestEnemyAttacks:
    """Tests for resolving enemy attack intents."""

    def test_every_hit_is_reported(self, make_floor, make_enemy):
        goblin = make_enemy("g", "goblin", (1, 0))
        archer = make_enemy("a", "archer", (4, 0))
        floor = make_floor(6, 1, entities=[goblin, archer])
        outcome = resolve_enemy_attacks(
            floor, [AttackIntent("g"), AttackIntent("a")], player_armor=5, player_pos=(0, 0)
        )
        assert [e.source_id for e in outcome.events] == ["g", "a"]
        assert [e.kind for e in outcome.events] == ["melee", "ranged"]
        assert [e.amount for e in outcome.events] == [5, 5]
        assert all(e.target_id == PLAYER_ID and e.to_pos == (0, 0) for e in outcome.events)
        assert outcome.total_damage == 10

    def test_armor_applies(self, make_floor, make_enemy):
        brute = make_enemy("b", "brute", (1, 0), level=10)
        floor = make_floor(3, 1, entities=[brute])
        outcome = resolve_enemy_attacks(floor, [AttackIntent("b")], player_armor=5)
        assert outcome.total_damage == 10

    def test_missing_attacker_is_skipped(self, make_floor):
        outcome = resolve_enemy_attacks(make_floor(3, 1), [AttackIntent("gone")], player_armor=0)
        assert outcome.events == []
        assert outcome.total_damage == 0
