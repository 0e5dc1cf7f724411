# systems/combat.py

"""
Damage resolution shared by player and enemy attacks.

Every hit is reported as a CombatEvent, including hits that armor reduced
to the minimum, so a presentation layer always has something to show.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Tuple

from settings import MIN_DAMAGE
from systems.enemies import ATTACK_MELEE, resolve_archetype
from world.ai import AttackIntent
from world.entities import Entity, Position
from world.game_map import Floor

logger = logging.getLogger("crawlcore.combat")

PLAYER_ID = "player"


@dataclass(frozen=True)
class CombatEvent:
    """One resolved hit."""
    kind: str                 # "melee" | "ranged" | "ability"
    source_id: str
    target_id: str
    amount: int
    from_pos: Position
    to_pos: Position
    killed: bool = False


def resolve_attack(attacker_damage: int, defender_armor: int, minimum: int = MIN_DAMAGE) -> int:
    """Armor soaks damage, but never below ``minimum``."""
    return max(minimum, attacker_damage - defender_armor)


def apply_damage(
    entities: Sequence[Entity],
    damage_by_id: Dict[str, int],
) -> Tuple[List[Entity], List[str], List[str]]:
    """
    Subtract damage from the listed enemies and drop any that reach 0 hp.

    Returns (entities, hit ids in entity order, killed ids). The input
    entities are not modified.
    """
    out: List[Entity] = []
    hit: List[str] = []
    killed: List[str] = []
    for ent in entities:
        data = ent.enemy
        if data is None or ent.id not in damage_by_id:
            out.append(ent)
            continue
        hit.append(ent.id)
        new_data = replace(data.copy(), hp=data.hp - damage_by_id[ent.id])
        if new_data.hp <= 0:
            killed.append(ent.id)
            continue
        out.append(replace(ent, data=new_data))
    return out, hit, killed


@dataclass
class PlayerAttackOutcome:
    entities: List[Entity]
    event: CombatEvent


def resolve_player_attack(
    floor: Floor,
    enemy_id: str,
    weapon_damage: int,
    player_pos: Optional[Position] = None,
) -> Optional[PlayerAttackOutcome]:
    """
    Player bumps into an enemy. None if ``enemy_id`` is not an enemy on
    this floor.
    """
    target = floor.get_entity(enemy_id)
    if target is None or target.enemy is None:
        logger.debug("Player attack on missing enemy %r ignored", enemy_id)
        return None

    amount = resolve_attack(weapon_damage, target.enemy.armor)
    entities, _, killed = apply_damage(floor.entities, {enemy_id: amount})
    event = CombatEvent(
        kind="melee",
        source_id=PLAYER_ID,
        target_id=enemy_id,
        amount=amount,
        from_pos=player_pos if player_pos is not None else target.pos,
        to_pos=target.pos,
        killed=bool(killed),
    )
    if killed:
        logger.debug("%s killed by player for %d", enemy_id, amount)
    return PlayerAttackOutcome(entities=entities, event=event)


@dataclass
class EnemyAttackOutcome:
    events: List[CombatEvent] = field(default_factory=list)
    total_damage: int = 0


def resolve_enemy_attacks(
    floor: Floor,
    attacks: Sequence[AttackIntent],
    player_armor: int,
    player_pos: Optional[Position] = None,
) -> EnemyAttackOutcome:
    """
    Turn attack intents into damage on the player: one event per attacker
    still on the floor, in intent order.
    """
    outcome = EnemyAttackOutcome()
    for intent in attacks:
        attacker_id = intent.attacker_id
        attacker = floor.get_entity(attacker_id)
        if attacker is None or attacker.enemy is None:
            continue
        amount = resolve_attack(attacker.enemy.damage, player_armor)
        melee = resolve_archetype(attacker.enemy.type_id).attack_pattern == ATTACK_MELEE
        outcome.events.append(
            CombatEvent(
                kind="melee" if melee else "ranged",
                source_id=attacker_id,
                target_id=PLAYER_ID,
                amount=amount,
                from_pos=attacker.pos,
                to_pos=player_pos if player_pos is not None else attacker.pos,
            )
        )
        outcome.total_damage += amount
    return outcome
