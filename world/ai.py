# world/ai.py

"""
Enemy turn: aggro, movement, attacks and cooldown abilities for every enemy
on a floor, resolved one enemy at a time in entity-list order.

The input floor is never mutated; the caller gets a new floor plus the
attack intents and ability results to apply to the player.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from settings import PATROL_RADIUS_TILES
from systems.enemies import (
    ATTACK_MELEE,
    MOVE_STATIC,
    MOVE_TELEPORT,
    EnemyAbilityContext,
    EnemyArchetype,
    VisualEffect,
    resolve_archetype,
)
from telemetry.logger import telemetry
from world.entities import (
    MODE_FOLLOW,
    MODE_STATIC,
    EnemyData,
    Entity,
    Interaction,
    Position,
    manhattan,
)
from world.game_map import Floor
from world.rng import SeededRng, create_rng

logger = logging.getLogger("crawlcore.ai")

# Patrol tries these in order: N, S, W, E
PATROL_DIRECTIONS = ((0, -1), (0, 1), (-1, 0), (1, 0))

# Teleporters blink when farther than this, landing 2-4 tiles from the player
TELEPORT_TRIGGER_DISTANCE = 3
TELEPORT_MIN_DISTANCE = 2
TELEPORT_MAX_DISTANCE = 4


@dataclass(frozen=True)
class AttackIntent:
    attacker_id: str


@dataclass
class EnemyAbilityFired:
    enemy_id: str
    ability_id: str
    player_damage: int = 0
    visual_effect: Optional[VisualEffect] = None


@dataclass
class EnemyTurnResult:
    floor: Floor
    attacks: List[AttackIntent] = field(default_factory=list)
    ability_results: List[EnemyAbilityFired] = field(default_factory=list)
    aggro_enemy_ids: List[str] = field(default_factory=list)
    interaction: Optional[Interaction] = None


# ----------------------------------------------------------------------
# Movement helpers
# ----------------------------------------------------------------------


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def is_valid_step(pos: Position, floor: Floor, reserved: Set[Position], player_pos: Position) -> bool:
    """In bounds, walkable, not the player's cell and not claimed by anyone else."""
    if not floor.in_bounds(pos) or pos == player_pos:
        return False
    if not floor.is_walkable(pos):
        return False
    return pos not in reserved


def should_move_this_turn(arch: EnemyArchetype, data: EnemyData, turn: int) -> bool:
    """Speed 1+ moves every turn, 0 never, fractions every ceil(1/speed) turns."""
    if arch.move_speed >= 1:
        return True
    if arch.move_speed <= 0:
        return False
    turns_per_move = math.ceil(1 / arch.move_speed)
    return turn - data.state.last_move_turn >= turns_per_move


def patrol_step(
    pos: Position,
    spawn: Optional[Position],
    floor: Floor,
    reserved: Set[Position],
    player_pos: Position,
) -> Position:
    if spawn is None:
        return pos
    for dx, dy in PATROL_DIRECTIONS:
        cand = (pos[0] + dx, pos[1] + dy)
        if manhattan(cand, spawn) <= PATROL_RADIUS_TILES and is_valid_step(cand, floor, reserved, player_pos):
            return cand
    return pos


def chase_step(pos: Position, floor: Floor, reserved: Set[Position], player_pos: Position) -> Position:
    """
    One step towards the player along the axis with the larger gap
    (horizontal on ties), else along the other axis, else stay.
    """
    dx = player_pos[0] - pos[0]
    dy = player_pos[1] - pos[1]
    horizontal = (_sign(dx), 0)
    vertical = (0, _sign(dy))
    steps = (horizontal, vertical) if abs(dx) >= abs(dy) else (vertical, horizontal)

    for sx, sy in steps:
        if sx == 0 and sy == 0:
            continue
        cand = (pos[0] + sx, pos[1] + sy)
        if is_valid_step(cand, floor, reserved, player_pos):
            return cand
    return pos


def teleport_step(
    pos: Position,
    floor: Floor,
    reserved: Set[Position],
    player_pos: Position,
    rng: SeededRng,
) -> Position:
    if manhattan(pos, player_pos) <= TELEPORT_TRIGGER_DISTANCE:
        return chase_step(pos, floor, reserved, player_pos)

    candidates: List[Position] = []
    reach = TELEPORT_MAX_DISTANCE
    for dx in range(-reach, reach + 1):
        for dy in range(-reach, reach + 1):
            cand = (player_pos[0] + dx, player_pos[1] + dy)
            if not TELEPORT_MIN_DISTANCE <= manhattan(cand, player_pos) <= TELEPORT_MAX_DISTANCE:
                continue
            if is_valid_step(cand, floor, reserved, player_pos):
                candidates.append(cand)

    if candidates:
        return rng.choice(candidates)
    return chase_step(pos, floor, reserved, player_pos)


def _follow_step(
    arch: EnemyArchetype,
    pos: Position,
    floor: Floor,
    reserved: Set[Position],
    player_pos: Position,
    rng: SeededRng,
) -> Position:
    if arch.movement_pattern == MOVE_TELEPORT:
        return teleport_step(pos, floor, reserved, player_pos, rng)
    # patrol, chase and maintain-distance all close in once following;
    # enemies already in attack range never get here
    return chase_step(pos, floor, reserved, player_pos)


# ----------------------------------------------------------------------
# Turn
# ----------------------------------------------------------------------


def _next_mode(prev_mode: str, data: EnemyData, distance: int, arch: EnemyArchetype) -> str:
    if prev_mode == MODE_FOLLOW:
        return MODE_FOLLOW
    took_damage = data.state.last_hp is not None and data.hp < data.state.last_hp
    if distance <= arch.aggro_range or took_damage:
        return MODE_FOLLOW
    return prev_mode


def _decide(
    ent: Entity,
    floor: Floor,
    player_pos: Position,
    turn: int,
    reserved: Set[Position],
    rng: SeededRng,
    attacks: List[AttackIntent],
) -> Entity:
    """
    Resolve one enemy's turn against the positions claimed so far.

    ``reserved`` holds every cell that is taken or already claimed; the
    enemy's own cell is released before it moves and its destination is
    claimed afterwards.
    """
    data = ent.enemy.copy()
    arch = resolve_archetype(data.type_id)

    prev_mode = data.state.mode
    mode = _next_mode(prev_mode, data, manhattan(ent.pos, player_pos), arch)

    reserved.discard(ent.pos)

    following = mode == MODE_FOLLOW
    in_range_now = following and manhattan(ent.pos, player_pos) <= arch.attack_range
    should_move = (
        mode != MODE_STATIC
        and arch.movement_pattern != MOVE_STATIC
        and should_move_this_turn(arch, data, turn)
        and not in_range_now
    )

    next_pos = ent.pos
    if should_move:
        if following:
            next_pos = _follow_step(arch, ent.pos, floor, reserved, player_pos, rng)
        else:
            next_pos = patrol_step(ent.pos, data.spawn_pos, floor, reserved, player_pos)
    moved = next_pos != ent.pos

    if following:
        dist = manhattan(next_pos, player_pos)
        if arch.attack_pattern == ATTACK_MELEE:
            if dist == 1:
                attacks.append(AttackIntent(ent.id))
        elif not moved and dist <= arch.attack_range:
            attacks.append(AttackIntent(ent.id))

    data.state.mode = mode
    data.state.last_hp = data.hp
    if should_move:
        data.state.last_move_turn = turn

    reserved.add(next_pos)
    return Entity(id=ent.id, kind=ent.kind, pos=next_pos, data=data)


def run_enemy_turn(
    floor: Floor,
    player_pos: Position,
    turn: int = 0,
    rng: Optional[SeededRng] = None,
) -> EnemyTurnResult:
    """
    Run every enemy on ``floor`` for turn number ``turn``.

    Aggro is decided from the pre-turn distance; enemies that walk into
    aggro range are switched to follow after everyone has moved. Follow is
    never left. Mode changes are tracked by entity id, so removing or
    reordering other entities cannot re-announce an enemy that was already
    following.

    ``rng`` feeds teleporting enemies; by default it is derived from the
    floor seed and the turn number.
    """
    if rng is None:
        rng = create_rng(f"{floor.seed}-enemy-turn-{turn}")

    prev_mode_by_id: Dict[str, str] = {
        e.id: e.enemy.state.mode for e in floor.entities if e.enemy is not None
    }
    reserved: Set[Position] = {e.pos for e in floor.entities}
    attacks: List[AttackIntent] = []

    entities: List[Entity] = []
    for ent in floor.entities:
        if ent.enemy is None or not ent.enemy.alive:
            entities.append(ent)
            continue
        entities.append(_decide(ent, floor, player_pos, turn, reserved, rng, attacks))

    aggro_ids: List[str] = []
    for ent in entities:
        data = ent.enemy
        if data is None or not data.alive or prev_mode_by_id.get(ent.id) == MODE_FOLLOW:
            continue
        if data.state.mode == MODE_FOLLOW:
            aggro_ids.append(ent.id)
            continue
        # Walked (or was left standing) inside aggro range
        if manhattan(ent.pos, player_pos) <= resolve_archetype(data.type_id).aggro_range:
            data.state.mode = MODE_FOLLOW
            data.state.last_hp = data.hp
            aggro_ids.append(ent.id)
    aggro_ids = list(dict.fromkeys(aggro_ids))

    new_floor = floor.with_entities(entities)

    fired: List[EnemyAbilityFired] = []
    for ent in entities:
        data = ent.enemy
        if data is None or not data.alive or data.state.mode != MODE_FOLLOW:
            continue
        for ability in resolve_archetype(data.type_id).abilities:
            last_used = data.state.ability_last_used.get(ability.id, 0)
            if turn - last_used < ability.turn_interval:
                continue
            outcome = ability.execute(
                EnemyAbilityContext(
                    floor=new_floor,
                    enemy=ent,
                    enemy_data=data,
                    player_pos=player_pos,
                    turn=turn,
                )
            )
            data.state.ability_last_used[ability.id] = turn
            fired.append(
                EnemyAbilityFired(
                    enemy_id=ent.id,
                    ability_id=ability.id,
                    player_damage=outcome.player_damage,
                    visual_effect=outcome.visual_effect,
                )
            )
            logger.debug("%s used %s on turn %d", ent.id, ability.id, turn)

    interaction: Optional[Interaction] = None
    if aggro_ids:
        interaction = Interaction(type="enemy-aggro", target_pos=player_pos, enemy_ids=tuple(aggro_ids))
    elif attacks:
        interaction = Interaction(
            type="enemy-attack", target_pos=player_pos, attacker_id=attacks[0].attacker_id
        )

    telemetry.log(
        "enemy_turn",
        turn=turn,
        floor_seed=floor.seed,
        enemies=len(prev_mode_by_id),
        attacks=len(attacks),
        abilities=len(fired),
        aggro=len(aggro_ids),
    )

    return EnemyTurnResult(
        floor=new_floor,
        attacks=attacks,
        ability_results=fired,
        aggro_enemy_ids=aggro_ids,
        interaction=interaction,
    )
