"""
One full game turn: the player's action, then every enemy, then the damage
the enemies dealt.

play_turn() is a pure function of (floor, player, action, turn). It returns
the new floor and player; nothing passed in is modified.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Union

from settings import TRAP_DAMAGE
from systems.abilities import ABILITIES, AbilityResult, can_afford, cast_ability, pay_ability_cost
from systems.combat import PLAYER_ID, CombatEvent, resolve_enemy_attacks, resolve_player_attack
from systems.inventory import Inventory, ItemLookup, ability_bar, empty_inventory
from systems.movement import ENEMY_COLLISION, INVALID_DIRECTION, NPC_COLLISION, Direction, MoveOutcome, attempt_move, normalize_direction
from systems.stats import PlayerStats, effective_stats
from telemetry.logger import telemetry
from world.ai import EnemyTurnResult, run_enemy_turn
from world.entities import Interaction, Position
from world.game_map import Floor
from world.rng import SeededRng

logger = logging.getLogger("crawlcore.turns")

# Action kinds
MOVE = "move"
CAST = "cast"
WAIT = "wait"


@dataclass
class PlayerState:
    """
    Everything about the player that a turn reads or changes.

    ``base`` holds the unmodified stats; held items are added on top by
    effective().
    """
    pos: Position
    hp: int
    mp: int
    base: PlayerStats = field(default_factory=PlayerStats)
    inventory: Inventory = field(default_factory=empty_inventory)
    facing: Optional[Direction] = None

    @classmethod
    def new(cls, pos: Position, base: Optional[PlayerStats] = None) -> "PlayerState":
        base = base or PlayerStats()
        return cls(pos=pos, hp=base.max_hp, mp=base.max_mp, base=base)

    def effective(self) -> PlayerStats:
        return effective_stats(self.base, self.inventory)

    def clamped(self) -> "PlayerState":
        """HP/MP capped at the effective maximums."""
        stats = self.effective()
        return replace(self, hp=min(self.hp, stats.max_hp), mp=min(self.mp, stats.max_mp))

    def ability_bar(self):
        return ability_bar(self.inventory, tuple(ABILITIES))

    @property
    def alive(self) -> bool:
        return self.hp > 0


@dataclass(frozen=True)
class PlayerAction:
    kind: str
    direction: Union[str, Direction, None] = None
    ability_id: Optional[str] = None

    @classmethod
    def move(cls, direction: Union[str, Direction]) -> "PlayerAction":
        return cls(kind=MOVE, direction=direction)

    @classmethod
    def cast(cls, ability_id: str) -> "PlayerAction":
        return cls(kind=CAST, ability_id=ability_id)

    @classmethod
    def wait(cls) -> "PlayerAction":
        return cls(kind=WAIT)


@dataclass
class TurnResult:
    floor: Floor
    player: PlayerState
    turn: int
    consumed_turn: bool
    events: List[CombatEvent] = field(default_factory=list)
    move: Optional[MoveOutcome] = None
    ability: Optional[AbilityResult] = None
    enemy_turn: Optional[EnemyTurnResult] = None
    interaction: Optional[Interaction] = None
    reached_exit: bool = False
    reason: Optional[str] = None

    @property
    def player_died(self) -> bool:
        return not self.player.alive


def _rejected(floor: Floor, player: PlayerState, turn: int, reason: str, **extra) -> TurnResult:
    return TurnResult(floor=floor, player=player, turn=turn, consumed_turn=False, reason=reason, **extra)


def _resolve_move(floor, player, action, item_lookup):
    """Returns (floor, player, outcome, events, interaction)."""
    outcome = attempt_move(player.pos, action.direction, floor, player.inventory, item_lookup)
    events: List[CombatEvent] = []
    interaction = None
    step = normalize_direction(action.direction)
    player = replace(player, facing=step)

    if outcome.success:
        player = replace(player, pos=outcome.new_pos)
        if outcome.new_inventory is not None:
            player = replace(player, inventory=outcome.new_inventory).clamped()
            floor = floor.with_entities(
                [e for e in floor.entities if e.id != outcome.item_entity_id_to_remove]
            )
        if outcome.triggered_trap:
            player = replace(player, hp=max(0, player.hp - TRAP_DAMAGE))
            events.append(
                CombatEvent(
                    kind="trap",
                    source_id="trap",
                    target_id=PLAYER_ID,
                    amount=TRAP_DAMAGE,
                    from_pos=player.pos,
                    to_pos=player.pos,
                )
            )
    elif outcome.reason == ENEMY_COLLISION:
        target = outcome.collided_with
        attack = resolve_player_attack(floor, target.id, player.effective().weapon_damage, player.pos)
        if attack is not None:
            floor = floor.with_entities(attack.entities)
            events.append(attack.event)
            interaction = Interaction(type="attack", target_pos=target.pos, attacker_id=PLAYER_ID)
    return floor, player, outcome, events, interaction


def play_turn(
    floor: Floor,
    player: PlayerState,
    action: PlayerAction,
    turn: int,
    item_lookup: Optional[ItemLookup] = None,
    rng: Optional[SeededRng] = None,
) -> TurnResult:
    """
    Play one turn and return the resulting state.

    Order: the player's action resolves completely (pickups, traps, kills,
    spell costs, death), then the turn counter advances and the enemies act
    on the updated floor, then their attacks and abilities hit the player.

    Actions that are rejected (unknown direction or ability, unaffordable or
    impossible casts) and bumping into an npc do not use up the turn. A
    blocked step does, so enemies still react. Stepping onto the exit ends
    the turn without an enemy phase; the caller moves to the next floor.

    ``rng`` feeds random targeting (teleport) and teleporting enemies.
    """
    events: List[CombatEvent] = []
    move_outcome = None
    ability_result = None
    interaction = None
    reached_exit = False

    if action.kind == MOVE:
        if normalize_direction(action.direction) is None:
            return _rejected(floor, player, turn, INVALID_DIRECTION)
        floor, player, move_outcome, events, interaction = _resolve_move(floor, player, action, item_lookup)
        if move_outcome.reason == NPC_COLLISION:
            bump = Interaction(type="bump", target_pos=move_outcome.collided_with.pos)
            return _rejected(floor, player, turn, NPC_COLLISION, move=move_outcome, interaction=bump)
        reached_exit = move_outcome.triggered_exit

    elif action.kind == CAST:
        ability = ABILITIES.get(action.ability_id)
        if ability is None or action.ability_id not in player.ability_bar():
            return _rejected(floor, player, turn, "unknown-ability")
        if not can_afford(ability, player.hp, player.mp):
            return _rejected(floor, player, turn, "insufficient-mp")

        ability_result = cast_ability(
            action.ability_id, floor, player.pos, player.facing, player.effective(), rng, turn
        )
        if not ability_result.did_cast:
            return _rejected(floor, player, turn, "cast-failed", ability=ability_result)

        hp, mp = pay_ability_cost(ability, player.hp, player.mp)
        player = replace(player, hp=hp, mp=mp)
        if ability_result.target_pos is not None:
            player = replace(player, pos=ability_result.target_pos)
        floor = floor.with_entities(ability_result.entities)
        interaction = ability_result.interaction
        for enemy_id in ability_result.hit_enemy_ids:
            events.append(
                CombatEvent(
                    kind="ability",
                    source_id=PLAYER_ID,
                    target_id=enemy_id,
                    amount=ability_result.damage_by_enemy_id.get(enemy_id, 0),
                    from_pos=player.pos,
                    to_pos=ability_result.interaction.target_pos,
                    killed=floor.get_entity(enemy_id) is None,
                )
            )

    elif action.kind != WAIT:
        return _rejected(floor, player, turn, "unknown-action")

    turn += 1
    enemy_turn = None

    if player.alive and not reached_exit:
        enemy_turn = run_enemy_turn(floor, player.pos, turn, rng)
        floor = enemy_turn.floor
        armor = player.effective().armor
        attacks = resolve_enemy_attacks(floor, enemy_turn.attacks, armor, player.pos)
        events.extend(attacks.events)
        damage = attacks.total_damage
        for fired in enemy_turn.ability_results:
            if fired.player_damage <= 0:
                continue
            caster = floor.get_entity(fired.enemy_id)
            events.append(
                CombatEvent(
                    kind="ability",
                    source_id=fired.enemy_id,
                    target_id=PLAYER_ID,
                    amount=fired.player_damage,
                    from_pos=caster.pos if caster is not None else player.pos,
                    to_pos=player.pos,
                )
            )
            damage += fired.player_damage
        if damage:
            player = replace(player, hp=max(0, player.hp - damage))
        interaction = enemy_turn.interaction or interaction

    if not player.alive:
        logger.info("Player died on turn %d (floor %s)", turn, floor.seed)

    telemetry.log(
        "player_turn",
        turn=turn,
        action=action.kind,
        floor_seed=floor.seed,
        hp=player.hp,
        mp=player.mp,
        events=len(events),
        died=not player.alive,
    )

    return TurnResult(
        floor=floor,
        player=player,
        turn=turn,
        consumed_turn=True,
        events=events,
        move=move_outcome,
        ability=ability_result,
        enemy_turn=enemy_turn,
        interaction=interaction,
        reached_exit=reached_exit,
        reason=move_outcome.reason if move_outcome is not None else None,
    )
