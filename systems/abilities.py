# systems/abilities.py

"""
Player-cast abilities.

An ability is either *directional* (needs a facing, e.g. a bolt fired
straight ahead) or *instant* (acts around the caster). Each variant carries
its own resolver signature and cast_ability() dispatches on the variant.
Resolvers are pure: they never touch the floor or stats they are given and
never charge the cost; pay_ability_cost() does that, and only after a
successful cast.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple, Union

from settings import MIN_DAMAGE
from systems.combat import apply_damage, resolve_attack
from systems.movement import Direction
from systems.stats import PlayerStats
from world.entities import Entity, Interaction, Position, manhattan
from world.game_map import Floor
from world.rng import SeededRng, create_rng

logger = logging.getLogger("crawlcore.abilities")

TARGET_INSTANT = "instant"
TARGET_DIRECTIONAL = "directional"

SHOCKWAVE_RADIUS = 2


@dataclass
class AbilityResult:
    did_cast: bool
    entities: List[Entity]
    interaction: Optional[Interaction] = None
    hit_enemy_ids: List[str] = field(default_factory=list)
    damage_by_enemy_id: Dict[str, int] = field(default_factory=dict)
    # Where the caster ends up (relocation abilities only)
    target_pos: Optional[Position] = None


DirectionalResolver = Callable[[Floor, Position, Direction, PlayerStats], AbilityResult]
InstantResolver = Callable[[Floor, Position, PlayerStats, SeededRng], AbilityResult]


@dataclass(frozen=True)
class DirectionalAbility:
    id: str
    name: str
    description: str
    icon: str
    mp_cost: int
    resolve: DirectionalResolver
    hp_fallback: bool = False
    targeting: str = TARGET_DIRECTIONAL


@dataclass(frozen=True)
class InstantAbility:
    id: str
    name: str
    description: str
    icon: str
    mp_cost: int
    resolve: InstantResolver
    hp_fallback: bool = False    # pay with HP when MP runs short
    targeting: str = TARGET_INSTANT


AbilityDef = Union[DirectionalAbility, InstantAbility]


def _failed(floor: Floor) -> AbilityResult:
    return AbilityResult(did_cast=False, entities=list(floor.entities))


def _spell_hit(floor: Floor, ability_id: str, center: Position, damage_by_id: Dict[str, int]) -> AbilityResult:
    entities, hit, _ = apply_damage(floor.entities, damage_by_id)
    return AbilityResult(
        did_cast=True,
        entities=entities,
        interaction=Interaction(type="ability", target_pos=center, ability_id=ability_id),
        hit_enemy_ids=hit,
        damage_by_enemy_id={eid: damage_by_id[eid] for eid in hit},
    )


# ---------- Resolvers ----------


def first_enemy_in_line(floor: Floor, start: Position, direction: Direction) -> Optional[Entity]:
    """Walk from the cell after ``start``; walls stop the scan."""
    x, y = start[0] + direction[0], start[1] + direction[1]
    while floor.in_bounds((x, y)):
        if not floor.is_walkable((x, y)):
            return None
        ent = floor.entity_at((x, y))
        if ent is not None and ent.enemy is not None:
            return ent
        x, y = x + direction[0], y + direction[1]
    return None


def _fireball(floor: Floor, caster: Position, facing: Direction, stats: PlayerStats) -> AbilityResult:
    target = first_enemy_in_line(floor, caster, facing)
    if target is None:
        # Fizzles against a wall or the edge, still a cast
        return AbilityResult(
            did_cast=True,
            entities=list(floor.entities),
            interaction=Interaction(type="ability", target_pos=caster, ability_id="fireball"),
        )
    damage = resolve_attack(stats.spell_damage, target.enemy.armor, MIN_DAMAGE)
    return _spell_hit(floor, "fireball", target.pos, {target.id: damage})


def _shockwave(floor: Floor, caster: Position, stats: PlayerStats, rng: SeededRng) -> AbilityResult:
    damage_by_id = {
        ent.id: resolve_attack(stats.spell_damage, ent.enemy.armor, MIN_DAMAGE)
        for ent in floor.enemies()
        if manhattan(ent.pos, caster) <= SHOCKWAVE_RADIUS
    }
    return _spell_hit(floor, "shockwave", caster, damage_by_id)


def free_cells(floor: Floor, exclude: Position) -> List[Position]:
    """Walkable cells with nothing on them, row-major, minus ``exclude``."""
    taken = {e.pos for e in floor.entities}
    return [
        (x, y)
        for y in range(floor.height)
        for x in range(floor.width)
        if (x, y) != exclude and (x, y) not in taken and floor.is_walkable((x, y))
    ]


def _teleport(floor: Floor, caster: Position, stats: PlayerStats, rng: SeededRng) -> AbilityResult:
    cells = free_cells(floor, caster)
    if not cells:
        return _failed(floor)
    target = rng.choice(cells)
    return AbilityResult(
        did_cast=True,
        entities=list(floor.entities),
        interaction=Interaction(type="ability", target_pos=target, ability_id="teleport"),
        target_pos=target,
    )


ABILITIES: Dict[str, AbilityDef] = {
    "fireball": DirectionalAbility(
        id="fireball",
        name="Fireball",
        description="Shoot a fireball straight ahead, hitting the first enemy.",
        icon="\U0001F525",
        mp_cost=10,
        resolve=_fireball,
    ),
    "shockwave": InstantAbility(
        id="shockwave",
        name="Shockwave",
        description="Deal damage to all enemies within 2 tiles.",
        icon="\U0001F4A5",
        mp_cost=15,
        resolve=_shockwave,
    ),
    "teleport": InstantAbility(
        id="teleport",
        name="Teleport",
        description="Teleport to a random walkable tile. Costs 25 MP or HP if insufficient MP.",
        icon="\u2728",
        mp_cost=25,
        resolve=_teleport,
        hp_fallback=True,
    ),
}


def get_ability(ability_id: str) -> Optional[AbilityDef]:
    return ABILITIES.get(ability_id)


def is_directional(ability_id: str) -> bool:
    ability = ABILITIES.get(ability_id)
    return isinstance(ability, DirectionalAbility)


def can_afford(ability: AbilityDef, hp: int, mp: int) -> bool:
    return mp >= ability.mp_cost or ability.hp_fallback


def pay_ability_cost(ability: AbilityDef, hp: int, mp: int) -> Optional[Tuple[int, int]]:
    """
    (hp, mp) after paying for ``ability``, or None if it cannot be paid.

    MP is used when there is enough; abilities with an HP fallback take the
    cost out of HP instead, which can kill the caster (HP floors at 0).
    """
    if mp >= ability.mp_cost:
        return hp, mp - ability.mp_cost
    if ability.hp_fallback:
        return max(0, hp - ability.mp_cost), mp
    return None


def cast_ability(
    ability_id: str,
    floor: Floor,
    player_pos: Position,
    facing: Optional[Direction],
    stats: PlayerStats,
    rng: Optional[SeededRng] = None,
    turn: int = 0,
) -> AbilityResult:
    """
    Resolve ``ability_id`` cast from ``player_pos``. Unknown abilities and
    directional abilities without a facing do not cast.

    ``rng`` drives random targeting; by default it is derived from the floor
    seed, the turn number and the caster's cell.
    """
    ability = ABILITIES.get(ability_id)
    if ability is None:
        logger.debug("Unknown ability %r", ability_id)
        return _failed(floor)

    if isinstance(ability, DirectionalAbility):
        if facing is None:
            logger.debug("%s needs a facing direction", ability_id)
            return _failed(floor)
        result = ability.resolve(floor, player_pos, facing, stats)
    else:
        if rng is None:
            rng = create_rng(f"{floor.seed}-{ability_id}-{turn}-{player_pos[0]},{player_pos[1]}")
        result = ability.resolve(floor, player_pos, stats, rng)

    if not result.did_cast:
        logger.debug("%s failed to cast from %s", ability_id, player_pos)
    return result
