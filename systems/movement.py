# systems/movement.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from systems.inventory import Inventory, ItemDef, ItemLookup, add_item, get_item_def
from world.entities import ENEMY, ITEM, NPC, RELIC, Entity, Position
from world.game_map import Floor
from world.tiles import EXIT, TRAP

Direction = Tuple[int, int]

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

# Failure reasons
INVALID_DIRECTION = "invalid-direction"
OUT_OF_BOUNDS = "out-of-bounds"
BLOCKED = "blocked"
ENEMY_COLLISION = "enemy-collision"
NPC_COLLISION = "npc-collision"


def normalize_direction(direction: Union[str, Direction, None]) -> Optional[Direction]:
    """A cardinal (dx, dy) for a direction name or vector; None if it is neither."""
    if isinstance(direction, str):
        return DIRECTIONS.get(direction.lower())
    if direction is None:
        return None
    try:
        dx, dy = direction
    except (TypeError, ValueError):
        return None
    if (dx, dy) in DIRECTIONS.values():
        return dx, dy
    return None


@dataclass(frozen=True)
class MoveOutcome:
    success: bool
    reason: Optional[str] = None
    new_pos: Optional[Position] = None
    picked_up_item: Optional[ItemDef] = None
    new_inventory: Optional[Inventory] = None
    item_entity_id_to_remove: Optional[str] = None
    triggered_trap: bool = False
    triggered_exit: bool = False
    collided_with: Optional[Entity] = None


def _item_for(entity: Entity, item_lookup: ItemLookup) -> Optional[ItemDef]:
    """Item carried by a floor entity: embedded under "item" or referenced by "item_id"."""
    data = entity.data if isinstance(entity.data, dict) else {}
    embedded = data.get("item")
    if isinstance(embedded, ItemDef):
        return embedded
    item_id = data.get("item_id")
    return item_lookup(item_id) if item_id else None


def attempt_move(
    player_pos: Position,
    direction: Union[str, Direction, None],
    floor: Floor,
    inventory: Inventory,
    item_lookup: Optional[ItemLookup] = None,
) -> MoveOutcome:
    """
    Decide what happens when the player steps in ``direction``.

    Nothing is changed here; the caller applies the outcome. Bumping an
    enemy or npc does not move the player and reports the entity instead.
    Items are picked up into the first empty slot; with a full inventory
    the player still moves and the item stays where it is.
    """
    step = normalize_direction(direction)
    if step is None:
        return MoveOutcome(success=False, reason=INVALID_DIRECTION)

    target = (player_pos[0] + step[0], player_pos[1] + step[1])
    if not floor.in_bounds(target):
        return MoveOutcome(success=False, reason=OUT_OF_BOUNDS)

    tile = floor.tile_at(target)
    if not tile.walkable:
        return MoveOutcome(success=False, reason=BLOCKED)

    occupant = floor.entity_at(target)
    if occupant is not None and occupant.kind == ENEMY:
        return MoveOutcome(success=False, reason=ENEMY_COLLISION, collided_with=occupant)
    if occupant is not None and occupant.kind == NPC:
        return MoveOutcome(success=False, reason=NPC_COLLISION, collided_with=occupant)

    picked_up = None
    new_inventory = None
    remove_id = None
    if occupant is not None and occupant.kind in (ITEM, RELIC):
        item = _item_for(occupant, item_lookup or get_item_def)
        if item is not None:
            updated = add_item(inventory, item)
            if updated is not None:
                picked_up, new_inventory, remove_id = item, updated, occupant.id

    return MoveOutcome(
        success=True,
        new_pos=target,
        picked_up_item=picked_up,
        new_inventory=new_inventory,
        item_entity_id_to_remove=remove_id,
        triggered_trap=tile.kind == TRAP,
        triggered_exit=tile.kind == EXIT,
    )
