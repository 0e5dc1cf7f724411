# systems/inventory.py

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from engine.error_handler import ContentError
from settings import ABILITY_BAR_SLOTS, INVENTORY_SLOTS

logger = logging.getLogger("crawlcore.inventory")

# Item kinds
CONSUMABLE = "consumable"
PASSIVE = "passive"
ABILITY_GRANTING = "ability-granting"
RELIC = "relic"

ITEM_KINDS = (CONSUMABLE, PASSIVE, ABILITY_GRANTING, RELIC)


# ---------- Item definitions ----------

@dataclass(frozen=True)
class ItemDef:
    id: str
    name: str
    kind: str                   # see ITEM_KINDS
    description: str = ""
    stats: Mapping[str, int] = field(default_factory=dict)   # e.g. {"armor": 2}
    heal_hp: int = 0            # consumables
    restore_mp: int = 0
    ability_id: Optional[str] = None
    rarity: str = "common"
    value: int = 0
    icon: str = ""


ItemLookup = Callable[[str], Optional[ItemDef]]


def _items_path() -> Path:
    # systems/ -> project root / data / items.json
    here = Path(__file__).resolve()
    return here.parent.parent / "data" / "items.json"


def _parse_item(entry: Mapping) -> ItemDef:
    try:
        item_id = entry["id"]
    except (KeyError, TypeError):
        raise ContentError(f"Item entry without an id: {entry!r}")
    kind = entry.get("kind", PASSIVE)
    if kind not in ITEM_KINDS:
        raise ContentError(f"Item {item_id!r} has unknown kind {kind!r}")
    try:
        return ItemDef(
            id=item_id,
            name=entry.get("name", item_id),
            kind=kind,
            description=entry.get("description", ""),
            stats={k: int(v) for k, v in entry.get("stats", {}).items()},
            heal_hp=int(entry.get("heal_hp", 0)),
            restore_mp=int(entry.get("restore_mp", 0)),
            ability_id=entry.get("ability_id"),
            rarity=entry.get("rarity", "common"),
            value=int(entry.get("value", 0)),
            icon=entry.get("icon", ""),
        )
    except (TypeError, ValueError) as e:
        raise ContentError(f"Item {item_id!r} is malformed: {e}")


class ItemCatalog:
    """
    Read-only id -> ItemDef lookup. Instances are callable, so a catalog can
    be passed anywhere an ItemLookup is expected.
    """

    def __init__(self, items: Sequence[ItemDef] = ()) -> None:
        self._items: Dict[str, ItemDef] = {item.id: item for item in items}

    @classmethod
    def from_file(cls, path: Optional[Path] = None) -> "ItemCatalog":
        if path is None:
            path = _items_path()
        if not path.exists():
            # Quiet fail: the core still runs without items
            logger.warning("Item catalog %s not found; no items loaded", path)
            return cls()

        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        entries = raw.get("items", []) if isinstance(raw, dict) else raw
        return cls([_parse_item(entry) for entry in entries])

    def get(self, item_id: str) -> Optional[ItemDef]:
        return self._items.get(item_id)

    __call__ = get

    def all_items(self) -> List[ItemDef]:
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)


_DEFAULT_CATALOG: Optional[ItemCatalog] = None


def default_catalog() -> ItemCatalog:
    """Catalog loaded once from data/items.json."""
    global _DEFAULT_CATALOG
    if _DEFAULT_CATALOG is None:
        _DEFAULT_CATALOG = ItemCatalog.from_file()
    return _DEFAULT_CATALOG


def get_item_def(item_id: str) -> Optional[ItemDef]:
    return default_catalog().get(item_id)


# ---------- Inventory ----------
#
# A fixed number of slots, each holding an ItemDef or None. Inventories are
# tuples; every operation returns a new one and leaves its input alone.

Inventory = Tuple[Optional[ItemDef], ...]


def empty_inventory(slots: int = INVENTORY_SLOTS) -> Inventory:
    return (None,) * slots


def _valid_slot(slot: int) -> bool:
    return 0 <= slot < INVENTORY_SLOTS


def first_empty_slot(inventory: Inventory) -> Optional[int]:
    for i in range(INVENTORY_SLOTS):
        if i >= len(inventory) or inventory[i] is None:
            return i
    return None


def add_item(inventory: Inventory, item: ItemDef) -> Optional[Inventory]:
    """Put ``item`` in the first empty slot. None if the inventory is full."""
    slot = first_empty_slot(inventory)
    if slot is None:
        return None
    items = list(inventory) + [None] * (INVENTORY_SLOTS - len(inventory))
    items[slot] = item
    return tuple(items)


def remove_item(inventory: Inventory, slot: int) -> Inventory:
    """Empty ``slot``. Out-of-range slots leave the inventory unchanged."""
    if not _valid_slot(slot) or slot >= len(inventory):
        return inventory
    items = list(inventory)
    items[slot] = None
    return tuple(items)


def get_item_at(inventory: Inventory, slot: int) -> Optional[ItemDef]:
    if not _valid_slot(slot) or slot >= len(inventory):
        return None
    return inventory[slot]


def inventory_count(inventory: Inventory) -> int:
    return sum(1 for item in inventory if item is not None)


@dataclass(frozen=True)
class UseOutcome:
    used: bool
    inventory: Inventory
    hp: int
    mp: int


def use_item(inventory: Inventory, slot: int, hp: int, mp: int) -> UseOutcome:
    """
    Consume the item in ``slot``, applying its heal/restore to ``hp``/``mp``.

    Only consumables can be used. Results are not clamped to the maximums;
    the caller clamps against effective stats.
    """
    item = get_item_at(inventory, slot)
    if item is None or item.kind != CONSUMABLE:
        return UseOutcome(used=False, inventory=inventory, hp=hp, mp=mp)
    return UseOutcome(
        used=True,
        inventory=remove_item(inventory, slot),
        hp=hp + item.heal_hp,
        mp=mp + item.restore_mp,
    )


def ability_bar(
    inventory: Inventory,
    known_abilities: Sequence[str],
    slots: int = ABILITY_BAR_SLOTS,
) -> Tuple[Optional[str], ...]:
    """
    First ``slots`` distinct known ability ids granted by held items, in
    inventory order, padded with None.
    """
    seen: List[str] = []
    for item in inventory:
        if item is None or item.kind != ABILITY_GRANTING or not item.ability_id:
            continue
        if item.ability_id in seen or item.ability_id not in known_abilities:
            continue
        seen.append(item.ability_id)
    bar = seen[:slots]
    return tuple(bar) + (None,) * (slots - len(bar))
