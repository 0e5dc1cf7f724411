from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Dict, Mapping, Optional, Sequence

from settings import HP_PER_VITALITY_CHARM

if TYPE_CHECKING:
    from systems.inventory import ItemDef

logger = logging.getLogger("crawlcore.stats")

VITALITY_CHARM_ID = "vitality-charm"


@dataclass(frozen=True)
class PlayerStats:
    # Combat-relevant player stats; held items add to these
    max_hp: int = 100
    max_mp: int = 50
    armor: int = 5
    weapon_damage: int = 15
    spell_damage: int = 20
    hp_per_floor: int = 0   # healed on every floor climb


STAT_KEYS = tuple(f.name for f in fields(PlayerStats))


def add_stats(base: PlayerStats, bonuses: Mapping[str, float]) -> PlayerStats:
    """Add bonuses onto ``base``. Keys that are not stat names are ignored."""
    changes: Dict[str, int] = {}
    for key, value in bonuses.items():
        if key not in STAT_KEYS:
            logger.debug("Ignoring unknown stat bonus %r", key)
            continue
        changes[key] = int(getattr(base, key) + value)
    return replace(base, **changes)


def inventory_stat_bonuses(inventory: Sequence[Optional["ItemDef"]]) -> Dict[str, float]:
    bonuses: Dict[str, float] = {}
    for item in inventory:
        if item is None:
            continue
        for key, value in item.stats.items():
            bonuses[key] = bonuses.get(key, 0) + value
    return bonuses


def effective_stats(base: PlayerStats, inventory: Sequence[Optional["ItemDef"]]) -> PlayerStats:
    """
    Base stats plus the passive bonuses of everything held. Each vitality
    charm adds HP_PER_VITALITY_CHARM to the per-floor heal.
    """
    stats = add_stats(base, inventory_stat_bonuses(inventory))
    charms = sum(1 for item in inventory if item is not None and item.id == VITALITY_CHARM_ID)
    return replace(stats, hp_per_floor=HP_PER_VITALITY_CHARM * charms)
