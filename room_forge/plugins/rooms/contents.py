from __future__ import annotations
from dataclasses import dataclass, field
import random
from typing import Dict, List, Optional, Tuple

from .tables import CONDITIONS, ITEM_TYPES, RANDOM, RARITIES

# (low, high) number of loose items rolled for each item quantity
QUANTITY_RANGES: Dict[str, Tuple[int, int]] = {
    "zero": (0, 0),
    "one": (1, 1),
    "couple": (2, 2),
    "several": (3, 5),
    "numerous": (6, 12),
    "abundant": (13, 24),
}

# (low, high) number of furniture pieces for each furniture quantity
FURNITURE_RANGES: Dict[str, Tuple[int, int]] = {
    "none": (0, 0),
    "minimum": (1, 1),
    "sparse": (2, 2),
    "average": (3, 4),
    "furnished": (5, 8),
}

# (name, holds other items)
FURNITURE = [
    ("bench", False),
    ("bookcase", True),
    ("cabinet", True),
    ("chair", False),
    ("chest", True),
    ("crate", True),
    ("rug", False),
    ("shelf", False),
    ("table", False),
    ("wardrobe", True),
]


@dataclass(frozen=True)
class Item:
    name: str
    item_type: str
    condition: str
    rarity: str
    count: int = 1

    @property
    def label(self) -> str:
        return f"{self.name} ({self.condition}, {self.rarity})"


@dataclass(frozen=True)
class Container:
    name: str
    count: int = 1
    contents: Tuple[Item, ...] = ()


@dataclass(frozen=True)
class ItemSet:
    """What a room holds. Rendering only ever looks at the counts."""
    items: Tuple[Item, ...] = ()
    containers: Tuple[Container, ...] = ()

    @property
    def total_count(self) -> int:
        loose = sum(i.count for i in self.items)
        held = sum(c.count + sum(i.count for i in c.contents) for c in self.containers)
        return loose + held


def _roll_range(rng: random.Random, span: Tuple[int, int]) -> int:
    lo, hi = span
    return rng.randint(lo, hi)


def _pick(rng: random.Random, value: Optional[str], domain) -> str:
    # Fields left as "random" by the resolver are rolled per item here.
    if value is None or value == RANDOM:
        return rng.choice(domain)
    return value


def roll_item(rng: random.Random, settings) -> Item:
    item_type = _pick(rng, settings.item_type, ITEM_TYPES)
    return Item(
        name=f"{item_type} item",
        item_type=item_type,
        condition=_pick(rng, settings.item_condition, CONDITIONS),
        rarity=_pick(rng, settings.item_rarity, RARITIES),
    )


def generate_item_set(settings, rng: Optional[random.Random] = None) -> ItemSet:
    """
    Default item-generation collaborator: builds an ItemSet from a resolved
    RoomConfig. Furniture that can hold things becomes a container and may
    receive some of the rolled items.
    """
    rng = rng or random.Random()

    item_count = _roll_range(rng, QUANTITY_RANGES.get(settings.item_quantity, (0, 0)))
    furniture_count = _roll_range(rng, FURNITURE_RANGES.get(settings.room_furniture_quantity or "none", (0, 0)))

    loose: List[Item] = [roll_item(rng, settings) for _ in range(item_count)]
    furniture: List[Item] = []
    holders: List[Tuple[str, List[Item]]] = []

    for _ in range(furniture_count):
        name, holds = rng.choice(FURNITURE)
        if holds:
            holders.append((name, []))
        else:
            furniture.append(Item(
                name=name,
                item_type="furnishing",
                condition=settings.room_condition or "average",
                rarity="common",
            ))

    if holders:
        for item in list(loose):
            if rng.random() < 0.5:
                loose.remove(item)
                rng.choice(holders)[1].append(item)

    containers = tuple(Container(name=name, contents=tuple(held)) for name, held in holders)
    return ItemSet(items=tuple(furniture + loose), containers=containers)
