# room_forge/plugins/rooms/tables.py

from __future__ import annotations

from typing import Dict, Tuple

# Placeholder accepted by every configurable field; never a resolved value
# except for item condition / rarity (see resolver).
RANDOM = "random"

# ---- Attribute scales (ordered) ----

QUANTITIES = ("zero", "one", "couple", "several", "numerous", "abundant")

CONDITIONS = ("decaying", "busted", "poor", "average", "good", "exquisite")

RARITIES = ("abundant", "common", "average", "uncommon", "rare", "exotic", "legendary")

# Rarities called out by name in prose; everything else reads "ordinary".
INDICATED_RARITIES = frozenset({"uncommon", "rare", "exotic", "legendary"})

FURNITURE_QUANTITIES = ("none", "minimum", "sparse", "average", "furnished")

SIZES = ("tiny", "small", "medium", "large", "massive")

ITEM_TYPES = (
    "ammo", "armor", "chancery", "clothing", "coin", "container", "food",
    "furnishing", "kitchen", "liquid", "music", "mysterious", "mystic",
    "potion", "survival", "tack", "tool", "treasure", "trinket", "weapon",
)

# ---- Rooms ----

ROOM_TYPES = (
    "armory", "atrium", "ballroom", "bathhouse", "bedroom", "chamber",
    "dining", "dormitory", "great_hall", "hallway", "kitchen", "laboratory",
    "library", "pantry", "parlour", "prison", "room", "shrine", "smithy",
    "storage", "study", "throne", "torture", "treasury",
)

# Types that read oddly on their own ("a throne") and keep the word "room".
APPEND_ROOM_TYPES = frozenset({"dining", "storage", "throne", "torture"})

_ALL_SIZES = SIZES
_NOT_TINY = ("small", "medium", "large", "massive")

ROOM_TYPE_SIZES: Dict[str, Tuple[str, ...]] = {
    "armory":     ("small", "medium", "large"),
    "atrium":     ("medium", "large", "massive"),
    "ballroom":   ("large", "massive"),
    "bathhouse":  ("medium", "large", "massive"),
    "bedroom":    ("tiny", "small", "medium", "large"),
    "chamber":    _ALL_SIZES,
    "dining":     _NOT_TINY,
    "dormitory":  ("medium", "large", "massive"),
    "great_hall": ("large", "massive"),
    "hallway":    ("tiny", "small", "medium", "large"),
    "kitchen":    ("small", "medium", "large"),
    "laboratory": ("small", "medium", "large"),
    "library":    _NOT_TINY,
    "pantry":     ("tiny", "small", "medium"),
    "parlour":    ("small", "medium", "large"),
    "prison":     _NOT_TINY,
    "room":       _ALL_SIZES,
    "shrine":     ("tiny", "small", "medium", "large"),
    "smithy":     ("small", "medium", "large"),
    "storage":    ("tiny", "small", "medium", "large"),
    "study":      ("tiny", "small", "medium"),
    "throne":     ("large", "massive"),
    "torture":    ("small", "medium", "large"),
    "treasury":   ("small", "medium", "large"),
}

# ---- Doors ----

DOOR_TYPES = (
    "archway", "brass", "concealed", "hole", "iron", "mechanical",
    "passageway", "portcullis", "secret", "stone", "wooden",
)

LOCKABLE_DOOR_TYPES = frozenset({"brass", "iron", "mechanical", "portcullis", "stone", "wooden"})

# Material door types render as "<material> doorway".
APPEND_DOORWAY_TYPES = frozenset({"brass", "iron", "mechanical", "stone", "wooden"})

# Never mentioned in player-facing narrative.
HIDDEN_DOOR_TYPES = frozenset({"concealed", "secret"})

DIRECTIONS = ("north", "east", "south", "west")
OPPOSITE_DIRECTIONS = {"north": "south", "south": "north", "east": "west", "west": "east"}

# ---- Grid ----

CELL_FEET = 5

# ---- Field -> domain lookup used by the resolver ----

FIELD_DOMAINS: Dict[str, Tuple[str, ...]] = {
    "item_condition": CONDITIONS,
    "item_quantity": QUANTITIES,
    "item_rarity": RARITIES,
    "item_type": ITEM_TYPES,
    "room_condition": CONDITIONS,
    "room_furniture_quantity": FURNITURE_QUANTITIES,
    "room_size": SIZES,
    "room_type": ROOM_TYPES,
}


def domain_for(field_name: str) -> Tuple[str, ...]:
    """Concrete value domain of a configurable room field."""
    return FIELD_DOMAINS[field_name]
