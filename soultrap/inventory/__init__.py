from soultrap.inventory.host import InventoryEntry, ItemMetadata, SoulTrapHost
from soultrap.inventory.memory_host import Actor, InMemoryHost
from soultrap.inventory.snapshot import (
    InventorySnapshot,
    InventoryStatus,
    OwnedSoulGem,
    SearchResult,
    find_first_owned,
)

__all__ = [
    "Actor",
    "InMemoryHost",
    "InventoryEntry",
    "InventorySnapshot",
    "InventoryStatus",
    "ItemMetadata",
    "OwnedSoulGem",
    "SearchResult",
    "SoulTrapHost",
    "find_first_owned",
]
