# SPDX-License-Identifier: MIT
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from soultrap.inventory.host import InventoryEntry, ItemMetadata, SoulTrapHost
from soultrap.taxonomy import SoulLevel

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Actor:
    name: str
    soul_level: SoulLevel = SoulLevel.NONE
    black_soul: bool = False
    dead: bool = False
    player: bool = False
    player_teammate: bool = False
    processed: bool = False
    # identity -> one metadata slot per unit held (None for plain items)
    inventory: Dict[str, List[Optional[ItemMetadata]]] = field(default_factory=dict)

    def give(self, identity: str, count: int = 1, metadata: Optional[ItemMetadata] = None) -> "Actor":
        self.inventory.setdefault(identity, []).extend([metadata] * count)
        return self

    def count(self, identity: str) -> int:
        return len(self.inventory.get(identity, ()))


class InMemoryHost(SoulTrapHost):
    """
    Host backed by plain ``Actor`` objects. Used for tests and simulations.
    Notifications and stats are recorded instead of displayed.
    """

    def __init__(self, actors: Iterable[Actor] = ()):
        self.actors: List[Actor] = list(actors)
        self.notifications: List[str] = []
        self.stats: List[tuple] = []

    def add_actor(self, actor: Actor) -> Actor:
        self.actors.append(actor)
        return actor

    # ---- entity queries ----
    def query_remaining_soul_level(self, entity: Actor) -> SoulLevel:
        if entity.processed:
            return SoulLevel.NONE
        return entity.soul_level

    def has_black_soul(self, entity: Actor) -> bool:
        return entity.black_soul

    def is_dead(self, entity: Actor) -> bool:
        return entity.dead

    def is_player(self, entity: Actor) -> bool:
        return entity.player

    def is_player_teammate(self, entity: Actor) -> bool:
        return entity.player_teammate

    def find_player(self) -> Optional[Actor]:
        for actor in self.actors:
            if actor.player:
                return actor
        return None

    # ---- inventory ----
    def scan_inventory(self, entity: Actor, predicate: Callable[[str], bool]) -> Iterable[InventoryEntry]:
        for identity, slots in entity.inventory.items():
            if not slots or not predicate(identity):
                continue
            metadata = next((m for m in slots if m is not None), None)
            yield InventoryEntry(identity=identity, count=len(slots), metadata=metadata)

    def add_item(self, entity: Actor, identity: str, metadata: Optional[ItemMetadata], count: int) -> None:
        entity.give(identity, count, metadata)

    def remove_item(self, entity: Actor, identity: str, count: int, metadata: Optional[ItemMetadata]) -> None:
        slots = entity.inventory.get(identity, [])
        for _ in range(count):
            if metadata in slots:
                slots.remove(metadata)
            elif None in slots:
                slots.remove(None)
            elif slots:
                slots.pop(0)
            else:
                raise KeyError(f"{entity.name} holds no {identity!r} to remove")
        if not slots:
            entity.inventory.pop(identity, None)

    # ---- side effects ----
    def mark_entity_processed(self, entity: Actor) -> None:
        entity.processed = True

    def emit_notification(self, message: str) -> None:
        logger.info("Notification: %s", message)
        self.notifications.append(message)

    def emit_stat(self, collector: Any, victim: Any) -> None:
        self.stats.append((collector, victim))
