# SPDX-License-Identifier: MIT
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from soultrap.taxonomy import SoulLevel


@dataclass(frozen=True)
class ItemMetadata:
    """Per-item extra data attached to a stack of items in an inventory."""
    owner: Optional[str] = None
    soul_level: SoulLevel = SoulLevel.NONE
    enchantment: Optional[str] = None


@dataclass(frozen=True)
class InventoryEntry:
    identity: str
    count: int
    metadata: Optional[ItemMetadata] = None


class SoulTrapHost(ABC):
    """
    Everything the soul trap core needs from the host process: entity queries,
    inventory access and user-facing notifications.

    Entities are opaque to the core; they are only passed back to the host.
    """

    # ---- entity queries ----
    @abstractmethod
    def query_remaining_soul_level(self, entity: Any) -> SoulLevel:
        """Soul still attached to ``entity`` (``NONE`` once it has been trapped)."""
        ...

    @abstractmethod
    def has_black_soul(self, entity: Any) -> bool:
        ...

    @abstractmethod
    def is_dead(self, entity: Any) -> bool:
        ...

    @abstractmethod
    def is_player(self, entity: Any) -> bool:
        ...

    @abstractmethod
    def is_player_teammate(self, entity: Any) -> bool:
        ...

    @abstractmethod
    def find_player(self) -> Optional[Any]:
        ...

    # ---- inventory ----
    @abstractmethod
    def scan_inventory(self, entity: Any, predicate: Callable[[str], bool]) -> Iterable[InventoryEntry]:
        """Yield the entries of ``entity``'s inventory whose identity matches ``predicate``."""
        ...

    @abstractmethod
    def add_item(self, entity: Any, identity: str, metadata: Optional[ItemMetadata], count: int) -> None:
        ...

    @abstractmethod
    def remove_item(self, entity: Any, identity: str, count: int, metadata: Optional[ItemMetadata]) -> None:
        ...

    # ---- side effects ----
    @abstractmethod
    def mark_entity_processed(self, entity: Any) -> None:
        ...

    @abstractmethod
    def emit_notification(self, message: str) -> None:
        ...

    @abstractmethod
    def emit_stat(self, collector: Any, victim: Any) -> None:
        ...
