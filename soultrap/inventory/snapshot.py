# SPDX-License-Identifier: MIT
"""
Inventory Snapshot
------------------
Point-in-time view of the soul gems a collector owns, keyed by identity.

The snapshot is rebuilt from the host only when it has been marked dirty, and
only between two queued victims, never in the middle of a strategy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence

from soultrap.gems.container_index import SoulGemGroup, SoulGemIndex
from soultrap.inventory.host import ItemMetadata, SoulTrapHost
from soultrap.taxonomy import SoulSize

logger = logging.getLogger(__name__)


class InventoryStatus(Enum):
    HAS_FILLABLE = "has_fillable"
    NONE_OWNED = "none_owned"  # collector owns no soul gems
    ALL_FULL = "all_full"      # every owned soul gem is fully filled


@dataclass(frozen=True)
class OwnedSoulGem:
    count: int
    metadata: Optional[ItemMetadata] = None


@dataclass
class InventorySnapshot:
    items: Dict[str, OwnedSoulGem] = field(default_factory=dict)
    full_count: int = 0

    @classmethod
    def build(
        cls,
        host: SoulTrapHost,
        collector: Any,
        index: SoulGemIndex,
        predicate: Optional[Callable[[str], bool]] = None,
    ) -> "InventorySnapshot":
        predicate = predicate or index.is_soul_gem
        items: Dict[str, OwnedSoulGem] = {}
        full_count = 0

        for entry in host.scan_inventory(collector, predicate):
            if entry.count <= 0:
                continue
            items[entry.identity] = OwnedSoulGem(count=entry.count, metadata=entry.metadata)

            # Dual soul gems holding a grand or black soul count as full even
            # though the soul could still be displaced.
            group = index.group_of(entry.identity)
            if group is not None and group.is_full(entry.identity):
                full_count += 1

        return cls(items=items, full_count=full_count)

    @property
    def distinct_count(self) -> int:
        return len(self.items)

    @property
    def status(self) -> InventoryStatus:
        if not self.items:
            return InventoryStatus.NONE_OWNED
        if self.full_count == len(self.items):
            return InventoryStatus.ALL_FULL
        return InventoryStatus.HAS_FILLABLE

    def owned(self, identity: str) -> Optional[OwnedSoulGem]:
        return self.items.get(identity)


@dataclass(frozen=True)
class SearchResult:
    group: SoulGemGroup
    contained: SoulSize
    count: int
    metadata: Optional[ItemMetadata]

    @property
    def identity(self) -> str:
        return self.group.identity_at(self.contained)

    def identity_at(self, contained: SoulSize) -> str:
        return self.group.identity_at(contained)


def find_first_owned(
    snapshot: InventorySnapshot,
    groups: Sequence[SoulGemGroup],
    contained: SoulSize,
) -> Optional[SearchResult]:
    """First group (in index order) whose member at ``contained`` the collector owns."""
    for group in groups:
        owned = snapshot.owned(group.identity_at(contained))
        if owned is not None and owned.count > 0:
            return SearchResult(group=group, contained=contained, count=owned.count, metadata=owned.metadata)
    return None
