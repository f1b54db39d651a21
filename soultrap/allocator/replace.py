# SPDX-License-Identifier: MIT
from __future__ import annotations

import logging
from typing import Optional, Sequence

from soultrap.allocator.context import AllocationContext
from soultrap.allocator.victims import Victim
from soultrap.gems.container_index import SoulGemGroup
from soultrap.inventory.host import ItemMetadata
from soultrap.inventory.snapshot import find_first_owned
from soultrap.taxonomy import SoulLevel, SoulSize, to_soul_size

logger = logging.getLogger(__name__)


def _metadata_from_original(original: Optional[ItemMetadata]) -> Optional[ItemMetadata]:
    """Fresh metadata that only inherits ownership from ``original``."""
    if original is not None and original.owner:
        return ItemMetadata(owner=original.owner)
    return None


def replace_soul_gem(
    to_add: str,
    to_remove: str,
    to_remove_metadata: Optional[ItemMetadata],
    d: AllocationContext,
) -> None:
    """Swap one ``to_remove`` for one ``to_add`` in the collector's inventory."""
    policy = d.policy
    old_metadata: Optional[ItemMetadata] = None
    new_metadata: Optional[ItemMetadata] = None

    if policy.allow_extra_soul_relocation or policy.preserve_ownership:
        old_metadata = to_remove_metadata

    if policy.allow_extra_soul_relocation and old_metadata is not None:
        soul_level = SoulLevel(old_metadata.soul_level)
        if soul_level != SoulLevel.NONE:
            # The original category is gone; a grand soul in a black-capable
            # soul gem is assumed to be black.
            if soul_level == SoulLevel.GRAND and d.index.can_hold_black_soul(to_remove):
                soul_size = SoulSize.BLACK
            else:
                soul_size = to_soul_size(soul_level)
            logger.debug("Relocating extra soul of size: %s", soul_size.name)
            d.victims.push(Victim.displaced(soul_size))

    if policy.preserve_ownership:
        new_metadata = _metadata_from_original(old_metadata)

    logger.debug("Replacing soul gems in %s's inventory: %s -> %s", d.collector, to_remove, to_add)

    # Add before remove. A failure in between leaves an extra soul gem behind,
    # never a missing one.
    d.host.add_item(d.collector, to_add, new_metadata, 1)
    d.set_inventory_changed()
    d.host.remove_item(d.collector, to_remove, 1, old_metadata)


def fill_soul_gem(
    groups: Sequence[SoulGemGroup],
    contained: SoulSize,
    target: SoulSize,
    d: AllocationContext,
) -> bool:
    """
    Replace the first owned soul gem among ``groups`` holding ``contained``
    with its sibling holding ``target``. Returns False (and touches nothing)
    when the collector owns none of them.
    """
    first_owned = find_first_owned(d.snapshot, groups, contained)
    if first_owned is None:
        return False

    replace_soul_gem(
        first_owned.identity_at(target),
        first_owned.identity,
        first_owned.metadata,
        d,
    )
    return True
