# SPDX-License-Identifier: MIT
from __future__ import annotations

import logging
from typing import Any, Optional

from soultrap.gems.container_index import SoulGemIndex, SoulGemNotFoundError
from soultrap.inventory.host import ItemMetadata, SoulTrapHost
from soultrap.taxonomy import SoulSize

logger = logging.getLogger(__name__)


def consume_soul_gem(
    host: SoulTrapHost,
    owner: Any,
    identity: str,
    index: SoulGemIndex,
    metadata: Optional[ItemMetadata] = None,
) -> SoulSize:
    """
    Spend one filled soul gem (e.g. to recharge an enchanted weapon) and return
    the size of the soul it held.

    Reusable soul gems are not used up: the owner gets the empty soul gem of
    the same group back. The empty one is added before the filled one is
    removed.
    """
    group = index.group_of(identity)
    if group is None:
        raise SoulGemNotFoundError(f"{identity!r} is not a registered soul gem")

    contained = group.contained_soul_size(identity)
    if contained == SoulSize.NONE:
        raise ValueError(f"{identity!r} is empty and cannot be consumed")

    if group.reusable:
        empty = group.identity_at(SoulSize.NONE)
        logger.debug("Returning reusable soul gem %s for %s", empty, identity)
        host.add_item(owner, empty, None, 1)

    host.remove_item(owner, identity, 1, metadata)
    return contained
