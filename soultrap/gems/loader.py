# SPDX-License-Identifier: MIT
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from soultrap.gems.container_index import SoulGemDefinitionError, SoulGemGroup, SoulGemIndex
from soultrap.taxonomy import SoulGemCapacity, SoulSize

logger = logging.getLogger(__name__)


def parse_group(raw: Dict[str, Any]) -> SoulGemGroup:
    """
    Build a group from one ``soul_gems`` entry:

        name: common
        capacity: common
        reusable: false
        members: {none: SoulGemCommonEmpty, petty: SoulGemCommonPetty, ...}
    """
    if not isinstance(raw, dict):
        raise SoulGemDefinitionError(f"Soul gem entry must be a mapping, got {type(raw).__name__}")

    name = str(raw.get("name") or "").strip()
    if not name:
        raise SoulGemDefinitionError("Soul gem entry is missing a name")

    try:
        capacity = SoulGemCapacity.parse(raw.get("capacity"))
    except ValueError as e:
        raise SoulGemDefinitionError(f"{name}: {e}") from e

    members_raw = raw.get("members") or {}
    if not isinstance(members_raw, dict):
        raise SoulGemDefinitionError(f"{name}: members must be a mapping of fill level to identity")

    members: Dict[SoulSize, str] = {}
    for level, identity in members_raw.items():
        # a ``~`` or ``null`` key means empty
        key = "none" if level is None else level
        try:
            members[SoulSize.parse(key)] = str(identity)
        except ValueError as e:
            raise SoulGemDefinitionError(f"{name}: {e}") from e

    return SoulGemGroup(
        name=name,
        capacity=capacity,
        members=members,
        reusable=bool(raw.get("reusable", False)),
    )


def build_index(entries: Iterable[Dict[str, Any]]) -> SoulGemIndex:
    groups: List[SoulGemGroup] = [parse_group(e) for e in entries or ()]
    index = SoulGemIndex(groups)
    logger.debug("Built soul gem index with %d groups", len(index))
    return index
