# SPDX-License-Identifier: MIT
from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional


class SoulTrapSuccessMessage(Enum):
    SOUL_CAPTURED = "soul_captured"
    SOUL_DISPLACED = "soul_displaced"
    SOUL_SHRUNK = "soul_shrunk"
    SOUL_SPLIT = "soul_split"


class SoulTrapFailureMessage(Enum):
    NO_SOUL_GEMS_OWNED = "no_soul_gems_owned"
    ALL_SOUL_GEMS_FILLED = "all_soul_gems_filled"
    NO_SUITABLE_SOUL_GEM = "no_suitable_soul_gem"
    NO_SOUL_GEM_LARGE_ENOUGH = "no_soul_gem_large_enough"


class MiscMessage(Enum):
    TIME_TAKEN_TO_TRAP_SOUL = "time_taken_to_trap_soul"


DEFAULT_MESSAGES = {
    SoulTrapSuccessMessage.SOUL_CAPTURED: "Soul captured!",
    SoulTrapSuccessMessage.SOUL_DISPLACED: "Soul captured! A smaller soul was displaced.",
    SoulTrapSuccessMessage.SOUL_SHRUNK: "Soul captured! The soul was shrunk to fit a smaller soul gem.",
    SoulTrapSuccessMessage.SOUL_SPLIT: "Soul captured! The soul was split into smaller souls.",
    SoulTrapFailureMessage.NO_SOUL_GEMS_OWNED: "You have no soul gems.",
    SoulTrapFailureMessage.ALL_SOUL_GEMS_FILLED: "All your soul gems are full.",
    SoulTrapFailureMessage.NO_SUITABLE_SOUL_GEM: "No suitable soul gem found.",
    SoulTrapFailureMessage.NO_SOUL_GEM_LARGE_ENOUGH: "No soul gem is large enough for this soul.",
    MiscMessage.TIME_TAKEN_TO_TRAP_SOUL: "Time taken to trap soul: {:.7f} seconds",
}


def get_message(key: Enum, overrides: Optional[Mapping[str, str]] = None) -> str:
    """Text for ``key``, preferring an override keyed by the message's value."""
    if overrides and key.value in overrides:
        return overrides[key.value]
    return DEFAULT_MESSAGES[key]
