# SPDX-License-Identifier: MIT
"""
Soul Taxonomy
-------------
Ordered scales for soul sizes, soul levels and soul gem capacities, plus the
conversions between them.

Soul sizes on the white scale are ordered ``NONE < PETTY < ... < GRAND``.
``BLACK`` is a separate category: it is only ever held by black-capable soul
gems and is never produced by splitting.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict, Tuple


class SoulSize(IntEnum):
    NONE = 0
    PETTY = 1
    LESSER = 2
    COMMON = 3
    GREATER = 4
    GRAND = 5
    BLACK = 6

    @property
    def is_white(self) -> bool:
        return SoulSize.PETTY <= self <= SoulSize.GRAND

    @classmethod
    def parse(cls, value) -> "SoulSize":
        """Accept an enum member, its integer value or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown soul size: {value!r}") from None
        return cls(value)


class SoulLevel(IntEnum):
    """Soul level as reported by the host for entities and item metadata."""
    NONE = 0
    PETTY = 1
    LESSER = 2
    COMMON = 3
    GREATER = 4
    GRAND = 5


class SoulGemCapacity(IntEnum):
    PETTY = 1
    LESSER = 2
    COMMON = 3
    GREATER = 4
    GRAND = 5
    DUAL = 6   # any white soul up to grand, or a single black soul
    BLACK = 7  # black souls only

    FIRST = 1
    LAST_WHITE = 6

    @classmethod
    def parse(cls, value) -> "SoulGemCapacity":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown soul gem capacity: {value!r}") from None
        return cls(value)


class SoulShrinkingTechnique(str, Enum):
    NONE = "none"
    SHRINK = "shrink"
    SPLIT = "split"


# Raw soul values. Splitting conserves the total.
SOUL_VALUES: Dict[SoulSize, int] = {
    SoulSize.NONE: 0,
    SoulSize.PETTY: 250,
    SoulSize.LESSER: 500,
    SoulSize.COMMON: 1000,
    SoulSize.GREATER: 2000,
    SoulSize.GRAND: 3000,
    SoulSize.BLACK: 3000,
}

SPLIT_TABLE: Dict[SoulSize, Tuple[SoulSize, SoulSize]] = {
    SoulSize.GRAND: (SoulSize.GREATER, SoulSize.COMMON),
    SoulSize.GREATER: (SoulSize.COMMON, SoulSize.COMMON),
    SoulSize.COMMON: (SoulSize.LESSER, SoulSize.LESSER),
    SoulSize.LESSER: (SoulSize.PETTY, SoulSize.PETTY),
}


def capacity_of(soul_size: SoulSize) -> SoulGemCapacity:
    """Smallest capacity that holds ``soul_size`` in full."""
    if soul_size == SoulSize.BLACK:
        return SoulGemCapacity.BLACK
    if not soul_size.is_white:
        raise ValueError(f"No soul gem capacity matches soul size {soul_size.name}")
    return SoulGemCapacity(int(soul_size))


def soul_size_of(capacity: SoulGemCapacity) -> SoulSize:
    """Largest soul a soul gem of ``capacity`` holds."""
    if capacity == SoulGemCapacity.BLACK:
        return SoulSize.BLACK
    if capacity == SoulGemCapacity.DUAL:
        return SoulSize.GRAND
    return SoulSize(int(capacity))


def fill_levels(capacity: SoulGemCapacity) -> Tuple[SoulSize, ...]:
    """Every soul size a soul gem of ``capacity`` can contain, ``NONE`` included."""
    if capacity == SoulGemCapacity.BLACK:
        return (SoulSize.NONE, SoulSize.BLACK)
    levels = tuple(SoulSize(v) for v in range(SoulSize.NONE, soul_size_of(capacity) + 1))
    if capacity == SoulGemCapacity.DUAL:
        levels += (SoulSize.BLACK,)
    return levels


def is_full(capacity: SoulGemCapacity, contained: SoulSize) -> bool:
    if contained == SoulSize.NONE:
        return False
    if capacity == SoulGemCapacity.DUAL and contained == SoulSize.BLACK:
        return True
    return contained == soul_size_of(capacity)


def to_soul_size(level: SoulLevel) -> SoulSize:
    return SoulSize(int(level))


def split(soul_size: SoulSize) -> Tuple[SoulSize, ...]:
    """Halves of a white soul; empty for souls that cannot be split."""
    return SPLIT_TABLE.get(soul_size, ())
