# SPDX-License-Identifier: MIT
"""
Victims
-------
A victim is one soul waiting to be trapped. The first victim of a call is the
soul of the defeated entity; displacement and splitting add more.

The queue always yields the largest soul first. Black souls rank above grand
souls. Souls of equal size come out in the order they were pushed.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple

from soultrap.taxonomy import SoulSize


class SoulCategory(Enum):
    BLACK = "black"
    SPLIT = "split"  # half of a soul that was split, must fill a gem of its own size
    FULL = "full"


@dataclass(frozen=True)
class Victim:
    entity: Optional[Any]
    soul_size: SoulSize
    category: SoulCategory
    is_primary: bool = False

    @classmethod
    def primary(cls, entity: Any, soul_size: SoulSize) -> "Victim":
        return cls(entity, soul_size, cls._category_for(soul_size, SoulCategory.FULL), True)

    @classmethod
    def displaced(cls, soul_size: SoulSize) -> "Victim":
        return cls(None, soul_size, cls._category_for(soul_size, SoulCategory.FULL), False)

    @classmethod
    def split(cls, entity: Any, soul_size: SoulSize) -> "Victim":
        if not soul_size.is_white:
            raise ValueError(f"Cannot create a split soul of size {soul_size.name}")
        return cls(entity, soul_size, SoulCategory.SPLIT, False)

    @staticmethod
    def _category_for(soul_size: SoulSize, default: SoulCategory) -> SoulCategory:
        if soul_size == SoulSize.BLACK:
            return SoulCategory.BLACK
        if not soul_size.is_white:
            raise ValueError(f"Victims need a soul, got {SoulSize(soul_size).name}")
        return default

    @property
    def is_primary_lineage(self) -> bool:
        """The defeated entity's own soul, or a fragment split off it."""
        return self.is_primary or (self.category is SoulCategory.SPLIT and self.entity is not None)

    def __str__(self) -> str:
        tag = "primary" if self.is_primary else self.category.value
        return f"Victim({self.soul_size.name}, {tag})"


class VictimQueue:
    def __init__(self):
        self._heap: List[Tuple[int, int, Victim]] = []
        self._seq = itertools.count()

    def push(self, victim: Victim) -> None:
        heapq.heappush(self._heap, (-int(victim.soul_size), next(self._seq), victim))

    def pop(self) -> Victim:
        if not self._heap:
            raise IndexError("pop from an empty victim queue")
        return heapq.heappop(self._heap)[2]

    def peek(self) -> Optional[Victim]:
        return self._heap[0][2] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[Victim]:
        """Victims in pop order, without consuming the queue."""
        return (entry[2] for entry in sorted(self._heap))
