# SPDX-License-Identifier: MIT
"""
Soul Gem Index
--------------
Maps (capacity, contained soul size) to the soul gem groups that have a member
of that shape. A group is one kind of soul gem (e.g. "common soul gem"), with
exactly one concrete identity per fill level.

The index is built once when the configuration is loaded and is read-only
afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from soultrap.taxonomy import SoulGemCapacity, SoulSize, fill_levels, is_full


class SoulGemNotFoundError(LookupError):
    """Raised when a fill level or identity has no registered soul gem."""


class SoulGemDefinitionError(ValueError):
    """Raised when a soul gem group definition is malformed."""


@dataclass(frozen=True, eq=False)
class SoulGemGroup:
    name: str
    capacity: SoulGemCapacity
    members: Mapping[SoulSize, str]
    reusable: bool = False
    _by_identity: Dict[str, SoulSize] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "capacity", SoulGemCapacity(self.capacity))
        object.__setattr__(self, "members", {SoulSize(k): v for k, v in self.members.items()})

        expected = set(fill_levels(self.capacity))
        given = set(self.members)
        if given != expected:
            missing = sorted(s.name for s in expected - given)
            extra = sorted(s.name for s in given - expected)
            raise SoulGemDefinitionError(
                f"Soul gem group {self.name!r} ({self.capacity.name}) "
                f"missing={missing} unexpected={extra}"
            )
        for size, identity in self.members.items():
            if identity in self._by_identity:
                raise SoulGemDefinitionError(
                    f"Soul gem group {self.name!r} uses {identity!r} for more than one fill level"
                )
            self._by_identity[identity] = size

    def identity_at(self, contained: SoulSize) -> str:
        try:
            return self.members[contained]
        except KeyError:
            raise SoulGemNotFoundError(
                f"{self.name!r} ({self.capacity.name}) has no member containing {SoulSize(contained).name}"
            ) from None

    def contained_soul_size(self, identity: str) -> SoulSize:
        try:
            return self._by_identity[identity]
        except KeyError:
            raise SoulGemNotFoundError(f"{identity!r} is not a member of {self.name!r}") from None

    def is_full(self, identity: str) -> bool:
        return is_full(self.capacity, self.contained_soul_size(identity))

    @property
    def can_hold_black_soul(self) -> bool:
        return self.capacity in (SoulGemCapacity.DUAL, SoulGemCapacity.BLACK)

    def identities(self) -> Iterable[str]:
        return self.members.values()


class SoulGemIndex:
    """
    Two-dimensional index over soul gem groups.

    Usage:
        index = SoulGemIndex([common_group, azura_group])
        for group in index.lookup(SoulGemCapacity.COMMON, SoulSize.NONE):
            ...

    Groups sharing a shape are returned in registration order; that order is
    the tie-break between otherwise equal candidates.
    """

    def __init__(self, groups: Iterable[SoulGemGroup] = ()):
        self._groups: List[SoulGemGroup] = []
        self._by_shape: Dict[Tuple[SoulGemCapacity, SoulSize], Tuple[SoulGemGroup, ...]] = {}
        self._by_identity: Dict[str, SoulGemGroup] = {}

        shapes: Dict[Tuple[SoulGemCapacity, SoulSize], List[SoulGemGroup]] = {}
        for group in groups:
            for identity in group.identities():
                if identity in self._by_identity:
                    raise SoulGemDefinitionError(
                        f"{identity!r} is registered by both "
                        f"{self._by_identity[identity].name!r} and {group.name!r}"
                    )
                self._by_identity[identity] = group
            for contained in group.members:
                shapes.setdefault((group.capacity, contained), []).append(group)
            self._groups.append(group)

        self._by_shape = {shape: tuple(gs) for shape, gs in shapes.items()}

    def __len__(self) -> int:
        return len(self._groups)

    @property
    def groups(self) -> Tuple[SoulGemGroup, ...]:
        return tuple(self._groups)

    def lookup(self, capacity: SoulGemCapacity, contained: SoulSize) -> Tuple[SoulGemGroup, ...]:
        return self._by_shape.get((SoulGemCapacity(capacity), SoulSize(contained)), ())

    def group_of(self, identity: str) -> Optional[SoulGemGroup]:
        return self._by_identity.get(identity)

    def is_soul_gem(self, identity: str) -> bool:
        return identity in self._by_identity

    def can_hold_black_soul(self, identity: str) -> bool:
        group = self._by_identity.get(identity)
        return group is not None and group.can_hold_black_soul
