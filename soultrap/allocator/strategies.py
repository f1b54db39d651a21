# SPDX-License-Identifier: MIT
"""
Soul Trap Strategies
--------------------
One strategy per soul category. Every strategy tries to place the current
victim of the context into a soul gem, notifies on success and may push the
souls it displaces back onto the victims queue.

Search ranges follow two conventions:
- contained soul size loops are end-EXCLUSIVE (``range(NONE, max)``), so a
  bound of ``PETTY`` means "empty soul gems only";
- capacity loops are end-INCLUSIVE.
"""

from __future__ import annotations

import logging

from soultrap.allocator.context import AllocationContext
from soultrap.allocator.replace import fill_soul_gem, replace_soul_gem
from soultrap.allocator.victims import Victim, VictimQueue
from soultrap.inventory.snapshot import find_first_owned
from soultrap.messages import SoulTrapSuccessMessage
from soultrap.taxonomy import SoulGemCapacity, SoulSize, capacity_of, soul_size_of, split

logger = logging.getLogger(__name__)


def _sizes_below(upper: SoulSize):
    return (SoulSize(v) for v in range(SoulSize.NONE, upper))


def _fill(capacity: SoulGemCapacity, contained: SoulSize, target: SoulSize, d: AllocationContext) -> bool:
    logger.debug(
        "Looking up soul gems with capacity = %s, containedSoulSize = %s",
        capacity.name,
        contained.name,
    )
    return fill_soul_gem(d.index.lookup(capacity, contained), contained, target, d)


def _fill_black_soul_gem(d: AllocationContext) -> bool:
    return _fill(SoulGemCapacity.BLACK, SoulSize.NONE, SoulSize.BLACK, d)


def _try_replace_black_soul_in_dual_soul_gem(d: AllocationContext) -> bool:
    """
    Move a black soul out of a dual soul gem into an empty black soul gem,
    then put the current (white) victim in the dual soul gem.

    Done here rather than through the victims queue, which would let black
    and white souls displace each other forever.
    """
    dual_with_black = find_first_owned(
        d.snapshot,
        d.index.lookup(SoulGemCapacity.DUAL, SoulSize.BLACK),
        SoulSize.BLACK,
    )
    if dual_with_black is None or not _fill_black_soul_gem(d):
        return False

    replace_soul_gem(
        dual_with_black.identity_at(d.victim.soul_size),
        dual_with_black.identity,
        dual_with_black.metadata,
        d,
    )
    return True


def trap_black_soul(d: AllocationContext) -> bool:
    logger.debug("Trapping black soul...")

    if _fill_black_soul_gem(d):
        d.notify_success(SoulTrapSuccessMessage.SOUL_CAPTURED)
        return True

    # With displacement, dual soul gems holding any white soul up to grand
    # are candidates too.
    max_contained = SoulSize.BLACK if d.policy.allow_soul_displacement else SoulSize.PETTY

    for contained in _sizes_below(max_contained):
        if not _fill(SoulGemCapacity.DUAL, contained, d.victim.soul_size, d):
            continue

        if contained > SoulSize.NONE:
            d.notify_success(SoulTrapSuccessMessage.SOUL_DISPLACED)
            if d.policy.allow_soul_relocation:
                d.victims.push(Victim.displaced(contained))
        else:
            d.notify_success(SoulTrapSuccessMessage.SOUL_CAPTURED)
        return True

    return False


def trap_full_soul(d: AllocationContext) -> bool:
    logger.debug("Trapping full white soul...")

    policy = d.policy
    soul_size = d.victim.soul_size
    min_capacity = capacity_of(soul_size)

    # Capacity loop is end-INclusive. Without partial filling only soul gems
    # of exactly the victim's size are searched.
    if policy.allow_partially_filling_soul_gems:
        max_capacity = SoulGemCapacity.LAST_WHITE
    else:
        max_capacity = min_capacity

    max_contained = soul_size if policy.allow_soul_displacement else SoulSize.PETTY
    capacities = [SoulGemCapacity(c) for c in range(min_capacity, max_capacity + 1)]

    if policy.allow_soul_relocation:
        # Best fit, where fit = capacity - containedSoulSize. Displaced souls
        # go back in the queue, so nothing is lost by displacing.
        #
        # For C = X..max capacity, E = 0..X-1: fill the first owned
        # (C, E) soul gem found.
        for capacity in capacities:
            for contained in _sizes_below(max_contained):
                if not _fill(capacity, contained, soul_size, d):
                    continue

                if contained > SoulSize.NONE:
                    d.notify_success(SoulTrapSuccessMessage.SOUL_DISPLACED)
                    d.victims.push(Victim.displaced(contained))
                else:
                    d.notify_success(SoulTrapSuccessMessage.SOUL_CAPTURED)
                return True

        if policy.allow_soul_displacement and (
            policy.allow_partially_filling_soul_gems or soul_size == SoulSize.GRAND
        ):
            logger.debug("Looking up dual soul gems filled with a black soul")
            if _try_replace_black_soul_in_dual_soul_gem(d):
                d.notify_success(SoulTrapSuccessMessage.SOUL_DISPLACED)
                return True
    else:
        # Without relocation a displaced soul is gone for good, so the
        # smallest contained soul is displaced first.
        #
        # For E = 0..X-1, C = X..max capacity: fill the first owned
        # (C, E) soul gem found.
        for contained in _sizes_below(max_contained):
            for capacity in capacities:
                if not _fill(capacity, contained, soul_size, d):
                    continue

                if contained > SoulSize.NONE:
                    d.notify_success(SoulTrapSuccessMessage.SOUL_DISPLACED)
                else:
                    d.notify_success(SoulTrapSuccessMessage.SOUL_CAPTURED)
                return True

    return False


def trap_shrunk_soul(d: AllocationContext) -> bool:
    """
    Shrink the victim into the largest smaller soul gem available. The shrunk
    soul always fills its soul gem; the size difference is lost.
    """
    logger.debug("Trapping shrunk white soul...")

    allow_displacement = d.policy.allow_soul_displacement
    first_capacity = capacity_of(d.victim.soul_size) - 1

    for capacity_value in range(first_capacity, SoulGemCapacity.FIRST - 1, -1):
        capacity = SoulGemCapacity(capacity_value)
        shrunk_size = soul_size_of(capacity)
        max_contained = shrunk_size if allow_displacement else SoulSize.PETTY

        for contained in _sizes_below(max_contained):
            if not _fill(capacity, contained, shrunk_size, d):
                continue

            d.notify_success(SoulTrapSuccessMessage.SOUL_SHRUNK)
            if d.policy.allow_soul_relocation and contained > SoulSize.NONE:
                d.victims.push(Victim.displaced(contained))
            return True

    return False


def trap_split_soul(d: AllocationContext) -> bool:
    """Split souls only go into soul gems of exactly their own size."""
    logger.debug("Trapping split white soul...")

    soul_size = d.victim.soul_size
    capacity = capacity_of(soul_size)
    max_contained = soul_size if d.policy.allow_soul_displacement else SoulSize.PETTY

    for contained in _sizes_below(max_contained):
        if not _fill(capacity, contained, soul_size, d):
            continue

        d.notify_success(SoulTrapSuccessMessage.SOUL_SPLIT)
        if d.policy.allow_soul_relocation and contained > SoulSize.NONE:
            d.victims.push(Victim.displaced(contained))
        return True

    return False


def split_soul(victim: Victim, victims: VictimQueue) -> int:
    """
    Push both halves of ``victim`` onto ``victims``:

        Grand   = 3000 = Greater + Common
        Greater = 2000 = Common + Common
        Common  = 1000 = Lesser + Lesser
        Lesser  = 500  = Petty + Petty

    Petty and black souls are not split. Returns the number of halves pushed.
    """
    halves = split(victim.soul_size)
    for half in halves:
        victims.push(Victim.split(victim.entity, half))
    if not halves:
        logger.debug("%s cannot be split and is lost", victim)
    return len(halves)
