# SPDX-License-Identifier: MIT
"""
Soul Capture
------------
Entry point for trapping the soul of a defeated entity:

    capture_soul(caster, victim, host=host, store=store) -> bool

Only one capture runs at a time, process-wide. A call holds the lock from the
already-trapped check through the end of victim processing, so the inventory
snapshot and every replace it leads to are atomic with respect to other calls.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Optional

from soultrap.allocator.context import AllocationContext
from soultrap.allocator.strategies import (
    split_soul,
    trap_black_soul,
    trap_full_soul,
    trap_shrunk_soul,
    trap_split_soul,
)
from soultrap.allocator.victims import SoulCategory, Victim
from soultrap.gems.container_index import SoulGemNotFoundError
from soultrap.inventory.host import SoulTrapHost
from soultrap.inventory.snapshot import InventoryStatus
from soultrap.messages import MiscMessage, SoulTrapFailureMessage, get_message
from soultrap.taxonomy import SoulLevel, SoulShrinkingTechnique, SoulSize, to_soul_size
from soultrap.utils.config import ConfigStore, SoulTrapConfig, get_default_store

logger = logging.getLogger(__name__)

_capture_lock = threading.Lock()


def _primary_victim(host: SoulTrapHost, victim: Any, level: SoulLevel) -> Victim:
    if host.has_black_soul(victim):
        return Victim.primary(victim, SoulSize.BLACK)
    return Victim.primary(victim, to_soul_size(level))


def _process_victims(d: AllocationContext) -> bool:
    is_soul_trap_successful = False
    technique = d.policy.soul_shrinking_technique

    while d.victims:
        victim = d.next_victim()
        logger.debug("Processing soul trap victim: %s", victim)

        if d.inventory_status is not InventoryStatus.HAS_FILLABLE:
            logger.debug("Caster has no soul gems to fill. Stop looking.")
            break

        if victim.category is SoulCategory.BLACK:
            if trap_black_soul(d):
                is_soul_trap_successful = True
        elif victim.category is SoulCategory.SPLIT:
            if trap_split_soul(d):
                is_soul_trap_successful = True
            else:
                split_soul(victim, d.victims)
        else:
            if trap_full_soul(d):
                is_soul_trap_successful = True
            # Shrinking takes precedence over splitting.
            elif technique is SoulShrinkingTechnique.SHRINK:
                if trap_shrunk_soul(d):
                    is_soul_trap_successful = True
            elif technique is SoulShrinkingTechnique.SPLIT:
                split_soul(victim, d.victims)
            else:
                logger.debug("%s could not be trapped and is lost", victim)

    return is_soul_trap_successful


def _notify_failure(d: AllocationContext) -> None:
    d.refresh_inventory()
    status = d.inventory_status

    if status is InventoryStatus.ALL_FULL:
        d.notify_failure(SoulTrapFailureMessage.ALL_SOUL_GEMS_FILLED)
    elif status is InventoryStatus.NONE_OWNED:
        d.notify_failure(SoulTrapFailureMessage.NO_SOUL_GEMS_OWNED)
    elif d.policy.soul_shrinking_technique is not SoulShrinkingTechnique.NONE:
        d.notify_failure(SoulTrapFailureMessage.NO_SUITABLE_SOUL_GEM)
    else:
        d.notify_failure(SoulTrapFailureMessage.NO_SOUL_GEM_LARGE_ENOUGH)


def _trap_soul(caster: Any, victim: Any, host: SoulTrapHost, config: SoulTrapConfig) -> bool:
    if caster is None:
        logger.debug("Caster is null.")
        return False
    if victim is None:
        logger.debug("Victim is null.")
        return False
    if host.is_dead(caster):
        logger.debug("Caster is dead.")
        return False
    if not host.is_dead(victim):
        logger.debug("Victim is not dead.")
        return False

    # Checked under the lock so two callers can't both see an untrapped soul.
    with _capture_lock:
        try:
            level = SoulLevel(host.query_remaining_soul_level(victim))
            if level == SoulLevel.NONE:
                logger.debug("Victim has already been soul trapped.")
                return False

            d = AllocationContext(host, caster, config.index, config.policy, config.messages)
            d.victims.push(_primary_victim(host, victim, level))
            logger.debug("Found configuration: %s", d.policy)

            is_soul_trap_successful = _process_victims(d)

            if is_soul_trap_successful:
                # Flag the victim so the same soul isn't trapped twice.
                logger.debug("Flagging soul trapped victim...")
                host.mark_entity_processed(victim)
            else:
                _notify_failure(d)

            return is_soul_trap_successful
        except SoulGemNotFoundError:
            raise
        except Exception as e:
            logger.error("Soul trap failed: %s", e, exc_info=True)
            return False


def capture_soul(
    caster: Any,
    victim: Any,
    *,
    host: SoulTrapHost,
    store: Optional[ConfigStore] = None,
) -> bool:
    """
    Trap ``victim``'s soul into one of ``caster``'s soul gems.

    Returns True when the soul (or any part of it) was trapped. Invalid
    callers, already-trapped victims and host failures all return False;
    a soul gem index missing a required member raises SoulGemNotFoundError.
    """
    config = (store or get_default_store()).current()
    logger.debug("Entering trap soul function")
    started = time.perf_counter()

    try:
        return _trap_soul(caster, victim, host, config)
    finally:
        elapsed = time.perf_counter() - started
        if config.policy.allow_profiling:
            logger.info("Time to trap soul: %.7f seconds", elapsed)
            try:
                host.emit_notification(
                    get_message(MiscMessage.TIME_TAKEN_TO_TRAP_SOUL, config.messages).format(elapsed)
                )
            except Exception as e:
                logger.error("Notification failed: %s", e, exc_info=True)
        logger.debug("Exiting trap soul function")
