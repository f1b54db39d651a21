# SPDX-License-Identifier: MIT
"""
Allocation Context
------------------
Per-call state passed around the soul trap strategies so they don't need half
a dozen arguments each:

- the frozen policy snapshot (immune to config reloads during the call)
- the collector, after soul diversion
- the victims queue and the victim currently being processed
- the collector's inventory snapshot, rebuilt lazily when dirty
- once-only guards for the notification and the soul trap stat
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from soultrap.allocator.victims import Victim, VictimQueue
from soultrap.gems.container_index import SoulGemIndex
from soultrap.inventory.host import SoulTrapHost
from soultrap.inventory.snapshot import InventorySnapshot, InventoryStatus
from soultrap.messages import SoulTrapFailureMessage, SoulTrapSuccessMessage, get_message
from soultrap.utils.config import PolicySnapshot

logger = logging.getLogger(__name__)


class AllocationContext:
    MAX_NOTIFICATION_COUNT = 1

    def __init__(
        self,
        host: SoulTrapHost,
        collector: Any,
        index: SoulGemIndex,
        policy: PolicySnapshot,
        messages: Optional[Mapping[str, str]] = None,
    ):
        self.host = host
        self.index = index
        self.policy = policy
        self.messages = dict(messages or {})
        self.victims = VictimQueue()

        self._collector = collector
        self._victim: Optional[Victim] = None
        self._snapshot: Optional[InventorySnapshot] = None
        self._snapshot_dirty = True
        self._notify_count = 0
        self._stat_incremented = False

        if policy.allow_soul_diversion and policy.perform_soul_diversion_in_dll:
            self._divert_to_player()

    def _divert_to_player(self) -> None:
        collector = self._collector
        if self.host.is_player(collector) or not self.host.is_player_teammate(collector):
            return
        player = self.host.find_player()
        if player is None:
            logger.warning("Failed to find player reference for soul diversion.")
            return
        self._collector = player
        logger.debug("Soul trap diverted to player.")

    # ---- accessors ----
    @property
    def collector(self) -> Any:
        return self._collector

    @property
    def victim(self) -> Victim:
        if self._victim is None:
            raise RuntimeError("No victim is being processed")
        return self._victim

    @property
    def snapshot(self) -> InventorySnapshot:
        if self._snapshot is None or self._snapshot_dirty:
            raise RuntimeError("Inventory snapshot is stale; call next_victim() first")
        return self._snapshot

    @property
    def inventory_status(self) -> InventoryStatus:
        return self.snapshot.status

    # ---- loop bookkeeping ----
    def set_inventory_changed(self) -> None:
        self._snapshot_dirty = True

    def refresh_inventory(self) -> None:
        if self._snapshot_dirty or self._snapshot is None:
            self._snapshot = InventorySnapshot.build(self.host, self._collector, self.index)
            self._snapshot_dirty = False
            logger.debug(
                "Inventory snapshot rebuilt: %d soul gems, %d full, status=%s",
                self._snapshot.distinct_count,
                self._snapshot.full_count,
                self._snapshot.status.value,
            )

    def next_victim(self) -> Victim:
        self._victim = self.victims.pop()
        self.refresh_inventory()
        return self._victim

    # ---- notifications ----
    def _notify(self, message_key) -> None:
        if self._notify_count >= self.MAX_NOTIFICATION_COUNT or not self.policy.allow_notifications:
            return
        self._notify_count += 1
        try:
            self.host.emit_notification(get_message(message_key, self.messages))
        except Exception as e:
            logger.error("Notification failed: %s", e, exc_info=True)

    def _increment_souls_trapped_stat(self, victim: Victim) -> None:
        if self._stat_incremented:
            return
        self._stat_incremented = True
        try:
            self.host.emit_stat(self._collector, victim.entity)
        except Exception as e:
            logger.error("Soul trap stat update failed: %s", e, exc_info=True)

    def notify_success(self, message: SoulTrapSuccessMessage, victim: Optional[Victim] = None) -> None:
        victim = victim or self.victim
        if self.host.is_player(self._collector) and victim.is_primary_lineage:
            self._notify(message)
            self._increment_souls_trapped_stat(victim)

    def notify_failure(self, message: SoulTrapFailureMessage) -> None:
        if self.host.is_player(self._collector):
            self._notify(message)
