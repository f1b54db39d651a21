"""
Tests for InventorySnapshot
"""

import unittest

from soultrap.gems import build_index
from soultrap.inventory import (
    Actor,
    InMemoryHost,
    InventorySnapshot,
    InventoryStatus,
    ItemMetadata,
    find_first_owned,
)
from soultrap.taxonomy import SoulGemCapacity, SoulSize
from soultrap.testing.fixtures import default_soul_gem_definitions


class TestInventorySnapshot(unittest.TestCase):
    """Test cases for building and classifying snapshots."""

    def setUp(self):
        self.index = build_index(default_soul_gem_definitions())
        self.collector = Actor(name="Player", player=True)
        self.host = InMemoryHost([self.collector])

    def _snapshot(self):
        return InventorySnapshot.build(self.host, self.collector, self.index)

    def test_no_soul_gems_owned(self):
        """Test an inventory with only non-soul-gem items."""
        self.collector.give("IronSword")
        snap = self._snapshot()
        self.assertEqual(snap.status, InventoryStatus.NONE_OWNED)
        self.assertEqual(snap.distinct_count, 0)

    def test_all_full(self):
        self.collector.give("SoulGemCommonCommon", 2)
        self.collector.give("SoulGemBlackBlack")
        self.collector.give("SoulGemBlackGrand")
        snap = self._snapshot()
        self.assertEqual(snap.full_count, 3)
        self.assertEqual(snap.status, InventoryStatus.ALL_FULL)

    def test_has_fillable(self):
        self.collector.give("SoulGemCommonCommon")
        self.collector.give("SoulGemGreaterLesser")
        snap = self._snapshot()
        self.assertEqual(snap.status, InventoryStatus.HAS_FILLABLE)
        self.assertEqual(snap.owned("SoulGemCommonCommon").count, 1)

    def test_representative_metadata(self):
        """Test the first metadata record of a stack is kept."""
        owned = ItemMetadata(owner="Whiterun")
        self.collector.give("SoulGemPettyEmpty", 2)
        self.collector.give("SoulGemPettyEmpty", 1, owned)
        snap = self._snapshot()
        self.assertEqual(snap.owned("SoulGemPettyEmpty").count, 3)
        self.assertEqual(snap.owned("SoulGemPettyEmpty").metadata, owned)


class TestFindFirstOwned(unittest.TestCase):
    """Test cases for find_first_owned search order."""

    def setUp(self):
        self.index = build_index(default_soul_gem_definitions())
        self.collector = Actor(name="Player", player=True)
        self.host = InMemoryHost([self.collector])

    def _find(self, capacity, contained):
        snap = InventorySnapshot.build(self.host, self.collector, self.index)
        return find_first_owned(snap, self.index.lookup(capacity, contained), contained)

    def test_not_owned(self):
        self.collector.give("SoulGemGrandPetty")
        self.assertIsNone(self._find(SoulGemCapacity.GRAND, SoulSize.NONE))

    def test_index_order_breaks_ties(self):
        """Test the first registered group wins when both are owned."""
        self.collector.give("AzurasStarEmpty")
        self.collector.give("SoulGemGrandEmpty")
        result = self._find(SoulGemCapacity.GRAND, SoulSize.NONE)
        self.assertEqual(result.group.name, "grand")
        self.assertEqual(result.identity, "SoulGemGrandEmpty")

    def test_later_group_found_when_first_missing(self):
        self.collector.give("AzurasStarEmpty", 3)
        result = self._find(SoulGemCapacity.GRAND, SoulSize.NONE)
        self.assertEqual(result.group.name, "azuras_star")
        self.assertEqual(result.count, 3)
        self.assertEqual(result.identity_at(SoulSize.GRAND), "AzurasStarGrand")


if __name__ == "__main__":
    unittest.main()
