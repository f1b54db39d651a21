"""
Tests for replace_soul_gem / fill_soul_gem
"""

import unittest

from soultrap.allocator.context import AllocationContext
from soultrap.allocator.replace import fill_soul_gem, replace_soul_gem
from soultrap.allocator.victims import SoulCategory
from soultrap.inventory import Actor, InMemoryHost, ItemMetadata
from soultrap.taxonomy import SoulGemCapacity, SoulLevel, SoulSize
from soultrap.testing.fixtures import make_config


def _total(actor):
    return sum(len(slots) for slots in actor.inventory.values())


class TestReplace(unittest.TestCase):
    """Test cases for the replace primitive."""

    def setUp(self):
        self.collector = Actor(name="Player", player=True)
        self.host = InMemoryHost([self.collector])

    def _context(self, **policy):
        config = make_config(**policy)
        d = AllocationContext(self.host, self.collector, config.index, config.policy)
        d.refresh_inventory()
        return d

    def _fill(self, d, capacity, contained, target):
        return fill_soul_gem(d.index.lookup(capacity, contained), contained, target, d)

    def test_fill_swaps_one_unit(self):
        """Test a fill replaces exactly one soul gem."""
        self.collector.give("SoulGemCommonEmpty", 2)
        d = self._context()
        before = _total(self.collector)

        self.assertTrue(self._fill(d, SoulGemCapacity.COMMON, SoulSize.NONE, SoulSize.COMMON))
        self.assertEqual(_total(self.collector), before)
        self.assertEqual(self.collector.count("SoulGemCommonEmpty"), 1)
        self.assertEqual(self.collector.count("SoulGemCommonCommon"), 1)

    def test_fill_marks_snapshot_dirty(self):
        self.collector.give("SoulGemCommonEmpty")
        d = self._context()
        self._fill(d, SoulGemCapacity.COMMON, SoulSize.NONE, SoulSize.LESSER)
        with self.assertRaises(RuntimeError):
            d.snapshot
        d.refresh_inventory()
        self.assertIsNotNone(d.snapshot.owned("SoulGemCommonLesser"))

    def test_fill_without_match_does_nothing(self):
        self.collector.give("SoulGemGreaterEmpty")
        d = self._context()
        self.assertFalse(self._fill(d, SoulGemCapacity.COMMON, SoulSize.NONE, SoulSize.COMMON))
        self.assertEqual(self.collector.count("SoulGemGreaterEmpty"), 1)
        self.assertIsNotNone(d.snapshot)

    def test_preserve_ownership_keeps_owner_only(self):
        """Test only the owner is carried over to the new soul gem."""
        stolen = ItemMetadata(owner="Belethor", enchantment="Fortify Barter")
        self.collector.give("SoulGemCommonEmpty", 1, stolen)
        d = self._context(preserve_ownership=True)

        self.assertTrue(self._fill(d, SoulGemCapacity.COMMON, SoulSize.NONE, SoulSize.COMMON))
        self.assertEqual(self.collector.inventory["SoulGemCommonCommon"], [ItemMetadata(owner="Belethor")])
        self.assertEqual(self.collector.count("SoulGemCommonEmpty"), 0)

    def test_ownership_dropped_without_policy(self):
        self.collector.give("SoulGemCommonEmpty", 1, ItemMetadata(owner="Belethor"))
        d = self._context()
        self._fill(d, SoulGemCapacity.COMMON, SoulSize.NONE, SoulSize.COMMON)
        self.assertEqual(self.collector.inventory["SoulGemCommonCommon"], [None])

    def test_extra_soul_relocated(self):
        """Test a soul stored in item metadata is queued as a displaced victim."""
        self.collector.give("SoulGemGreaterEmpty", 1, ItemMetadata(soul_level=SoulLevel.LESSER))
        d = self._context(allow_extra_soul_relocation=True)

        replace_soul_gem("SoulGemGreaterGreater", "SoulGemGreaterEmpty", d.snapshot.owned("SoulGemGreaterEmpty").metadata, d)
        self.assertEqual(len(d.victims), 1)
        extra = d.victims.pop()
        self.assertEqual(extra.soul_size, SoulSize.LESSER)
        self.assertFalse(extra.is_primary)

    def test_extra_grand_soul_in_black_soul_gem_is_black(self):
        self.collector.give("SoulGemBlackEmpty", 1, ItemMetadata(soul_level=SoulLevel.GRAND))
        d = self._context(allow_extra_soul_relocation=True)

        self._fill(d, SoulGemCapacity.DUAL, SoulSize.NONE, SoulSize.COMMON)
        extra = d.victims.pop()
        self.assertEqual(extra.soul_size, SoulSize.BLACK)
        self.assertIs(extra.category, SoulCategory.BLACK)

    def test_extra_soul_ignored_without_policy(self):
        self.collector.give("SoulGemGreaterEmpty", 1, ItemMetadata(soul_level=SoulLevel.LESSER))
        d = self._context()
        self._fill(d, SoulGemCapacity.GREATER, SoulSize.NONE, SoulSize.GREATER)
        self.assertEqual(len(d.victims), 0)


if __name__ == "__main__":
    unittest.main()
