from soultrap.allocator.context import AllocationContext
from soultrap.allocator.replace import fill_soul_gem, replace_soul_gem
from soultrap.allocator.strategies import (
    split_soul,
    trap_black_soul,
    trap_full_soul,
    trap_shrunk_soul,
    trap_split_soul,
)
from soultrap.allocator.victims import SoulCategory, Victim, VictimQueue

__all__ = [
    "AllocationContext",
    "SoulCategory",
    "Victim",
    "VictimQueue",
    "fill_soul_gem",
    "replace_soul_gem",
    "split_soul",
    "trap_black_soul",
    "trap_full_soul",
    "trap_shrunk_soul",
    "trap_split_soul",
]
