from soultrap.gems.container_index import (
    SoulGemDefinitionError,
    SoulGemGroup,
    SoulGemIndex,
    SoulGemNotFoundError,
)
from soultrap.gems.loader import build_index, parse_group
from soultrap.gems.recharge import consume_soul_gem

__all__ = [
    "SoulGemDefinitionError",
    "SoulGemGroup",
    "SoulGemIndex",
    "SoulGemNotFoundError",
    "build_index",
    "consume_soul_gem",
    "parse_group",
]
