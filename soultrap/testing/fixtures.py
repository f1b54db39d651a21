# soultrap/testing/fixtures.py

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from soultrap.inventory.memory_host import Actor, InMemoryHost
from soultrap.taxonomy import SoulGemCapacity, SoulLevel, SoulSize, fill_levels
from soultrap.utils.config import ConfigStore, SoulTrapConfig


def gem_id(prefix: str, contained: SoulSize) -> str:
    """``SoulGemCommon`` + COMMON -> ``SoulGemCommonCommon``; NONE -> ``...Empty``."""
    suffix = "Empty" if contained == SoulSize.NONE else contained.name.capitalize()
    return f"{prefix}{suffix}"


def group_definition(name: str, capacity: SoulGemCapacity, prefix: str, reusable: bool = False) -> Dict[str, Any]:
    return {
        "name": name,
        "capacity": capacity.name.lower(),
        "reusable": reusable,
        "members": {s.name.lower(): gem_id(prefix, s) for s in fill_levels(capacity)},
    }


def default_soul_gem_definitions() -> List[Dict[str, Any]]:
    defs = [
        group_definition(c.name.lower(), c, f"SoulGem{c.name.capitalize()}")
        for c in (
            SoulGemCapacity.PETTY,
            SoulGemCapacity.LESSER,
            SoulGemCapacity.COMMON,
            SoulGemCapacity.GREATER,
            SoulGemCapacity.GRAND,
        )
    ]
    defs.append(group_definition("black", SoulGemCapacity.DUAL, "SoulGemBlack"))
    defs.append(group_definition("azuras_star", SoulGemCapacity.GRAND, "AzurasStar", reusable=True))
    defs.append(group_definition("black_star", SoulGemCapacity.BLACK, "BlackStar", reusable=True))
    return defs


def make_config(messages: Optional[Dict[str, str]] = None, **policy: Any) -> SoulTrapConfig:
    return SoulTrapConfig.from_dict(
        {
            "policy": policy,
            "soul_gems": default_soul_gem_definitions(),
            "messages": messages or {},
        }
    )


def make_store(**policy: Any) -> ConfigStore:
    return ConfigStore(make_config(**policy))


def make_world(
    victim_level: SoulLevel = SoulLevel.COMMON,
    *,
    black_soul: bool = False,
    collector_is_player: bool = True,
) -> Tuple[InMemoryHost, Actor, Actor]:
    collector = Actor(name="Player" if collector_is_player else "Lydia", player=collector_is_player)
    victim = Actor(name="Bandit", soul_level=victim_level, black_soul=black_soul, dead=True)
    return InMemoryHost([collector, victim]), collector, victim
