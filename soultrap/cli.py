# SPDX-License-Identifier: MIT
"""
Soul trap simulator
-------------------
Runs one capture against an in-memory inventory described by a scenario YAML:

    collector:
      name: Player
      player: true
      inventory:
        - {identity: SoulGemCommonEmpty, count: 2}
        - {identity: SoulGemGrandPetty, count: 1, owner: Riverwood}
    victim:
      name: Bandit
      soul_level: common
      black_soul: false
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict, List, Optional

import yaml

from soultrap.capture import capture_soul
from soultrap.inventory.host import ItemMetadata
from soultrap.inventory.memory_host import Actor, InMemoryHost
from soultrap.taxonomy import SoulLevel
from soultrap.utils.config import ConfigError, ConfigStore, SoulTrapConfig
from soultrap.utils.env_loader import config_path_from_env
from soultrap.utils.log_utils import get_logger

log = logging.getLogger("soultrap.cli")


def _parse_level(value: Any) -> SoulLevel:
    if isinstance(value, str):
        try:
            return SoulLevel[value.strip().upper()]
        except KeyError:
            raise ConfigError(f"Unknown soul level: {value!r}") from None
    return SoulLevel(int(value or 0))


def build_actor(raw: Dict[str, Any], *, dead: bool) -> Actor:
    actor = Actor(
        name=str(raw.get("name", "actor")),
        soul_level=_parse_level(raw.get("soul_level", 0)),
        black_soul=bool(raw.get("black_soul", False)),
        dead=dead,
        player=bool(raw.get("player", False)),
        player_teammate=bool(raw.get("player_teammate", False)),
    )
    for item in raw.get("inventory") or []:
        metadata = None
        if item.get("owner") or item.get("soul_level"):
            metadata = ItemMetadata(
                owner=item.get("owner"),
                soul_level=_parse_level(item.get("soul_level", 0)),
            )
        actor.give(str(item["identity"]), int(item.get("count", 1)), metadata)
    return actor


def run_scenario(config: SoulTrapConfig, scenario: Dict[str, Any]) -> Dict[str, Any]:
    collector = build_actor(scenario.get("collector") or {}, dead=False)
    victim = build_actor(scenario.get("victim") or {}, dead=True)
    actors = [collector, victim]
    if scenario.get("player") and not collector.player:
        actors.append(build_actor(scenario["player"], dead=False))

    host = InMemoryHost(actors)
    result = capture_soul(collector, victim, host=host, store=ConfigStore(config))

    inventories: Dict[str, Dict[str, int]] = {
        a.name: {identity: len(slots) for identity, slots in a.inventory.items()}
        for a in actors
        if a is not victim
    }
    return {
        "captured": result,
        "notifications": list(host.notifications),
        "inventories": inventories,
    }


def main(argv: Optional[List[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Soul trap simulator")
    parser.add_argument(
        "scenario",
        help="Path to the scenario YAML (collector, victim).",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Path to the soul trap config YAML (defaults to $SOULTRAP_CONFIG, then configs/soultrap.yaml).",
    )
    parser.add_argument("--log-level", default=None, help="Overrides $LOG_LEVEL.")
    args = parser.parse_args(argv)

    get_logger(level=args.log_level)

    config_path = args.config or config_path_from_env("configs/soultrap.yaml")
    try:
        config = SoulTrapConfig.load(config_path)
        with open(args.scenario, "r", encoding="utf-8") as f:
            scenario = yaml.safe_load(f) or {}
        outcome = run_scenario(config, scenario)
    except (OSError, ConfigError) as e:
        log.error("❌ %s", e)
        return 1

    print(yaml.safe_dump(outcome, sort_keys=False), end="")
    return 0 if outcome["captured"] else 2


if __name__ == "__main__":
    sys.exit(main())
