from __future__ import annotations

import copy
import logging
import os
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from soultrap.gems.container_index import SoulGemDefinitionError, SoulGemIndex
from soultrap.gems.loader import build_index
from soultrap.taxonomy import SoulShrinkingTechnique
from soultrap.utils.config_validator import BOOL_POLICY_DEFAULTS, ConfigValidator

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when the soul trap configuration cannot be used."""


@dataclass(frozen=True)
class PolicySnapshot:
    """Policy flags frozen for the duration of one capture call."""
    allow_soul_diversion: bool = False
    perform_soul_diversion_in_dll: bool = False
    allow_notifications: bool = True
    allow_extra_soul_relocation: bool = False
    preserve_ownership: bool = False
    allow_soul_relocation: bool = False
    allow_soul_displacement: bool = False
    allow_partially_filling_soul_gems: bool = False
    allow_profiling: bool = False
    soul_shrinking_technique: SoulShrinkingTechnique = SoulShrinkingTechnique.NONE

    @classmethod
    def from_dict(cls, policy: Optional[Dict[str, Any]]) -> "PolicySnapshot":
        values = dict(policy or {})
        is_valid, errors = ConfigValidator().add_policy_rules().validate(values)
        if not is_valid:
            raise ConfigError("Invalid soul trap policy:\n" + "\n".join(f"  - {e}" for e in errors))

        kwargs = {key: bool(values[key]) for key in BOOL_POLICY_DEFAULTS}
        technique = values["soul_shrinking_technique"]
        kwargs["soul_shrinking_technique"] = SoulShrinkingTechnique(
            str(getattr(technique, "value", technique)).lower()
        )
        return cls(**kwargs)


@dataclass
class SoulTrapConfig:
    data: dict
    policy: PolicySnapshot = field(default_factory=PolicySnapshot)
    index: SoulGemIndex = field(default_factory=SoulGemIndex)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SoulTrapConfig":
        data = copy.deepcopy(data or {})
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping, got {type(data).__name__}")

        policy = PolicySnapshot.from_dict(data.get("policy"))
        try:
            index = build_index(data.get("soul_gems") or [])
        except SoulGemDefinitionError as e:
            raise ConfigError(f"Invalid soul gem definitions: {e}") from e

        messages = data.get("messages") or {}
        if not isinstance(messages, dict):
            raise ConfigError("'messages' must be a mapping of message key to text")

        return cls(data=data, policy=policy, index=index)

    @classmethod
    def load(cls, path: str) -> "SoulTrapConfig":
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {path}: {e}") from e
        config = cls.from_dict(data)
        logger.info("Loaded soul trap config from %s (%d soul gem groups)", path, len(config.index))
        return config

    def y(self, key: str, default: Any = None) -> Any:
        cur = self.data
        for part in key.split("."):
            if isinstance(cur, dict) and part in cur:
                cur = cur[part]
            else:
                return default
        return cur

    @property
    def messages(self) -> Dict[str, str]:
        return {str(k): str(v) for k, v in (self.data.get("messages") or {}).items()}


class ConfigStore:
    """
    Holds the active configuration. With a path and ``auto_reload_seconds``,
    the file is re-read when it is older than the interval. A reload that
    fails is logged and the previous config stays active.

    Readers take one snapshot per capture call; a reload never affects a call
    already in flight.
    """

    def __init__(
        self,
        config: Optional[SoulTrapConfig] = None,
        path: Optional[str] = None,
        auto_reload_seconds: Optional[float] = None,
    ):
        self.path = path
        self.auto_reload = auto_reload_seconds
        self._lock = threading.Lock()
        self._last_load = 0.0
        self._config = config or SoulTrapConfig.from_dict({})
        if config is None and path:
            self._load()

    def _load(self) -> None:
        self._last_load = time.time()
        if not self.path or not os.path.exists(self.path):
            logger.warning("Soul trap config not found at %s; keeping current config", self.path)
            return
        self._config = SoulTrapConfig.load(self.path)

    def _reload(self) -> None:
        try:
            self._load()
        except (ConfigError, OSError) as e:
            logger.error("❌ Soul trap config reload failed, keeping previous config: %s", e)

    def current(self) -> SoulTrapConfig:
        with self._lock:
            if self.path and self.auto_reload is not None:
                if time.time() - self._last_load >= self.auto_reload:
                    self._reload()
            return self._config

    def replace(self, config: SoulTrapConfig) -> None:
        with self._lock:
            self._config = config

    def snapshot(self) -> PolicySnapshot:
        return self.current().policy


_default_store: Optional[ConfigStore] = None
_default_store_lock = threading.Lock()


def get_default_store() -> ConfigStore:
    global _default_store
    with _default_store_lock:
        if _default_store is None:
            _default_store = ConfigStore(path=os.getenv("SOULTRAP_CONFIG") or None)
        return _default_store


def set_default_store(store: ConfigStore) -> None:
    global _default_store
    with _default_store_lock:
        _default_store = store
