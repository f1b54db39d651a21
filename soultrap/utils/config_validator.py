"""
Configuration Validator
-----------------------
Validates the ``policy`` section of the soul trap configuration before a
policy snapshot is produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from soultrap.taxonomy import SoulShrinkingTechnique

logger = logging.getLogger(__name__)

BOOL_POLICY_DEFAULTS: Dict[str, bool] = {
    "allow_soul_diversion": False,
    "perform_soul_diversion_in_dll": False,
    "allow_notifications": True,
    "allow_extra_soul_relocation": False,
    "preserve_ownership": False,
    "allow_soul_relocation": False,
    "allow_soul_displacement": False,
    "allow_partially_filling_soul_gems": False,
    "allow_profiling": False,
}


@dataclass
class ConfigRule:
    """Rule for validating a configuration value."""
    key: str
    required: bool = True
    default: Any = None
    validator: Optional[Callable[[Any], bool]] = None
    error_message: Optional[str] = None


class ConfigValidator:
    """
    Validates configuration values against a list of rules.

    Usage:
        validator = ConfigValidator()
        validator.add_rule("allow_soul_relocation", required=False, default=False,
                           validator=lambda x: isinstance(x, bool))
        is_valid, errors = validator.validate(policy_dict)

    Missing optional values are filled in with their defaults in place.
    """

    def __init__(self):
        self.rules: List[ConfigRule] = []

    def add_rule(
        self,
        key: str,
        required: bool = True,
        default: Any = None,
        validator: Optional[Callable[[Any], bool]] = None,
        error_message: Optional[str] = None,
    ) -> None:
        self.rules.append(
            ConfigRule(
                key=key,
                required=required,
                default=default,
                validator=validator,
                error_message=error_message,
            )
        )

    def validate(self, config: Dict[str, Any]) -> Tuple[bool, List[str]]:
        errors: List[str] = []

        for rule in self.rules:
            value = config.get(rule.key)

            if rule.required and value is None:
                errors.append(rule.error_message or f"Required configuration '{rule.key}' is missing")
                continue

            if value is None and rule.default is not None:
                value = rule.default
                config[rule.key] = value
                logger.debug("Using default for %s: %s", rule.key, rule.default)

            if value is not None and rule.validator is not None:
                try:
                    ok = rule.validator(value)
                except Exception as e:
                    errors.append(rule.error_message or f"Validation error for '{rule.key}': {e}")
                    continue
                if not ok:
                    errors.append(rule.error_message or f"Invalid value for '{rule.key}': {value!r}")

        for error in errors:
            logger.error("❌ %s", error)

        return len(errors) == 0, errors

    def add_policy_rules(self) -> "ConfigValidator":
        for key, default in BOOL_POLICY_DEFAULTS.items():
            self.add_rule(
                key,
                required=False,
                default=default,
                validator=lambda x: isinstance(x, bool),
                error_message=f"'{key}' must be true or false",
            )

        allowed = [t.value for t in SoulShrinkingTechnique]
        self.add_rule(
            "soul_shrinking_technique",
            required=False,
            default=SoulShrinkingTechnique.NONE.value,
            validator=lambda x: str(getattr(x, "value", x)).lower() in allowed,
            error_message=f"'soul_shrinking_technique' must be one of {', '.join(allowed)}",
        )
        return self
