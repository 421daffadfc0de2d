"""
Rule Catalog — Builds the registry of built-in rules.

Each provider module contributes its rules through ``add_rules(registry)``.
Nothing registers on import; callers build a registry and pass it to the
engine explicitly.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from apilint.core.registry import RuleRegistry
from apilint.core.rules import (
    enum_unspecified,
    map_object_values,
    standard_get,
    standard_list,
    standard_update,
    versioned_packages,
)

logger = logging.getLogger("apilint.registry")

RuleProvider = Callable[[RuleRegistry], None]

RULE_PROVIDERS: tuple[RuleProvider, ...] = (
    enum_unspecified.add_rules,
    standard_get.add_rules,
    standard_list.add_rules,
    standard_update.add_rules,
    versioned_packages.add_rules,
    map_object_values.add_rules,
)


def build_registry(providers: Iterable[RuleProvider] = RULE_PROVIDERS) -> RuleRegistry:
    """Create a registry populated by every provider, in order."""
    registry = RuleRegistry()
    for add_rules in providers:
        add_rules(registry)
    logger.info(f"Loaded {len(registry)} rules")
    return registry
