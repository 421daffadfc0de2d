"""
Rule Registry — The set of rules a lint run executes.

Rule providers add their rules with ``register`` during start-up. The engine
freezes the registry before the first traversal; after that the rule set is
read-only, so rules cannot change the set they are being run under.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator

from apilint.core.errors import DuplicateRuleName, RegistryFrozen
from apilint.models.descriptor_models import DeclarationKind
from apilint.models.rule_models import Rule, RuleConfig, RuleName

logger = logging.getLogger("apilint.registry")


class RuleRegistry:
    """Mapping of RuleName -> Rule, iterated in lexicographic name order."""

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}
        self._by_kind: dict[DeclarationKind, list[Rule]] = {}
        self._frozen = False
        self._lock = threading.Lock()

    def register(self, *rules: Rule) -> None:
        """Add rules; the first registration of a name wins."""
        with self._lock:
            for rule in rules:
                key = str(rule.name)
                if self._frozen:
                    raise RegistryFrozen(rule.name)
                if key in self._rules:
                    raise DuplicateRuleName(rule.name)
                self._rules[key] = rule
                bucket = self._by_kind.setdefault(rule.kind, [])
                bucket.append(rule)
                bucket.sort(key=lambda r: str(r.name))
                logger.debug(f"Registered {key} ({rule.kind.value})")

    def freeze(self) -> None:
        with self._lock:
            if not self._frozen:
                self._frozen = True
                logger.debug(f"Registry frozen with {len(self._rules)} rules")

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: RuleName | str) -> Rule | None:
        return self._rules.get(str(name))

    def is_enabled(self, rule: Rule, config: RuleConfig | None, path: str = "") -> bool:
        return config is None or config.is_rule_enabled(rule.name, path)

    def rules_for_kind(
        self,
        kind: DeclarationKind,
        config: RuleConfig | None = None,
        path: str = "",
    ) -> list[Rule]:
        """Rules bound to ``kind`` in name order, optionally only enabled ones."""
        return [
            rule
            for rule in self._by_kind.get(kind, [])
            if self.is_enabled(rule, config, path)
        ]

    def rules_in_namespace(self, prefix: str) -> list[Rule]:
        return [rule for rule in self if rule.name.has_prefix(prefix)]

    def __iter__(self) -> Iterator[Rule]:
        return iter([self._rules[key] for key in sorted(self._rules)])

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, (RuleName, str)) and str(name) in self._rules
