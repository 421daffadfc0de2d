"""
Rule Engine — Walks a declaration tree and runs every applicable rule.

For each declaration, in pre-order: malformed suppression directives on it
are reported, then each enabled rule bound to its kind is guarded by
``only_if``, filtered by suppression, and invoked. A rule that raises is
isolated into a single internal-error Problem and the run continues.
Registry misuse (DuplicateRuleName, RegistryFrozen) aborts the run.
Output order depends only on the tree and the registry.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from apilint.core import locations
from apilint.core.errors import DuplicateRuleName, InternalRuleError, RegistryFrozen
from apilint.core.registry import RuleRegistry
from apilint.core.suppression import find_suppression, malformed_directives
from apilint.models.descriptor_models import Declaration, FileDecl
from apilint.models.lint_models import LintResult, SuppressionRecord
from apilint.models.problem_models import Problem
from apilint.models.rule_models import Rule, RuleConfig

logger = logging.getLogger("apilint.engine")


def _position(decl: Declaration) -> tuple[int, int]:
    if decl.span is None:
        return (0, 0)
    return (decl.span.start_line, decl.span.start_column)


class RuleEngine:
    """
    Deterministic rule engine.

    Holds no per-run state, so one engine can lint several files at once
    from different threads.
    """

    def __init__(self, registry: RuleRegistry, config: RuleConfig | None = None) -> None:
        self.registry = registry
        self.config = config

    def run(self, root: FileDecl) -> LintResult:
        """
        Lint one file.

        Args:
            root: The file declaration; its whole subtree is visited.

        Returns:
            LintResult with problems sorted by (file, position, rule name).
        """
        start = time.monotonic()
        self.registry.freeze()

        path = root.name
        entries: list[tuple[tuple[Any, ...], Problem]] = []
        rules_executed: set[str] = set()
        suppressions: list[SuppressionRecord] = []

        for order, decl in enumerate(root.walk()):
            found: list[Problem] = []

            for malformed in malformed_directives(decl):
                logger.warning(
                    f"{path}: malformed suppression on {decl.full_name}: {malformed}"
                )
                found.append(malformed.to_problem(decl, locations.leading_comments(decl)))

            for rule in self.registry.rules_for_kind(decl.kind, self.config, path):
                found.extend(self._apply(rule, decl, rules_executed, suppressions))

            for problem in found:
                entries.append((self._sort_key(path, decl, order, problem), problem))

        entries.sort(key=lambda entry: entry[0])
        elapsed = (time.monotonic() - start) * 1000

        return LintResult(
            file_path=path,
            problems=[problem for _, problem in entries],
            rules_executed=sorted(rules_executed),
            suppressions=suppressions,
            duration_ms=round(elapsed, 2),
        )

    def _apply(
        self,
        rule: Rule,
        decl: Declaration,
        rules_executed: set[str],
        suppressions: list[SuppressionRecord],
    ) -> list[Problem]:
        try:
            if not rule.applies_to(decl):
                return []
        except (DuplicateRuleName, RegistryFrozen):
            raise
        except Exception as e:
            return [self._internal_error(rule, decl, e)]

        scope = find_suppression(decl, rule.name)
        if scope is not None:
            suppressions.append(
                SuppressionRecord(
                    rule_name=str(rule.name),
                    descriptor_kind=decl.kind.value,
                    descriptor_name=decl.full_name,
                    suppressed_by=scope.full_name,
                )
            )
            return []

        rules_executed.add(str(rule.name))
        try:
            problems = rule.lint(decl) or []
            return [
                p.model_copy(update={"rule_name": str(rule.name), "rule_uri": rule.name.uri})
                for p in problems
            ]
        except (DuplicateRuleName, RegistryFrozen):
            raise
        except Exception as e:
            return [self._internal_error(rule, decl, e)]

    @staticmethod
    def _internal_error(rule: Rule, decl: Declaration, cause: Exception) -> Problem:
        error = InternalRuleError(rule.name, decl, cause)
        logger.warning(str(error), exc_info=cause)
        return error.to_problem(locations.declaration(decl))

    @staticmethod
    def _sort_key(path: str, decl: Declaration, order: int, problem: Problem) -> tuple[Any, ...]:
        position = _position(problem.descriptor) if problem.descriptor.span else _position(decl)
        return (
            path,
            position,
            order,
            problem.rule_name,
            problem.location.sort_key(),
            problem.message,
        )


def run(root: FileDecl, registry: RuleRegistry, config: RuleConfig | None = None) -> list[Problem]:
    """Lint ``root`` against ``registry`` and return the ordered problems."""
    return RuleEngine(registry, config).run(root).problems
