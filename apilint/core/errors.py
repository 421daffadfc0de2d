"""
Engine Errors — Configuration errors abort; schema-level errors become Problems.

DuplicateRuleName and RegistryFrozen signal misuse of the engine and are
raised to the caller. MalformedSuppressionDirective and InternalRuleError are
raised only inside the engine and always converted to a Problem.
"""

from __future__ import annotations

from apilint.models.descriptor_models import Declaration
from apilint.models.problem_models import Location, Problem, ProblemCategory
from apilint.models.rule_models import RuleName

MALFORMED_DIRECTIVE_RULE = RuleName("linter", 1, "malformed-directive")


class LintEngineError(Exception):
    """Base class for rule engine errors."""


class DuplicateRuleName(LintEngineError):
    def __init__(self, name: RuleName) -> None:
        super().__init__(f"Rule '{name}' is already registered")
        self.name = name


class RegistryFrozen(LintEngineError):
    def __init__(self, name: RuleName) -> None:
        super().__init__(f"Cannot register '{name}': the registry is frozen")
        self.name = name


class MalformedSuppressionDirective(LintEngineError):
    """A comment line carries the directive prefix but cannot be honored."""

    def __init__(self, reason: str, text: str, line: int = 0) -> None:
        super().__init__(f"{reason}: {text.strip()!r}")
        self.reason = reason
        self.text = text
        self.line = line

    def to_problem(self, decl: Declaration, location: Location) -> Problem:
        return Problem(
            message=f"Suppression directive ignored ({self.reason}): {self.text.strip()}",
            descriptor=decl,
            location=location,
            rule_name=str(MALFORMED_DIRECTIVE_RULE),
            category=ProblemCategory.MALFORMED_DIRECTIVE,
        )


class InternalRuleError(LintEngineError):
    """A rule raised while checking a declaration."""

    def __init__(self, name: RuleName, decl: Declaration, cause: BaseException) -> None:
        super().__init__(
            f"Rule '{name}' failed on {decl.kind.value} '{decl.full_name}': "
            f"{type(cause).__name__}: {cause}"
        )
        self.name = name
        self.decl = decl
        self.cause = cause

    def to_problem(self, location: Location) -> Problem:
        return Problem(
            message=str(self),
            descriptor=self.decl,
            location=location,
            rule_name=str(self.name),
            rule_uri=self.name.uri,
            category=ProblemCategory.INTERNAL_ERROR,
        )
