"""
Rule Data Models — Rule identity, rule definitions, and enablement config.

A rule is a plain value bound to exactly one declaration kind; the engine
dispatches on ``decl.kind`` instead of a class hierarchy.
"""

from __future__ import annotations

import fnmatch
import re
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from pydantic import BaseModel, Field

from apilint.models.descriptor_models import Declaration, DeclarationKind
from apilint.models.problem_models import Problem

SEPARATOR = "::"
WILDCARD = "all"
RULE_URI_BASE = "https://linter.aip.dev"

_SEGMENT = re.compile(r"^[a-z0-9][a-z0-9-]*$")
_SHORT_NAME = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")


@dataclass(frozen=True)
class RuleName:
    """Stable rule identity, e.g. ``core::0126::unspecified``."""

    namespace: str
    number: int
    short_name: str

    def __post_init__(self) -> None:
        if not _SEGMENT.match(self.namespace):
            raise ValueError(f"Invalid rule namespace: {self.namespace!r}")
        if self.number < 0:
            raise ValueError(f"Rule number must be non-negative: {self.number}")
        if not _SHORT_NAME.match(self.short_name):
            raise ValueError(f"Rule short name must be kebab-case: {self.short_name!r}")

    def __str__(self) -> str:
        return SEPARATOR.join((self.namespace, f"{self.number:04d}", self.short_name))

    @classmethod
    def parse(cls, text: str) -> RuleName:
        parts = text.strip().split(SEPARATOR)
        if len(parts) != 3 or not parts[1].isdigit():
            raise ValueError(f"Not a rule name: {text!r}")
        return cls(parts[0], int(parts[1]), parts[2])

    @property
    def uri(self) -> str | None:
        """Documentation link; only core rules are documented."""
        if self.namespace != "core":
            return None
        return f"{RULE_URI_BASE}/{self.number}/{self.short_name}"

    def has_prefix(self, prefix: str) -> bool:
        """Segment-wise prefix match; ``all`` matches every rule."""
        prefix = prefix.strip()
        if prefix == WILDCARD:
            return True
        text = str(self)
        return text == prefix or text.startswith(prefix + SEPARATOR)


def is_valid_rule_prefix(token: str) -> bool:
    """True for ``all``, a namespace, ``namespace::number`` or a full name."""
    if token == WILDCARD:
        return True
    parts = token.split(SEPARATOR)
    if len(parts) > 3 or not all(_SEGMENT.match(p) for p in parts):
        return False
    return len(parts) < 2 or parts[1].isdigit()


D = TypeVar("D", bound=Declaration)


def _always(_decl: Declaration) -> bool:
    return True


@dataclass(frozen=True)
class Rule(Generic[D]):
    """A named check bound to one declaration kind."""

    name: RuleName
    kind: DeclarationKind
    lint: Callable[[D], list[Problem] | None]
    only_if: Callable[[D], bool] = _always
    description: str = ""

    def applies_to(self, decl: Declaration) -> bool:
        return decl.kind is self.kind and self.only_if(decl)


def _bound(kind: DeclarationKind):
    def factory(
        name: RuleName | str,
        lint: Callable[..., list[Problem] | None],
        only_if: Callable[..., bool] | None = None,
        description: str = "",
    ) -> Rule:
        return Rule(
            name=name if isinstance(name, RuleName) else RuleName.parse(name),
            kind=kind,
            lint=lint,
            only_if=only_if or _always,
            description=description,
        )

    factory.__name__ = f"{kind.value}_rule"
    return factory


file_rule = _bound(DeclarationKind.FILE)
message_rule = _bound(DeclarationKind.MESSAGE)
field_rule = _bound(DeclarationKind.FIELD)
enum_rule = _bound(DeclarationKind.ENUM)
enum_value_rule = _bound(DeclarationKind.ENUM_VALUE)
service_rule = _bound(DeclarationKind.SERVICE)
method_rule = _bound(DeclarationKind.METHOD)


class RuleConfig(BaseModel):
    """Which rules run for which files.

    A rule is enabled for a path unless a disabled prefix matches it and no
    enabled prefix does. Path patterns are shell-style globs.
    """

    included_paths: list[str] = Field(default_factory=list)
    excluded_paths: list[str] = Field(default_factory=list)
    enabled_rules: list[str] = Field(default_factory=list)
    disabled_rules: list[str] = Field(default_factory=list)

    def matches_path(self, path: str) -> bool:
        if any(fnmatch.fnmatch(path, p) for p in self.excluded_paths):
            return False
        if not self.included_paths:
            return True
        return any(fnmatch.fnmatch(path, p) for p in self.included_paths)

    def is_rule_enabled(self, name: RuleName, path: str = "") -> bool:
        if not self.matches_path(path):
            return True
        if any(name.has_prefix(p) for p in self.enabled_rules):
            return True
        return not any(name.has_prefix(p) for p in self.disabled_rules)
