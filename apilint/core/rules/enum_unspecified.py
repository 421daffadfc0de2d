"""
Enum Unspecified Rule — The zero value of an enum is <ENUM_NAME>_UNSPECIFIED.

proto3 requires the first enum value to have number 0; that value must be
named after the enum in upper snake case with an _UNSPECIFIED suffix.
"""

from __future__ import annotations

from apilint.core import locations
from apilint.core.registry import RuleRegistry
from apilint.core.rules.utils import to_snake_case
from apilint.models.descriptor_models import EnumValueDecl
from apilint.models.problem_models import Problem
from apilint.models.rule_models import RuleName, enum_value_rule

RULE_NAME = RuleName("core", 126, "unspecified")


def _is_first_enum_value(v: EnumValueDecl) -> bool:
    return v.number == 0


def check(v: EnumValueDecl) -> list[Problem]:
    """Flag a zero value not named <ENUM_NAME>_UNSPECIFIED."""
    want = f"{to_snake_case(v.enum.name).upper()}_UNSPECIFIED"
    if v.name != want:
        return [
            Problem(
                message=f'The first enum value should be "{want}"',
                suggestion=want,
                descriptor=v,
                location=locations.descriptor_name(v),
            )
        ]
    return []


unspecified = enum_value_rule(
    RULE_NAME,
    check,
    only_if=_is_first_enum_value,
    description="The first enum value must be <ENUM_NAME>_UNSPECIFIED.",
)


def add_rules(registry: RuleRegistry) -> None:
    registry.register(unspecified)
