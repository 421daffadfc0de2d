"""
Map Object Values Rule — Maps should not use messages as values.

Message-valued maps are hard to evolve and to patch partially; a repeated
message with a key field is preferred.
"""

from __future__ import annotations

from apilint.core import locations
from apilint.core.registry import RuleRegistry
from apilint.core.rules.utils import is_common_proto
from apilint.models.descriptor_models import FieldDecl
from apilint.models.problem_models import Problem
from apilint.models.rule_models import RuleName, field_rule

RULE_NAME = RuleName("core", 25146, "object-values")


def _is_owned_map_field(f: FieldDecl) -> bool:
    return not is_common_proto(f.file) and f.map_value is not None


def check(f: FieldDecl) -> list[Problem]:
    if f.map_value.is_message:
        return [
            Problem(
                message="Avoid using objects as map values.",
                descriptor=f,
                location=locations.field_type(f),
            )
        ]
    return []


object_values = field_rule(
    RULE_NAME,
    check,
    only_if=_is_owned_map_field,
    description="Map fields should not use messages as values.",
)


def add_rules(registry: RuleRegistry) -> None:
    registry.register(object_values)
