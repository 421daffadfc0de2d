"""
Versioned Packages Rule — API packages end in a version component.

Accepted versions: v1, v1p1, v2beta, v1alpha3, ...
"""

from __future__ import annotations

import re

from apilint.core import locations
from apilint.core.registry import RuleRegistry
from apilint.core.rules.utils import is_common_proto
from apilint.models.descriptor_models import FileDecl
from apilint.models.problem_models import Problem
from apilint.models.rule_models import RuleName, file_rule

RULE_NAME = RuleName("core", 215, "versioned-packages")

_VERSION = re.compile(r"^v\d+(p\d+)?((alpha|beta)\d*)?$")


def _is_api_file(f: FileDecl) -> bool:
    return bool(f.package) and not is_common_proto(f)


def check(f: FileDecl) -> list[Problem]:
    last = f.package.rsplit(".", 1)[-1]
    if not _VERSION.match(last):
        return [
            Problem(
                message=f"API components should be in versioned packages; `{f.package}` is not.",
                descriptor=f,
                location=locations.file_package(f),
            )
        ]
    return []


versioned_packages = file_rule(
    RULE_NAME,
    check,
    only_if=_is_api_file,
    description="Packages must end in a version component such as v1.",
)


def add_rules(registry: RuleRegistry) -> None:
    registry.register(versioned_packages)
