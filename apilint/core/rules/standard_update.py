"""
Standard Update Rules — Shape of Update methods and their request messages.

Update methods bind to an HTTP PATCH; the request carries an `update_mask`
FieldMask and, optionally, an `allow_missing` bool.
"""

from __future__ import annotations

from typing import Callable

from apilint.core.registry import RuleRegistry
from apilint.core.rules import common_lints
from apilint.core.rules.utils import is_update_method, is_update_request_message
from apilint.models.descriptor_models import FieldDecl, MessageDecl
from apilint.models.rule_models import RuleName, field_rule, method_rule

AIP = 134


def _update_request_field(name: str) -> Callable[[FieldDecl], bool]:
    def guard(f: FieldDecl) -> bool:
        return (
            f.name == name
            and isinstance(f.parent, MessageDecl)
            and is_update_request_message(f.parent)
        )

    return guard


request_message_name = method_rule(
    RuleName("core", AIP, "request-message-name"),
    common_lints.lint_method_has_matching_request_name,
    only_if=is_update_method,
    description="Update methods take an Update<Resource>Request message.",
)

http_method = method_rule(
    RuleName("core", AIP, "http-method"),
    common_lints.lint_http_method("PATCH"),
    only_if=is_update_method,
    description="Update methods use the HTTP PATCH verb.",
)

request_mask_field = field_rule(
    RuleName("core", AIP, "request-mask-field"),
    common_lints.lint_field_mask,
    only_if=_update_request_field("update_mask"),
    description="`update_mask` is a singular google.protobuf.FieldMask.",
)

request_allow_missing_field = field_rule(
    RuleName("core", AIP, "request-allow-missing-field"),
    common_lints.lint_singular_bool_field,
    only_if=_update_request_field("allow_missing"),
    description="`allow_missing` is a singular bool.",
)


def add_rules(registry: RuleRegistry) -> None:
    registry.register(
        request_message_name,
        http_method,
        request_mask_field,
        request_allow_missing_field,
    )
