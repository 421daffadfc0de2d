"""
Standard Get Rules — Shape of Get methods and their request messages.

A Get method is named Get<Resource>, takes Get<Resource>Request, binds to an
HTTP GET without a body, and addresses the resource by a `name` URI variable.
The request carries a required `name` string referencing the resource.
"""

from __future__ import annotations

from apilint.core.registry import RuleRegistry
from apilint.core.rules import common_lints
from apilint.core.rules.utils import is_get_method, is_get_request_message
from apilint.models.descriptor_models import FieldDecl, MessageDecl
from apilint.models.rule_models import RuleName, field_rule, message_rule, method_rule

AIP = 131


def _is_name_field(f: FieldDecl) -> bool:
    return f.name == "name" and isinstance(f.parent, MessageDecl) and is_get_request_message(f.parent)


request_message_name = method_rule(
    RuleName("core", AIP, "request-message-name"),
    common_lints.lint_method_has_matching_request_name,
    only_if=is_get_method,
    description="Get methods take a Get<Resource>Request message.",
)

http_method = method_rule(
    RuleName("core", AIP, "http-method"),
    common_lints.lint_http_method("GET"),
    only_if=is_get_method,
    description="Get methods use the HTTP GET verb.",
)

http_body = method_rule(
    RuleName("core", AIP, "http-body"),
    common_lints.lint_no_http_body,
    only_if=is_get_method,
    description="Get methods have no HTTP body.",
)

http_uri_name = method_rule(
    RuleName("core", AIP, "http-uri-name"),
    common_lints.lint_http_uri_has_name_variable,
    only_if=is_get_method,
    description="Get methods address the resource with a `name` URI variable.",
)

request_name_field = message_rule(
    RuleName("core", AIP, "request-name-field"),
    common_lints.lint_field_present_and_singular_string("name"),
    only_if=is_get_request_message,
    description="Get requests have a singular string `name` field.",
)

request_name_required = field_rule(
    RuleName("core", AIP, "request-name-required"),
    common_lints.lint_required_field,
    only_if=_is_name_field,
    description="The `name` field of a Get request is REQUIRED.",
)

request_name_reference = field_rule(
    RuleName("core", AIP, "request-name-reference"),
    common_lints.lint_field_resource_reference,
    only_if=_is_name_field,
    description="The `name` field of a Get request references its resource.",
)


def add_rules(registry: RuleRegistry) -> None:
    registry.register(
        request_message_name,
        http_method,
        http_body,
        http_uri_name,
        request_name_field,
        request_name_required,
        request_name_reference,
    )
