"""
Standard List Rules — Shape of List methods.
"""

from __future__ import annotations

from apilint.core.registry import RuleRegistry
from apilint.core.rules import common_lints
from apilint.core.rules.utils import is_list_method
from apilint.models.rule_models import RuleName, method_rule

AIP = 132

request_message_name = method_rule(
    RuleName("core", AIP, "request-message-name"),
    common_lints.lint_method_has_matching_request_name,
    only_if=is_list_method,
    description="List methods take a List<Resources>Request message.",
)

response_message_name = method_rule(
    RuleName("core", AIP, "response-message-name"),
    common_lints.lint_method_has_matching_response_name,
    only_if=is_list_method,
    description="List methods return a List<Resources>Response message.",
)

http_method = method_rule(
    RuleName("core", AIP, "http-method"),
    common_lints.lint_http_method("GET"),
    only_if=is_list_method,
    description="List methods use the HTTP GET verb.",
)

http_body = method_rule(
    RuleName("core", AIP, "http-body"),
    common_lints.lint_no_http_body,
    only_if=is_list_method,
    description="List methods have no HTTP body.",
)

http_uri_parent = method_rule(
    RuleName("core", AIP, "http-uri-parent"),
    common_lints.lint_http_uri_has_parent_variable,
    only_if=is_list_method,
    description="List methods address the collection with a `parent` URI variable.",
)


def add_rules(registry: RuleRegistry) -> None:
    registry.register(
        request_message_name,
        response_message_name,
        http_method,
        http_body,
        http_uri_parent,
    )
