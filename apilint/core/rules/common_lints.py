"""
Common Lints — Reusable checks the built-in rules are assembled from.

Every helper returns a list of Problems (empty when the declaration is fine),
so rules can concatenate them or return them directly. Problems carry no rule
name; the engine tags them with the rule that returned them.

This is the helper API offered to every rule provider, not only the built-in
catalog. lint_output_only_field, lint_wildcard_http_body and
lint_http_uri_variable_count back Create, Delete and custom-method rules that
providers register themselves.
"""

from __future__ import annotations

from typing import Callable

from apilint.core import locations
from apilint.models.descriptor_models import FieldDecl, MessageDecl, MethodDecl
from apilint.models.problem_models import Problem

FIELD_MASK = "google.protobuf.FieldMask"


def lint_field_present(m: MessageDecl, field: str) -> tuple[FieldDecl | None, list[Problem]]:
    """Return the named field, or a problem if the message does not have it."""
    f = m.find_field(field)
    if f is None:
        return None, [Problem(message=f"Message `{m.name}` has no `{field}` field.", descriptor=m)]
    return f, []


def _lint_singular_field(f: FieldDecl, want: str) -> list[Problem]:
    if f.type != want or f.repeated or f.is_map:
        return [
            Problem(
                message=f"The `{f.name}` field must be a singular {want}.",
                suggestion=want,
                descriptor=f,
                location=locations.field_type(f),
            )
        ]
    return []


def lint_singular_string_field(f: FieldDecl) -> list[Problem]:
    return _lint_singular_field(f, "string")


def lint_singular_bool_field(f: FieldDecl) -> list[Problem]:
    return _lint_singular_field(f, "bool")


def lint_field_mask(f: FieldDecl) -> list[Problem]:
    """The field must be a singular google.protobuf.FieldMask."""
    if f.message_type != FIELD_MASK or f.repeated:
        return [
            Problem(
                message=f"The `{f.name}` field should be a singular {FIELD_MASK}.",
                suggestion=FIELD_MASK,
                descriptor=f,
                location=locations.field_type(f),
            )
        ]
    return []


def lint_field_present_and_singular_string(field: str) -> Callable[[MessageDecl], list[Problem]]:
    def check(m: MessageDecl) -> list[Problem]:
        f, problems = lint_field_present(m, field)
        if f is None:
            return problems
        return lint_singular_string_field(f)

    return check


def _lint_field_behavior(f: FieldDecl, want: str) -> list[Problem]:
    if want not in f.behaviors:
        return [
            Problem(
                message=(
                    f"The `{f.name}` field should include "
                    f"`(google.api.field_behavior) = {want}`."
                ),
                descriptor=f,
            )
        ]
    return []


def lint_required_field(f: FieldDecl) -> list[Problem]:
    return _lint_field_behavior(f, "REQUIRED")


def lint_output_only_field(f: FieldDecl) -> list[Problem]:
    return _lint_field_behavior(f, "OUTPUT_ONLY")


def lint_field_resource_reference(f: FieldDecl) -> list[Problem]:
    if not f.resource_reference:
        return [
            Problem(
                message=(
                    f"The `{f.name}` field should include a "
                    f"`google.api.resource_reference` annotation."
                ),
                descriptor=f,
            )
        ]
    return []


def _lint_http_body(m: MethodDecl, want: str, msg: str) -> list[Problem]:
    for rule in m.http_rules:
        if rule.body != want:
            return [
                Problem(
                    message=f"The `{m.name}` method should {msg} HTTP body.",
                    descriptor=m,
                    location=locations.method_http_rule(m),
                )
            ]
    return []


def lint_no_http_body(m: MethodDecl) -> list[Problem]:
    return _lint_http_body(m, "", "not have an")


def lint_wildcard_http_body(m: MethodDecl) -> list[Problem]:
    return _lint_http_body(m, "*", 'use "*" as the')


def lint_http_method(verb: str) -> Callable[[MethodDecl], list[Problem]]:
    """Build a check that every HTTP binding uses ``verb``."""

    def check(m: MethodDecl) -> list[Problem]:
        for rule in m.http_rules:
            if rule.method.upper() != verb:
                return [
                    Problem(
                        message=f"The `{m.name}` method should use the HTTP {verb} verb.",
                        descriptor=m,
                        location=locations.method_http_rule(m),
                    )
                ]
        return []

    return check


def lint_method_has_matching_request_name(m: MethodDecl) -> list[Problem]:
    want = f"{m.name}Request"
    if m.input_type_name != want:
        return [
            Problem(
                message=f'Request message should be named after the RPC, i.e. "{want}".',
                suggestion=want,
                descriptor=m,
                location=locations.method_request_type(m),
            )
        ]
    return []


def lint_method_has_matching_response_name(m: MethodDecl) -> list[Problem]:
    want = f"{m.name}Response"
    if m.output_type_name != want:
        return [
            Problem(
                message=f'Response message should be named after the RPC, i.e. "{want}".',
                suggestion=want,
                descriptor=m,
                location=locations.method_response_type(m),
            )
        ]
    return []


def lint_http_uri_has_variable(m: MethodDecl, variable: str) -> list[Problem]:
    for rule in m.http_rules:
        if variable not in rule.variables:
            return [
                Problem(
                    message=f"HTTP URI should include a `{variable}` variable.",
                    descriptor=m,
                    location=locations.method_http_rule(m),
                )
            ]
    return []


def lint_http_uri_has_parent_variable(m: MethodDecl) -> list[Problem]:
    return lint_http_uri_has_variable(m, "parent")


def lint_http_uri_has_name_variable(m: MethodDecl) -> list[Problem]:
    return lint_http_uri_has_variable(m, "name")


def lint_http_uri_variable_count(m: MethodDecl, n: int) -> list[Problem]:
    """The busiest HTTP binding must carry exactly ``n`` URI variables."""
    noun = "variable" if n == 1 else "variables"
    count = max((len(rule.variables) for rule in m.http_rules), default=0)
    if count != n:
        return [
            Problem(
                message=f"HTTP URI should contain {n} {noun}.",
                descriptor=m,
                location=locations.method_http_rule(m),
            )
        ]
    return []
