"""
Tests for Common Lints — the building blocks of the built-in rules.
"""

import pytest

from apilint.core.registry import RuleRegistry
from apilint.core.rule_engine import run
from apilint.core.rules import common_lints
from apilint.core.rules.utils import is_common_proto, to_snake_case
from apilint.models.descriptor_models import (
    FieldDecl,
    FieldTypeRef,
    FileDecl,
    HttpRule,
    MessageDecl,
    MethodDecl,
    ServiceDecl,
)
from apilint.models.problem_models import LocationKind
from apilint.models.rule_models import field_rule, method_rule


def _method(name="GetBook", rules=(), input_type="GetBookRequest", output_type="Book"):
    return MethodDecl(
        name=name,
        input_type=input_type,
        output_type=output_type,
        http_rules=list(rules),
    )


def test_field_present():
    m = MessageDecl(name="GetBookRequest", fields=[FieldDecl(name="name")])
    found, problems = common_lints.lint_field_present(m, "name")
    assert found is m.fields[0]
    assert problems == []

    missing, problems = common_lints.lint_field_present(m, "parent")
    assert missing is None
    assert problems[0].message == "Message `GetBookRequest` has no `parent` field."


@pytest.mark.parametrize(
    "field,ok",
    [
        (FieldDecl(name="name", type="string"), True),
        (FieldDecl(name="name", type="int32"), False),
        (FieldDecl(name="name", type="string", repeated=True), False),
        (
            FieldDecl(
                name="name",
                type="string",
                map_key_type="string",
                map_value=FieldTypeRef(type="string"),
            ),
            False,
        ),
    ],
)
def test_singular_string_field(field, ok):
    problems = common_lints.lint_singular_string_field(field)
    assert (problems == []) is ok
    if not ok:
        assert problems[0].suggestion == "string"
        assert problems[0].location.kind is LocationKind.TYPE


def test_singular_bool_field():
    assert common_lints.lint_singular_bool_field(FieldDecl(name="allow_missing", type="bool")) == []
    problems = common_lints.lint_singular_bool_field(FieldDecl(name="allow_missing", type="string"))
    assert problems[0].message == "The `allow_missing` field must be a singular bool."


def test_field_mask():
    mask = FieldDecl(name="update_mask", type="message", type_name=".google.protobuf.FieldMask")
    assert common_lints.lint_field_mask(mask) == []
    wrong = FieldDecl(name="update_mask", type="string")
    assert common_lints.lint_field_mask(wrong)[0].suggestion == "google.protobuf.FieldMask"
    repeated = FieldDecl(
        name="update_mask",
        type="message",
        type_name="google.protobuf.FieldMask",
        repeated=True,
    )
    assert len(common_lints.lint_field_mask(repeated)) == 1


def test_field_present_and_singular_string():
    check = common_lints.lint_field_present_and_singular_string("name")
    assert check(MessageDecl(name="M", fields=[FieldDecl(name="name", type="string")])) == []
    assert "has no `name` field" in check(MessageDecl(name="M"))[0].message
    assert "singular string" in check(MessageDecl(name="M", fields=[FieldDecl(name="name", type="bytes")]))[0].message


def test_field_behaviors():
    required = FieldDecl(name="name", behaviors=["REQUIRED"])
    assert common_lints.lint_required_field(required) == []
    assert common_lints.lint_output_only_field(required)[0].message == (
        "The `name` field should include `(google.api.field_behavior) = OUTPUT_ONLY`."
    )
    assert len(common_lints.lint_required_field(FieldDecl(name="name"))) == 1


def test_field_resource_reference():
    assert common_lints.lint_field_resource_reference(
        FieldDecl(name="name", resource_reference="library.googleapis.com/Book")
    ) == []
    assert len(common_lints.lint_field_resource_reference(FieldDecl(name="name"))) == 1


def test_http_body_checks():
    no_body = _method(rules=[HttpRule(method="GET", uri="/v1/{name=books/*}")])
    wildcard = _method(rules=[HttpRule(method="POST", uri="/v1/books", body="*")])
    assert common_lints.lint_no_http_body(no_body) == []
    assert common_lints.lint_wildcard_http_body(wildcard) == []

    problems = common_lints.lint_no_http_body(wildcard)
    assert problems[0].message == "The `GetBook` method should not have an HTTP body."
    assert problems[0].location.kind is LocationKind.HTTP
    assert problems[0].location.path == "google.api.http"
    assert common_lints.lint_wildcard_http_body(no_body)[0].message == (
        'The `GetBook` method should use "*" as the HTTP body.'
    )


def test_http_checks_pass_without_bindings():
    bare = _method()
    assert common_lints.lint_no_http_body(bare) == []
    assert common_lints.lint_http_method("GET")(bare) == []
    assert common_lints.lint_http_uri_has_name_variable(bare) == []


def test_http_method():
    check = common_lints.lint_http_method("PATCH")
    assert check(_method(rules=[HttpRule(method="patch", uri="/v1/x")])) == []
    problems = check(_method(rules=[HttpRule(method="PUT", uri="/v1/x")]))
    assert problems[0].message == "The `GetBook` method should use the HTTP PATCH verb."


def test_http_uri_variables():
    get = _method(rules=[HttpRule(method="GET", uri="/v1/{name=shelves/*/books/*}")])
    assert common_lints.lint_http_uri_has_name_variable(get) == []
    assert common_lints.lint_http_uri_has_parent_variable(get)[0].message == (
        "HTTP URI should include a `parent` variable."
    )
    assert common_lints.lint_http_uri_variable_count(get, 1) == []
    assert common_lints.lint_http_uri_variable_count(get, 2)[0].message == (
        "HTTP URI should contain 2 variables."
    )
    assert common_lints.lint_http_uri_variable_count(_method(), 1)[0].message == (
        "HTTP URI should contain 1 variable."
    )


def test_matching_message_names():
    good = _method(name="ListBooks", input_type="ListBooksRequest", output_type=".a.v1.ListBooksResponse")
    assert common_lints.lint_method_has_matching_request_name(good) == []
    assert common_lints.lint_method_has_matching_response_name(good) == []

    bad = _method(name="ListBooks", input_type="BooksQuery", output_type="Books")
    request = common_lints.lint_method_has_matching_request_name(bad)[0]
    assert request.message == 'Request message should be named after the RPC, i.e. "ListBooksRequest".'
    assert request.suggestion == "ListBooksRequest"
    assert request.location.kind is LocationKind.INPUT_TYPE
    response = common_lints.lint_method_has_matching_response_name(bad)[0]
    assert response.suggestion == "ListBooksResponse"
    assert response.location.kind is LocationKind.OUTPUT_TYPE


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Format", "format"),
        ("BookFormat", "book_format"),
        ("HTTPMethod", "http_method"),
        ("V1Thing", "v1_thing"),
    ],
)
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


@pytest.mark.parametrize(
    "package,common",
    [
        ("google.api", True),
        ("google.api.expr.v1", True),
        ("google.protobuf", True),
        ("google.type", True),
        ("google.cloud.library.v1", False),
        ("library.v1", False),
    ],
)
def test_is_common_proto(package, common):
    assert is_common_proto(FileDecl(name="x.proto", package=package)) is common
    assert is_common_proto(None) is False


def test_provider_rules_compose_helpers():
    def create_book_checks(m):
        return common_lints.lint_wildcard_http_body(m) + common_lints.lint_http_uri_variable_count(m, 1)

    def output_only_checks(f):
        return common_lints.lint_output_only_field(f)

    registry = RuleRegistry()
    registry.register(
        method_rule("acme::0133::create-shape", create_book_checks, only_if=lambda m: m.name.startswith("Create")),
        field_rule("acme::0133::create-time", output_only_checks, only_if=lambda f: f.name == "create_time"),
    )
    file = FileDecl(
        name="a.proto",
        package="library.v1",
        messages=[MessageDecl(name="Book", fields=[FieldDecl(name="create_time", type="message")])],
        services=[
            ServiceDecl(
                name="Library",
                methods=[
                    MethodDecl(
                        name="CreateBook",
                        input_type="CreateBookRequest",
                        output_type="Book",
                        http_rules=[HttpRule(method="POST", uri="/v1/books", body="book")],
                    )
                ],
            )
        ],
    )
    problems = run(file, registry)
    assert [(p.rule_name, p.message) for p in problems] == [
        (
            "acme::0133::create-time",
            "The `create_time` field should include `(google.api.field_behavior) = OUTPUT_ONLY`.",
        ),
        ("acme::0133::create-shape", "HTTP URI should contain 1 variable."),
        ("acme::0133::create-shape", 'The `CreateBook` method should use "*" as the HTTP body.'),
    ]
    assert problems[1].rule_uri is None
