"""
Locations — Pick the precise span a Problem should highlight.

Each helper falls back to the whole-declaration span when the parser did not
record the requested sub-span, but keeps the requested kind.
"""

from __future__ import annotations

from apilint.models.descriptor_models import Declaration, FieldDecl, FileDecl, MethodDecl
from apilint.models.problem_models import Location, LocationKind

HTTP_OPTION = "google.api.http"


def _sub_span(decl: Declaration, key: str, kind: LocationKind, path: str | None = None) -> Location:
    return Location(kind=kind, span=decl.spans.get(key, decl.span), path=path)


def declaration(decl: Declaration) -> Location:
    return Location(kind=LocationKind.DECLARATION, span=decl.span)


def descriptor_name(decl: Declaration) -> Location:
    return _sub_span(decl, "name", LocationKind.NAME)


def field_type(field: FieldDecl) -> Location:
    return _sub_span(field, "type", LocationKind.TYPE)


def method_http_rule(method: MethodDecl) -> Location:
    return _sub_span(method, "http", LocationKind.HTTP, path=HTTP_OPTION)


def method_request_type(method: MethodDecl) -> Location:
    return _sub_span(method, "input_type", LocationKind.INPUT_TYPE)


def method_response_type(method: MethodDecl) -> Location:
    return _sub_span(method, "output_type", LocationKind.OUTPUT_TYPE)


def file_syntax(file: FileDecl) -> Location:
    return _sub_span(file, "syntax", LocationKind.SYNTAX)


def file_package(file: FileDecl) -> Location:
    return _sub_span(file, "package", LocationKind.PACKAGE)


def leading_comments(decl: Declaration) -> Location:
    return _sub_span(decl, "leading_comments", LocationKind.LEADING_COMMENTS)
