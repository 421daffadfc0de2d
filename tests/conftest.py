"""
Test fixtures shared across all apilint tests.
"""

import pytest

from apilint.core.registry import RuleRegistry
from apilint.core.rules import map_object_values
from apilint.models.descriptor_models import (
    EnumDecl,
    EnumValueDecl,
    FieldDecl,
    FieldTypeRef,
    FileDecl,
    HttpRule,
    MessageDecl,
    MethodDecl,
    ServiceDecl,
)
from factories import span


@pytest.fixture
def build_map_file():
    """Factory: a Shelf message with a message-valued map field."""

    def build(shelf_comments=None, file_comments=None, path="library/v1/library.proto"):
        return FileDecl(
            name=path,
            package="library.v1",
            leading_comments=file_comments or [],
            span=span(1, end_line=20),
            spans={"package": span(3, 8, 3, 18)},
            messages=[
                MessageDecl(
                    name="Shelf",
                    leading_comments=shelf_comments or [],
                    span=span(5, end_line=8),
                    fields=[
                        FieldDecl(
                            name="books",
                            number=1,
                            type="message",
                            type_name=".library.v1.Shelf.BooksEntry",
                            repeated=True,
                            map_key_type="string",
                            map_value=FieldTypeRef(type="message", type_name=".library.v1.Book"),
                            span=span(7, 2, 7, 30),
                            spans={"type": span(7, 2, 7, 21)},
                        ),
                    ],
                ),
                MessageDecl(
                    name="Book",
                    span=span(10, end_line=12),
                    fields=[
                        FieldDecl(name="title", number=1, type="string", span=span(11, 2)),
                    ],
                ),
            ],
        )

    return build


@pytest.fixture
def map_file(build_map_file):
    return build_map_file()


@pytest.fixture
def object_values_registry():
    registry = RuleRegistry()
    map_object_values.add_rules(registry)
    return registry


@pytest.fixture
def library_file():
    """A small, mostly well-formed API file with a few deliberate defects."""
    return FileDecl(
        name="library/v1/library.proto",
        package="library.v1",
        span=span(1, end_line=60),
        spans={"package": span(3, 8, 3, 18), "syntax": span(1, 0, 1, 18)},
        messages=[
            MessageDecl(
                name="Book",
                span=span(5, end_line=9),
                fields=[
                    FieldDecl(name="name", number=1, type="string", span=span(6, 2)),
                    FieldDecl(name="title", number=2, type="string", span=span(7, 2)),
                ],
                enums=[
                    EnumDecl(
                        name="Format",
                        span=span(8, 2),
                        values=[
                            EnumValueDecl(
                                name="FORMAT_UNKNOWN",
                                number=0,
                                span=span(8, 4),
                                spans={"name": span(8, 4, 8, 18)},
                            ),
                            EnumValueDecl(name="HARDCOVER", number=1, span=span(9, 4)),
                        ],
                    ),
                ],
            ),
            MessageDecl(
                name="GetBookRequest",
                span=span(12, end_line=14),
                fields=[
                    FieldDecl(
                        name="name",
                        number=1,
                        type="string",
                        behaviors=["REQUIRED"],
                        resource_reference="library.googleapis.com/Book",
                        span=span(13, 2),
                    ),
                ],
            ),
        ],
        services=[
            ServiceDecl(
                name="Library",
                span=span(20, end_line=30),
                methods=[
                    MethodDecl(
                        name="GetBook",
                        input_type=".library.v1.GetBookRequest",
                        output_type=".library.v1.Book",
                        http_rules=[HttpRule(method="GET", uri="/v1/{name=shelves/*/books/*}")],
                        span=span(21, 2),
                    ),
                    MethodDecl(
                        name="ListBooks",
                        input_type=".library.v1.ListBooksRequest",
                        output_type=".library.v1.ListBooksResponse",
                        http_rules=[HttpRule(method="POST", uri="/v1/books", body="*")],
                        span=span(24, 2),
                        spans={"http": span(25, 4, 25, 40)},
                    ),
                ],
            ),
        ],
    )
