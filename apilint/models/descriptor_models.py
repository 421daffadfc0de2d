"""
Declaration Data Models — The already-parsed schema tree the linter walks.

These models are produced by an external schema parser (or posted as JSON to
the API) and are the input to the rule engine. Constructing a FileDecl links
every nested declaration to its parent, so rules can navigate upward
(field -> message -> file) without the tree being rebuilt.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, ClassVar, Iterator

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class DeclarationKind(str, Enum):
    FILE = "file"
    MESSAGE = "message"
    FIELD = "field"
    ENUM = "enum"
    ENUM_VALUE = "enum_value"
    SERVICE = "service"
    METHOD = "method"


class Span(BaseModel):
    """A source range inside a schema file."""

    model_config = ConfigDict(frozen=True)

    start_line: int = Field(..., ge=0)
    start_column: int = Field(default=0, ge=0)
    end_line: int = Field(..., ge=0)
    end_column: int = Field(default=0, ge=0)


class Declaration(BaseModel):
    """Base for every node of the schema tree.

    Equality and hashing use the declaration's identity
    (kind, file path, full name) rather than its recursive contents.
    """

    kind: ClassVar[DeclarationKind]

    name: str
    leading_comments: list[str] = Field(
        default_factory=list,
        description="Leading and detached comment blocks, in source order",
    )
    span: Span | None = Field(default=None, description="Whole-declaration span")
    spans: dict[str, Span] = Field(
        default_factory=dict,
        description="Named sub-spans: 'name', 'type', 'http', 'package', ...",
    )

    _parent: Declaration | None = PrivateAttr(default=None)

    @property
    def parent(self) -> Declaration | None:
        return self._parent

    @property
    def file(self) -> FileDecl | None:
        decl: Declaration = self
        while decl._parent is not None:
            decl = decl._parent
        return decl if isinstance(decl, FileDecl) else None

    @property
    def full_name(self) -> str:
        parent = self._parent
        if isinstance(parent, FileDecl):
            return f"{parent.package}.{self.name}" if parent.package else self.name
        if parent is None:
            return self.name
        return f"{parent.full_name}.{self.name}"

    def children(self) -> list[Declaration]:
        return []

    def ancestors(self) -> Iterator[Declaration]:
        """Yield the parent chain, nearest first, ending with the file."""
        decl = self._parent
        while decl is not None:
            yield decl
            decl = decl._parent

    def walk(self) -> Iterator[Declaration]:
        """Depth-first pre-order walk, children in declared order."""
        yield self
        for child in self.children():
            yield from child.walk()

    def identity(self) -> tuple[str, str, str]:
        file = self.file
        return (self.kind.value, file.name if file else "", self.full_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Declaration):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    def _link(self) -> None:
        for child in self.children():
            child._parent = self
            child._link()


class FieldTypeRef(BaseModel):
    """A field type: a proto scalar name, or 'message'/'enum' plus type_name."""

    type: str
    type_name: str | None = None

    @property
    def is_message(self) -> bool:
        return self.type == "message"


class FieldDecl(Declaration):
    kind: ClassVar[DeclarationKind] = DeclarationKind.FIELD

    number: int = 0
    type: str = Field(default="string", description="Proto scalar type, 'message' or 'enum'")
    type_name: str | None = Field(
        default=None, description="Fully-qualified message/enum name"
    )
    repeated: bool = False
    map_key_type: str | None = None
    map_value: FieldTypeRef | None = Field(
        default=None, description="Value type; present only for map fields"
    )
    behaviors: list[str] = Field(
        default_factory=list, description="google.api.field_behavior values"
    )
    resource_reference: str | None = None

    @property
    def is_map(self) -> bool:
        return self.map_value is not None

    @property
    def message_type(self) -> str | None:
        if self.type != "message" or not self.type_name:
            return None
        return self.type_name.lstrip(".")


class EnumValueDecl(Declaration):
    kind: ClassVar[DeclarationKind] = DeclarationKind.ENUM_VALUE

    number: int = 0

    @property
    def enum(self) -> EnumDecl | None:
        return self._parent if isinstance(self._parent, EnumDecl) else None


class EnumDecl(Declaration):
    kind: ClassVar[DeclarationKind] = DeclarationKind.ENUM

    values: list[EnumValueDecl] = Field(default_factory=list)

    def children(self) -> list[Declaration]:
        return list(self.values)


class MessageDecl(Declaration):
    kind: ClassVar[DeclarationKind] = DeclarationKind.MESSAGE

    messages: list[MessageDecl] = Field(default_factory=list)
    fields: list[FieldDecl] = Field(default_factory=list)
    enums: list[EnumDecl] = Field(default_factory=list)

    def children(self) -> list[Declaration]:
        return [*self.messages, *self.fields, *self.enums]

    def find_field(self, name: str) -> FieldDecl | None:
        return next((f for f in self.fields if f.name == name), None)


_URI_VARIABLE = re.compile(r"\{([^}=]+)(?:=([^}]*))?\}")


class HttpRule(BaseModel):
    """One google.api.http binding of a method."""

    method: str = Field(..., description="HTTP verb, e.g. GET")
    uri: str
    body: str = ""

    @property
    def variables(self) -> dict[str, str]:
        """URI variables mapped to their path templates ('*' when bare)."""
        return {
            m.group(1).strip(): (m.group(2) or "*").strip()
            for m in _URI_VARIABLE.finditer(self.uri)
        }


class MethodDecl(Declaration):
    kind: ClassVar[DeclarationKind] = DeclarationKind.METHOD

    input_type: str
    output_type: str
    client_streaming: bool = False
    server_streaming: bool = False
    http_rules: list[HttpRule] = Field(default_factory=list)

    @property
    def input_type_name(self) -> str:
        return self.input_type.rsplit(".", 1)[-1]

    @property
    def output_type_name(self) -> str:
        return self.output_type.rsplit(".", 1)[-1]


class ServiceDecl(Declaration):
    kind: ClassVar[DeclarationKind] = DeclarationKind.SERVICE

    methods: list[MethodDecl] = Field(default_factory=list)

    def children(self) -> list[Declaration]:
        return list(self.methods)


class FileDecl(Declaration):
    """A schema file; ``name`` is its path."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.FILE

    package: str = ""
    syntax: str = "proto3"
    messages: list[MessageDecl] = Field(default_factory=list)
    enums: list[EnumDecl] = Field(default_factory=list)
    services: list[ServiceDecl] = Field(default_factory=list)

    def model_post_init(self, context: Any) -> None:
        self._link()

    @property
    def full_name(self) -> str:
        return self.name

    def children(self) -> list[Declaration]:
        return [*self.messages, *self.enums, *self.services]

    def find_message(self, full_name: str) -> MessageDecl | None:
        """Look up a message declared in this file by fully-qualified name."""
        wanted = full_name.lstrip(".")
        for decl in self.walk():
            if isinstance(decl, MessageDecl) and decl.full_name == wanted:
                return decl
        return None
