"""
Diagnostic Data Models — Problems and locations.

A Problem is the only thing a rule produces. It references the offending
declaration (never owns it) and pins the finding to a precise sub-span.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from apilint.models.descriptor_models import Declaration, Span


class LocationKind(str, Enum):
    DECLARATION = "declaration"
    NAME = "name"
    TYPE = "type"
    HTTP = "http"
    INPUT_TYPE = "input-type"
    OUTPUT_TYPE = "output-type"
    SYNTAX = "syntax"
    PACKAGE = "package"
    LEADING_COMMENTS = "leading-comments"


class Location(BaseModel):
    """The implicated part of a declaration."""

    model_config = ConfigDict(frozen=True)

    kind: LocationKind = LocationKind.DECLARATION
    span: Span | None = None
    path: str | None = Field(
        default=None, description="Sub-field path, e.g. 'google.api.http'"
    )

    def sort_key(self) -> tuple[Any, ...]:
        span: tuple[int, ...] = ()
        if self.span is not None:
            span = (
                self.span.start_line,
                self.span.start_column,
                self.span.end_line,
                self.span.end_column,
            )
        return (self.kind.value, span, self.path or "")


class ProblemCategory(str, Enum):
    LINT = "lint"
    INTERNAL_ERROR = "internal-error"
    MALFORMED_DIRECTIVE = "malformed-directive"


class Problem(BaseModel):
    """A single diagnostic finding."""

    model_config = ConfigDict(frozen=True)

    message: str
    suggestion: str | None = Field(default=None, description="Suggested replacement text")
    descriptor: Declaration = Field(..., exclude=True, repr=False)
    location: Location = Field(default_factory=Location)
    rule_name: str = Field(default="", description="Textual RuleName, set by the engine")
    rule_uri: str | None = None
    category: ProblemCategory = ProblemCategory.LINT
