"""
Rule Utilities — Shared predicates for the built-in rules.
"""

from __future__ import annotations

import re

from apilint.models.descriptor_models import FileDecl, MessageDecl, MethodDecl

COMMON_PACKAGES = {"google.protobuf", "google.longrunning", "google.rpc", "google.type"}

_GET_METHOD = re.compile(r"^Get(?:[A-Z]|$)")
_LIST_METHOD = re.compile(r"^List(?:[A-Z]|$)")
_UPDATE_METHOD = re.compile(r"^Update(?:[A-Z]|$)")


def is_common_proto(file: FileDecl | None) -> bool:
    """True for the shared Google packages that API authors do not own."""
    if file is None:
        return False
    return file.package.startswith("google.api") or file.package in COMMON_PACKAGES


def to_snake_case(name: str) -> str:
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    return name.replace("-", "_").lower()


def is_get_method(m: MethodDecl) -> bool:
    return bool(_GET_METHOD.match(m.name))


def is_list_method(m: MethodDecl) -> bool:
    return bool(_LIST_METHOD.match(m.name))


def is_update_method(m: MethodDecl) -> bool:
    return bool(_UPDATE_METHOD.match(m.name))


def is_get_request_message(m: MessageDecl) -> bool:
    return bool(re.match(r"^Get[A-Z]\w*Request$", m.name))


def is_update_request_message(m: MessageDecl) -> bool:
    return bool(re.match(r"^Update[A-Z]\w*Request$", m.name))
