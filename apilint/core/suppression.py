"""
Suppression — In-source directives that switch rules off for a subtree.

Directive grammar, matched exactly as existing annotated schemas write it:

    (-- api-linter: core::0126::unspecified=disabled
        aip.dev/not-precedent: We need this for legacy clients. --)

A directive line holds one or more ``<target>=disabled`` tokens separated by
commas or whitespace. A target is a full rule name, a namespace prefix
(``core``, ``core::0126``) or ``all``. The comment block must also carry a
non-empty ``aip.dev/not-precedent:`` justification, otherwise the directive
is malformed and ignored.

A directive on a declaration applies to that declaration and everything
nested in it. Any match on the declaration, an ancestor, or the file
suppresses; there is no re-enabling directive.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from apilint.core.errors import MalformedSuppressionDirective
from apilint.models.descriptor_models import Declaration
from apilint.models.rule_models import RuleName, is_valid_rule_prefix

logger = logging.getLogger("apilint.suppression")

DIRECTIVE_PREFIX = "api-linter:"
JUSTIFICATION_TAG = "aip.dev/not-precedent:"

_DIRECTIVE = re.compile(re.escape(DIRECTIVE_PREFIX) + r"(?P<body>.*)$")
_JUSTIFICATION = re.compile(re.escape(JUSTIFICATION_TAG) + r"(?P<text>.*)$")
_TOKEN = re.compile(r"^(?P<target>[^=\s]+)=disabled$")
_TOKEN_SPLIT = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class SuppressionDirective:
    targets: tuple[str, ...]
    justification: str
    line: int = 0

    def matches(self, name: RuleName) -> bool:
        return any(name.has_prefix(target) for target in self.targets)


@dataclass(frozen=True)
class CommentDirectives:
    directives: tuple[SuppressionDirective, ...] = ()
    malformed: tuple[MalformedSuppressionDirective, ...] = ()


def _strip_markers(text: str) -> str:
    return text.replace("(--", " ").replace("--)", " ").strip()


def parse_directive(text: str, justification: str, line: int = 0) -> SuppressionDirective:
    """Parse one directive line.

    Raises:
        MalformedSuppressionDirective: bad token syntax or no justification.
    """
    match = _DIRECTIVE.search(text)
    if match is None:
        raise MalformedSuppressionDirective(f"missing '{DIRECTIVE_PREFIX}' prefix", text, line)

    body = _strip_markers(match.group("body").split(JUSTIFICATION_TAG, 1)[0])
    tokens = [t for t in _TOKEN_SPLIT.split(body) if t]
    if not tokens:
        raise MalformedSuppressionDirective("no rule names", text, line)

    targets: list[str] = []
    for token in tokens:
        token_match = _TOKEN.match(token)
        if token_match is None or not is_valid_rule_prefix(token_match.group("target")):
            raise MalformedSuppressionDirective(f"invalid rule token '{token}'", text, line)
        targets.append(token_match.group("target"))

    if not justification:
        raise MalformedSuppressionDirective(
            f"missing '{JUSTIFICATION_TAG}' justification", text, line
        )
    return SuppressionDirective(targets=tuple(targets), justification=justification, line=line)


@lru_cache(maxsize=4096)
def parse_comment(text: str) -> CommentDirectives:
    """Extract every directive from one comment block."""
    lines = text.splitlines()

    justification = ""
    for line in lines:
        match = _JUSTIFICATION.search(line)
        if match and _strip_markers(match.group("text")):
            justification = _strip_markers(match.group("text"))
            break

    directives: list[SuppressionDirective] = []
    malformed: list[MalformedSuppressionDirective] = []
    for index, line in enumerate(lines):
        # justification text is free-form and may mention the prefix
        if _DIRECTIVE.search(line.split(JUSTIFICATION_TAG, 1)[0]) is None:
            continue
        try:
            directives.append(parse_directive(line, justification, index))
        except MalformedSuppressionDirective as e:
            malformed.append(e)
    return CommentDirectives(directives=tuple(directives), malformed=tuple(malformed))


def directives_for(decl: Declaration) -> list[SuppressionDirective]:
    """Valid directives attached directly to ``decl``."""
    return [d for block in decl.leading_comments for d in parse_comment(block).directives]


def malformed_directives(decl: Declaration) -> list[MalformedSuppressionDirective]:
    """Malformed directives attached directly to ``decl``."""
    return [m for block in decl.leading_comments for m in parse_comment(block).malformed]


def find_suppression(decl: Declaration, name: RuleName) -> Declaration | None:
    """Return the declaration whose directive disables ``name`` for ``decl``."""
    for scope in (decl, *decl.ancestors()):
        if any(d.matches(name) for d in directives_for(scope)):
            logger.debug(f"{name} suppressed at {decl.full_name} by {scope.full_name}")
            return scope
    return None


def is_suppressed(decl: Declaration, name: RuleName) -> bool:
    return find_suppression(decl, name) is not None
