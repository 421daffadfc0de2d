"""
Lint Request/Result Models — Engine results and the API contract schemas.

LintResult is what the engine returns for one file. The remaining models are
the public-facing wire format used by the FastAPI endpoints; they flatten each
Problem so the declaration tree is never echoed back.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

from apilint.models.descriptor_models import FileDecl
from apilint.models.problem_models import Location, Problem, ProblemCategory
from apilint.models.rule_models import RuleConfig


class SuppressionRecord(BaseModel):
    """A rule evaluation skipped because of an in-source directive."""

    rule_name: str
    descriptor_kind: str
    descriptor_name: str
    suppressed_by: str = Field(..., description="Full name of the declaration carrying the directive")


class LintResult(BaseModel):
    """Result of linting a single file."""

    file_path: str
    problems: list[Problem] = Field(default_factory=list)
    rules_executed: list[str] = Field(
        default_factory=list, description="Rules invoked at least once, sorted"
    )
    suppressions: list[SuppressionRecord] = Field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def internal_errors(self) -> list[Problem]:
        return [p for p in self.problems if p.category is ProblemCategory.INTERNAL_ERROR]


class ProblemReport(BaseModel):
    """A Problem as reported over the wire."""

    rule_name: str
    rule_uri: str | None = None
    category: ProblemCategory = ProblemCategory.LINT
    message: str
    suggestion: str | None = None
    file_path: str
    descriptor_kind: str
    descriptor_name: str
    location: Location

    @classmethod
    def from_problem(cls, problem: Problem) -> ProblemReport:
        file = problem.descriptor.file
        return cls(
            rule_name=problem.rule_name,
            rule_uri=problem.rule_uri,
            category=problem.category,
            message=problem.message,
            suggestion=problem.suggestion,
            file_path=file.name if file else "",
            descriptor_kind=problem.descriptor.kind.value,
            descriptor_name=problem.descriptor.full_name,
            location=problem.location,
        )


class FileReport(BaseModel):
    file_path: str
    problems: list[ProblemReport] = Field(default_factory=list)
    suppressions: list[SuppressionRecord] = Field(default_factory=list)
    duration_ms: float = 0.0

    @classmethod
    def from_result(cls, result: LintResult) -> FileReport:
        return cls(
            file_path=result.file_path,
            problems=[ProblemReport.from_problem(p) for p in result.problems],
            suppressions=result.suppressions,
            duration_ms=result.duration_ms,
        )


class LintRequest(BaseModel):
    """Request body for POST /lint."""

    files: list[FileDecl] = Field(default_factory=list)
    config: RuleConfig | None = Field(
        default=None, description="Overrides the server's default rule config"
    )


class LintResponse(BaseModel):
    """Top-level response for POST /lint."""

    message: Literal["lint_complete", "error"] = "lint_complete"
    run_id: str = ""
    results: list[FileReport] = Field(default_factory=list)
    total_problems: int = 0
    error: str | None = None


class RuleInfo(BaseModel):
    name: str
    kind: str
    uri: str | None = None
    description: str = ""


class LintAuditEntry(BaseModel):
    """Audit metadata for a lint run."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    run_id: str
    files_linted: int
    file_paths: list[str] = Field(default_factory=list)
    problems_found: int
    internal_errors: int = 0
    malformed_directives: int = 0
    suppressions_exercised: int = 0
    rules_executed: list[str] = Field(
        default_factory=list, description="Rules invoked at least once in any file"
    )
    duration_ms: float = 0.0

    @classmethod
    def from_results(
        cls, run_id: str, results: list[LintResult], duration_ms: float
    ) -> LintAuditEntry:
        problems = [p for r in results for p in r.problems]
        return cls(
            run_id=run_id,
            files_linted=len(results),
            file_paths=[r.file_path for r in results],
            problems_found=len(problems),
            internal_errors=sum(
                p.category is ProblemCategory.INTERNAL_ERROR for p in problems
            ),
            malformed_directives=sum(
                p.category is ProblemCategory.MALFORMED_DIRECTIVE for p in problems
            ),
            suppressions_exercised=sum(len(r.suppressions) for r in results),
            rules_executed=sorted({name for r in results for name in r.rules_executed}),
            duration_ms=duration_ms,
        )
