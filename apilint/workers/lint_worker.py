"""
Lint Worker — Async orchestrator linting many files at once.

Pipeline:
1. Freeze the registry
2. Fan out one engine run per file to worker threads (bounded)
3. Fan in and order results by file path
4. Optionally append an audit entry
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid

from apilint.audit.logger import AuditLogger
from apilint.config import settings
from apilint.core.registry import RuleRegistry
from apilint.core.rule_engine import RuleEngine
from apilint.models.descriptor_models import FileDecl
from apilint.models.lint_models import LintAuditEntry, LintResult
from apilint.models.problem_models import Problem
from apilint.models.rule_models import RuleConfig

logger = logging.getLogger("apilint.worker")


class LintWorker:
    """Runs the rule engine over a batch of files concurrently."""

    def __init__(
        self,
        registry: RuleRegistry,
        config: RuleConfig | None = None,
        audit_logger: AuditLogger | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.registry = registry
        self.config = config
        self.audit_logger = audit_logger
        self.max_workers = max_workers or settings.lint_max_workers

    async def run_lint(
        self,
        files: list[FileDecl],
        config: RuleConfig | None = None,
        run_id: str | None = None,
    ) -> list[LintResult]:
        """
        Lint every file and return one result per file, ordered by path.

        Args:
            files: Parsed file declarations.
            config: Rule enablement for this run; defaults to the worker's.
            run_id: Identifier used in logs and the audit trail.
        """
        run_id = run_id or str(uuid.uuid4())[:8]
        start_time = time.monotonic()
        self.registry.freeze()
        engine = RuleEngine(self.registry, config or self.config)
        semaphore = asyncio.Semaphore(self.max_workers)

        logger.info(f"[{run_id}] Linting {len(files)} files with {len(self.registry)} rules")

        async def lint_one(file: FileDecl) -> LintResult:
            async with semaphore:
                return await asyncio.to_thread(engine.run, file)

        results = await asyncio.gather(*(lint_one(f) for f in files))
        results = sorted(results, key=lambda r: r.file_path)

        duration_ms = round((time.monotonic() - start_time) * 1000, 2)
        if self.audit_logger is not None:
            summary = self.audit_logger.record(run_id, results, duration_ms)
        else:
            summary = LintAuditEntry.from_results(run_id, results, duration_ms)
        logger.info(
            f"[{run_id}] {summary.problems_found} problems, "
            f"{summary.internal_errors} internal errors, "
            f"{summary.suppressions_exercised} suppressions ({duration_ms:.1f}ms)"
        )

        return results


def merge_problems(results: list[LintResult]) -> list[Problem]:
    """Concatenate per-file problems in file-path order."""
    return [p for r in sorted(results, key=lambda r: r.file_path) for p in r.problems]
