"""
apilint — POST /lint and GET /rules endpoints.

POST /lint accepts already-parsed file declarations, runs the rule engine
over them, and returns the problems per file. GET /rules lists the registry.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException

from apilint.api.dependencies import get_lint_worker, get_registry
from apilint.config import settings
from apilint.core.registry import RuleRegistry
from apilint.models.lint_models import FileReport, LintRequest, LintResponse, RuleInfo
from apilint.workers.lint_worker import LintWorker

logger = logging.getLogger("apilint.lint")
router = APIRouter()


@router.post("/lint", response_model=LintResponse)
async def lint_files(req: LintRequest, worker: LintWorker = Depends(get_lint_worker)):
    """Lint every submitted file."""
    if not req.files:
        return LintResponse(message="error", error="No files submitted")

    if len(req.files) > settings.max_files_per_request:
        raise HTTPException(
            status_code=400,
            detail=f"At most {settings.max_files_per_request} files per request",
        )

    run_id = str(uuid.uuid4())[:8]
    try:
        results = await worker.run_lint(req.files, config=req.config, run_id=run_id)
    except Exception:
        logger.exception(f"[{run_id}] Unexpected lint error")
        raise HTTPException(status_code=500, detail="Lint run failed")

    reports = [FileReport.from_result(r) for r in results]
    return LintResponse(
        run_id=run_id,
        results=reports,
        total_problems=sum(len(r.problems) for r in reports),
    )


@router.get("/rules", response_model=list[RuleInfo])
async def list_rules(registry: RuleRegistry = Depends(get_registry)):
    """Every registered rule, in name order."""
    return [
        RuleInfo(
            name=str(rule.name),
            kind=rule.kind.value,
            uri=rule.name.uri,
            description=rule.description,
        )
        for rule in registry
    ]
