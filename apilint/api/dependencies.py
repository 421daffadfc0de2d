"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

from functools import lru_cache

from apilint.audit.logger import AuditLogger
from apilint.config import settings
from apilint.core.registry import RuleRegistry
from apilint.core.rule_catalog import build_registry
from apilint.workers.lint_worker import LintWorker


@lru_cache
def get_registry() -> RuleRegistry:
    """Built-in rule registry, frozen on first use."""
    return build_registry()


@lru_cache
def get_audit_logger() -> AuditLogger:
    """Shared audit logger singleton."""
    return AuditLogger()


@lru_cache
def get_lint_worker() -> LintWorker:
    """Shared lint worker singleton."""
    return LintWorker(
        registry=get_registry(),
        config=settings.rule_config(),
        audit_logger=get_audit_logger() if settings.audit_enabled else None,
    )
