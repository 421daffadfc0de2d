"""
Lint Audit Trail — One validated JSON line per lint run.

Entries are LintAuditEntry records: which files were linted, how many
problems, internal rule errors and malformed directives were reported, which
suppressions were exercised and which rules actually ran. Lines that do not
validate as an entry are skipped on read.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from pathlib import Path

from pydantic import ValidationError

from apilint.config import settings
from apilint.models.lint_models import LintAuditEntry, LintResult

logger = logging.getLogger("apilint.audit")


class AuditLogger:
    """Appends lint run entries to a JSON-lines file and reads them back."""

    def __init__(self, log_path: str | None = None) -> None:
        self.log_path = Path(log_path or settings.audit_log_path)
        self._lock = threading.Lock()

    def record(
        self, run_id: str, results: list[LintResult], duration_ms: float
    ) -> LintAuditEntry:
        """Summarise a finished run, append it, and return the entry."""
        entry = LintAuditEntry.from_results(run_id, results, duration_ms)
        self.log(entry)
        return entry

    def log(self, entry: LintAuditEntry) -> None:
        # a failed audit write never fails the lint request
        try:
            with self._lock, open(self.log_path, "a", encoding="utf-8") as f:
                f.write(entry.model_dump_json() + "\n")
        except OSError as e:
            logger.error(f"[{entry.run_id}] Failed to write audit log {self.log_path}: {e}")

    def read_recent(self, count: int = 50) -> list[LintAuditEntry]:
        """The last ``count`` valid entries, oldest first."""
        if not self.log_path.exists():
            return []

        recent: deque[LintAuditEntry] = deque(maxlen=count)
        try:
            with open(self.log_path, encoding="utf-8") as f:
                for number, line in enumerate(f, start=1):
                    if not line.strip():
                        continue
                    try:
                        recent.append(LintAuditEntry.model_validate_json(line))
                    except ValidationError:
                        logger.debug(f"Skipping invalid audit line {number} in {self.log_path}")
        except OSError as e:
            logger.error(f"Failed to read audit log {self.log_path}: {e}")
            return []

        return list(recent)

    def runs_with_internal_errors(self, count: int = 50) -> list[LintAuditEntry]:
        """Recent runs in which at least one rule raised."""
        return [e for e in self.read_recent(count) if e.internal_errors]
