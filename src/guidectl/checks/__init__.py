"""Documentation-linting checks over a guide corpus."""

from __future__ import annotations

from .base import CheckDef, CheckStatus, Severity, Violation, finding
from .catalog import ALL_CHECKS, get_check, list_checks, select_checks
from .runner import CheckResult, CheckRunReport, run_checks

__all__ = [
    "ALL_CHECKS",
    "CheckDef",
    "CheckResult",
    "CheckRunReport",
    "CheckStatus",
    "Severity",
    "Violation",
    "finding",
    "get_check",
    "list_checks",
    "run_checks",
    "select_checks",
]
