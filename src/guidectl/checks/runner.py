from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from ..core.logging import log_event
from .base import CheckDef, CheckStatus, Severity, Violation
from .catalog import select_checks

if TYPE_CHECKING:
    from ..core.context import RunContext
    from ..corpus.loader import Corpus

REPORT_SCHEMA = "guidectl.check-report.v1"


@dataclass(frozen=True)
class BudgetProfile:
    default_budget_ms: int = 2_000
    timeout_cap_ms: int = 30_000

    def budget_for(self, check: CheckDef) -> int:
        budget = int(check.budget_ms or 0)
        return budget if budget > 0 else self.default_budget_ms


@dataclass(frozen=True)
class CheckResult:
    id: str
    title: str
    domain: str
    status: CheckStatus
    violations: tuple[Violation, ...]
    duration_ms: int
    budget_ms: int
    fix_hint: str

    @property
    def errors(self) -> list[str]:
        return [v.render() for v in self.violations if v.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[str]:
        return [v.render() for v in self.violations if v.severity is Severity.WARN]

    @property
    def budget_status(self) -> str:
        return "pass" if self.duration_ms <= self.budget_ms else "warn"

    def to_payload(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "domain": self.domain,
            "status": self.status.value,
            "duration_ms": self.duration_ms,
            "budget_ms": self.budget_ms,
            "budget_status": self.budget_status,
            "fix_hint": self.fix_hint,
            "errors": self.errors,
            "warnings": self.warnings,
            "violations": [v.to_payload() for v in self.violations],
        }


@dataclass(frozen=True)
class CheckRunReport:
    run_id: str
    domain: str
    results: tuple[CheckResult, ...]

    @property
    def failed(self) -> list[CheckResult]:
        return [r for r in self.results if r.status in {CheckStatus.FAIL, CheckStatus.ERROR}]

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def warning_count(self) -> int:
        return sum(len(r.warnings) for r in self.results)

    def to_payload(self) -> dict[str, object]:
        return {
            "schema_name": REPORT_SCHEMA,
            "schema_version": 1,
            "tool": "guidectl",
            "kind": "checks-runner",
            "run_id": self.run_id,
            "domain": self.domain,
            "status": "pass" if self.ok else "fail",
            "failed_count": len(self.failed),
            "warning_count": self.warning_count,
            "total_count": len(self.results),
            "checks": [r.to_payload() for r in self.results],
        }


def _run_with_timeout(check: CheckDef, corpus: Corpus, timeout_ms: int) -> list[Violation]:
    pool = ThreadPoolExecutor(max_workers=1)
    try:
        future = pool.submit(check.fn, corpus)
        return list(future.result(timeout=max(0.001, timeout_ms / 1000.0)))
    finally:
        pool.shutdown(wait=False, cancel_futures=True)


def _stamp(check: CheckDef, violations: list[Violation]) -> tuple[Violation, ...]:
    stamped = (
        replace(v, code=v.code or check.result_code, hint=v.hint or check.fix_hint)
        for v in violations
    )
    return tuple(sorted(stamped, key=lambda item: item.canonical_key))


def _make_result(check: CheckDef, status: CheckStatus, duration_ms: int, budget_ms: int, violations: tuple[Violation, ...] = ()) -> CheckResult:
    return CheckResult(
        id=check.check_id,
        title=check.title,
        domain=check.domain,
        status=status,
        violations=violations,
        duration_ms=duration_ms,
        budget_ms=budget_ms,
        fix_hint=check.fix_hint,
    )


def run_single_check(check: CheckDef, corpus: Corpus, budget_profile: BudgetProfile | None = None) -> CheckResult:
    profile = budget_profile or BudgetProfile(default_budget_ms=corpus.config.budget_ms)
    budget_ms = profile.budget_for(check)
    if check.check_id in corpus.config.disabled_checks:
        return _make_result(check, CheckStatus.SKIP, 0, budget_ms)
    started = time.perf_counter()
    try:
        found = _run_with_timeout(check, corpus, profile.timeout_cap_ms)
    except FutureTimeoutError:
        duration_ms = int((time.perf_counter() - started) * 1000)
        message = Violation(code=check.result_code, message=f"timeout after {profile.timeout_cap_ms}ms", hint=check.fix_hint)
        return _make_result(check, CheckStatus.ERROR, duration_ms, budget_ms, (message,))
    except Exception as exc:
        duration_ms = int((time.perf_counter() - started) * 1000)
        message = Violation(code=check.result_code, message=f"{exc.__class__.__name__}: {exc}", hint=check.fix_hint)
        return _make_result(check, CheckStatus.ERROR, duration_ms, budget_ms, (message,))
    duration_ms = int((time.perf_counter() - started) * 1000)
    violations = _stamp(check, found)
    has_error = any(v.severity is Severity.ERROR for v in violations)
    return _make_result(check, CheckStatus.FAIL if has_error else CheckStatus.PASS, duration_ms, budget_ms, violations)


def run_checks(
    corpus: Corpus,
    domain: str = "all",
    select: tuple[str, ...] = (),
    fail_fast: bool = False,
    budget_profile: BudgetProfile | None = None,
    ctx: RunContext | None = None,
) -> CheckRunReport:
    results: list[CheckResult] = []
    for check in select_checks(domain, select):
        result = run_single_check(check, corpus, budget_profile)
        results.append(result)
        if ctx is not None:
            log_event(
                ctx,
                "info",
                "checks",
                "finish",
                check=result.id,
                status=result.status.value,
                duration_ms=result.duration_ms,
                violations=len(result.violations),
            )
            if result.budget_status == "warn":
                log_event(ctx, "warn", "checks", "budget_exceeded", check=result.id, duration_ms=result.duration_ms, budget_ms=result.budget_ms)
        if fail_fast and result.status in {CheckStatus.FAIL, CheckStatus.ERROR}:
            break
    return CheckRunReport(run_id=ctx.run_id if ctx is not None else "", domain=domain, results=tuple(results))
