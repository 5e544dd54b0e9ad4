from __future__ import annotations

from .base import CheckStatus
from .runner import CheckRunReport


def render_text(report: CheckRunReport, *, quiet: bool = False, verbose: bool = False) -> str:
    out: list[str] = []
    if quiet:
        for result in report.failed:
            out.append(f"FAIL {result.id}")
            out.extend(f"  - {message}" for message in result.errors)
        if not out:
            out.append("PASS")
        return "\n".join(out)
    for result in report.results:
        status = result.status.value.upper()
        if verbose:
            out.append(f"{status} {result.id} [{result.duration_ms}ms/{result.budget_ms}ms] {result.title}")
        else:
            out.append(f"{status} {result.id} ({result.duration_ms}ms)")
        for message in result.errors:
            out.append(f"  - {message}")
        for message in result.warnings:
            out.append(f"  ~ {message}")
        if result.status in {CheckStatus.FAIL, CheckStatus.ERROR}:
            out.append(f"  hint: {result.fix_hint}")
    passed = sum(1 for r in report.results if r.status is CheckStatus.PASS)
    skipped = sum(1 for r in report.results if r.status is CheckStatus.SKIP)
    out.append(
        f"summary: passed={passed} failed={len(report.failed)} skipped={skipped} "
        f"warnings={report.warning_count} total={len(report.results)}"
    )
    return "\n".join(out)
