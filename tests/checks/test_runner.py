from __future__ import annotations

import time
from dataclasses import replace
from pathlib import Path

import pytest

from guidectl.checks.base import CheckDef, CheckFunc, CheckStatus, Violation, finding
from guidectl.checks.catalog import ALL_CHECKS, domains, list_checks, select_checks
from guidectl.checks.report import render_text
from guidectl.checks.runner import BudgetProfile, REPORT_SCHEMA, run_checks, run_single_check
from guidectl.config import GuidectlConfig
from guidectl.contracts import validate
from guidectl.corpus.loader import Corpus
from guidectl.errors import ScriptError
from guidectl.exit_codes import ERR_USAGE


def test_catalog_ids_are_unique_and_grouped_by_domain() -> None:
    ids = [check.check_id for check in ALL_CHECKS]
    assert len(ids) == len(set(ids)) == 16
    assert domains() == ["all", "registry", "guides", "contributing"]
    assert len(list_checks("registry")) == 6
    assert len(list_checks("guides")) == 8
    assert len(list_checks("contributing")) == 2
    assert len({check.result_code for check in ALL_CHECKS}) == 16


def test_unknown_domain_and_check_are_usage_errors() -> None:
    with pytest.raises(ScriptError) as domain:
        list_checks("style")
    assert domain.value.code == ERR_USAGE
    with pytest.raises(ScriptError) as check:
        select_checks("all", ("guides.nope",))
    assert check.value.kind == "unknown_check"


def test_select_narrows_within_domain() -> None:
    selected = select_checks("guides", ("guides.toc_complete", "registry.table_present"))
    assert [check.check_id for check in selected] == ["guides.toc_complete"]


@pytest.mark.parametrize(
    ("check_id", "domain", "result_code", "message"),
    [
        ("Guides.Title", "guides", "GUIDE_TITLE", "invalid check id"),
        ("guides.title", "registry", "GUIDE_TITLE", "domain segment must match"),
        ("style.title", "style", "GUIDE_TITLE", "invalid domain"),
        ("guides.title", "guides", "guide-title", "invalid result_code"),
    ],
)
def test_check_def_validation(check_id: str, domain: str, result_code: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        CheckDef(check_id, domain, "probe", 100, lambda corpus: [], result_code=result_code)


def test_fixture_corpus_passes_every_check(corpus: Corpus) -> None:
    report = run_checks(corpus)
    assert report.ok, [r.errors for r in report.failed]
    assert report.warning_count == 0
    assert len(report.results) == 16
    payload = report.to_payload()
    validate(REPORT_SCHEMA, payload)
    assert payload["status"] == "pass"
    assert payload["kind"] == "checks-runner"


def test_failure_report_validates_and_stamps_codes(corpus_root: Path) -> None:
    (corpus_root / "python.md").unlink()
    report = run_checks(Corpus(corpus_root, GuidectlConfig()), domain="registry")
    payload = report.to_payload()
    validate(REPORT_SCHEMA, payload)
    assert payload["status"] == "fail"
    assert [r.id for r in report.failed] == ["registry.linked_guides_exist"]
    violation = report.failed[0].violations[0]
    assert violation.code == "REGISTRY_LINK_BROKEN"
    assert violation.hint == "Fix the link or add the guide file in the same change."


def test_disabled_checks_are_skipped(corpus_root: Path) -> None:
    (corpus_root / "python.md").unlink()
    config = GuidectlConfig(disabled_checks=("registry.linked_guides_exist",))
    report = run_checks(Corpus(corpus_root, config), domain="registry")
    statuses = {r.id: r.status for r in report.results}
    assert statuses["registry.linked_guides_exist"] is CheckStatus.SKIP
    assert report.ok


def test_fail_fast_stops_after_first_failure(corpus_root: Path) -> None:
    (corpus_root / "README.md").write_text("# Guides\n", encoding="utf-8")
    report = run_checks(Corpus(corpus_root, GuidectlConfig()), fail_fast=True)
    assert [r.id for r in report.results] == ["registry.table_present"]
    assert report.results[0].status is CheckStatus.FAIL


def _probe(fn: CheckFunc) -> CheckDef:
    return CheckDef("guides.probe", "guides", "probe check", 10, fn, result_code="GUIDE_PROBE")


def test_crashing_check_is_reported_as_error(corpus: Corpus) -> None:
    def boom(_corpus: Corpus) -> list[Violation]:
        raise RuntimeError("boom")

    result = run_single_check(_probe(boom), corpus)
    assert result.status is CheckStatus.ERROR
    assert result.errors == ["RuntimeError: boom"]


def test_slow_check_times_out(corpus: Corpus) -> None:
    def slow(_corpus: Corpus) -> list[Violation]:
        time.sleep(0.5)
        return []

    result = run_single_check(_probe(slow), corpus, BudgetProfile(timeout_cap_ms=50))
    assert result.status is CheckStatus.ERROR
    assert result.errors == ["timeout after 50ms"]
    assert result.budget_ms == 10
    assert result.budget_status == "warn"


def test_budget_falls_back_to_profile_default(corpus: Corpus) -> None:
    check = replace(_probe(lambda _corpus: [finding("note", path="a.md", line=3)]), budget_ms=0)
    result = run_single_check(check, corpus, BudgetProfile(default_budget_ms=1234))
    assert result.budget_ms == 1234
    assert result.status is CheckStatus.FAIL
    assert result.violations[0].render() == "a.md:3: note"


def test_render_text(corpus_root: Path) -> None:
    (corpus_root / "python.md").unlink()
    report = run_checks(Corpus(corpus_root, GuidectlConfig()), domain="registry")
    text = render_text(report)
    assert "FAIL registry.linked_guides_exist" in text
    assert "  - README.md:9: Python: linked guide `python.md` does not exist" in text
    assert "  hint: Fix the link or add the guide file in the same change." in text
    assert text.splitlines()[-1] == "summary: passed=5 failed=1 skipped=0 warnings=0 total=6"
    quiet = render_text(report, quiet=True)
    assert quiet.splitlines()[0] == "FAIL registry.linked_guides_exist"
