from __future__ import annotations

from pathlib import Path

from helpers import edit

from guidectl.checks.base import CheckStatus
from guidectl.checks.catalog import get_check
from guidectl.checks.runner import CheckResult, run_single_check
from guidectl.config import GuidectlConfig
from guidectl.corpus.loader import Corpus


def _run(root: Path, check_id: str) -> CheckResult:
    return run_single_check(get_check(check_id), Corpus(root, GuidectlConfig()))


def test_missing_contributing_guide(corpus_root: Path) -> None:
    (corpus_root / "CONTRIBUTING.md").unlink()
    assert _run(corpus_root, "contributing.present").errors == ["CONTRIBUTING.md: missing CONTRIBUTING.md"]
    assert _run(corpus_root, "contributing.template_present").status is CheckStatus.PASS


def test_intake_steps_are_required(corpus_root: Path) -> None:
    path = corpus_root / "CONTRIBUTING.md"
    edit(path, "3. Fork the repository and clone your fork.\n", "3. Clone the repository.\n")
    edit(path, "Submit a pull request", "Send your change")
    result = _run(corpus_root, "contributing.present")
    assert result.status is CheckStatus.FAIL
    assert result.errors == [
        "CONTRIBUTING.md: contribution guide does not describe the `fork` step",
        "CONTRIBUTING.md: contribution guide does not describe the `pull request` step",
    ]


def test_pr_abbreviation_counts_as_pull_request(corpus_root: Path) -> None:
    path = corpus_root / "CONTRIBUTING.md"
    edit(path, "Submit a pull request", "Open a PR")
    assert _run(corpus_root, "contributing.present").status is CheckStatus.PASS


def test_template_block_is_required(corpus_root: Path) -> None:
    edit(corpus_root / "CONTRIBUTING.md", "````markdown", "````text")
    result = _run(corpus_root, "contributing.template_present")
    assert result.errors == ["CONTRIBUTING.md: no fenced ```markdown guide template"]
    assert result.violations[0].code == "CONTRIBUTING_TEMPLATE"


def test_template_without_donts_warns(corpus_root: Path) -> None:
    edit(corpus_root / "CONTRIBUTING.md", "#### Don'ts\n\n- A habit to avoid.\n\n", "")
    result = _run(corpus_root, "contributing.template_present")
    assert result.status is CheckStatus.PASS
    assert result.warnings == ["CONTRIBUTING.md:20: guide template has no Don'ts section"]
