from __future__ import annotations

from pathlib import Path

from ...corpus.loader import Corpus
from ...corpus.models import GuideStatus
from ..base import Severity, Violation, finding


def _linked_path(corpus: Corpus, link: str) -> Path:
    target = link.split("#", 1)[0]
    return (corpus.readme_path.parent / target).resolve()


def _is_external(link: str) -> bool:
    return "://" in link or link.startswith("mailto:")


def check_registry_table_present(corpus: Corpus) -> list[Violation]:
    readme = corpus.config.readme
    if not corpus.readme_path.is_file():
        return [finding(f"missing registry file {readme}", path=readme)]
    registry = corpus.registry()
    if registry is None:
        return [finding("no registry table with language and status columns", path=readme)]
    errors: list[Violation] = []
    for key in ("link", "topics"):
        if key not in registry.columns:
            errors.append(finding(f"registry table has no {key} column", path=readme, line=registry.start + 1))
    if not registry.rows:
        errors.append(finding("registry table lists no guides", path=readme, line=registry.start + 1))
    return errors


def check_registry_status_link_invariant(corpus: Corpus) -> list[Violation]:
    registry = corpus.registry()
    if registry is None:
        return []
    return [finding(problem.message, path=corpus.config.readme, line=problem.line) for problem in registry.problems]


def check_registry_linked_guides_exist(corpus: Corpus) -> list[Violation]:
    registry = corpus.registry()
    if registry is None:
        return []
    readme = corpus.config.readme
    errors: list[Violation] = []
    for row in registry.rows:
        entry = row.entry
        if entry is None or entry.status is not GuideStatus.AVAILABLE or entry.link is None:
            continue
        if _is_external(entry.link):
            errors.append(finding(f"{entry.name}: guide link `{entry.link}` must point to a file in the corpus", path=readme, line=row.line))
            continue
        if not _linked_path(corpus, entry.link).is_file():
            errors.append(finding(f"{entry.name}: linked guide `{entry.link}` does not exist", path=readme, line=row.line))
    return errors


def check_registry_linked_guide_titles(corpus: Corpus) -> list[Violation]:
    registry = corpus.registry()
    if registry is None:
        return []
    errors: list[Violation] = []
    for entry in registry.entries:
        if entry.status is not GuideStatus.AVAILABLE or entry.link is None or _is_external(entry.link):
            continue
        path = _linked_path(corpus, entry.link)
        if not path.is_file():
            continue
        guide = corpus.guide(path)
        rel = corpus.rel(path)
        if guide.title is None:
            errors.append(finding(f"{entry.name}: linked guide has no level-1 title as its first heading", path=rel))
        elif guide.language is None:
            errors.append(
                finding(
                    f"{entry.name}: title `{guide.title}` does not match `{corpus.config.title_pattern}`",
                    path=rel,
                    line=guide.title_line,
                )
            )
        elif guide.language.casefold() != entry.name.casefold():
            errors.append(
                finding(
                    f"{entry.name}: guide title names `{guide.language}`",
                    path=rel,
                    line=guide.title_line,
                    severity=Severity.WARN,
                )
            )
    return errors


def check_registry_topics_present(corpus: Corpus) -> list[Violation]:
    registry = corpus.registry()
    if registry is None:
        return []
    return [
        finding(f"{row.entry.name}: no topics listed", path=corpus.config.readme, line=row.line, severity=Severity.WARN)
        for row in registry.rows
        if row.entry is not None and not row.entry.topics
    ]


def check_registry_unlisted_guides(corpus: Corpus) -> list[Violation]:
    registry = corpus.registry()
    if registry is None:
        return []
    linked = {
        _linked_path(corpus, entry.link)
        for entry in registry.entries
        if entry.link is not None and not _is_external(entry.link)
    }
    return [
        finding(f"guide file is not linked from the {corpus.config.readme} registry", path=corpus.rel(path))
        for path in corpus.guide_paths()
        if path not in linked
    ]
