from __future__ import annotations

from pathlib import Path

from ...corpus.loader import Corpus
from ...corpus.markdown import parse_fenced_blocks, parse_headings, parse_links
from ..base import Violation, finding


def _documents(corpus: Corpus) -> list[Path]:
    docs = [p for p in (corpus.readme_path, corpus.contributing_path) if p.is_file()]
    return [p.resolve() for p in docs] + corpus.guide_paths()


def _anchors(path: Path, cache: dict[Path, set[str]]) -> set[str]:
    if path not in cache:
        cache[path] = {h.anchor for h in parse_headings(path.read_text(encoding="utf-8"))}
    return cache[path]


def check_guides_fence_language(corpus: Corpus) -> list[Violation]:
    errors: list[Violation] = []
    for path in _documents(corpus):
        rel = corpus.rel(path)
        for block in parse_fenced_blocks(path.read_text(encoding="utf-8")):
            if not block.language:
                errors.append(finding("fenced code block has no language tag", path=rel, line=block.line))
            if not block.closed:
                errors.append(finding("fenced code block is never closed", path=rel, line=block.line))
    return errors


def check_guides_links_exist(corpus: Corpus) -> list[Violation]:
    errors: list[Violation] = []
    anchors: dict[Path, set[str]] = {}
    for md in _documents(corpus):
        rel = corpus.rel(md)
        for link in parse_links(md.read_text(encoding="utf-8")):
            if link.is_external:
                continue
            target_path, _, fragment = link.target.partition("#")
            resolved = (md.parent / target_path).resolve() if target_path else md
            if not resolved.exists():
                errors.append(finding(f"broken link target `{link.target}`", path=rel, line=link.line))
                continue
            if fragment and resolved.suffix == ".md" and resolved.is_file() and fragment not in _anchors(resolved, anchors):
                errors.append(finding(f"link `{link.target}` points to a missing heading anchor", path=rel, line=link.line))
    return errors
