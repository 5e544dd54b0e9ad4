from __future__ import annotations

from pathlib import Path

import pytest

from guidectl.config import GuidectlConfig
from guidectl.corpus.loader import Corpus
from guidectl.errors import ScriptError


def test_guide_paths_skip_readme_contributing_and_excludes(corpus: Corpus) -> None:
    (corpus.root / "CHANGELOG.md").write_text("# Changes\n", encoding="utf-8")
    (corpus.root / "go.md").write_text("# Go\n", encoding="utf-8")
    assert [corpus.rel(p) for p in corpus.guide_paths()] == ["go.md", "python.md"]


def test_guide_globs_are_configurable(corpus_root: Path) -> None:
    (corpus_root / "guides").mkdir()
    (corpus_root / "python.md").rename(corpus_root / "guides" / "python.md")
    (corpus_root / "guides" / "draft.md").write_text("# Draft\n", encoding="utf-8")
    corpus = Corpus(corpus_root, GuidectlConfig(guides=("guides/*.md",), exclude=("guides/draft.md",)))
    assert [corpus.rel(p) for p in corpus.guide_paths()] == ["guides/python.md"]


def test_guides_are_parsed_once(corpus: Corpus) -> None:
    first = corpus.guides()[0]
    assert corpus.guide(Path("python.md")) is first
    assert corpus.registry() is corpus.registry()


def test_resolve_guide_by_path_or_registry_name(corpus: Corpus) -> None:
    expected = (corpus.root / "python.md").resolve()
    assert corpus.resolve_guide("python.md") == expected
    assert corpus.resolve_guide("PYTHON") == expected
    with pytest.raises(ScriptError, match="guide not found: Rust"):
        corpus.resolve_guide("Rust")


def test_missing_readme_means_no_registry(tmp_path: Path) -> None:
    assert Corpus(tmp_path).registry() is None
    assert Corpus(tmp_path).guide_paths() == []
