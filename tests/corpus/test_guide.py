from __future__ import annotations

from pathlib import Path

import pytest

from guidectl.config import GuidectlConfig
from guidectl.corpus.guide import classify_label, example_label, load_guide, parse_guide
from guidectl.errors import ScriptError
from guidectl.exit_codes import ERR_DOCS


def test_fixture_guide_outline(corpus_root: Path) -> None:
    guide = load_guide(corpus_root / "python.md", GuidectlConfig())
    assert guide.title == "Python Best Practices: From Basics to Advanced"
    assert guide.language == "Python"
    assert [(e.anchor, e.depth) for e in guide.toc] == [("basic-practices", 0), ("advanced-practices", 0)]
    assert [p.title for p in guide.basic] == ["Virtual Environments", "Code Style"]
    assert [p.title for p in guide.advanced] == ["Concurrency"]

    venv = guide.basic[0]
    assert venv.rationale.startswith("Isolate each project's dependencies")
    assert venv.do_list == ("Create one virtual environment per project.", "Pin dependencies in a requirements file.")
    assert venv.dont_list == ("Install project packages into the system interpreter.", "Commit the environment directory.")
    assert venv.part_order == ("description", "do", "dont", "examples")
    assert [(e.language, e.label) for e in venv.examples] == [("bash", "bad"), ("bash", "good")]
    assert venv.examples[0].caption == "Installing into the system interpreter:"
    assert venv.published


def test_bold_labels_and_nested_bullets() -> None:
    text = """# Go Best Practices: From Basics to Advanced

## Basic Practices

### Errors

Wrap errors with context.

**Do:**
- Return errors.
  - nested detail stays out of the list
- Wrap with `%w`.

**Don't:**
* Panic in libraries.

```go
// GOOD: wrap
return fmt.Errorf("load: %w", err)
```
"""
    guide = parse_guide(Path("go.md"), text, GuidectlConfig())
    practice = guide.basic[0]
    assert practice.do_list == ("Return errors.", "Wrap with `%w`.")
    assert practice.dont_list == ("Panic in libraries.",)
    assert practice.part_order == ("description", "do", "dont", "examples")
    assert practice.examples[0].label == "good"
    assert guide.advanced == ()


def test_donts_before_dos_are_recorded_out_of_order() -> None:
    text = """# Go Best Practices: From Basics to Advanced

## Basic Practices

### Naming

#### Don'ts

- Stutter.

#### Do's

- Keep names short.
"""
    practice = parse_guide(Path("go.md"), text, GuidectlConfig()).basic[0]
    assert practice.rationale == ""
    assert practice.part_order == ("dont", "do")


def test_title_mismatch_leaves_language_unset() -> None:
    guide = parse_guide(Path("go.md"), "# Go Tips\n\n## Basic Practices\n", GuidectlConfig())
    assert guide.title == "Go Tips"
    assert guide.language is None
    untitled = parse_guide(Path("go.md"), "## Basic Practices\n", GuidectlConfig())
    assert untitled.title is None
    assert untitled.title_line == 0


def test_nested_toc_depth_follows_indentation() -> None:
    text = "# T\n\n## Table of Contents\n\n- [A](#a)\n    - [B](#b)\n- [C](#c)\n\n## A\n"
    guide = parse_guide(Path("t.md"), text, GuidectlConfig())
    assert [(e.text, e.depth, e.line) for e in guide.toc] == [("A", 0, 5), ("B", 1, 6), ("C", 0, 7)]


@pytest.mark.parametrize(
    ("label", "kind"),
    [("Do's", "do"), ("Dos", "do"), ("Don'ts", "dont"), ("Do not", "dont"), ("Code Examples", "examples"), ("Notes", None)],
)
def test_classify_label(label: str, kind: str | None) -> None:
    assert classify_label(label) == kind


def test_example_label_prefers_caption_then_first_line() -> None:
    assert example_label("BAD: global state", "x = 1") == "bad"
    assert example_label("", "\n# GOOD: explicit\nx = 1") == "good"
    assert example_label("Good approach", "x = 1") == "good"
    assert example_label("A badge renderer", "x = 1") is None


def test_load_guide_missing(tmp_path: Path) -> None:
    with pytest.raises(ScriptError) as excinfo:
        load_guide(tmp_path / "nope.md", GuidectlConfig())
    assert excinfo.value.code == ERR_DOCS
    assert excinfo.value.kind == "guide_missing"
