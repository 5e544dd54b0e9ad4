from __future__ import annotations

from pathlib import Path

import pytest

from guidectl.config import GuidectlConfig, Tiers, load_config, resolve_config_path
from guidectl.errors import ScriptError
from guidectl.exit_codes import ERR_CONFIG


def test_defaults_without_config_file(corpus_root: Path) -> None:
    config = load_config(corpus_root)
    assert config == GuidectlConfig()
    assert config.source is None
    assert "README.md" in config.excluded_files
    assert "CHANGELOG.md" in config.excluded_files
    assert config.title_re.match("Go Best Practices: From Basics to Advanced").group("language") == "Go"


def test_config_file_overrides_defaults(corpus_root: Path) -> None:
    (corpus_root / "guidectl.yaml").write_text(
        "guides:\n  - guides/*.md\n"
        "title_pattern: '^(?P<language>.+) Style Guide$'\n"
        "title_template: '{language} Style Guide'\n"
        "toc_depth: 3\n"
        "tiers:\n  basic: Essentials\n  advanced: Expert Topics\n"
        "disabled_checks:\n  - registry.topics_present\n",
        encoding="utf-8",
    )
    config = load_config(corpus_root)
    assert config.guides == ("guides/*.md",)
    assert config.toc_depth == 3
    assert config.tiers == Tiers(basic="Essentials", advanced="Expert Topics")
    assert config.disabled_checks == ("registry.topics_present",)
    assert config.title_template.format(language="Go") == "Go Style Guide"
    assert config.source is not None and config.source.endswith("guidectl.yaml")
    assert config.to_payload()["tiers"] == {"basic": "Essentials", "advanced": "Expert Topics"}


def test_empty_config_file_means_defaults(corpus_root: Path) -> None:
    (corpus_root / "guidectl.yaml").write_text("", encoding="utf-8")
    assert load_config(corpus_root).toc_depth == 2


@pytest.mark.parametrize(
    ("body", "fragment"),
    [
        ("guides: [unclosed\n", "invalid YAML"),
        ("- a\n- b\n", "root must be mapping"),
        ("colour: blue\n", "schema validation failed"),
        ("toc_depth: 9\n", "toc_depth"),
        ("title_template: 'Guide'\n", "title_template"),
        ("title_pattern: '^(.+) Guide$'\n", "`language` named group"),
        ("title_pattern: '(?P<language>'\n", "invalid title_pattern"),
        ("disabled_checks: [registry.topic_present]\n", "unknown check ids in disabled_checks: ['registry.topic_present']"),
    ],
)
def test_invalid_config_is_a_config_error(corpus_root: Path, body: str, fragment: str) -> None:
    (corpus_root / "guidectl.yaml").write_text(body, encoding="utf-8")
    with pytest.raises(ScriptError) as excinfo:
        load_config(corpus_root)
    assert excinfo.value.code == ERR_CONFIG
    assert excinfo.value.kind == "config_invalid"
    assert fragment in excinfo.value.message


def test_explicit_and_env_config_paths(corpus_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (corpus_root / "alt.yaml").write_text("toc_depth: 4\n", encoding="utf-8")
    assert resolve_config_path(corpus_root, "alt.yaml") == corpus_root / "alt.yaml"
    monkeypatch.setenv("GUIDECTL_CONFIG", "alt.yaml")
    assert load_config(corpus_root).toc_depth == 4
    with pytest.raises(ScriptError) as excinfo:
        resolve_config_path(corpus_root, "missing.yaml")
    assert excinfo.value.code == ERR_CONFIG
    assert excinfo.value.kind == "config_missing"
