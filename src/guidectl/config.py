from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .contracts import validate
from .core.env import getenv
from .core.repo_root import CONFIG_FILENAME
from .errors import ScriptError
from .exit_codes import ERR_CONFIG

CONFIG_SCHEMA = "guidectl.config.v1"
DEFAULT_TITLE_PATTERN = r"^(?P<language>.+?) Best Practices: From Basics to Advanced$"
DEFAULT_TITLE_TEMPLATE = "{language} Best Practices: From Basics to Advanced"
DEFAULT_EXCLUDE = ("CHANGELOG.md", "CODE_OF_CONDUCT.md", "LICENSE.md", "SECURITY.md")


@dataclass(frozen=True)
class Tiers:
    basic: str = "Basic Practices"
    advanced: str = "Advanced Practices"


@dataclass(frozen=True)
class GuidectlConfig:
    readme: str = "README.md"
    contributing: str = "CONTRIBUTING.md"
    guides: tuple[str, ...] = ("*.md",)
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE
    title_pattern: str = DEFAULT_TITLE_PATTERN
    title_template: str = DEFAULT_TITLE_TEMPLATE
    toc_heading: str = "Table of Contents"
    toc_depth: int = 2
    tiers: Tiers = field(default_factory=Tiers)
    budget_ms: int = 2_000
    disabled_checks: tuple[str, ...] = ()
    source: str | None = None

    @property
    def title_re(self) -> re.Pattern[str]:
        return re.compile(self.title_pattern)

    @property
    def excluded_files(self) -> tuple[str, ...]:
        return (self.readme, self.contributing, *self.exclude)

    def to_payload(self) -> dict[str, object]:
        return {
            "schema_version": 1,
            "readme": self.readme,
            "contributing": self.contributing,
            "guides": list(self.guides),
            "exclude": list(self.exclude),
            "title_pattern": self.title_pattern,
            "title_template": self.title_template,
            "toc_heading": self.toc_heading,
            "toc_depth": self.toc_depth,
            "tiers": {"basic": self.tiers.basic, "advanced": self.tiers.advanced},
            "budget_ms": self.budget_ms,
            "disabled_checks": list(self.disabled_checks),
        }


def load_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _check_known_ids(check_ids: tuple[str, ...], source: str | None) -> None:
    from .checks.catalog import ALL_CHECKS

    known = {check.check_id for check in ALL_CHECKS}
    unknown = sorted(set(check_ids) - known)
    if unknown:
        raise ScriptError(f"{source}: unknown check ids in disabled_checks: {unknown}", ERR_CONFIG, kind="config_invalid")


def _from_mapping(raw: dict[str, Any], source: str | None) -> GuidectlConfig:
    base = GuidectlConfig()
    tiers_raw = raw.get("tiers") or {}
    title_pattern = str(raw.get("title_pattern", base.title_pattern))
    try:
        compiled = re.compile(title_pattern)
    except re.error as exc:
        raise ScriptError(f"{source}: invalid title_pattern: {exc}", ERR_CONFIG, kind="config_invalid") from exc
    if "language" not in compiled.groupindex:
        raise ScriptError(f"{source}: title_pattern must define a `language` named group", ERR_CONFIG, kind="config_invalid")
    disabled = tuple(raw.get("disabled_checks", base.disabled_checks))
    _check_known_ids(disabled, source)
    return GuidectlConfig(
        readme=str(raw.get("readme", base.readme)),
        contributing=str(raw.get("contributing", base.contributing)),
        guides=tuple(raw.get("guides", base.guides)),
        exclude=tuple(raw.get("exclude", base.exclude)),
        title_pattern=title_pattern,
        title_template=str(raw.get("title_template", base.title_template)),
        toc_heading=str(raw.get("toc_heading", base.toc_heading)),
        toc_depth=int(raw.get("toc_depth", base.toc_depth)),
        tiers=Tiers(
            basic=str(tiers_raw.get("basic", base.tiers.basic)),
            advanced=str(tiers_raw.get("advanced", base.tiers.advanced)),
        ),
        budget_ms=int(raw.get("budget_ms", base.budget_ms)),
        disabled_checks=disabled,
        source=source,
    )


def resolve_config_path(corpus_root: Path, explicit: str | None = None) -> Path | None:
    candidate = explicit or getenv("GUIDECTL_CONFIG")
    if candidate:
        path = Path(candidate)
        path = path if path.is_absolute() else (corpus_root / path)
        if not path.is_file():
            raise ScriptError(f"config file not found: {path}", ERR_CONFIG, kind="config_missing")
        return path
    default = corpus_root / CONFIG_FILENAME
    return default if default.is_file() else None


def load_config(corpus_root: Path, explicit: str | None = None) -> GuidectlConfig:
    path = resolve_config_path(corpus_root, explicit)
    if path is None:
        return GuidectlConfig()
    try:
        raw = load_yaml(path)
    except yaml.YAMLError as exc:
        raise ScriptError(f"{path}: invalid YAML: {exc}", ERR_CONFIG, kind="config_invalid") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ScriptError(f"{path}: root must be mapping", ERR_CONFIG, kind="config_invalid")
    try:
        validate(CONFIG_SCHEMA, raw)
    except ScriptError as exc:
        raise ScriptError(f"{path}: {exc.message}", ERR_CONFIG, kind="config_invalid") from exc
    return _from_mapping(raw, path.as_posix())
