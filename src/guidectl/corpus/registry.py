"""Guide registry: the README table mapping languages to guide status."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path

from ..errors import ScriptError
from ..exit_codes import ERR_DOCS, ERR_VALIDATION
from .markdown import line_ending
from .models import GuideEntry, GuideStatus

_SEPARATOR_RE = re.compile(r"^\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)*\|?\s*$")
_CELL_LINK_RE = re.compile(r"\[(?P<text>[^\]]*)\]\((?P<target>[^)\s]+)\)")
_NO_LINK = {"", "-", "—", "–", "n/a", "na", "tbd", "none"}

_COLUMN_KEYWORDS: dict[str, tuple[str, ...]] = {
    "name": ("language", "framework", "name", "guide name"),
    "status": ("status",),
    "link": ("link", "guide", "file", "document"),
    "topics": ("topic",),
}


@dataclass(frozen=True)
class RegistryProblem:
    line: int
    message: str


@dataclass(frozen=True)
class RegistryRow:
    line: int
    raw: str | None
    entry: GuideEntry | None


@dataclass(frozen=True)
class Registry:
    header: tuple[str, ...]
    columns: dict[str, int]
    rows: tuple[RegistryRow, ...]
    start: int
    end: int
    problems: tuple[RegistryProblem, ...] = ()
    status_labels: dict[GuideStatus, str] = field(default_factory=dict)

    @property
    def entries(self) -> tuple[GuideEntry, ...]:
        return tuple(row.entry for row in self.rows if row.entry is not None)

    def get(self, name: str) -> GuideEntry | None:
        key = name.strip().casefold()
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    def add(self, name: str, topics: tuple[str, ...] = ()) -> "Registry":
        if self.get(name) is not None:
            raise ScriptError(f"registry already lists `{name.strip()}`", ERR_VALIDATION, kind="registry_conflict")
        try:
            entry = GuideEntry(name=name, status=GuideStatus.COMING_SOON, topics=topics)
        except ValueError as exc:
            raise ScriptError(str(exc), ERR_VALIDATION, kind="registry_invalid") from exc
        return replace(self, rows=(*self.rows, RegistryRow(line=0, raw=None, entry=entry)))

    def publish(self, name: str, link: str) -> "Registry":
        key = name.strip().casefold()
        rows: list[RegistryRow] = []
        found = False
        for row in self.rows:
            if row.entry is not None and row.entry.key == key:
                try:
                    published = row.entry.publish(link)
                except ValueError as exc:
                    raise ScriptError(str(exc), ERR_VALIDATION, kind="registry_conflict") from exc
                rows.append(RegistryRow(line=row.line, raw=None, entry=published))
                found = True
            else:
                rows.append(row)
        if not found:
            raise ScriptError(f"registry has no entry named `{name.strip()}`", ERR_VALIDATION, kind="registry_unknown")
        return replace(self, rows=tuple(rows))

    def to_payload(self, readme: str) -> dict[str, object]:
        return {
            "schema_name": "guidectl.registry.v1",
            "schema_version": 1,
            "tool": "guidectl",
            "status": "ok",
            "readme": readme,
            "entries": [entry.to_payload() for entry in self.entries],
        }


def split_row(line: str) -> list[str]:
    body = line.strip()
    if body.startswith("|"):
        body = body[1:]
    if body.endswith("|") and not body.endswith("\\|"):
        body = body[:-1]
    cells = re.split(r"(?<!\\)\|", body)
    return [cell.strip().replace("\\|", "|") for cell in cells]


def _detect_columns(header: list[str]) -> dict[str, int] | None:
    columns: dict[str, int] = {}
    lowered = [cell.lower() for cell in header]
    for key in ("status", "topics", "name", "link"):
        for idx, cell in enumerate(lowered):
            if idx in columns.values():
                continue
            if any(word in cell for word in _COLUMN_KEYWORDS[key]):
                columns[key] = idx
                break
    if "name" not in columns or "status" not in columns:
        return None
    return columns


def parse_link_cell(cell: str) -> str | None:
    m = _CELL_LINK_RE.search(cell)
    if m:
        return m.group("target").strip() or None
    value = cell.strip().strip("`")
    if value.lower() in _NO_LINK:
        return None
    return value


def parse_topics(cell: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in cell.split(",") if item.strip())


def _cell(cells: list[str], columns: dict[str, int], key: str) -> str:
    idx = columns.get(key)
    if idx is None or idx >= len(cells):
        return ""
    return cells[idx]


def _plain_name(cell: str) -> str:
    m = _CELL_LINK_RE.search(cell)
    text = m.group("text") if m else cell
    return text.replace("**", "").replace("__", "").strip()


def _find_table(lines: list[str]) -> tuple[int, dict[str, int]] | None:
    for idx in range(len(lines) - 1):
        if not lines[idx].lstrip().startswith("|"):
            continue
        if not _SEPARATOR_RE.match(lines[idx + 1].strip()):
            continue
        columns = _detect_columns(split_row(lines[idx]))
        if columns is not None:
            return idx, columns
    return None


def parse_registry(text: str) -> Registry | None:
    lines = text.splitlines()
    found = _find_table(lines)
    if found is None:
        return None
    start, columns = found
    header = tuple(split_row(lines[start]))
    rows: list[RegistryRow] = []
    problems: list[RegistryProblem] = []
    labels: dict[GuideStatus, str] = {}
    seen: dict[str, int] = {}
    idx = start + 2
    while idx < len(lines) and lines[idx].lstrip().startswith("|"):
        line_no = idx + 1
        cells = split_row(lines[idx])
        name = _plain_name(_cell(cells, columns, "name"))
        raw_status = _cell(cells, columns, "status")
        entry: GuideEntry | None = None
        try:
            status = GuideStatus.parse(raw_status)
            labels.setdefault(status, raw_status)
            entry = GuideEntry(
                name=name,
                status=status,
                link=parse_link_cell(_cell(cells, columns, "link")),
                topics=parse_topics(_cell(cells, columns, "topics")),
            )
        except ValueError as exc:
            problems.append(RegistryProblem(line=line_no, message=str(exc)))
        if entry is not None:
            if entry.key in seen:
                problems.append(
                    RegistryProblem(line=line_no, message=f"duplicate registry entry `{entry.name}` (first on line {seen[entry.key]})")
                )
            else:
                seen[entry.key] = line_no
        rows.append(RegistryRow(line=line_no, raw=lines[idx], entry=entry))
        idx += 1
    return Registry(
        header=header,
        columns=columns,
        rows=tuple(rows),
        start=start,
        end=idx,
        problems=tuple(problems),
        status_labels=labels,
    )


def load_registry(readme: Path) -> Registry:
    if not readme.is_file():
        raise ScriptError(f"registry file not found: {readme}", ERR_DOCS, kind="registry_missing")
    registry = parse_registry(readme.read_text(encoding="utf-8"))
    if registry is None:
        raise ScriptError(f"{readme}: no registry table with name and status columns", ERR_DOCS, kind="registry_missing")
    return registry


def _link_label(link: str) -> str:
    return Path(link).name or link


def render_row(entry: GuideEntry, registry: Registry) -> str:
    cells = [""] * len(registry.header)
    cols = registry.columns
    cells[cols["name"]] = entry.name
    cells[cols["status"]] = registry.status_labels.get(entry.status, entry.status.label)
    if "link" in cols:
        cells[cols["link"]] = f"[{_link_label(entry.link)}]({entry.link})" if entry.link else "-"
    if "topics" in cols:
        cells[cols["topics"]] = ", ".join(entry.topics)
    return "| " + " | ".join(cell.replace("|", "\\|") for cell in cells) + " |"


def render_registry_table(registry: Registry) -> list[str]:
    out = [
        "| " + " | ".join(registry.header) + " |",
        "|" + "|".join("---" for _ in registry.header) + "|",
    ]
    for row in registry.rows:
        if row.raw is not None:
            out.append(row.raw)
        elif row.entry is not None:
            out.append(render_row(row.entry, registry))
    return out


def replace_registry_table(text: str, registry: Registry) -> str:
    lines = text.splitlines()
    header_and_sep = lines[registry.start : registry.start + 2]
    body = render_registry_table(registry)[2:]
    updated = lines[: registry.start] + header_and_sep + body + lines[registry.end :]
    newline = line_ending(text)
    trailing = newline if text.endswith("\n") else ""
    return newline.join(updated) + trailing
