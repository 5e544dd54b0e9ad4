"""Guide documents: parse one language guide into the Guide/Practice model."""

from __future__ import annotations

import re
from pathlib import Path

from ..config import GuidectlConfig
from ..errors import ScriptError
from ..exit_codes import ERR_DOCS
from .markdown import (
    FencedBlock,
    Heading,
    iter_prose_lines,
    parse_fenced_blocks,
    parse_headings,
    parse_links,
    section_lines,
)
from .models import CodeExample, Guide, Practice, TocEntry

PRACTICE_LEVEL = 3
PART_ORDER = ("description", "do", "dont", "examples")

_BOLD_LABEL_RE = re.compile(r"^\s*(?:\*\*|__)(?P<label>[^*_]+?)(?:\*\*|__)\s*:?\s*$")
_HEADING_LABEL_RE = re.compile(r"^#{4,6}\s+(?P<label>.+?)\s*#*\s*$")
_BULLET_RE = re.compile(r"^(?P<indent>\s*)(?:[-*+]|\d+[.)])\s+(?P<item>.+?)\s*$")
_TOC_ITEM_RE = re.compile(r"^(?P<indent>\s*)(?:[-*+]|\d+[.)])\s+\[(?P<text>[^\]]+)\]\((?P<target>#[^)\s]*)\)")
_LABEL_STRICT_RE = re.compile(r"\b(BAD|GOOD)\b")
_LABEL_LOOSE_RE = re.compile(r"^[\W_]*(bad|good)\b", re.IGNORECASE)


def classify_label(text: str) -> str | None:
    norm = re.sub(r"[^a-z]", "", text.lower())
    if norm in {"dont", "donts", "donot", "dontdo"}:
        return "dont"
    if norm in {"do", "dos", "dodo"}:
        return "do"
    if "example" in norm:
        return "examples"
    return None


def example_label(caption: str, code: str) -> str | None:
    first_code = next((ln.strip() for ln in code.splitlines() if ln.strip()), "")
    for source in (caption, first_code):
        m = _LABEL_STRICT_RE.search(source) or _LABEL_LOOSE_RE.search(source.lstrip("#/;-*! "))
        if m:
            return m.group(1).lower()
    return None


def _bullet_item(line: str, base_indent: int | None) -> tuple[str, int] | None:
    m = _BULLET_RE.match(line)
    if not m:
        return None
    indent = len(m.group("indent").expandtabs(4))
    if base_indent is not None and indent > base_indent:
        return None
    return m.group("item").strip(), indent


def parse_practice(
    text: str,
    heading: Heading,
    headings: list[Heading],
    blocks: list[FencedBlock],
    tier: str,
    prose: dict[int, str] | None = None,
) -> Practice:
    body = section_lines(text, heading, headings)
    first_line = heading.line + 1
    last_line = heading.line + len(body)
    if prose is None:
        prose = dict(iter_prose_lines(text))
    block_starts = {block.line: block for block in blocks if first_line <= block.line <= last_line}

    part: str = "description"
    order: list[str] = []
    description: list[str] = []
    items: dict[str, list[str]] = {"do": [], "dont": []}
    base_indent: dict[str, int | None] = {"do": None, "dont": None}
    seen_sections: set[str] = set()
    examples: list[CodeExample] = []
    caption = ""

    def enter(kind: str) -> None:
        if not order or order[-1] != kind:
            order.append(kind)

    for offset, line in enumerate(body):
        line_no = first_line + offset
        if line_no in block_starts:
            block = block_starts[line_no]
            if part in {"dont", "examples"}:
                part = "examples"
                enter("examples")
            examples.append(
                CodeExample(
                    language=block.language,
                    code=block.code,
                    caption=caption,
                    label=example_label(caption, block.code),
                    line=block.line,
                )
            )
            caption = ""
            continue
        if line_no not in prose:
            continue
        stripped = line.strip()
        if not stripped:
            continue
        m = _HEADING_LABEL_RE.match(line) or _BOLD_LABEL_RE.match(line)
        kind = classify_label(m.group("label")) if m else None
        if kind is not None:
            part = kind
            seen_sections.add(kind)
            enter(kind)
            caption = ""
            continue
        if part == "description":
            if not _HEADING_LABEL_RE.match(line):
                description.append(stripped)
                enter("description")
            continue
        if part in items:
            bullet = _bullet_item(line, base_indent[part])
            if bullet is not None:
                item, indent = bullet
                if base_indent[part] is None:
                    base_indent[part] = indent
                items[part].append(item)
                continue
        caption = stripped

    return Practice(
        title=heading.text,
        tier=tier,
        line=heading.line,
        rationale=" ".join(description),
        do_list=tuple(items["do"]),
        dont_list=tuple(items["dont"]),
        examples=tuple(examples),
        part_order=tuple(order),
        has_do_section="do" in seen_sections,
        has_dont_section="dont" in seen_sections,
    )


def parse_toc(text: str, toc_heading: Heading | None, headings: list[Heading]) -> tuple[TocEntry, ...]:
    if toc_heading is None:
        return ()
    raw: list[tuple[str, str, int, int]] = []
    for offset, line in enumerate(section_lines(text, toc_heading, headings)):
        m = _TOC_ITEM_RE.match(line)
        if m:
            indent = len(m.group("indent").expandtabs(4))
            raw.append((m.group("text").strip(), m.group("target")[1:], indent, toc_heading.line + 1 + offset))
    levels = sorted({indent for _, _, indent, _ in raw})
    return tuple(
        TocEntry(text=entry_text, anchor=anchor, depth=levels.index(indent), line=line_no)
        for entry_text, anchor, indent, line_no in raw
    )


def _same_heading(a: str, b: str) -> bool:
    return a.strip().casefold() == b.strip().casefold()


def find_heading(headings: list[Heading], level: int, text: str) -> Heading | None:
    for heading in headings:
        if heading.level == level and _same_heading(heading.text, text):
            return heading
    return None


def parse_guide(path: Path, text: str, config: GuidectlConfig) -> Guide:
    headings = parse_headings(text)
    blocks = parse_fenced_blocks(text)
    title_heading = headings[0] if headings and headings[0].level == 1 else None
    language = None
    if title_heading is not None:
        m = config.title_re.match(title_heading.text)
        language = m.group("language").strip() if m else None

    tiers: dict[str, list[Practice]] = {"basic": [], "advanced": []}
    tier_names = {"basic": config.tiers.basic, "advanced": config.tiers.advanced}
    current_tier: str | None = None
    prose = dict(iter_prose_lines(text))
    for heading in headings:
        if heading.level <= 2:
            current_tier = next(
                (key for key, name in tier_names.items() if heading.level == 2 and _same_heading(heading.text, name)),
                None,
            )
            continue
        if heading.level == PRACTICE_LEVEL and current_tier is not None:
            tiers[current_tier].append(parse_practice(text, heading, headings, blocks, current_tier, prose))

    return Guide(
        path=path,
        title=title_heading.text if title_heading else None,
        title_line=title_heading.line if title_heading else 0,
        language=language,
        toc=parse_toc(text, find_heading(headings, 2, config.toc_heading), headings),
        basic=tuple(tiers["basic"]),
        advanced=tuple(tiers["advanced"]),
        headings=tuple(headings),
        blocks=tuple(blocks),
        links=tuple(parse_links(text)),
    )


def load_guide(path: Path, config: GuidectlConfig) -> Guide:
    if not path.is_file():
        raise ScriptError(f"guide not found: {path}", ERR_DOCS, kind="guide_missing")
    return parse_guide(path, path.read_text(encoding="utf-8"), config)
