"""Minimal markdown structure reader.

Only the pieces the guide template relies on are understood: ATX headings,
fenced code blocks, inline links and GitHub-style heading anchors. Headings and
links inside fenced code are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

_HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
_FENCE_OPEN_RE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})[ \t]*(?P<info>[^`]*?)[ \t]*$")
_MD_LINK_RE = re.compile(r"(?<!!)\[(?P<text>[^\]]+)\]\((?P<target>[^)\s]+)(?:\s+\"[^\"]*\")?\)")
_INLINE_CODE_RE = re.compile(r"`[^`]*`")
_ANCHOR_DROP_RE = re.compile(r"[^\w\- ]", re.UNICODE)


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    anchor: str
    line: int


@dataclass(frozen=True)
class FencedBlock:
    language: str
    info: str
    code: str
    line: int
    closed: bool = True


@dataclass(frozen=True)
class Link:
    text: str
    target: str
    line: int

    @property
    def is_external(self) -> bool:
        return "://" in self.target or self.target.startswith("mailto:")

    @property
    def is_anchor(self) -> bool:
        return self.target.startswith("#")


def github_anchor(text: str) -> str:
    plain = _MD_LINK_RE.sub(lambda m: m.group("text"), text)
    plain = plain.replace("`", "").strip().lower()
    plain = _ANCHOR_DROP_RE.sub("", plain)
    return plain.replace(" ", "-")


def line_ending(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def iter_prose_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_no, line)`` for every line outside fenced code blocks."""
    fence: str | None = None
    for idx, line in enumerate(text.splitlines(), start=1):
        if fence is None:
            m = _FENCE_OPEN_RE.match(line)
            if m:
                fence = m.group("fence")
                continue
            yield idx, line
        elif line.strip().startswith(fence[0] * len(fence)) and not line.strip().strip(fence[0]):
            fence = None


def parse_headings(text: str) -> list[Heading]:
    headings: list[Heading] = []
    seen: dict[str, int] = {}
    for line_no, line in iter_prose_lines(text):
        m = _HEADING_RE.match(line)
        if not m:
            continue
        title = m.group(2).strip()
        base = github_anchor(title)
        count = seen.get(base, 0)
        seen[base] = count + 1
        anchor = base if count == 0 else f"{base}-{count}"
        headings.append(Heading(level=len(m.group(1)), text=title, anchor=anchor, line=line_no))
    return headings


def parse_fenced_blocks(text: str) -> list[FencedBlock]:
    blocks: list[FencedBlock] = []
    lines = text.splitlines()
    idx = 0
    while idx < len(lines):
        m = _FENCE_OPEN_RE.match(lines[idx])
        if not m:
            idx += 1
            continue
        fence = m.group("fence")
        info = m.group("info").strip()
        start = idx
        body: list[str] = []
        idx += 1
        closed = False
        while idx < len(lines):
            stripped = lines[idx].strip()
            if stripped.startswith(fence[0] * len(fence)) and not stripped.strip(fence[0]):
                closed = True
                break
            body.append(lines[idx])
            idx += 1
        language = info.split()[0] if info else ""
        blocks.append(FencedBlock(language=language, info=info, code="\n".join(body), line=start + 1, closed=closed))
        idx += 1
    return blocks


def parse_links(text: str) -> list[Link]:
    links: list[Link] = []
    for line_no, line in iter_prose_lines(text):
        for m in _MD_LINK_RE.finditer(_INLINE_CODE_RE.sub("", line)):
            links.append(Link(text=m.group("text").strip(), target=m.group("target").strip(), line=line_no))
    return links


def section_lines(text: str, heading: Heading, headings: list[Heading]) -> list[str]:
    """Return the raw lines below ``heading`` up to the next heading of the same or higher level."""
    lines = text.splitlines()
    end = len(lines)
    for other in headings:
        if other.line > heading.line and other.level <= heading.level:
            end = other.line - 1
            break
    return lines[heading.line:end]
