from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

from .markdown import FencedBlock, Heading, Link

_STATUS_WORDS_RE = re.compile(r"[a-z]+")


class GuideStatus(str, Enum):
    AVAILABLE = "available"
    COMING_SOON = "coming_soon"

    @property
    def label(self) -> str:
        return "Available" if self is GuideStatus.AVAILABLE else "Coming Soon"

    @classmethod
    def parse(cls, raw: str) -> "GuideStatus":
        words = _STATUS_WORDS_RE.findall(str(raw).lower())
        joined = "".join(words)
        if joined == "available":
            return cls.AVAILABLE
        if joined == "comingsoon":
            return cls.COMING_SOON
        raise ValueError(f"unknown guide status `{str(raw).strip()}`: expected Available or Coming Soon")


@dataclass(frozen=True)
class GuideEntry:
    name: str
    status: GuideStatus
    link: str | None = None
    topics: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        name = str(self.name).strip()
        if not name:
            raise ValueError("guide entry name cannot be empty")
        object.__setattr__(self, "name", name)
        link = (self.link or "").strip() or None
        object.__setattr__(self, "link", link)
        object.__setattr__(self, "topics", tuple(t.strip() for t in self.topics if t and t.strip()))
        if self.status is GuideStatus.AVAILABLE and link is None:
            raise ValueError(f"{name}: available guide must link to its guide file")
        if self.status is GuideStatus.COMING_SOON and link is not None:
            raise ValueError(f"{name}: coming-soon guide must not carry a link (`{link}`)")

    @property
    def key(self) -> str:
        return self.name.casefold()

    def publish(self, link: str) -> "GuideEntry":
        if self.status is GuideStatus.AVAILABLE:
            raise ValueError(f"{self.name}: guide is already available at `{self.link}`")
        return replace(self, status=GuideStatus.AVAILABLE, link=link)

    def to_payload(self) -> dict[str, object]:
        return {
            "name": self.name,
            "status": self.status.value,
            "link": self.link,
            "topics": list(self.topics),
        }


@dataclass(frozen=True)
class TocEntry:
    text: str
    anchor: str
    depth: int
    line: int


@dataclass(frozen=True)
class CodeExample:
    language: str
    code: str
    caption: str = ""
    label: str | None = None
    line: int = 0

    def to_payload(self) -> dict[str, object]:
        return {"language": self.language, "label": self.label, "caption": self.caption, "line": self.line}


@dataclass(frozen=True)
class Practice:
    title: str
    tier: str
    line: int
    rationale: str = ""
    do_list: tuple[str, ...] = ()
    dont_list: tuple[str, ...] = ()
    examples: tuple[CodeExample, ...] = ()
    # Sequence of part kinds as they appear: "description", "do", "dont", "examples".
    part_order: tuple[str, ...] = ()
    has_do_section: bool = False
    has_dont_section: bool = False

    @property
    def published(self) -> bool:
        return bool(self.do_list) and bool(self.dont_list)

    def to_payload(self) -> dict[str, object]:
        return {
            "title": self.title,
            "line": self.line,
            "rationale": self.rationale,
            "do_list": list(self.do_list),
            "dont_list": list(self.dont_list),
            "examples": [example.to_payload() for example in self.examples],
        }


@dataclass(frozen=True)
class Guide:
    path: Path
    title: str | None
    title_line: int
    language: str | None
    toc: tuple[TocEntry, ...]
    basic: tuple[Practice, ...] = ()
    advanced: tuple[Practice, ...] = ()
    headings: tuple[Heading, ...] = field(default=(), repr=False)
    blocks: tuple[FencedBlock, ...] = field(default=(), repr=False)
    links: tuple[Link, ...] = field(default=(), repr=False)

    @property
    def practices(self) -> tuple[Practice, ...]:
        return self.basic + self.advanced

    def to_payload(self, rel_path: str | None = None) -> dict[str, object]:
        return {
            "schema_name": "guidectl.guide-outline.v1",
            "schema_version": 1,
            "tool": "guidectl",
            "path": rel_path or self.path.as_posix(),
            "title": self.title,
            "language": self.language,
            "toc": [{"text": e.text, "anchor": e.anchor, "depth": e.depth} for e in self.toc],
            "tiers": {
                "basic": [p.to_payload() for p in self.basic],
                "advanced": [p.to_payload() for p in self.advanced],
            },
        }
