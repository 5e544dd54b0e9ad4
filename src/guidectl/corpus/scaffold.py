"""Guide skeletons and table-of-contents regeneration."""

from __future__ import annotations

import re

from ..config import GuidectlConfig
from .guide import find_heading
from .markdown import Heading, line_ending, parse_headings, section_lines

_FENCE_LANGUAGES = {
    "c#": "csharp",
    "c++": "cpp",
    "f#": "fsharp",
    "golang": "go",
    "node.js": "javascript",
    "objective-c": "objectivec",
}
_HASH_COMMENT_LANGUAGES = {"python", "ruby", "bash", "sh", "shell", "yaml", "r", "perl", "elixir", "powershell"}


def fence_language(language: str) -> str:
    lowered = language.strip().lower()
    if lowered in _FENCE_LANGUAGES:
        return _FENCE_LANGUAGES[lowered]
    return re.sub(r"[^a-z0-9]+", "", lowered) or "text"


def _comment(fence: str) -> str:
    return "#" if fence in _HASH_COMMENT_LANGUAGES else "//"


def toc_lines(headings: list[Heading], config: GuidectlConfig) -> list[str]:
    lines: list[str] = []
    for heading in headings:
        if heading.level < 2 or heading.level > config.toc_depth:
            continue
        if heading.level == 2 and heading.text.strip().casefold() == config.toc_heading.casefold():
            continue
        indent = "  " * (heading.level - 2)
        lines.append(f"{indent}- [{heading.text}](#{heading.anchor})")
    return lines


def regenerate_toc(text: str, config: GuidectlConfig) -> str:
    """Return ``text`` with its table of contents rebuilt from the current headings.

    The TOC section is created right after the title when it is missing.
    """
    headings = parse_headings(text)
    lines = text.splitlines()
    entries = toc_lines(headings, config)
    toc = find_heading(headings, 2, config.toc_heading)
    if toc is None:
        insert_at = headings[0].line if headings and headings[0].level == 1 else 0
        head = _rstrip_blank(lines[:insert_at])
        head += [""] if head else []
        head += [f"## {config.toc_heading}"]
        tail = lines[insert_at:]
    else:
        body = section_lines(text, toc, headings)
        head = lines[: toc.line]
        tail = lines[toc.line + len(body) :]
    tail = _lstrip_blank(tail)
    new_lines = head + ["", *entries] + ([""] + tail if tail else [])
    newline = line_ending(text)
    return newline.join(new_lines).rstrip("\r\n") + newline


def _rstrip_blank(lines: list[str]) -> list[str]:
    end = len(lines)
    while end and not lines[end - 1].strip():
        end -= 1
    return lines[:end]


def _lstrip_blank(lines: list[str]) -> list[str]:
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    return lines[start:]


def _practice_block(topic: str, fence: str) -> list[str]:
    comment = _comment(fence)
    return [
        f"### {topic}",
        "",
        f"Explain what {topic} means and why it matters.",
        "",
        "#### Do's",
        "",
        "- State one habit to follow.",
        "",
        "#### Don'ts",
        "",
        "- State one habit to avoid.",
        "",
        "#### Examples",
        "",
        f"```{fence}",
        f"{comment} BAD: describe the problem",
        "```",
        "",
        f"```{fence}",
        f"{comment} GOOD: describe the fix",
        "```",
        "",
    ]


def render_guide_skeleton(
    language: str,
    config: GuidectlConfig,
    basic_topics: tuple[str, ...] = (),
    advanced_topics: tuple[str, ...] = (),
    code_language: str | None = None,
) -> str:
    fence = code_language or fence_language(language)
    lines = [f"# {config.title_template.format(language=language.strip())}", ""]
    lines += [f"## {config.toc_heading}", ""]
    for tier, topics in ((config.tiers.basic, basic_topics or ("Getting Started",)), (config.tiers.advanced, advanced_topics or ("Going Further",))):
        lines += [f"## {tier}", ""]
        for topic in topics:
            lines += _practice_block(topic, fence)
    return regenerate_toc("\n".join(lines), config)
