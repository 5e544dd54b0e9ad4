from __future__ import annotations

import re

from ...corpus.guide import classify_label
from ...corpus.loader import Corpus
from ...corpus.markdown import parse_fenced_blocks
from ..base import Severity, Violation, finding

_INTAKE_STEPS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("issue", re.compile(r"\bissues?\b", re.IGNORECASE)),
    ("fork", re.compile(r"\bfork\b", re.IGNORECASE)),
    ("pull request", re.compile(r"\bpull requests?\b|\bPRs?\b")),
)
_TEMPLATE_LANGUAGES = {"markdown", "md"}
_LABEL_LINE_RE = re.compile(r"^\s*(?:#{4,6}\s+|\*\*|__)(?P<label>[^*_#]+)")


def check_contributing_present(corpus: Corpus) -> list[Violation]:
    rel = corpus.config.contributing
    if not corpus.contributing_path.is_file():
        return [finding(f"missing {rel}", path=rel)]
    text = corpus.contributing_path.read_text(encoding="utf-8")
    return [
        finding(f"contribution guide does not describe the `{step}` step", path=rel)
        for step, pattern in _INTAKE_STEPS
        if not pattern.search(text)
    ]


def check_contributing_template_present(corpus: Corpus) -> list[Violation]:
    rel = corpus.config.contributing
    if not corpus.contributing_path.is_file():
        return []
    blocks = [b for b in parse_fenced_blocks(corpus.contributing_path.read_text(encoding="utf-8")) if b.language.lower() in _TEMPLATE_LANGUAGES]
    if not blocks:
        return [finding("no fenced ```markdown guide template", path=rel)]
    template = blocks[0]
    labels = {
        classify_label(m.group("label"))
        for line in template.code.splitlines()
        if (m := _LABEL_LINE_RE.match(line))
    }
    return [
        finding(f"guide template has no {name} section", path=rel, line=template.line, severity=Severity.WARN)
        for kind, name in (("do", "Do's"), ("dont", "Don'ts"))
        if kind not in labels
    ]
