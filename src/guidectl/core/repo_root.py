"""Corpus root detection helpers.

`Path.cwd()` is only allowed in this module.
"""

from __future__ import annotations

from pathlib import Path

from ..errors import ScriptError
from ..exit_codes import ERR_DOCS

CONFIG_FILENAME = "guidectl.yaml"
_MARKERS = (CONFIG_FILENAME, "CONTRIBUTING.md")


def find_corpus_root(start: Path | None = None) -> Path:
    cur = (start or Path.cwd()).resolve()
    if cur.is_file():
        cur = cur.parent
    while True:
        if (cur / "README.md").is_file() and any((cur / marker).is_file() for marker in _MARKERS):
            return cur
        if cur.parent == cur:
            raise ScriptError(
                f"unable to resolve corpus root from {start or Path.cwd()}: no README.md next to CONTRIBUTING.md or {CONFIG_FILENAME}",
                ERR_DOCS,
                kind="corpus_not_found",
            )
        cur = cur.parent

