"""CLI payload output helpers."""

from __future__ import annotations

from pathlib import Path

from ..core.serialize import dumps_json
from ..corpus.markdown import line_ending


def emit(payload: dict[str, object], as_json: bool) -> None:
    print(dumps_json(payload, pretty=not as_json))


def resolve_output_format(*, cli_json: bool, cli_format: str | None, ci_present: bool) -> str:
    if cli_json:
        return "json"
    if cli_format:
        return cli_format
    return "json" if ci_present else "text"


def render_error(*, as_json: bool, message: str, code: int, kind: str = "generic_error", run_id: str = "") -> str:
    if as_json:
        payload: dict[str, object] = {
            "schema_name": "guidectl.error.v1",
            "schema_version": 1,
            "tool": "guidectl",
            "status": "error",
            "errors": [{"code": code, "kind": kind, "message": message}],
        }
        if run_id:
            payload["run_id"] = run_id
        return dumps_json(payload, pretty=False)
    return f"guidectl: error: {message}"


def read_text(path: Path) -> str:
    """Read a document keeping its line endings, so edits can be written back unchanged."""
    with path.open("r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text if text.endswith("\n") else text + line_ending(text), encoding="utf-8", newline="")
    return path
