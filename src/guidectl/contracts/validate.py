from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import ScriptError
from ..exit_codes import ERR_VALIDATION


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    version: int
    file: str


def schemas_root() -> Path:
    return Path(__file__).resolve().parent / "schemas"


def _catalog_path() -> Path:
    return schemas_root() / "catalog.json"


@lru_cache(maxsize=1)
def load_catalog() -> dict[str, CatalogEntry]:
    raw = json.loads(_catalog_path().read_text(encoding="utf-8"))
    entries: dict[str, CatalogEntry] = {}
    for row in raw.get("schemas", []):
        entry = CatalogEntry(name=row["name"], version=int(row["version"]), file=row["file"])
        entries[entry.name] = entry
    return entries


def schema_path(schema_name: str) -> Path:
    entry = load_catalog().get(schema_name)
    if entry is None:
        raise ScriptError(f"unknown schema: {schema_name}", ERR_VALIDATION, kind="unknown_schema")
    return schemas_root() / entry.file


def validate(schema_name: str, payload: Any) -> None:
    schema = json.loads(schema_path(schema_name).read_text(encoding="utf-8"))
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ScriptError(
            f"schema validation failed for {schema_name} at {loc}: {exc.message}",
            ERR_VALIDATION,
            kind="schema_validation",
        ) from exc


def validate_file(schema_name: str, file_path: str | Path) -> None:
    path = Path(file_path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ScriptError(f"file not found: {path}", ERR_VALIDATION, kind="missing_file") from exc
    except json.JSONDecodeError as exc:
        raise ScriptError(f"{path}: invalid JSON: {exc.msg} (line {exc.lineno})", ERR_VALIDATION, kind="invalid_json") from exc
    validate(schema_name, payload)
