from __future__ import annotations

import argparse

from ..cli.output import emit, read_text, write_text
from ..contracts import validate
from ..core.context import RunContext
from ..core.logging import log_event
from ..corpus.loader import Corpus
from ..corpus.registry import Registry, load_registry, parse_topics, render_registry_table, replace_registry_table
from ..errors import ScriptError
from ..exit_codes import ERR_DOCS, OK

REGISTRY_SCHEMA = "guidectl.registry.v1"


def configure_registry_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("registry", help="read and maintain the README guide registry")
    reg_sub = p.add_subparsers(dest="registry_cmd", required=True)
    reg_sub.add_parser("list", help="list registry entries")

    add_p = reg_sub.add_parser("add", help="register a coming-soon guide")
    add_p.add_argument("name", help="language or framework name")
    add_p.add_argument("--topics", default="", help="comma separated topics the guide will cover")
    add_p.add_argument("--dry-run", action="store_true", help="print the updated table without writing")

    pub_p = reg_sub.add_parser("publish", help="mark a guide available and link its file")
    pub_p.add_argument("name", help="registry entry name")
    pub_p.add_argument("--link", required=True, help="guide path relative to the README")
    pub_p.add_argument("--dry-run", action="store_true", help="print the updated table without writing")


def _write_registry(ctx: RunContext, corpus: Corpus, updated: Registry, dry_run: bool) -> None:
    if dry_run:
        print("\n".join(render_registry_table(updated)))
        return
    text = read_text(corpus.readme_path)
    write_text(corpus.readme_path, replace_registry_table(text, updated))
    log_event(ctx, "info", "registry", "written", path=corpus.readme_path)


def run_registry_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    corpus = Corpus(ctx.corpus_root, ctx.config)
    registry = load_registry(corpus.readme_path)
    if ns.registry_cmd == "list":
        payload = registry.to_payload(corpus.config.readme)
        if ctx.as_json:
            validate(REGISTRY_SCHEMA, payload)
            emit(payload, True)
            return OK
        for entry in registry.entries:
            print(f"{entry.name}\t{entry.status.value}\t{entry.link or '-'}\t{', '.join(entry.topics)}")
        return OK

    if ns.registry_cmd == "add":
        updated = registry.add(ns.name, parse_topics(ns.topics))
        entry = updated.get(ns.name)
    else:
        target = (corpus.readme_path.parent / ns.link.split("#", 1)[0]).resolve()
        if not target.is_file():
            raise ScriptError(f"cannot publish `{ns.name}`: guide file `{ns.link}` does not exist", ERR_DOCS, kind="guide_missing")
        updated = registry.publish(ns.name, ns.link)
        entry = updated.get(ns.name)
    log_event(ctx, "info", "registry", ns.registry_cmd, name=ns.name, dry_run=ns.dry_run)
    _write_registry(ctx, corpus, updated, ns.dry_run)
    if entry is not None and not ns.dry_run:
        if ctx.as_json:
            emit({"schema_version": 1, "tool": "guidectl", "status": "ok", "action": ns.registry_cmd, "entry": entry.to_payload()}, True)
        elif not ctx.quiet:
            print(f"{ns.registry_cmd}: {entry.name} ({entry.status.value})")
    return OK
