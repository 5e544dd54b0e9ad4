from __future__ import annotations

import argparse
from pathlib import Path

from ..cli.output import emit, read_text, write_text
from ..contracts import validate
from ..core.context import RunContext
from ..core.logging import log_event
from ..corpus.loader import Corpus
from ..corpus.markdown import parse_headings
from ..corpus.scaffold import fence_language, regenerate_toc, render_guide_skeleton, toc_lines
from ..errors import ScriptError
from ..exit_codes import ERR_CHECKS_FAILED, ERR_VALIDATION, OK

OUTLINE_SCHEMA = "guidectl.guide-outline.v1"


def configure_guide_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("guide", help="inspect, scaffold and maintain guide documents")
    guide_sub = p.add_subparsers(dest="guide_cmd", required=True)

    outline_p = guide_sub.add_parser("outline", help="print the parsed structure of a guide")
    outline_p.add_argument("guide", help="guide path or registry name")

    toc_p = guide_sub.add_parser("toc", help="rebuild a guide's table of contents")
    toc_p.add_argument("guide", help="guide path or registry name")
    mode = toc_p.add_mutually_exclusive_group()
    mode.add_argument("--write", action="store_true", help="rewrite the guide in place")
    mode.add_argument("--check", action="store_true", help="exit non-zero when the table of contents is stale")

    new_p = guide_sub.add_parser("new", help="scaffold a guide that follows the template")
    new_p.add_argument("language", help="language or framework name")
    new_p.add_argument("--out", help="output path (default: <language>.md in the corpus root)")
    new_p.add_argument("--topic", action="append", default=[], help="basic practice title (repeatable)")
    new_p.add_argument("--advanced-topic", action="append", default=[], help="advanced practice title (repeatable)")
    new_p.add_argument("--code-language", help="fence language tag for examples")
    new_p.add_argument("--force", action="store_true", help="overwrite an existing file")


def _outline_text(payload: dict[str, object]) -> str:
    out = [f"{payload['path']}: {payload['title'] or '<no title>'}"]
    tiers = payload["tiers"]
    for tier in ("basic", "advanced"):
        practices = tiers[tier]  # type: ignore[index]
        out.append(f"{tier} ({len(practices)} practices)")
        for practice in practices:
            out.append(
                f"  - {practice['title']}: do={len(practice['do_list'])} dont={len(practice['dont_list'])} examples={len(practice['examples'])}"
            )
    return "\n".join(out)


def _run_toc(ctx: RunContext, corpus: Corpus, ns: argparse.Namespace) -> int:
    path = corpus.resolve_guide(ns.guide)
    text = read_text(path)
    updated = regenerate_toc(text, corpus.config)
    rel = corpus.rel(path)
    if ns.check:
        stale = updated != text
        if ctx.as_json:
            emit({"schema_version": 1, "tool": "guidectl", "path": rel, "status": "fail" if stale else "pass"}, True)
        elif stale:
            print(f"{rel}: table of contents is stale; run `guidectl guide toc {rel} --write`")
        return ERR_CHECKS_FAILED if stale else OK
    if ns.write:
        if updated != text:
            write_text(path, updated)
            log_event(ctx, "info", "guide", "toc_written", path=rel)
        if ctx.as_json:
            emit({"schema_version": 1, "tool": "guidectl", "path": rel, "status": "ok", "changed": updated != text}, True)
        elif not ctx.quiet:
            print(f"{rel}: table of contents {'updated' if updated != text else 'unchanged'}")
        return OK
    print("\n".join(toc_lines(parse_headings(text), corpus.config)))
    return OK


def _run_new(ctx: RunContext, corpus: Corpus, ns: argparse.Namespace) -> int:
    out = Path(ns.out) if ns.out else Path(f"{fence_language(ns.language)}.md")
    path = out if out.is_absolute() else corpus.root / out
    if path.exists() and not ns.force:
        raise ScriptError(f"{corpus.rel(path)} already exists; pass --force to overwrite", ERR_VALIDATION, kind="guide_exists")
    text = render_guide_skeleton(
        ns.language,
        corpus.config,
        basic_topics=tuple(ns.topic),
        advanced_topics=tuple(ns.advanced_topic),
        code_language=ns.code_language,
    )
    write_text(path, text)
    rel = corpus.rel(path)
    log_event(ctx, "info", "guide", "scaffolded", path=rel, language=ns.language)
    if ctx.as_json:
        emit({"schema_version": 1, "tool": "guidectl", "status": "ok", "path": rel}, True)
    elif not ctx.quiet:
        print(f"created {rel}; register it with `guidectl registry add {ns.language}`")
    return OK


def run_guide_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    corpus = Corpus(ctx.corpus_root, ctx.config)
    if ns.guide_cmd == "outline":
        path = corpus.resolve_guide(ns.guide)
        payload = corpus.guide(path).to_payload(corpus.rel(path))
        validate(OUTLINE_SCHEMA, payload)
        if ctx.as_json:
            emit(payload, True)
        else:
            print(_outline_text(payload))
        return OK
    if ns.guide_cmd == "toc":
        return _run_toc(ctx, corpus, ns)
    return _run_new(ctx, corpus, ns)
