from __future__ import annotations

import argparse

from ..checks.catalog import domains, list_checks
from ..checks.report import render_text
from ..checks.runner import REPORT_SCHEMA, run_checks
from ..cli.output import emit, write_text
from ..contracts import validate
from ..core.context import RunContext
from ..core.logging import log_event
from ..core.serialize import dumps_json
from ..corpus.loader import Corpus
from ..exit_codes import ERR_CHECKS_FAILED, OK


def configure_check_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("check", help="run documentation-linting checks over the corpus")
    p.add_argument("--domain", choices=domains(), default="all", help="check domain to run")
    p.add_argument("--select", action="append", default=[], metavar="CHECK_ID", help="run only this check id (repeatable)")
    p.add_argument("--fail-fast", action="store_true", help="stop at the first failing check")
    p.add_argument("--out-file", help="also write the JSON report to this path")

    checks_p = sub.add_parser("checks", help="inspect the check catalog")
    checks_sub = checks_p.add_subparsers(dest="checks_cmd", required=True)
    list_p = checks_sub.add_parser("list", help="list available checks")
    list_p.add_argument("--domain", choices=domains(), default="all", help="limit to one domain")


def checks_payload(domain: str = "all") -> dict[str, object]:
    return {
        "schema_version": 1,
        "tool": "guidectl",
        "domain": domain,
        "checks": [
            {
                "id": check.check_id,
                "domain": check.domain,
                "description": check.description,
                "budget_ms": check.budget_ms,
                "result_code": check.result_code,
                "fix_hint": check.fix_hint,
            }
            for check in list_checks(domain)
        ],
    }


def run_checks_list(ns: argparse.Namespace, as_json: bool) -> int:
    payload = checks_payload(ns.domain)
    if as_json:
        emit(payload, True)
        return OK
    for row in payload["checks"]:  # type: ignore[union-attr]
        print(f"{row['id']}\t{row['description']}")
    return OK


def run_check_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    corpus = Corpus(ctx.corpus_root, ctx.config)
    log_event(ctx, "info", "check", "start", domain=ns.domain, root=ctx.corpus_root, config=ctx.config.source or "<defaults>")
    report = run_checks(corpus, domain=ns.domain, select=tuple(ns.select), fail_fast=ns.fail_fast, ctx=ctx)
    payload = report.to_payload()
    validate(REPORT_SCHEMA, payload)
    if ns.out_file:
        out = write_text(corpus.root / ns.out_file, dumps_json(payload, pretty=True))
        log_event(ctx, "info", "check", "report_written", path=out)
    if ctx.as_json:
        emit(payload, True)
    else:
        print(render_text(report, quiet=ctx.quiet, verbose=ctx.verbose))
    log_event(ctx, "info", "check", "finish", status=payload["status"], failed=payload["failed_count"], total=payload["total_count"])
    return OK if report.ok else ERR_CHECKS_FAILED
