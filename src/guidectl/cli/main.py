from __future__ import annotations

import argparse
import sys

import yaml

from .. import __version__
from ..commands.check import configure_check_parser, run_check_command, run_checks_list
from ..commands.guide import configure_guide_parser, run_guide_command
from ..commands.registry import configure_registry_parser, run_registry_command
from ..contracts import validate_file
from ..core.context import RunContext
from ..core.env import getenv
from ..core.logging import log_event
from ..errors import ScriptError
from ..exit_codes import ERR_INTERNAL, ERR_USAGE, OK
from .output import emit, render_error, resolve_output_format

CORPUS_COMMANDS = {
    "check": run_check_command,
    "registry": run_registry_command,
    "guide": run_guide_command,
}


def _version_string() -> str:
    return f"guidectl {__version__}"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="guidectl", description="Lint and maintain a best-practices guide corpus.")
    p.add_argument("--version", action="version", version=_version_string())
    p.add_argument("--root", help="corpus root (default: nearest directory with README.md and CONTRIBUTING.md)")
    p.add_argument("--config", help="config file (default: guidectl.yaml in the corpus root)")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--run-id", help="run identifier for logs and reports")
    p.add_argument("--log-json", action="store_true", help="emit structured logs as JSON lines on stderr")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version", help="print the guidectl version")
    sub.add_parser("config", help="print the effective configuration")
    configure_check_parser(sub)
    configure_registry_parser(sub)
    configure_guide_parser(sub)

    val_p = sub.add_parser("validate-output", help="validate a JSON file against a guidectl schema")
    val_p.add_argument("--schema", required=True)
    val_p.add_argument("--file", required=True)
    return p


def _context(ns: argparse.Namespace, fmt: str) -> RunContext:
    return RunContext.from_args(
        root=ns.root,
        config_path=ns.config,
        run_id=ns.run_id,
        output_format=fmt,  # type: ignore[arg-type]
        verbose=ns.verbose,
        quiet=ns.quiet,
        log_json=ns.log_json,
    )


def _dispatch(ns: argparse.Namespace, fmt: str, state: dict[str, RunContext]) -> int:
    as_json = fmt == "json"
    if ns.cmd == "version":
        if as_json:
            emit({"schema_version": 1, "tool": "guidectl", "status": "ok", "version": __version__}, True)
        else:
            print(_version_string())
        return OK
    if ns.cmd == "checks":
        return run_checks_list(ns, as_json)
    if ns.cmd == "validate-output":
        validate_file(ns.schema, ns.file)
        if as_json:
            emit({"schema_version": 1, "tool": "guidectl", "status": "ok", "schema": ns.schema, "file": ns.file}, True)
        else:
            print(f"{ns.file}: valid {ns.schema}")
        return OK

    ctx = _context(ns, fmt)
    state["ctx"] = ctx
    log_event(ctx, "info", "cli", "start", cmd=ns.cmd, root=ctx.corpus_root, fmt=ctx.output_format)
    if ns.cmd == "config":
        payload = ctx.config.to_payload()
        if as_json:
            emit(payload, True)
        else:
            print(yaml.safe_dump(payload, sort_keys=False, allow_unicode=True).rstrip())
        return OK
    handler = CORPUS_COMMANDS.get(ns.cmd)
    if handler is None:
        raise ScriptError(f"unknown command `{ns.cmd}`", ERR_USAGE, kind="usage")
    rc = handler(ctx, ns)
    log_event(ctx, "info", "cli", "finish", cmd=ns.cmd, rc=rc)
    return rc


def main(argv: list[str] | None = None) -> int:
    raw_argv = argv if argv is not None else sys.argv[1:]
    ns = build_parser().parse_args(raw_argv)
    if ns.format and ns.json and ns.format != "json":
        print(render_error(as_json=False, message="conflicting output flags: use either --format json or --json", code=ERR_USAGE), file=sys.stderr)
        return ERR_USAGE
    fmt = resolve_output_format(cli_json=ns.json, cli_format=ns.format, ci_present=bool(getenv("CI")))
    state: dict[str, RunContext] = {}
    try:
        return _dispatch(ns, fmt, state)
    except ScriptError as exc:
        ctx = state.get("ctx")
        if ctx is not None:
            log_event(ctx, "error", "cli", "error", cmd=ns.cmd, kind=exc.kind, code=exc.code)
        print(
            render_error(as_json=(fmt == "json"), message=str(exc), code=exc.code, kind=exc.kind, run_id=ctx.run_id if ctx else ""),
            file=sys.stderr,
        )
        return exc.code
    except Exception as exc:  # pragma: no cover
        ctx = state.get("ctx")
        print(
            render_error(
                as_json=(fmt == "json"),
                message=f"internal error: {exc}",
                code=ERR_INTERNAL,
                kind="internal_error",
                run_id=ctx.run_id if ctx else "",
            ),
            file=sys.stderr,
        )
        return ERR_INTERNAL
