"""Check catalog accessors."""

from __future__ import annotations

from ..errors import ScriptError
from ..exit_codes import ERR_USAGE
from .base import DOMAINS, CheckDef
from .contributing import CHECKS as CONTRIBUTING_CHECKS
from .guides import CHECKS as GUIDES_CHECKS
from .registry import CHECKS as REGISTRY_CHECKS

ALL_CHECKS: tuple[CheckDef, ...] = (*REGISTRY_CHECKS, *GUIDES_CHECKS, *CONTRIBUTING_CHECKS)


def domains() -> list[str]:
    return ["all", *DOMAINS]


def list_checks(domain: str = "all") -> list[CheckDef]:
    if domain != "all" and domain not in DOMAINS:
        raise ScriptError(f"unknown check domain `{domain}`: expected one of {domains()}", ERR_USAGE, kind="unknown_domain")
    return [check for check in ALL_CHECKS if domain == "all" or check.domain == domain]


def get_check(check_id: str) -> CheckDef:
    for check in ALL_CHECKS:
        if check.check_id == check_id:
            return check
    raise ScriptError(f"unknown check id `{check_id}`", ERR_USAGE, kind="unknown_check")


def select_checks(domain: str = "all", select: tuple[str, ...] = ()) -> list[CheckDef]:
    selected = list_checks(domain)
    if not select:
        return selected
    wanted = {get_check(check_id).check_id for check_id in select}
    return [check for check in selected if check.check_id in wanted]
