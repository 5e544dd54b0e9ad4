from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from ..corpus.loader import Corpus

_CHECK_ID_PATTERN = re.compile(r"^[a-z]+\.[a-z0-9_]+$")
_RESULT_CODE_PATTERN = re.compile(r"^[A-Z][A-Z0-9_]*$")
DOMAINS = ("registry", "guides", "contributing")


class Severity(str, Enum):
    ERROR = "error"
    WARN = "warn"


class CheckStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    ERROR = "error"


@dataclass(frozen=True)
class Violation:
    code: str
    message: str
    hint: str = ""
    path: str = ""
    line: int = 0
    severity: Severity = Severity.ERROR

    @property
    def canonical_key(self) -> tuple[str, int, str]:
        return (self.path, self.line, self.message)

    @property
    def location(self) -> str:
        if not self.path:
            return ""
        return f"{self.path}:{self.line}" if self.line else self.path

    def render(self) -> str:
        return f"{self.location}: {self.message}" if self.location else self.message

    def to_payload(self) -> dict[str, object]:
        return {
            "code": self.code,
            "message": self.message,
            "hint": self.hint,
            "path": self.path,
            "line": self.line,
            "severity": self.severity.value,
        }


def finding(message: str, *, path: str = "", line: int = 0, severity: Severity = Severity.ERROR) -> Violation:
    """Build a violation whose code and hint are filled in by the runner from its CheckDef."""
    return Violation(code="", message=message, path=path, line=line, severity=severity)


CheckFunc = Callable[["Corpus"], list[Violation]]


@dataclass(frozen=True)
class CheckDef:
    check_id: str
    domain: str
    description: str
    budget_ms: int
    fn: CheckFunc
    fix_hint: str = "Review check output and apply the documented fix."
    result_code: str = "CHECK_GENERIC"

    def __post_init__(self) -> None:
        if not _CHECK_ID_PATTERN.fullmatch(self.check_id):
            raise ValueError(f"invalid check id `{self.check_id}`: expected <domain>.<snake_case_name>")
        if self.check_id.split(".", 1)[0] != self.domain:
            raise ValueError(f"invalid check id `{self.check_id}`: domain segment must match `{self.domain}`")
        if self.domain not in DOMAINS:
            raise ValueError(f"invalid domain `{self.domain}`: must be one of {list(DOMAINS)}")
        if not _RESULT_CODE_PATTERN.fullmatch(self.result_code):
            raise ValueError(f"invalid result_code `{self.result_code}`: expected UPPER_SNAKE_CASE")

    @property
    def id(self) -> str:
        return self.check_id

    @property
    def title(self) -> str:
        return self.description
