from __future__ import annotations

from ..base import CheckDef
from .intake import check_contributing_present, check_contributing_template_present

CHECKS: tuple[CheckDef, ...] = (
    CheckDef("contributing.present", "contributing", "contribution guide describes issue, fork and pull request steps", 300, check_contributing_present, fix_hint="Describe the issue -> fork -> pull request workflow in CONTRIBUTING.md.", result_code="CONTRIBUTING_INTAKE"),
    CheckDef("contributing.template_present", "contributing", "contribution guide carries a guide template", 300, check_contributing_template_present, fix_hint="Add a ```markdown template showing the Do's/Don'ts layout.", result_code="CONTRIBUTING_TEMPLATE"),
)
