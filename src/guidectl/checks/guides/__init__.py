from __future__ import annotations

from ..base import CheckDef
from .integrity import check_guides_fence_language, check_guides_links_exist
from .structure import (
    check_guides_example_pairing,
    check_guides_practice_order,
    check_guides_practice_sections,
    check_guides_tiers_present,
    check_guides_title_pattern,
    check_guides_toc_complete,
)

CHECKS: tuple[CheckDef, ...] = (
    CheckDef("guides.title_pattern", "guides", "guides open with the template title", 500, check_guides_title_pattern, fix_hint="Use `# <Language> Best Practices: From Basics to Advanced` as the only level-1 heading.", result_code="GUIDE_TITLE"),
    CheckDef("guides.toc_complete", "guides", "table of contents and section headings match both ways", 800, check_guides_toc_complete, fix_hint="Run `guidectl guide toc <guide> --write` to rebuild the table of contents.", result_code="GUIDE_TOC_DRIFT"),
    CheckDef("guides.tiers_present", "guides", "guides have Basic then Advanced practice tiers", 500, check_guides_tiers_present, fix_hint="Add `## Basic Practices` and `## Advanced Practices` with ### practice subsections.", result_code="GUIDE_TIERS"),
    CheckDef("guides.practice_sections", "guides", "every practice lists Do's and Don'ts", 800, check_guides_practice_sections, fix_hint="Add non-empty `#### Do's` and `#### Don'ts` lists to the practice.", result_code="GUIDE_PRACTICE_SECTIONS"),
    CheckDef("guides.practice_order", "guides", "practices read description, Do's, Don'ts, examples", 800, check_guides_practice_order, fix_hint="Reorder the practice: description, Do's, Don'ts, then examples.", result_code="GUIDE_PRACTICE_ORDER"),
    CheckDef("guides.example_pairing", "guides", "BAD examples are paired with GOOD examples", 800, check_guides_example_pairing, fix_hint="Follow every `BAD` example with a `GOOD` one.", result_code="GUIDE_EXAMPLE_PAIRING"),
    CheckDef("guides.fence_language", "guides", "fenced code blocks declare a language", 800, check_guides_fence_language, fix_hint="Tag the opening fence, e.g. ```python.", result_code="GUIDE_FENCE_LANGUAGE"),
    CheckDef("guides.links_exist", "guides", "relative links and anchors resolve", 1200, check_guides_links_exist, fix_hint="Fix broken relative links or heading anchors.", result_code="GUIDE_LINK_BROKEN"),
)
