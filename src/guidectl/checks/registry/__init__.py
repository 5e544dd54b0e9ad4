from __future__ import annotations

from ..base import CheckDef
from .integrity import (
    check_registry_linked_guide_titles,
    check_registry_linked_guides_exist,
    check_registry_status_link_invariant,
    check_registry_table_present,
    check_registry_topics_present,
    check_registry_unlisted_guides,
)

CHECKS: tuple[CheckDef, ...] = (
    CheckDef("registry.table_present", "registry", "require a registry table in README", 300, check_registry_table_present, fix_hint="Add a | Language | Status | Link | Topics | table to README.md.", result_code="REGISTRY_TABLE_MISSING"),
    CheckDef("registry.status_link_invariant", "registry", "available entries carry a link and coming-soon entries do not", 300, check_registry_status_link_invariant, fix_hint="Link available guides; use `-` as the link of coming-soon entries.", result_code="REGISTRY_STATUS_LINK"),
    CheckDef("registry.linked_guides_exist", "registry", "registry links resolve to guide files", 500, check_registry_linked_guides_exist, fix_hint="Fix the link or add the guide file in the same change.", result_code="REGISTRY_LINK_BROKEN"),
    CheckDef("registry.linked_guide_titles", "registry", "linked guides open with the required title", 1000, check_registry_linked_guide_titles, fix_hint="Start the guide with `# <Language> Best Practices: From Basics to Advanced`.", result_code="REGISTRY_GUIDE_TITLE"),
    CheckDef("registry.topics_present", "registry", "registry entries summarize their topics", 300, check_registry_topics_present, fix_hint="List the topics a guide covers, comma separated.", result_code="REGISTRY_TOPICS_MISSING"),
    CheckDef("registry.unlisted_guides", "registry", "every guide file is listed in the registry", 500, check_registry_unlisted_guides, fix_hint="Add the guide to the README registry or exclude it in guidectl.yaml.", result_code="REGISTRY_GUIDE_UNLISTED"),
)
