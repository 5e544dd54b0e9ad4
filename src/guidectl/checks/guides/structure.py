from __future__ import annotations

from ...corpus.guide import PART_ORDER, PRACTICE_LEVEL, find_heading
from ...corpus.loader import Corpus
from ..base import Severity, Violation, finding

_PART_NAMES = {"description": "description", "do": "Do's", "dont": "Don'ts", "examples": "examples"}


def check_guides_title_pattern(corpus: Corpus) -> list[Violation]:
    errors: list[Violation] = []
    pattern = corpus.config.title_pattern
    for guide in corpus.guides():
        rel = corpus.rel(guide.path)
        if guide.title is None:
            first = guide.headings[0] if guide.headings else None
            line = first.line if first else 0
            errors.append(finding("guide must open with a level-1 title heading", path=rel, line=line))
            continue
        if guide.language is None:
            errors.append(finding(f"title `{guide.title}` does not match `{pattern}`", path=rel, line=guide.title_line))
        for extra in guide.headings[1:]:
            if extra.level == 1:
                errors.append(finding(f"second level-1 heading `{extra.text}`", path=rel, line=extra.line))
    return errors


def check_guides_toc_complete(corpus: Corpus) -> list[Violation]:
    errors: list[Violation] = []
    config = corpus.config
    for guide in corpus.guides():
        rel = corpus.rel(guide.path)
        toc_heading = find_heading(list(guide.headings), 2, config.toc_heading)
        if toc_heading is None:
            errors.append(finding(f"missing `## {config.toc_heading}` section", path=rel, line=guide.title_line))
            continue
        toc_anchors = {entry.anchor for entry in guide.toc}
        for heading in guide.headings:
            if heading is toc_heading or heading.level < 2 or heading.level > config.toc_depth:
                continue
            if heading.anchor not in toc_anchors:
                errors.append(
                    finding(f"heading `{heading.text}` has no table of contents entry (#{heading.anchor})", path=rel, line=heading.line)
                )
        known = {heading.anchor for heading in guide.headings}
        seen: set[str] = set()
        for entry in guide.toc:
            if entry.anchor not in known:
                errors.append(finding(f"table of contents entry `{entry.text}` links to unknown anchor #{entry.anchor}", path=rel, line=entry.line))
            elif entry.anchor in seen:
                errors.append(
                    finding(f"table of contents lists #{entry.anchor} more than once", path=rel, line=entry.line, severity=Severity.WARN)
                )
            seen.add(entry.anchor)
    return errors


def check_guides_tiers_present(corpus: Corpus) -> list[Violation]:
    errors: list[Violation] = []
    tiers = corpus.config.tiers
    for guide in corpus.guides():
        rel = corpus.rel(guide.path)
        headings = list(guide.headings)
        basic = find_heading(headings, 2, tiers.basic)
        advanced = find_heading(headings, 2, tiers.advanced)
        if basic is None:
            errors.append(finding(f"missing `## {tiers.basic}` section", path=rel))
        if advanced is None:
            errors.append(finding(f"missing `## {tiers.advanced}` section", path=rel))
        if basic and advanced and advanced.line < basic.line:
            errors.append(finding(f"`## {tiers.advanced}` must follow `## {tiers.basic}`", path=rel, line=advanced.line))
        for heading, practices in ((basic, guide.basic), (advanced, guide.advanced)):
            if heading is not None and not practices:
                errors.append(
                    finding(
                        f"`{heading.text}` has no practice subsections (level {PRACTICE_LEVEL} headings)",
                        path=rel,
                        line=heading.line,
                        severity=Severity.WARN,
                    )
                )
    return errors


def check_guides_practice_sections(corpus: Corpus) -> list[Violation]:
    errors: list[Violation] = []
    for guide in corpus.guides():
        rel = corpus.rel(guide.path)
        for practice in guide.practices:
            for present, items, label in (
                (practice.has_do_section, practice.do_list, "Do's"),
                (practice.has_dont_section, practice.dont_list, "Don'ts"),
            ):
                if not present:
                    errors.append(finding(f"practice `{practice.title}` has no {label} section", path=rel, line=practice.line))
                elif not items:
                    errors.append(finding(f"practice `{practice.title}` has an empty {label} list", path=rel, line=practice.line))
    return errors


def check_guides_practice_order(corpus: Corpus) -> list[Violation]:
    errors: list[Violation] = []
    expected = " → ".join(_PART_NAMES[part] for part in PART_ORDER)
    for guide in corpus.guides():
        rel = corpus.rel(guide.path)
        for practice in guide.practices:
            if not practice.rationale:
                errors.append(finding(f"practice `{practice.title}` has no description before its Do's", path=rel, line=practice.line))
            ranks = [PART_ORDER.index(part) for part in practice.part_order]
            if ranks != sorted(ranks) or len(set(practice.part_order)) != len(practice.part_order):
                actual = " → ".join(_PART_NAMES[part] for part in practice.part_order)
                errors.append(
                    finding(f"practice `{practice.title}` sections out of order ({actual}); expected {expected}", path=rel, line=practice.line)
                )
    return errors


def check_guides_example_pairing(corpus: Corpus) -> list[Violation]:
    errors: list[Violation] = []
    for guide in corpus.guides():
        rel = corpus.rel(guide.path)
        for practice in guide.practices:
            if not practice.examples:
                errors.append(finding(f"practice `{practice.title}` has no code examples", path=rel, line=practice.line, severity=Severity.WARN))
                continue
            labels = [example.label for example in practice.examples]
            if "bad" in labels and "good" not in labels:
                first_bad = next(example for example in practice.examples if example.label == "bad")
                errors.append(finding(f"practice `{practice.title}` shows a BAD example without a GOOD one", path=rel, line=first_bad.line))
            if not any(labels):
                errors.append(
                    finding(
                        f"practice `{practice.title}` examples are not labelled BAD/GOOD",
                        path=rel,
                        line=practice.examples[0].line,
                        severity=Severity.WARN,
                    )
                )
    return errors
