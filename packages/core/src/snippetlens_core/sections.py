"""Split a model's free-text review into titled sections.

The model is asked to organise its review under headings, but the exact
wording varies between calls and providers. Sections are therefore detected
heuristically: a line that mentions one of a title's trigger keywords AND
carries a heading marker (``#``) or a colon starts a new section. Everything
before the first such line lands in an implicit Overview section.

The heuristic is deliberately simple and single-pass. A response that never
uses ``#`` or ``:`` collapses into one Overview section; that is accepted
behaviour, not a parsing failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SectionTitle(str, Enum):
    OVERVIEW = "Overview"
    BUGS = "Bugs"
    PERFORMANCE = "Performance"
    SECURITY = "Security"
    STYLE = "Style"
    SUGGESTIONS = "Suggestions"


# Evaluation order matters: the first title whose keyword matches wins.
SECTION_KEYWORDS: tuple[tuple[SectionTitle, tuple[str, ...]], ...] = (
    (SectionTitle.BUGS, ("bugs", "errors", "issues")),
    (SectionTitle.PERFORMANCE, ("performance", "optimizations", "efficiency")),
    (SectionTitle.SECURITY, ("security", "vulnerabilities", "risk")),
    (SectionTitle.STYLE, ("style", "practices", "conventions", "formatting")),
    (SectionTitle.SUGGESTIONS, ("suggestions", "improvements", "recommendations")),
)

_HEADER_MARKERS = ("#", ":")


@dataclass(frozen=True)
class Section:
    """A titled, ordered group of review lines."""

    title: SectionTitle
    lines: tuple[str, ...]

    def to_dict(self) -> dict:
        return {"title": self.title.value, "lines": list(self.lines)}


def match_header(line: str) -> SectionTitle | None:
    """Return the section title a line opens, or None if it is not a header.

    When keywords of several titles occur, the one appearing first in the
    line wins ("Performance issues" is Performance, not Bugs); keywords at
    the same position fall back to declaration order.
    """
    if not any(marker in line for marker in _HEADER_MARKERS):
        return None
    lowered = line.lower()
    best: tuple[int, int] | None = None
    for order, (_, keywords) in enumerate(SECTION_KEYWORDS):
        positions = [lowered.find(keyword) for keyword in keywords]
        found = [pos for pos in positions if pos >= 0]
        if found and (best is None or min(found) < best[0]):
            best = (min(found), order)
    if best is None:
        return None
    return SECTION_KEYWORDS[best[1]][0]


def segment_review(text: str) -> list[Section]:
    """Partition review text into sections in order of appearance.

    Header lines are kept as the first line of the section they open, so
    concatenating every section's lines reproduces the input line for line.
    """
    sections: list[Section] = []
    current_title = SectionTitle.OVERVIEW
    buffer: list[str] = []

    for line in text.split("\n"):
        title = match_header(line)
        if title is None:
            buffer.append(line)
            continue
        if buffer:
            sections.append(Section(title=current_title, lines=tuple(buffer)))
        current_title = title
        buffer = [line]

    if buffer:
        sections.append(Section(title=current_title, lines=tuple(buffer)))
    return sections


@dataclass
class SectionDisplayState:
    """Expand/collapse flag per section title.

    Keys are always ``SectionTitle`` members; every title is present from
    construction so a toggle can never create a stray entry.
    """

    expanded: dict[SectionTitle, bool] = field(default_factory=lambda: {t: True for t in SectionTitle})

    @classmethod
    def with_collapsed(cls, titles) -> SectionDisplayState:
        """Build a state where the given titles start collapsed and the rest expanded."""
        state = cls()
        for title in titles:
            state.expanded[SectionTitle(title)] = False
        return state

    def is_expanded(self, title: SectionTitle) -> bool:
        return self.expanded[SectionTitle(title)]

    def toggle(self, title: SectionTitle) -> bool:
        """Flip one title's flag and return its new value."""
        key = SectionTitle(title)
        self.expanded[key] = not self.expanded[key]
        return self.expanded[key]
