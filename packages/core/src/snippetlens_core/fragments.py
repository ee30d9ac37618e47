"""Turn raw review lines into structured display fragments.

Each line is classified on its own into a small, closed set of fragment
kinds. Fragments carry plain text only; it is up to the UI layer (Jinja2
templates, rich panels) to render them, and every text node must be escaped
there. Model output is never passed through as markup.

Rules, applied in order to every line:

  1. blank line                  -> spacer
  2. contains ``##``             -> subheading (markers removed)
  3. else contains ``#``         -> heading (markers removed)
  4. starts with ``<digits>.``   -> list item (overrides 2/3, keeps the line)
  5. triple-backtick fence       -> code block
  6. single-backtick span        -> inline code
  7. anything else non-blank     -> paragraph
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from snippetlens_core.sections import Section, SectionDisplayState, SectionTitle

_NUMBERED_RE = re.compile(r"^\d+\.")
# Capturing groups keep the enclosed text in re.split output at odd indices.
_FENCE_RE = re.compile(r"```([\s\S]*?)```")
_INLINE_CODE_RE = re.compile(r"`([^`]+)`")


class FragmentKind(str, Enum):
    SPACER = "spacer"
    HEADING = "heading"
    SUBHEADING = "subheading"
    LIST_ITEM = "list_item"
    CODE_BLOCK = "code_block"
    INLINE_CODE = "inline_code"
    PARAGRAPH = "paragraph"
    RAW_TEXT = "raw_text"


@dataclass(frozen=True)
class Fragment:
    kind: FragmentKind
    text: str = ""
    children: tuple[Fragment, ...] = ()

    def to_dict(self) -> dict:
        data: dict = {"kind": self.kind.value, "text": self.text}
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    def plain_text(self) -> str:
        """Concatenated text of this fragment and its descendants, markers excluded."""
        return self.text + "".join(child.plain_text() for child in self.children)


# (icon, colour) per title; UI layers map the icon name to a glyph.
SECTION_ICONS: dict[SectionTitle, tuple[str, str]] = {
    SectionTitle.OVERVIEW: ("code", "grey50"),
    SectionTitle.BUGS: ("alert", "red"),
    SectionTitle.PERFORMANCE: ("code", "blue"),
    SectionTitle.SECURITY: ("alert", "dark_orange"),
    SectionTitle.STYLE: ("code", "purple"),
    SectionTitle.SUGGESTIONS: ("check", "green"),
}


@dataclass(frozen=True)
class RenderedSection:
    """A section ready for display: header strip data plus formatted lines."""

    title: SectionTitle
    icon: str
    color: str
    expanded: bool
    lines: tuple[Fragment, ...]

    def to_dict(self) -> dict:
        return {
            "title": self.title.value,
            "icon": self.icon,
            "color": self.color,
            "expanded": self.expanded,
            "lines": [line.to_dict() for line in self.lines],
        }


def _inline_fragments(text: str) -> list[Fragment]:
    fragments = []
    for i, part in enumerate(_INLINE_CODE_RE.split(text)):
        if not part:
            continue
        kind = FragmentKind.INLINE_CODE if i % 2 else FragmentKind.RAW_TEXT
        fragments.append(Fragment(kind, part))
    return fragments


def _content_fragments(text: str) -> list[Fragment]:
    """Split text into code blocks and inline runs, keeping every character."""
    fragments: list[Fragment] = []
    for i, part in enumerate(_FENCE_RE.split(text)):
        if i % 2:
            fragments.append(Fragment(FragmentKind.CODE_BLOCK, part))
        elif part:
            fragments.extend(_inline_fragments(part))
    return fragments


def format_line(line: str) -> Fragment:
    """Classify one raw review line into a fragment tree. Never raises."""
    if not line.strip():
        return Fragment(FragmentKind.SPACER)

    kind: FragmentKind | None = None
    text = line
    if "##" in line:
        kind, text = FragmentKind.SUBHEADING, line.replace("##", "").strip()
    elif "#" in line:
        kind, text = FragmentKind.HEADING, line.replace("#", "").strip()

    if _NUMBERED_RE.match(line):
        kind, text = FragmentKind.LIST_ITEM, line

    if kind is not None:
        return Fragment(kind, children=tuple(_content_fragments(text)))

    if not _FENCE_RE.search(text):
        return Fragment(FragmentKind.PARAGRAPH, children=tuple(_inline_fragments(text)))

    # Plain line carrying one or more code blocks: the prose around them
    # becomes paragraphs of its own.
    children: list[Fragment] = []
    for i, part in enumerate(_FENCE_RE.split(text)):
        if i % 2:
            children.append(Fragment(FragmentKind.CODE_BLOCK, part))
        elif part.strip():
            children.append(Fragment(FragmentKind.PARAGRAPH, children=tuple(_inline_fragments(part))))
        elif part:
            children.append(Fragment(FragmentKind.RAW_TEXT, part))
    return Fragment(FragmentKind.RAW_TEXT, children=tuple(children))


def render_section(section: Section, state: SectionDisplayState | None = None) -> RenderedSection:
    """Format every line of a section and attach its header strip data."""
    icon, color = SECTION_ICONS[section.title]
    expanded = state.is_expanded(section.title) if state is not None else True
    return RenderedSection(
        title=section.title,
        icon=icon,
        color=color,
        expanded=expanded,
        lines=tuple(format_line(line) for line in section.lines),
    )


def render_review(sections: list[Section], state: SectionDisplayState | None = None) -> list[RenderedSection]:
    return [render_section(section, state) for section in sections]
