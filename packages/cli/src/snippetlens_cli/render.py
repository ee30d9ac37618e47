"""Rich renderables for formatted review sections.

Everything is built from ``rich.text.Text`` objects, never from console
markup strings, so brackets in model output print literally.
"""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.text import Text

from snippetlens_core.fragments import Fragment, FragmentKind, RenderedSection

ICON_GLYPHS = {"alert": "!", "code": "</>", "check": "✓"}

_LINE_STYLES = {
    FragmentKind.HEADING: "bold underline",
    FragmentKind.SUBHEADING: "bold",
    FragmentKind.PARAGRAPH: "",
    FragmentKind.LIST_ITEM: "",
}
_INLINE_CODE_STYLE = "bold cyan"
_CODE_BLOCK_STYLE = "on grey15"


def _inline_text(children: tuple[Fragment, ...], style: str = "") -> Text:
    text = Text(style=style)
    for child in children:
        if child.kind is FragmentKind.INLINE_CODE:
            text.append(child.text, style=_INLINE_CODE_STYLE)
        elif child.kind is FragmentKind.CODE_BLOCK:
            text.append(child.text, style=_CODE_BLOCK_STYLE)
        else:
            text.append(child.text)
            text.append_text(_inline_text(child.children))
    return text


def _code_block(fragment: Fragment) -> Panel:
    return Panel(Text(fragment.text.strip("\n")), style=_CODE_BLOCK_STYLE, expand=False)


def fragment_to_renderable(fragment: Fragment) -> RenderableType:
    if fragment.kind is FragmentKind.SPACER:
        return Text("")
    if fragment.kind is FragmentKind.LIST_ITEM:
        return Padding(_inline_text(fragment.children), (0, 0, 0, 2))
    if fragment.kind in _LINE_STYLES:
        return _inline_text(fragment.children, _LINE_STYLES[fragment.kind])

    # Line split around code blocks: stack the pieces vertically.
    parts: list[RenderableType] = []
    for child in fragment.children:
        if child.kind is FragmentKind.CODE_BLOCK:
            parts.append(_code_block(child))
        elif child.plain_text().strip():
            parts.append(_inline_text(child.children) if child.children else Text(child.text))
    return Group(*parts)


def section_header(section: RenderedSection) -> Text:
    arrow = "▾" if section.expanded else "▸"
    header = Text()
    header.append(ICON_GLYPHS[section.icon], style=section.color)
    header.append(f" {section.title.value} ")
    header.append(arrow, style="dim")
    return header


def section_to_renderable(section: RenderedSection) -> RenderableType:
    """Header strip only when collapsed, a bordered panel when expanded."""
    header = section_header(section)
    if not section.expanded:
        return header
    body = Group(*(fragment_to_renderable(line) for line in section.lines))
    return Panel(body, title=header, title_align="left", border_style=section.color)
