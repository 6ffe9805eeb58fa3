"""Common helpers shared by renderer implementations."""
from __future__ import annotations

from typing import Dict, List, Optional

from word_html.model.elements import Paragraph, Run
from word_html.utils.units import twips_to_pixels

DEFAULT_ALIGNMENT = "left"


def run_to_css(run: Run) -> Dict[str, str]:
    """Convert run formatting flags into CSS properties."""
    css: Dict[str, str] = {}
    if run.bold:
        css["font-weight"] = "bold"
    if run.italic:
        css["font-style"] = "italic"
    if run.underline:
        css["text-decoration"] = "underline"
    return css


def paragraph_to_css(paragraph: Paragraph) -> Dict[str, str]:
    """Convert paragraph alignment and left indent into CSS properties."""
    css = {"text-align": paragraph.alignment or DEFAULT_ALIGNMENT}
    if paragraph.indent_left is not None and paragraph.indent_left > 0:
        css["margin-left"] = f"{twips_to_pixels(paragraph.indent_left)}px"
    return css


def css_declarations(css: Dict[str, str]) -> str:
    return ";".join(f"{key}:{value}" for key, value in css.items())


def style_attribute(css: Dict[str, str]) -> str:
    """Render `` style="..."`` or an empty string when there is nothing to declare."""
    if not css:
        return ""
    return f' style="{css_declarations(css)}"'


def join_fragments(fragments: List[Optional[str]]) -> str:
    return "".join(fragment for fragment in fragments if fragment)
