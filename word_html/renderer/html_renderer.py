"""Render the parsed document body into an HTML fragment."""
from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import List, Optional

from word_html.config import LIST_TYPE_NUMBERING, ConversionOptions
from word_html.model.elements import (
    BlockElement,
    DocumentBody,
    ListType,
    Paragraph,
    Run,
    StructuredBlock,
    Table,
)
from word_html.model.numbering_model import NumberingCatalog
from word_html.renderer.image_resolver import ImageResolver
from word_html.renderer.utils import join_fragments, paragraph_to_css, run_to_css, style_attribute
from word_html.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass
class PendingList:
    """List items buffered while consecutive list paragraphs share a type."""

    list_type: ListType
    items: List[str] = field(default_factory=list)

    def flush(self) -> str:
        tag = self.list_type.tag
        return f"<{tag}>{''.join(self.items)}</{tag}>"


class HtmlRenderer:
    """Produce HTML markup for a document body, preserving document order."""

    def __init__(
        self,
        images: ImageResolver,
        options: Optional[ConversionOptions] = None,
        numbering: Optional[NumberingCatalog] = None,
    ) -> None:
        self._images = images
        self._options = options or ConversionOptions()
        self._numbering = numbering

    def render(self, body: DocumentBody) -> str:
        """Render the body and wrap it in the configured container element."""
        fragment = self.render_blocks(body.blocks)
        wrapper_class = self._options.wrapper_class
        if wrapper_class is None:
            return fragment
        return f'<div class="{html.escape(wrapper_class, quote=True)}">{fragment}</div>'

    def render_blocks(self, blocks: List[BlockElement]) -> str:
        """Walk blocks in order, grouping adjacent list paragraphs of the same type.

        A pending list is flushed when a list paragraph of a different type
        arrives, when any other block arrives, and at the end of the body.
        """
        fragments: List[str] = []
        pending: Optional[PendingList] = None

        for block in blocks:
            if isinstance(block, Paragraph) and block.is_list_item:
                list_type = self.list_type_of(block)
                item = self.format_paragraph(block)
                if pending is not None and pending.list_type is list_type:
                    pending.items.append(item)
                    continue
                if pending is not None:
                    fragments.append(pending.flush())
                pending = PendingList(list_type, [item])
                continue

            if pending is not None:
                fragments.append(pending.flush())
                pending = None
            fragments.append(self.format_block(block))

        if pending is not None:
            fragments.append(pending.flush())
        return "".join(fragments)

    def list_type_of(self, paragraph: Paragraph) -> ListType:
        membership = paragraph.list_membership
        num_id = membership.num_id if membership else None
        if self._options.list_type_strategy == LIST_TYPE_NUMBERING and self._numbering is not None:
            level = self._numbering.resolve_level(num_id, membership.level if membership else 0)
            if level is not None:
                return ListType.ORDERED if level.is_ordered else ListType.UNORDERED
            LOGGER.debug("No numbering definition for numId=%s, using parity", num_id)
        return ListType.from_num_id(num_id)

    # ------------------------------------------------------------------
    # Formatters
    def format_block(self, block: BlockElement) -> str:
        if isinstance(block, Paragraph):
            return self.format_paragraph(block)
        if isinstance(block, Table):
            return self.format_table(block)
        if isinstance(block, StructuredBlock):
            return self.format_structured_block(block)
        raise TypeError(f"Unsupported block element: {type(block).__name__}")

    def format_run(self, run: Run) -> str:
        if run.drawing is not None:
            return self._images.render(run.drawing)
        if not run.text:
            return ""
        text = html.escape(run.text, quote=True).replace("\n", "<br />")
        return f"<span{style_attribute(run_to_css(run))}>{text}</span>"

    def format_paragraph(self, paragraph: Paragraph) -> str:
        tag = "li" if paragraph.is_list_item else "p"
        content = join_fragments([self.format_run(run) for run in paragraph.runs])
        return f"<{tag}{style_attribute(paragraph_to_css(paragraph))}>{content}</{tag}>"

    def format_table(self, table: Table) -> str:
        parts = ['<table border="1">']
        for row in table.rows:
            parts.append("<tr>")
            for cell in row.cells:
                cell_html = join_fragments([self.format_block(item) for item in cell.content])
                parts.append(f"<td>{cell_html}</td>")
            parts.append("</tr>")
        parts.append("</table>")
        return "".join(parts)

    def format_structured_block(self, block: StructuredBlock) -> str:
        return join_fragments([self._images.render(drawing) for drawing in block.drawings])
