"""Parse document.xml into structured content blocks."""
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Union
from xml.etree import ElementTree as ET

from word_html.errors import MissingDocumentPart
from word_html.model.elements import (
    BlockElement,
    DocumentBody,
    DrawingReference,
    ListMembership,
    Paragraph,
    Run,
    StructuredBlock,
    Table,
    TableCell,
    TableRow,
)
from word_html.parser.docx_loader import DocxPackage
from word_html.utils.logger import get_logger
from word_html.utils.xml_utils import (
    Namespaces,
    get_attr,
    get_int_attr,
    is_word_tag,
    local_name,
    parse_xml,
    qualify,
)

LOGGER = get_logger(__name__)

W = Namespaces.WORD["w"]
A = Namespaces.DRAWING["a"]
WP = Namespaces.DRAWING["wp"]
V = Namespaces.DRAWING["v"]
MC = "http://schemas.openxmlformats.org/markup-compatibility/2006"

ALIGNMENTS = {
    "left": "left",
    "start": "left",
    "center": "center",
    "right": "right",
    "end": "right",
    "both": "justify",
    "justify": "justify",
    "distribute": "justify",
}
FALSE_TOGGLES = frozenset({"0", "false", "off"})
# Inline containers whose runs belong to the surrounding paragraph.
INLINE_WRAPPERS = frozenset({"hyperlink", "smartTag", "ins", "fldSimple", "customXml"})


class DocumentParser:
    """Transforms Word body XML into model elements.

    Elements are matched by namespace URI and local name; prefixes used in
    the source document are irrelevant.
    """

    def __init__(self, package: DocxPackage) -> None:
        self._package = package

    def parse(self) -> DocumentBody:
        """Parse the document body into high-level block elements."""
        try:
            root = parse_xml(self._package.document_xml).getroot()
        except (ET.ParseError, LookupError, ValueError) as exc:
            raise MissingDocumentPart(f"Main document part is not well-formed XML: {exc}", exc) from exc

        body = root.find("w:body", Namespaces.WORD)
        if body is None:
            LOGGER.warning("document.xml missing body element")
            return DocumentBody()

        blocks: List[BlockElement] = []
        for child in list(body):
            if is_word_tag(child, "p"):
                blocks.append(self._parse_paragraph(child))
            elif is_word_tag(child, "tbl"):
                blocks.append(self._parse_table(child))
            elif is_word_tag(child, "sdt"):
                blocks.append(StructuredBlock(drawings=self._collect_drawings(child)))
            elif is_word_tag(child, "sectPr"):
                continue
            else:
                LOGGER.debug("Skipping unsupported element: %s", local_name(child.tag))
        return DocumentBody(blocks=blocks)

    # ------------------------------------------------------------------
    # Paragraphs and runs
    def _parse_paragraph(self, paragraph_el: ET.Element) -> Paragraph:
        ppr = paragraph_el.find("w:pPr", Namespaces.WORD)
        return Paragraph(
            runs=list(self._parse_inline(paragraph_el)),
            alignment=self._extract_alignment(ppr),
            indent_left=self._extract_indent(ppr),
            list_membership=self._extract_list_membership(ppr),
        )

    def _parse_inline(self, container: ET.Element) -> Iterator[Run]:
        for child in list(container):
            if child.tag == f"{{{W}}}r":
                yield from self._parse_run(child)
            elif child.tag.startswith(f"{{{W}}}") and local_name(child.tag) in INLINE_WRAPPERS:
                yield from self._parse_inline(child)
            elif is_word_tag(child, "sdt"):
                content = child.find("w:sdtContent", Namespaces.WORD)
                if content is not None:
                    yield from self._parse_inline(content)

    def _parse_run(self, run_el: ET.Element) -> List[Run]:
        """Parse a run element into text runs, splitting around drawings."""
        rpr = run_el.find("w:rPr", Namespaces.WORD)
        bold = self._toggle(rpr, "w:b")
        italic = self._toggle(rpr, "w:i")
        underline = self._underline(rpr)

        runs: List[Run] = []
        text_parts: List[str] = []

        def flush() -> None:
            if text_parts:
                runs.append(Run("".join(text_parts), bold, italic, underline))
                text_parts.clear()

        for child in list(run_el):
            tag = local_name(child.tag) if child.tag.startswith(f"{{{W}}}") else None
            if tag == "t":
                text_parts.append(child.text or "")
            elif tag == "tab":
                text_parts.append("\t")
            elif tag in ("br", "cr"):
                text_parts.append("\n")
            elif tag in ("drawing", "pict") or child.tag == f"{{{MC}}}AlternateContent":
                flush()
                for drawing in self._collect_drawings(child):
                    runs.append(Run("", bold, italic, underline, drawing=drawing))
        flush()
        return runs

    # ------------------------------------------------------------------
    # Tables
    def _parse_table(self, table_el: ET.Element) -> Table:
        rows: List[TableRow] = []
        for row_el in self._unwrap(table_el, "tr"):
            cells = [self._parse_cell(cell_el) for cell_el in self._unwrap(row_el, "tc")]
            rows.append(TableRow(cells=cells))
        return Table(rows=rows)

    def _parse_cell(self, cell_el: ET.Element) -> TableCell:
        content: List[Union[Paragraph, Table]] = []
        for child in self._unwrap(cell_el, "p", "tbl"):
            if is_word_tag(child, "p"):
                content.append(self._parse_paragraph(child))
            else:
                content.append(self._parse_table(child))
        return TableCell(content=content)

    def _unwrap(self, parent: ET.Element, *names: str) -> Iterator[ET.Element]:
        """Yield direct children named ``names``, looking through ``w:sdt`` wrappers."""
        for child in list(parent):
            if any(is_word_tag(child, name) for name in names):
                yield child
            elif is_word_tag(child, "sdt"):
                content = child.find("w:sdtContent", Namespaces.WORD)
                if content is not None:
                    yield from self._unwrap(content, *names)

    # ------------------------------------------------------------------
    # Drawings
    def _collect_drawings(self, element: ET.Element) -> List[DrawingReference]:
        """Find picture references anywhere below ``element``, in document order."""
        drawings: List[DrawingReference] = []
        self._walk_drawings(element, drawings)
        return drawings

    def _walk_drawings(self, node: ET.Element, drawings: List[DrawingReference]) -> None:
        if node.tag == f"{{{W}}}drawing":
            drawings.extend(self._parse_drawing(node))
            return
        if node.tag == f"{{{V}}}imagedata":
            r_id = node.attrib.get(qualify("r:id"))
            if r_id:
                drawings.append(DrawingReference(r_id=r_id, description=node.attrib.get("title")))
            return
        for child in list(node):
            # mc:Fallback repeats the mc:Choice picture for older readers.
            if child.tag == f"{{{MC}}}Fallback":
                continue
            self._walk_drawings(child, drawings)

    def _parse_drawing(self, drawing_el: ET.Element) -> Iterable[DrawingReference]:
        doc_pr = drawing_el.find(f".//{{{WP}}}docPr")
        description = None
        if doc_pr is not None:
            description = doc_pr.attrib.get("descr") or doc_pr.attrib.get("name")
        for blip in drawing_el.iter(f"{{{A}}}blip"):
            r_id = blip.attrib.get(qualify("r:embed"))
            if r_id:
                yield DrawingReference(r_id=r_id, description=description)

    # ------------------------------------------------------------------
    # Property extraction
    def _extract_alignment(self, ppr: Optional[ET.Element]) -> Optional[str]:
        value = get_attr(ppr, "w:jc", "w:val")
        if value is None:
            return None
        alignment = ALIGNMENTS.get(value)
        if alignment is None:
            LOGGER.debug("Unknown paragraph alignment %r, using left", value)
            return "left"
        return alignment

    def _extract_indent(self, ppr: Optional[ET.Element]) -> Optional[int]:
        left = get_int_attr(ppr, "w:ind", "w:left")
        if left is None:
            left = get_int_attr(ppr, "w:ind", "w:start")
        return left

    def _extract_list_membership(self, ppr: Optional[ET.Element]) -> Optional[ListMembership]:
        if ppr is None:
            return None
        num_pr = ppr.find("w:numPr", Namespaces.WORD)
        if num_pr is None:
            return None
        level = get_int_attr(num_pr, "w:ilvl", "w:val")
        return ListMembership(
            num_id=get_int_attr(num_pr, "w:numId", "w:val"),
            level=level if level is not None else 0,
        )

    def _toggle(self, rpr: Optional[ET.Element], name: str) -> bool:
        if rpr is None or rpr.find(name, Namespaces.WORD) is None:
            return False
        value = get_attr(rpr, name, "w:val")
        return value is None or value.lower() not in FALSE_TOGGLES

    def _underline(self, rpr: Optional[ET.Element]) -> bool:
        if rpr is None or rpr.find("w:u", Namespaces.WORD) is None:
            return False
        value = get_attr(rpr, "w:u", "w:val")
        return value is None or value.lower() != "none"
