"""Helpers for building small WordprocessingML documents in tests."""
from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Mapping, Optional, Union

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
R_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
REL_IMAGE = f"{R_NS}/image"

DOCUMENT_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    f'<w:document xmlns:w="{W_NS}" xmlns:r="{R_NS}"'
    ' xmlns:wp="http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing"'
    ' xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main"'
    ' xmlns:pic="http://schemas.openxmlformats.org/drawingml/2006/picture"'
    ' xmlns:mc="http://schemas.openxmlformats.org/markup-compatibility/2006"'
    ' xmlns:v="urn:schemas-microsoft-com:vml">'
    "<w:body>{body}</w:body></w:document>"
)

RELS_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    "{relationships}</Relationships>"
)

# Smallest valid PNG header; the bytes only need to round-trip through base64.
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00"


def document_xml(body: str) -> str:
    return DOCUMENT_TEMPLATE.format(body=body)


def rels_xml(targets: Mapping[str, str], rel_type: str = REL_IMAGE) -> str:
    relationships = "".join(
        f'<Relationship Id="{r_id}" Type="{rel_type}" Target="{target}"/>'
        for r_id, target in targets.items()
    )
    return RELS_TEMPLATE.format(relationships=relationships)


def paragraph(text: str = "", ppr: str = "", rpr: str = "") -> str:
    run = ""
    if text:
        run_props = f"<w:rPr>{rpr}</w:rPr>" if rpr else ""
        run = f'<w:r>{run_props}<w:t xml:space="preserve">{text}</w:t></w:r>'
    para_props = f"<w:pPr>{ppr}</w:pPr>" if ppr else ""
    return f"<w:p>{para_props}{run}</w:p>"


def list_paragraph(text: str, num_id: Optional[int] = None, level: int = 0) -> str:
    num_id_xml = f'<w:numId w:val="{num_id}"/>' if num_id is not None else ""
    return paragraph(text, ppr=f'<w:numPr><w:ilvl w:val="{level}"/>{num_id_xml}</w:numPr>')


def inline_picture(r_id: str, description: str = "picture") -> str:
    return (
        "<w:drawing><wp:inline>"
        f'<wp:docPr id="1" name="Picture 1" descr="{description}"/>'
        '<a:graphic><a:graphicData uri="http://schemas.openxmlformats.org/drawingml/2006/picture">'
        f'<pic:pic><pic:blipFill><a:blip r:embed="{r_id}"/></pic:blipFill></pic:pic>'
        "</a:graphicData></a:graphic></wp:inline></w:drawing>"
    )


def structured_block(inner: str) -> str:
    return f"<w:sdt><w:sdtPr/><w:sdtContent>{inner}</w:sdtContent></w:sdt>"


def build_docx(
    target: Union[str, Path, io.BytesIO, None] = None,
    body: str = "",
    rels: Optional[str] = None,
    media: Optional[Mapping[str, bytes]] = None,
    numbering: Optional[str] = None,
    include_document: bool = True,
) -> bytes:
    """Write a DOCX archive to ``target`` (if given) and return its bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("[Content_Types].xml", '<?xml version="1.0"?><Types/>')
        if include_document:
            archive.writestr("word/document.xml", document_xml(body))
        if rels is not None:
            archive.writestr("word/_rels/document.xml.rels", rels)
        if numbering is not None:
            archive.writestr("word/numbering.xml", numbering)
        for name, data in (media or {}).items():
            archive.writestr(name, data)
    payload = buffer.getvalue()
    if isinstance(target, io.BytesIO):
        target.write(payload)
    elif target is not None:
        Path(target).write_bytes(payload)
    return payload
