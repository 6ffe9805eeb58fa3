"""DOCX package loader responsible for unpacking XML parts and media."""
from __future__ import annotations

import io
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from word_html.errors import MissingDocumentPart, UnreadableContainer
from word_html.parser.rels_parser import RelationshipMap
from word_html.utils.logger import get_logger

LOGGER = get_logger(__name__)

DOCUMENT_XML_PATH = "word/document.xml"
DOCUMENT_RELS_PATH = "word/_rels/document.xml.rels"
NUMBERING_XML_PATH = "word/numbering.xml"
MEDIA_PREFIX = "word/media/"


@dataclass(slots=True)
class DocxPackage:
    """Raw parts extracted from a DOCX archive.

    Everything the conversion needs is read eagerly, so the archive is
    closed again before any XML parsing happens.
    """

    document_xml: bytes
    document_rels_xml: Optional[bytes] = None
    numbering_xml: Optional[bytes] = None
    media: Dict[str, bytes] = field(default_factory=dict)

    relationships: RelationshipMap = field(init=False)

    def __post_init__(self) -> None:
        self.relationships = RelationshipMap.parse(self.document_rels_xml)

    @classmethod
    def load(cls, docx_path: Union[str, Path]) -> "DocxPackage":
        """Open a DOCX archive from disk and extract its parts."""
        path = Path(docx_path)
        if not path.is_file():
            raise UnreadableContainer(f"Not a readable file: {path}")
        return cls._read_archive(path, path.name)

    @classmethod
    def from_bytes(cls, payload: bytes, name: str = "<memory>") -> "DocxPackage":
        """Build a package from archive bytes already held in memory."""
        return cls._read_archive(io.BytesIO(payload), name)

    # ------------------------------------------------------------------
    # Internal bootstrap
    @classmethod
    def _read_archive(cls, source: Union[Path, io.BytesIO], name: str) -> "DocxPackage":
        try:
            with zipfile.ZipFile(source) as docx_zip:
                names = set(docx_zip.namelist())
                if DOCUMENT_XML_PATH not in names:
                    raise MissingDocumentPart(f"{name} has no {DOCUMENT_XML_PATH} entry")
                document_xml = docx_zip.read(DOCUMENT_XML_PATH)
                rels_xml = docx_zip.read(DOCUMENT_RELS_PATH) if DOCUMENT_RELS_PATH in names else None
                numbering_xml = docx_zip.read(NUMBERING_XML_PATH) if NUMBERING_XML_PATH in names else None
                media = {
                    entry: docx_zip.read(entry)
                    for entry in sorted(names)
                    if entry.startswith(MEDIA_PREFIX) and not entry.endswith("/")
                }
        except (
            zipfile.BadZipFile,
            zlib.error,
            OSError,
            EOFError,
            # Encrypted or unsupported entries.
            RuntimeError,
            NotImplementedError,
        ) as exc:
            raise UnreadableContainer(f"Cannot open {name} as a zip archive: {exc}", exc) from exc

        LOGGER.debug(
            "Loaded %s: document=%d bytes, rels=%s, numbering=%s, media=%d",
            name,
            len(document_xml),
            rels_xml is not None,
            numbering_xml is not None,
            len(media),
        )
        return cls(
            document_xml=document_xml,
            document_rels_xml=rels_xml,
            numbering_xml=numbering_xml,
            media=media,
        )
