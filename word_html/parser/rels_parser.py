"""Utilities for reading the main document's relationship part."""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional
from xml.etree import ElementTree as ET

from word_html.utils.logger import get_logger
from word_html.utils.xml_utils import Namespaces, parse_xml

LOGGER = get_logger(__name__)

WORD_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
RELTYPE_IMAGE = f"{WORD_REL_NS}/image"
RELTYPE_HYPERLINK = f"{WORD_REL_NS}/hyperlink"

DOCUMENT_BASE_DIR = "word"


@dataclass(frozen=True)
class Relationship:
    """Represents a single OPC relationship."""

    r_id: str
    target: str
    rel_type: str = ""
    is_external: bool = False


class RelationshipMap(Mapping[str, str]):
    """Immutable ``relationship id → target`` mapping for one document.

    Unknown ids simply miss; a malformed or absent manifest yields an empty map.
    """

    def __init__(self, relationships: Optional[Mapping[str, Relationship]] = None) -> None:
        self._by_id: Mapping[str, Relationship] = MappingProxyType(dict(relationships or {}))

    @classmethod
    def parse(cls, rels_xml: Optional[bytes]) -> "RelationshipMap":
        if not rels_xml:
            return cls()
        try:
            tree = parse_xml(rels_xml)
        except (ET.ParseError, LookupError, ValueError) as exc:
            LOGGER.warning("Ignoring malformed relationship part: %s", exc)
            return cls()
        return cls(cls._parse_relationship_part(tree))

    def __getitem__(self, r_id: str) -> str:
        return self._by_id[r_id].target

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def find(self, r_id: Optional[str]) -> Optional[Relationship]:
        """Return the full relationship record, or ``None`` if unknown."""
        if not r_id:
            return None
        return self._by_id.get(r_id)

    def resolve_part(self, r_id: Optional[str]) -> Optional[str]:
        """Return the package path an internal relationship points at.

        Targets are relative to ``word/``; ``..`` segments and absolute
        (``/word/...``) targets are normalised. External targets never resolve.
        """
        rel = self.find(r_id)
        if rel is None or rel.is_external or not rel.target:
            return None
        return resolve_target_path(rel.target)

    @staticmethod
    def _parse_relationship_part(tree: ET.ElementTree) -> Dict[str, Relationship]:
        result: Dict[str, Relationship] = {}
        for rel_el in tree.getroot().iter(f"{{{Namespaces.RELS['rel']}}}Relationship"):
            r_id = rel_el.attrib.get("Id")
            if not r_id:
                continue
            result[r_id] = Relationship(
                r_id=r_id,
                target=rel_el.attrib.get("Target", ""),
                rel_type=rel_el.attrib.get("Type", ""),
                is_external=rel_el.attrib.get("TargetMode") == "External",
            )
        return result


def resolve_target_path(target: str, base_dir: str = DOCUMENT_BASE_DIR) -> str:
    """Resolve a relationship target to a package entry name."""
    if target.startswith("/"):
        return posixpath.normpath(target.lstrip("/"))
    return posixpath.normpath(posixpath.join(base_dir, target))
