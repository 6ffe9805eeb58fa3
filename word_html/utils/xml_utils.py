"""Helper functions to work with XML namespaces and parsing."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
from xml.etree import ElementTree as ET


@dataclass(frozen=True)
class Namespaces:
    """Common OpenXML namespace prefixes used across parsers."""

    WORD: Dict[str, str] = None  # type: ignore[assignment]
    RELS: Dict[str, str] = None  # type: ignore[assignment]
    DRAWING: Dict[str, str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:  # pragma: no cover
        raise RuntimeError("Namespaces should not be instantiated")


Namespaces.WORD = {  # type: ignore[attr-defined]
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
}
Namespaces.RELS = {  # type: ignore[attr-defined]
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}
Namespaces.DRAWING = {  # type: ignore[attr-defined]
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
    "wp": "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing",
    "v": "urn:schemas-microsoft-com:vml",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
}


def parse_xml(data: bytes) -> ET.ElementTree:
    """Parse XML from raw bytes with sane defaults."""
    return ET.ElementTree(ET.fromstring(data))


def qualify(name: str) -> str:
    """Expand a ``prefix:local`` name into Clark notation (``{uri}local``)."""
    prefix, local = name.split(":", 1)
    for mapping in (Namespaces.WORD, Namespaces.DRAWING):
        if prefix in mapping:
            return f"{{{mapping[prefix]}}}{local}"
    raise KeyError(f"Unknown namespace prefix: {prefix}")


def local_name(tag: str) -> str:
    return tag.split("}", 1)[-1]


def is_word_tag(element: ET.Element, name: str) -> bool:
    """Match an element by WordprocessingML namespace URI and local name."""
    return element.tag == f"{{{Namespaces.WORD['w']}}}{name}"


def get_attr(element: Optional[ET.Element], child_name: Optional[str], attr_name: str) -> Optional[str]:
    """Return a namespaced attribute from ``element`` or one of its direct children."""
    if element is None:
        return None
    target = element.find(child_name, Namespaces.WORD) if child_name else element
    if target is None:
        return None
    return target.attrib.get(qualify(attr_name))


def get_int_attr(element: Optional[ET.Element], child_name: Optional[str], attr_name: str) -> Optional[int]:
    value = get_attr(element, child_name, attr_name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
