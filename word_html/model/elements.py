"""In-memory representation of the parsed document body."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Union

DEFAULT_NUM_ID = 1


class ListType(enum.Enum):
    """Kind of HTML list a group of list paragraphs is emitted as."""

    ORDERED = "ol"
    UNORDERED = "ul"

    @property
    def tag(self) -> str:
        return self.value

    @classmethod
    def from_num_id(cls, num_id: Optional[int]) -> "ListType":
        """Infer the list type from the parity of the numbering id (even → ordered)."""
        if num_id is None:
            num_id = DEFAULT_NUM_ID
        return cls.ORDERED if num_id % 2 == 0 else cls.UNORDERED


@dataclass(slots=True)
class DrawingReference:
    """An embedded picture, referenced through a relationship id."""

    r_id: str
    description: Optional[str] = None


@dataclass(slots=True)
class Run:
    """Contiguous text sharing one formatting state."""

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    drawing: Optional[DrawingReference] = None


@dataclass(slots=True)
class ListMembership:
    """Numbering reference (``w:numPr``) attached to a paragraph."""

    num_id: Optional[int] = None
    level: int = 0


@dataclass(slots=True)
class Paragraph:
    """Block-level paragraph with its alignment, indentation and runs."""

    runs: List[Run] = field(default_factory=list)
    alignment: Optional[str] = None
    indent_left: Optional[int] = None
    list_membership: Optional[ListMembership] = None

    @property
    def is_list_item(self) -> bool:
        return self.list_membership is not None


@dataclass(slots=True)
class TableCell:
    """Single table cell; holds paragraphs and nested tables in order."""

    content: List[Union[Paragraph, "Table"]] = field(default_factory=list)


@dataclass(slots=True)
class TableRow:
    """Row with a sequence of cells."""

    cells: List[TableCell] = field(default_factory=list)


@dataclass(slots=True)
class Table:
    """Tabular structure extracted from Word tables."""

    rows: List[TableRow] = field(default_factory=list)


@dataclass(slots=True)
class StructuredBlock:
    """Structured content block (``w:sdt``); only its pictures are rendered."""

    drawings: List[DrawingReference] = field(default_factory=list)


BlockElement = Union[Paragraph, Table, StructuredBlock]


@dataclass(slots=True)
class DocumentBody:
    """Ordered block-level content of ``w:body``."""

    blocks: List[BlockElement] = field(default_factory=list)


@dataclass(slots=True)
class MediaAsset:
    """Raw bytes of one embedded media entry, keyed by its package path."""

    target_path: str
    media_type: str
    binary_data: bytes
