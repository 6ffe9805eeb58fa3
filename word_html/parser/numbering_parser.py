"""Parse numbering.xml into numbering model definitions."""
from __future__ import annotations

from typing import Dict, Optional
from xml.etree import ElementTree as ET

from word_html.model.numbering_model import (
    AbstractNumberingDefinition,
    NumberingCatalog,
    NumberingInstance,
    NumberingLevel,
)
from word_html.utils.logger import get_logger
from word_html.utils.xml_utils import Namespaces, get_attr, get_int_attr, parse_xml

LOGGER = get_logger(__name__)


class NumberingParser:
    """Parser for numbering definitions defined in numbering.xml."""

    def __init__(self, numbering_xml: Optional[bytes]) -> None:
        self._numbering_xml = numbering_xml

    def parse(self) -> NumberingCatalog:
        if not self._numbering_xml:
            return NumberingCatalog()
        try:
            root = parse_xml(self._numbering_xml).getroot()
        except (ET.ParseError, LookupError, ValueError) as exc:
            LOGGER.warning("Ignoring malformed numbering part: %s", exc)
            return NumberingCatalog()

        abstracts = self._parse_abstract_nums(root)
        instances = self._parse_nums(root)
        return NumberingCatalog(abstracts=abstracts, instances=instances)

    # ------------------------------------------------------------------
    def _parse_abstract_nums(self, root: ET.Element) -> Dict[int, AbstractNumberingDefinition]:
        abstracts: Dict[int, AbstractNumberingDefinition] = {}
        for abstract_el in root.findall("w:abstractNum", Namespaces.WORD):
            abstract_id = get_int_attr(abstract_el, None, "w:abstractNumId")
            if abstract_id is None:
                continue
            abstracts[abstract_id] = AbstractNumberingDefinition(
                abstract_num_id=abstract_id,
                levels=self._parse_levels(abstract_el),
            )
        return abstracts

    def _parse_levels(self, parent_el: ET.Element) -> Dict[int, NumberingLevel]:
        levels: Dict[int, NumberingLevel] = {}
        for lvl_el in parent_el.findall("w:lvl", Namespaces.WORD):
            level = self._parse_level(lvl_el)
            if level is not None:
                levels[level.level_index] = level
        return levels

    def _parse_level(self, lvl_el: ET.Element) -> Optional[NumberingLevel]:
        level_index = get_int_attr(lvl_el, None, "w:ilvl")
        if level_index is None:
            return None
        return NumberingLevel(
            level_index=level_index,
            num_format=get_attr(lvl_el, "w:numFmt", "w:val"),
            level_text=get_attr(lvl_el, "w:lvlText", "w:val"),
        )

    def _parse_nums(self, root: ET.Element) -> Dict[int, NumberingInstance]:
        instances: Dict[int, NumberingInstance] = {}
        for num_el in root.findall("w:num", Namespaces.WORD):
            num_id = get_int_attr(num_el, None, "w:numId")
            abstract_num_id = get_int_attr(num_el, "w:abstractNumId", "w:val")
            if num_id is None or abstract_num_id is None:
                continue
            instances[num_id] = NumberingInstance(
                num_id=num_id,
                abstract_num_id=abstract_num_id,
                level_overrides=self._parse_overrides(num_el),
            )
        return instances

    def _parse_overrides(self, num_el: ET.Element) -> Dict[int, NumberingLevel]:
        # Only overrides that redefine the level (w:lvl) change its format;
        # a bare w:startOverride keeps the abstract definition.
        overrides: Dict[int, NumberingLevel] = {}
        for override_el in num_el.findall("w:lvlOverride", Namespaces.WORD):
            lvl_el = override_el.find("w:lvl", Namespaces.WORD)
            if lvl_el is None:
                continue
            level = self._parse_level(lvl_el)
            if level is None:
                continue
            overrides[level.level_index] = level
        return overrides
