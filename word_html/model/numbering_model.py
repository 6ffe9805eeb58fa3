"""Numbering model captures list definitions extracted from numbering.xml."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

UNORDERED_FORMATS = frozenset({"bullet", "none"})


@dataclass(slots=True)
class NumberingLevel:
    """Defines numbering behavior for a specific indentation level."""

    level_index: int
    num_format: Optional[str]
    level_text: Optional[str] = None

    @property
    def is_ordered(self) -> bool:
        return self.num_format not in UNORDERED_FORMATS


@dataclass(slots=True)
class AbstractNumberingDefinition:
    """Template describing multi-level numbering behavior."""

    abstract_num_id: int
    levels: Dict[int, NumberingLevel] = field(default_factory=dict)


@dataclass(slots=True)
class NumberingInstance:
    """Concrete numbering instance bound to an abstract definition."""

    num_id: int
    abstract_num_id: int
    level_overrides: Dict[int, NumberingLevel] = field(default_factory=dict)


@dataclass(slots=True)
class NumberingCatalog:
    """Collection of abstract definitions and concrete numbering instances."""

    abstracts: Dict[int, AbstractNumberingDefinition] = field(default_factory=dict)
    instances: Dict[int, NumberingInstance] = field(default_factory=dict)

    def get_abstract(self, abstract_num_id: Optional[int]) -> Optional[AbstractNumberingDefinition]:
        if abstract_num_id is None:
            return None
        return self.abstracts.get(abstract_num_id)

    def get_instance(self, num_id: Optional[int]) -> Optional[NumberingInstance]:
        if num_id is None:
            return None
        return self.instances.get(num_id)

    def resolve_level(self, num_id: Optional[int], level: int) -> Optional[NumberingLevel]:
        """Follow instance → (override | abstract) → level; ``None`` when any link is missing."""
        instance = self.get_instance(num_id)
        if instance is None:
            return None
        if level in instance.level_overrides:
            return instance.level_overrides[level]
        abstract = self.get_abstract(instance.abstract_num_id)
        if abstract is None:
            return None
        return abstract.levels.get(level)
