"""Conversion settings shared by the library and the command line."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

LIST_TYPE_PARITY = "parity"
LIST_TYPE_NUMBERING = "numbering"
LIST_TYPE_STRATEGIES = (LIST_TYPE_PARITY, LIST_TYPE_NUMBERING)

DEFAULT_WRAPPER_CLASS = "docx-content"
DEFAULT_CONVERTER_EXECUTABLE = "libreoffice"
DEFAULT_CACHE_TTL = 3600


@dataclass(frozen=True)
class ConversionOptions:
    """Knobs that influence the produced markup and the collaborators around it."""

    wrapper_class: Optional[str] = DEFAULT_WRAPPER_CLASS
    list_type_strategy: str = LIST_TYPE_PARITY
    default_image_subtype: str = "png"
    converter_executable: str = DEFAULT_CONVERTER_EXECUTABLE
    converter_timeout: Optional[float] = None
    cache_ttl: int = DEFAULT_CACHE_TTL

    def __post_init__(self) -> None:
        if self.list_type_strategy not in LIST_TYPE_STRATEGIES:
            raise ValueError(
                f"Unknown list type strategy {self.list_type_strategy!r}; "
                f"expected one of {', '.join(LIST_TYPE_STRATEGIES)}"
            )
        if self.cache_ttl < 0:
            raise ValueError("cache_ttl must not be negative")
        if self.converter_timeout is not None and self.converter_timeout <= 0:
            raise ValueError("converter_timeout must be positive")
