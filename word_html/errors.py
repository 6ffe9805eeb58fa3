"""Typed failures raised by the conversion entry points.

Every failure is terminal for a single conversion call. Problems inside the
document body (unknown relationship ids, missing media, absent properties)
are not errors; the parser degrades to omission or defaults instead.
"""
from __future__ import annotations

from typing import Optional


class ConversionError(Exception):
    """Base class for all conversion failures.

    Attributes:
        message: Human-readable description of the failure.
        original_error: The low-level exception that caused it, if any.
    """

    def __init__(self, message: str, original_error: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class UnsupportedFormat(ConversionError):
    """Raised when the input extension is neither ``.doc`` nor ``.docx``."""


class UnreadableContainer(ConversionError):
    """Raised when the path is missing, not a regular file, or not a zip archive."""


class MissingDocumentPart(ConversionError):
    """Raised when the archive lacks a usable ``word/document.xml``."""


class UnreadableExternalConverter(ConversionError):
    """Raised when the ``.doc`` converter cannot start or exits with an error."""


class MissingConvertedOutput(ConversionError):
    """Raised when the ``.doc`` converter succeeds but leaves no HTML behind."""
