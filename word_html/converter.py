"""Public conversion entry points: ``.docx``/``.doc`` path → HTML fragment."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from word_html.config import LIST_TYPE_NUMBERING, ConversionOptions
from word_html.errors import UnreadableContainer, UnsupportedFormat
from word_html.external.doc_converter import DocumentConverter, LibreOfficeConverter, convert_with
from word_html.model.numbering_model import NumberingCatalog
from word_html.parser.document_parser import DocumentParser
from word_html.parser.docx_loader import DocxPackage
from word_html.parser.numbering_parser import NumberingParser
from word_html.renderer.html_renderer import HtmlRenderer
from word_html.renderer.image_resolver import ImageResolver
from word_html.utils.logger import get_logger

LOGGER = get_logger(__name__)

PathLike = Union[str, Path]


def convert_to_html(
    path: PathLike,
    options: Optional[ConversionOptions] = None,
    doc_converter: Optional[DocumentConverter] = None,
) -> str:
    """Convert a Word document to an HTML fragment, dispatching on its extension.

    Raises a :class:`~word_html.errors.ConversionError` subclass when no
    complete fragment can be produced.
    """
    source = Path(path)
    if not source.is_file():
        raise UnreadableContainer(f"Not a readable file: {source}")

    suffix = source.suffix.lower()
    if suffix == ".docx":
        return convert_docx_to_html(source, options)
    if suffix == ".doc":
        return convert_doc_to_html(source, options, doc_converter)
    raise UnsupportedFormat(f"Unsupported file type {suffix or '(none)'}: {source.name}")


def convert_docx_to_html(path: PathLike, options: Optional[ConversionOptions] = None) -> str:
    """Load, parse and render a ``.docx`` archive."""
    LOGGER.info("Converting %s", Path(path).name)
    return render_package(DocxPackage.load(path), options)


def convert_docx_bytes(payload: bytes, options: Optional[ConversionOptions] = None) -> str:
    """Same as :func:`convert_docx_to_html` for an archive already in memory."""
    return render_package(DocxPackage.from_bytes(payload), options)


def render_package(package: DocxPackage, options: Optional[ConversionOptions] = None) -> str:
    options = options or ConversionOptions()
    body = DocumentParser(package).parse()

    numbering: Optional[NumberingCatalog] = None
    if options.list_type_strategy == LIST_TYPE_NUMBERING:
        numbering = NumberingParser(package.numbering_xml).parse()

    images = ImageResolver(package.relationships, package.media, options.default_image_subtype)
    return HtmlRenderer(images, options, numbering).render(body)


def convert_doc_to_html(
    path: PathLike,
    options: Optional[ConversionOptions] = None,
    converter: Optional[DocumentConverter] = None,
) -> str:
    """Convert a legacy ``.doc`` file through an external converter."""
    options = options or ConversionOptions()
    if converter is None:
        converter = LibreOfficeConverter(options.converter_executable, options.converter_timeout)
    LOGGER.info("Converting %s with %s", Path(path).name, type(converter).__name__)
    return convert_with(converter, path)
