"""
Integration tests for the complete DOCX conversion pipeline.

Archives are built on disk and converted through the public entry points.
"""

import base64
import os
import re
import tempfile
import unittest
from pathlib import Path

from word_html.config import ConversionOptions
from word_html.converter import convert_docx_bytes, convert_to_html
from word_html.errors import MissingDocumentPart, UnreadableContainer, UnsupportedFormat
from word_html.tests.support import (
    PNG_BYTES,
    build_docx,
    inline_picture,
    list_paragraph,
    paragraph,
    rels_xml,
    structured_block,
)

NUMBERING_XML = (
    '<w:numbering xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
    '<w:abstractNum w:abstractNumId="0"><w:lvl w:ilvl="0"><w:numFmt w:val="decimal"/></w:lvl></w:abstractNum>'
    '<w:num w:numId="1"><w:abstractNumId w:val="0"/></w:num>'
    "</w:numbering>"
)


class IntegrationTest(unittest.TestCase):
    """End-to-end conversion of small documents."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _docx(self, name: str = "doc.docx", **kwargs) -> Path:
        path = self.tmp_path / name
        build_docx(path, **kwargs)
        return path

    def test_minimal_hello_document(self) -> None:
        html = convert_to_html(self._docx(body=paragraph("Hello")))

        self.assertEqual(html, '<div class="docx-content"><p style="text-align:left"><span>Hello</span></p></div>')
        self.assertEqual(len(re.findall(r"<p[ >]", html)), 1)

    def test_markup_in_text_is_escaped(self) -> None:
        html = convert_to_html(self._docx(body=paragraph("a &lt;b&gt; &amp; c")))

        self.assertIn("a &lt;b&gt; &amp; c", html)
        self.assertNotIn("<b>", html)

    def test_adjacent_list_paragraphs(self) -> None:
        same = convert_to_html(self._docx("same.docx", body=list_paragraph("a", 1) + list_paragraph("b", 1)))
        self.assertEqual(same.count("<ul>"), 1)
        self.assertEqual(same.count("<li "), 2)

        mixed = convert_to_html(self._docx("mixed.docx", body=list_paragraph("a", 1) + list_paragraph("b", 2)))
        self.assertIn("</ul><ol>", mixed)
        self.assertEqual(mixed.count("<li "), 2)

    def test_numbering_strategy_reads_numbering_part(self) -> None:
        path = self._docx(body=list_paragraph("a", 1), numbering=NUMBERING_XML)

        self.assertIn("<ul>", convert_to_html(path))
        self.assertIn("<ol>", convert_to_html(path, ConversionOptions(list_type_strategy="numbering")))

    def test_structured_block_with_unknown_relationship(self) -> None:
        picture = "<w:p><w:r>" + inline_picture("rId404") + "</w:r></w:p>"
        path = self._docx(
            body=paragraph("before") + structured_block(picture) + paragraph("after"),
            rels=rels_xml({"rId1": "media/image1.png"}),
            media={"word/media/image1.png": PNG_BYTES},
        )

        html = convert_to_html(path)

        self.assertNotIn("<img", html)
        self.assertIn("<span>before</span>", html)
        self.assertIn("<span>after</span>", html)

    def test_unreadable_optional_parts_degrade(self) -> None:
        bogus = '<?xml version="1.0" encoding="bogus"?><Relationships/>'
        picture = "<w:p><w:r>" + inline_picture("rId1") + "</w:r></w:p>"
        path = self._docx(
            body=list_paragraph("item", num_id=1) + structured_block(picture),
            rels=bogus,
            numbering=bogus,
            media={"word/media/image1.png": PNG_BYTES},
        )

        html = convert_to_html(path, ConversionOptions(list_type_strategy="numbering"))

        self.assertIn("<ul><li", html)
        self.assertIn("<span>item</span>", html)
        self.assertNotIn("<img", html)

    def test_structured_block_picture_is_inlined(self) -> None:

        picture = "<w:p><w:r>" + inline_picture("rId1", "logo") + "</w:r></w:p>"
        path = self._docx(
            body=structured_block(picture),
            rels=rels_xml({"rId1": "media/image1.png"}),
            media={"word/media/image1.png": PNG_BYTES},
        )

        html = convert_to_html(path, ConversionOptions(wrapper_class=None))

        encoded = base64.b64encode(PNG_BYTES).decode("ascii")
        self.assertEqual(html, f'<img src="data:image/png;base64,{encoded}" alt="logo" />')

    def test_table_dimensions(self) -> None:
        row = "<w:tr>" + "".join("<w:tc>" + paragraph(str(c)) + "</w:tc>" for c in range(3)) + "</w:tr>"
        html = convert_to_html(self._docx(body="<w:tbl>" + row * 2 + "</w:tbl>"))

        rows = re.findall(r"<tr>(.*?)</tr>", html)
        self.assertEqual(len(rows), 2)
        self.assertTrue(all(r.count("<td>") == 3 for r in rows))

    def test_conversion_is_idempotent(self) -> None:
        path = self._docx(body=paragraph("Same") + list_paragraph("x", 2))
        os.utime(path, (1_700_000_000, 1_700_000_000))

        self.assertEqual(convert_to_html(path), convert_to_html(path))

    def test_bytes_and_path_agree(self) -> None:
        payload = build_docx(body=paragraph("Bytes"))
        path = self.tmp_path / "bytes.docx"
        path.write_bytes(payload)

        self.assertEqual(convert_docx_bytes(payload), convert_to_html(path))

    def test_extension_is_case_insensitive(self) -> None:
        html = convert_to_html(self._docx("UPPER.DOCX", body=paragraph("Hi")))
        self.assertIn("<span>Hi</span>", html)

    def test_failures_are_typed(self) -> None:
        with self.assertRaises(UnreadableContainer):
            convert_to_html(self.tmp_path / "missing.docx")

        text_file = self.tmp_path / "notes.txt"
        text_file.write_text("plain")
        with self.assertRaises(UnsupportedFormat):
            convert_to_html(text_file)

        with self.assertRaises(MissingDocumentPart):
            convert_to_html(self._docx("nodoc.docx", include_document=False))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
