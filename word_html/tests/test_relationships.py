"""Tests for relationship parsing and target resolution."""
import unittest

from word_html.parser.rels_parser import RELTYPE_IMAGE, RelationshipMap, resolve_target_path


doc_rels_xml = b"""
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/styles" Target="styles.xml"/>
  <Relationship Id="rId3" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="media/image1.png"/>
  <Relationship Id="rId4" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="../word/media/image2.jpeg"/>
  <Relationship Id="rId5" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink" Target="https://example.com" TargetMode="External"/>
  <Relationship Id="rId6" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="/word/media/image3.gif"/>
</Relationships>
"""


class RelationshipMapTest(unittest.TestCase):
    """Validate id → target mapping and its graceful degradation."""

    def setUp(self) -> None:
        self.relationships = RelationshipMap.parse(doc_rels_xml)

    def test_maps_ids_to_targets(self) -> None:
        self.assertEqual(len(self.relationships), 5)
        self.assertEqual(self.relationships["rId3"], "media/image1.png")
        self.assertEqual(self.relationships.get("rId5"), "https://example.com")
        rel = self.relationships.find("rId3")
        assert rel is not None
        self.assertEqual(rel.rel_type, RELTYPE_IMAGE)
        self.assertFalse(rel.is_external)

    def test_unknown_id_misses_without_error(self) -> None:
        self.assertIsNone(self.relationships.get("rId99"))
        self.assertIsNone(self.relationships.find("rId99"))
        self.assertIsNone(self.relationships.resolve_part("rId99"))
        self.assertIsNone(self.relationships.resolve_part(None))

    def test_resolve_part_normalizes_targets(self) -> None:
        self.assertEqual(self.relationships.resolve_part("rId3"), "word/media/image1.png")
        self.assertEqual(self.relationships.resolve_part("rId4"), "word/media/image2.jpeg")
        self.assertEqual(self.relationships.resolve_part("rId6"), "word/media/image3.gif")

    def test_external_targets_never_resolve(self) -> None:
        self.assertIsNone(self.relationships.resolve_part("rId5"))

    def test_malformed_or_absent_manifest_is_empty(self) -> None:
        self.assertEqual(len(RelationshipMap.parse(b"<Relationships><oops")), 0)
        self.assertEqual(len(RelationshipMap.parse(None)), 0)
        self.assertEqual(len(RelationshipMap.parse(b"")), 0)

    def test_unknown_declared_encoding_is_empty(self) -> None:
        manifest = b'<?xml version="1.0" encoding="bogus"?><Relationships/>'
        self.assertEqual(len(RelationshipMap.parse(manifest)), 0)


    def test_map_is_read_only(self) -> None:
        with self.assertRaises(TypeError):
            self.relationships["rId7"] = "media/other.png"  # type: ignore[index]

    def test_resolve_target_path_helper(self) -> None:
        self.assertEqual(resolve_target_path("media/a.png"), "word/media/a.png")
        self.assertEqual(resolve_target_path("./media/a.png"), "word/media/a.png")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
