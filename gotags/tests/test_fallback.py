"""Unit tests for line-pattern fallback extraction."""

import unittest
from pathlib import Path

from gotags.fallback import extract_fallback_tags, iter_fallback_tags
from gotags.models import SourceView, Tag
from gotags.parser import parse_bytes

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestFallbackExtraction(unittest.TestCase):

    def setUp(self) -> None:
        self.source = (FIXTURES_DIR / "broken.go").read_bytes()

    def test_fixture_does_not_parse(self) -> None:
        self.assertTrue(parse_bytes(self.source).root_node.has_error)

    def test_column_zero_declarations_only(self) -> None:
        tags = extract_fallback_tags(SourceView(self.source))
        self.assertEqual(
            tags,
            [
                Tag(pattern=b"package broken", name=b"broken", line=1),
                Tag(pattern=b"type Config", name=b"Config", line=5),
                Tag(pattern=b"var a", name=b"a", line=13),
                Tag(pattern=b"func (c *Config) Describe", name=b"Describe", line=15),
                Tag(pattern=b"func helper", name=b"helper", line=19),
                Tag(pattern=b"const Limit", name=b"Limit", line=22),
            ],
        )

    def test_no_offsets(self) -> None:
        tags = list(iter_fallback_tags(SourceView(self.source)))
        self.assertTrue(all(tag.offset is None for tag in tags))

    def test_implicit_names(self) -> None:
        tags = list(iter_fallback_tags(SourceView(b"package p\nfunc f() {\n"), explicit_names=False))
        self.assertEqual(
            tags,
            [Tag(pattern=b"package p", line=1), Tag(pattern=b"func f", line=2)],
        )
        self.assertFalse(any(tag.is_explicit for tag in tags))

    def test_crlf_and_unicode_names(self) -> None:
        source = "package p\r\nvar größe int\r\n".encode("utf-8")
        tags = list(iter_fallback_tags(SourceView(source)))
        self.assertEqual([tag.name for tag in tags], [b"p", "größe".encode("utf-8")])

    def test_one_tag_per_line(self) -> None:
        tags = list(iter_fallback_tags(SourceView(b"var x int; var y int\n")))
        self.assertEqual(tags, [Tag(pattern=b"var x", name=b"x", line=1)])

    def test_keyword_prefix_is_not_a_declaration(self) -> None:
        tags = list(iter_fallback_tags(SourceView(b"variable x\nfunctional y\n")))
        self.assertEqual(tags, [])


if __name__ == "__main__":
    unittest.main()
