"""Tests for the package's public interface."""

import strict_markup_parser
from strict_markup_parser import Element, ParseErrorKind, parse, parse_string


class TestPackageInterface:
    """Tests for top-level exports."""

    def test_version(self):
        """Test version metadata."""
        assert strict_markup_parser.__version__ == "0.1.0"

    def test_all_exports_exist(self):
        """Test every name in __all__ is importable."""
        for name in strict_markup_parser.__all__:
            assert hasattr(strict_markup_parser, name), name

    def test_quick_start(self):
        """Test the simplest usage path."""
        node = parse("<p>hello</p>")

        assert isinstance(node, Element)
        assert node.text_content == "hello"

    def test_error_kinds(self):
        """Test every failure kind has a display string."""
        assert {kind.value for kind in ParseErrorKind} == {
            "Invalid HTML tag",
            "Unexpected end of file",
            "Mismatched closing tag",
            "Invalid attribute value",
            "Nesting too deep",
        }

    def test_result_flow(self):
        """Test the result-based API round trip."""
        assert parse_string("<br/>").unwrap() == Element.new("br")
