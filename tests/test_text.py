"""Tests for plain-text extraction from runs."""

from runmark import extract_text, parse


class TestExtractText:
    def test_plain(self) -> None:
        assert extract_text(parse("hello")) == "hello"

    def test_formatting_removed(self) -> None:
        assert extract_text(parse("a **b** *c* ~~d~~")) == "a b c d"

    def test_links_and_scripts(self) -> None:
        assert extract_text(parse("E=mc^2^ see [**the** docs](x.com)")) == "E=mc2 see the docs"

    def test_placeholders_contribute_nothing(self) -> None:
        assert extract_text(parse("a {x} b", placeholders={"x": object()})) == "a  b"

    def test_link_display_text(self) -> None:
        link = parse("[**a** b](c.com)")[0].content
        assert link.display_text == "a b"
