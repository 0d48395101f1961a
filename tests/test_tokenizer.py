"""Tests for the single-pass tokenizer."""

import time

import pytest

from runmark.parsing import has_formatting, has_formatting_markers, tokenize
from runmark.tokens import Token, TokenKind


def kinds(text: str) -> list[TokenKind]:
    return [t.kind for t in tokenize(text)]


def values(text: str) -> list[str]:
    return [t.value for t in tokenize(text)]


class TestPlainText:
    def test_empty(self) -> None:
        assert tokenize("") == []

    def test_plain_text_is_one_token(self) -> None:
        """Characters without markup merge into a single TEXT token."""
        assert tokenize("hello world") == [Token(TokenKind.TEXT, "hello world", 0, 11)]

    @pytest.mark.parametrize("text", ["a+b", "x = y", "1 + 2 = 3", "a]b)c"])
    def test_lone_plus_equals_and_closers_are_text(self, text: str) -> None:
        assert kinds(text) == [TokenKind.TEXT]
        assert values(text) == [text]


class TestMarkers:
    def test_bold_markers(self) -> None:
        assert kinds("a **b**") == [TokenKind.TEXT, TokenKind.BOLD, TokenKind.TEXT, TokenKind.BOLD]

    @pytest.mark.parametrize(
        ("marker", "kind"),
        [
            ("*", TokenKind.ITALIC),
            ("_", TokenKind.ITALIC),
            ("**", TokenKind.BOLD),
            ("__", TokenKind.BOLD),
            ("***", TokenKind.BOLD_ITALIC),
            ("___", TokenKind.BOLD_ITALIC),
            ("~~", TokenKind.STRIKETHROUGH),
            ("~", TokenKind.SUBSCRIPT),
            ("^", TokenKind.SUPERSCRIPT),
            ("`", TokenKind.CODE),
            ("++", TokenKind.UNDERLINE),
            ("==", TokenKind.HIGHLIGHT),
        ],
    )
    def test_marker_kinds(self, marker: str, kind: TokenKind) -> None:
        tokens = tokenize(f"{marker}x{marker}")
        assert [t.kind for t in tokens] == [kind, TokenKind.TEXT, kind]
        assert tokens[0].value == marker
        assert tokens[0].length == len(marker)
        assert tokens[2].position == len(marker) + 1

    def test_longest_match_first(self) -> None:
        """Four asterisks are a bold-italic marker followed by an italic one."""
        tokens = tokenize("****")
        assert [t.kind for t in tokens] == [TokenKind.BOLD_ITALIC, TokenKind.ITALIC]
        assert [t.value for t in tokens] == ["***", "*"]

    def test_three_tildes(self) -> None:
        assert kinds("~~~") == [TokenKind.STRIKETHROUGH, TokenKind.SUBSCRIPT]

    def test_subscript_chemistry(self) -> None:
        assert values("H~2~O") == ["H", "~", "2", "~", "O"]

    def test_mixed_emphasis_characters_are_separate(self) -> None:
        assert values("*_") == ["*", "_"]

    def test_all_formatting_kinds_flagged(self) -> None:
        for token in tokenize("**a** *b* ~~c~~ ++d++ ==e== `f` ^g^ ~h~"):
            if token.kind is not TokenKind.TEXT:
                assert token.kind.is_formatting


class TestEscapes:
    def test_escaped_marker_becomes_text(self) -> None:
        """The backslash is dropped and the escaped character points at itself."""
        assert tokenize("\\*x") == [
            Token(TokenKind.TEXT, "*", 1, 1),
            Token(TokenKind.TEXT, "x", 2, 1),
        ]

    @pytest.mark.parametrize("char", list("*_~`+=^\\[](){}"))
    def test_every_escapable_character(self, char: str) -> None:
        assert tokenize(f"\\{char}") == [Token(TokenKind.TEXT, char, 1, 1)]

    def test_backslash_before_ordinary_character(self) -> None:
        assert values("a\\b") == ["a\\b"]

    def test_trailing_backslash(self) -> None:
        assert values("a\\") == ["a\\"]

    def test_escaped_backslash_does_not_escape_next(self) -> None:
        assert kinds("\\\\*") == [TokenKind.TEXT, TokenKind.ITALIC]


class TestLinks:
    def test_link_window(self) -> None:
        assert tokenize("[go](x.com)") == [
            Token(TokenKind.LINK_START, "[", 0, 1),
            Token(TokenKind.TEXT, "go", 1, 2),
            Token(TokenKind.LINK_SEPARATOR, "](", 3, 2),
            Token(TokenKind.TEXT, "x.com", 5, 5),
            Token(TokenKind.LINK_END, ")", 10, 1),
        ]

    def test_empty_link_parts(self) -> None:
        tokens = tokenize("[]()")
        assert [t.kind for t in tokens] == [
            TokenKind.LINK_START,
            TokenKind.TEXT,
            TokenKind.LINK_SEPARATOR,
            TokenKind.TEXT,
            TokenKind.LINK_END,
        ]
        assert tokens[1].value == ""
        assert tokens[3].value == ""

    def test_nested_brackets_and_parens(self) -> None:
        tokens = tokenize("[a [b] c](http://x.com/(y))")
        assert tokens[1].value == "a [b] c"
        assert tokens[3].value == "http://x.com/(y)"
        assert len(tokens) == 5

    def test_escaped_bracket_inside_link_text(self) -> None:
        tokens = tokenize("[a\\]b](u)")
        assert tokens[1].value == "a\\]b"

    def test_link_text_keeps_markers(self) -> None:
        assert tokenize("[**b**](u)")[1].value == "**b**"

    @pytest.mark.parametrize("text", ["[a] b", "[a](b", "[a", "[a] (b)", "a]("])
    def test_malformed_link_is_text(self, text: str) -> None:
        assert values(text) == [text]

    def test_malformed_link_resumes_after_bracket(self) -> None:
        """A failed scan only gives up the bracket; later markup still counts."""
        assert kinds("[**a**") == [TokenKind.TEXT, TokenKind.BOLD, TokenKind.TEXT, TokenKind.BOLD]
        assert values("[**a**")[0] == "["

    def test_text_before_and_after_link(self) -> None:
        assert values("see [x](y) now") == ["see ", "[", "x", "](", "y", ")", " now"]
        assert tokenize("see [x](y) now")[0].kind.is_link is False
        assert tokenize("see [x](y) now")[1].kind.is_link

    def test_link_after_unclosed_brackets(self) -> None:
        tokens = tokenize("[[[ [a](b)")
        assert tokens[0] == Token(TokenKind.TEXT, "[[[ ", 0, 4)
        assert [t.value for t in tokens[1:]] == ["[", "a", "](", "b", ")"]

    @pytest.mark.parametrize("unit", ["[", "[a](", "[a]", "(["])
    def test_unclosed_brackets_scale_linearly(self, unit: str) -> None:
        """Many failed link openers tokenize in linear time."""
        text = unit * 20_000
        start = time.perf_counter()
        tokens = tokenize(text)
        assert time.perf_counter() - start < 2.0
        assert "".join(t.literal for t in tokens) == text


class TestPlaceholders:
    def test_placeholder(self) -> None:
        assert tokenize("{name}") == [Token(TokenKind.PLACEHOLDER, "name", 0, 6)]

    def test_literal_restores_braces(self) -> None:
        assert tokenize("a {x_1}")[1].literal == "{x_1}"

    @pytest.mark.parametrize("text", ["{}", "{ x}", "{a-b}", "{x", "x}"])
    def test_invalid_placeholder_is_text(self, text: str) -> None:
        assert values(text) == [text]

    def test_digit_key(self) -> None:
        assert values("{0} and {1}") == ["0", " and ", "1"]

    def test_double_brace_form(self) -> None:
        assert tokenize("{{0}}") == [Token(TokenKind.PLACEHOLDER, "0", 0, 5)]
        assert tokenize("a {{key}} b")[1].literal == "{{key}}"

    def test_unbalanced_double_brace_falls_back(self) -> None:
        tokens = tokenize("{{x}")
        assert tokens[0] == Token(TokenKind.TEXT, "{", 0, 1)
        assert tokens[1] == Token(TokenKind.PLACEHOLDER, "x", 1, 3)

    @pytest.mark.parametrize("text", ["{{}}", "{{ x}}"])
    def test_invalid_double_brace_is_text(self, text: str) -> None:
        assert values(text) == [text]


class TestHasFormatting:
    def test_plain(self) -> None:
        assert has_formatting("plain text, with punctuation!") is False

    @pytest.mark.parametrize("char", list("*_~`+=^\\[{"))
    def test_trigger_characters(self, char: str) -> None:
        assert has_formatting(f"a{char}b") is True

    @pytest.mark.parametrize("char", list("*_~`+=^\\"))
    def test_styling_markers(self, char: str) -> None:
        assert has_formatting_markers(f"a{char}b") is True

    def test_structural_syntax_is_not_styling(self) -> None:
        text = "text with [brackets] and {braces} and (parens)"
        assert has_formatting(text) is True
        assert has_formatting_markers(text) is False
