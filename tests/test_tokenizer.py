"""Tests for tokenizer module."""

import pytest

from dota_loadscreen_export.errors import ParseError
from dota_loadscreen_export.tokenizer import (
    BraceClose,
    BraceOpen,
    KeyValue,
    Scalar,
    classify_line,
    tokenize,
)


def quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


class TestTokenize:
    """Test quoted token extraction."""

    def test_key_value_line(self) -> None:
        """Test that a key and a value separated by tabs give two tokens."""
        assert tokenize('\t\t"prefab"\t\t"loading_screen"') == ["prefab", "loading_screen"]

    def test_single_quoted_token(self) -> None:
        """Test that a lone quoted key gives one token without quotes."""
        assert tokenize('\t"items"') == ["items"]

    def test_empty_value(self) -> None:
        """Test that an empty quoted value is kept."""
        assert tokenize('"name"  ""') == ["name", ""]

    def test_escaped_quote_and_backslash(self) -> None:
        """Test that escaped quotes and backslashes land in the token."""
        assert tokenize(r'"a\"b"  "c\\d"') == ['a"b', "c\\d"]

    def test_escape_before_token_prefixes_it(self) -> None:
        """Test that an escaped backslash outside quotes starts the next token."""
        assert tokenize(r'\\"key"') == ["\\key"]

    def test_escaped_quote_before_token_prefixes_it(self) -> None:
        """Test that an escaped quote outside quotes starts the next token."""
        assert tokenize(r'\" "a"') == ['"a']

    @pytest.mark.parametrize("literals", [
        ["plain"],
        ['say "hi"'],
        ["back\\slash", "ends with \\"],
        ['"', "\\\\"],
        ["name", 'mixed \\" both'],
    ])
    def test_recovers_quoted_literals(self, literals) -> None:
        """Test that quoting literals then tokenizing returns the literals."""
        line = "\t".join(quote(text) for text in literals)
        assert tokenize(line) == literals

    @pytest.mark.parametrize("line", ["{", "\t\t}", "", "no quotes here"])
    def test_unquoted_line_falls_back_to_itself(self, line) -> None:
        """Test that a line without quoted content is returned as-is."""
        assert tokenize(line) == [line]

    def test_unterminated_quote_is_dropped(self) -> None:
        """Test that an open quote at end of line keeps only closed tokens."""
        assert tokenize('"key" "val') == ["key"]

    def test_only_unterminated_quote_falls_back(self) -> None:
        """Test that a line with nothing but an open quote is returned whole."""
        assert tokenize('  "open') == ['  "open']


class TestClassifyLine:
    """Test tagging of tokenized lines."""

    def test_braces(self) -> None:
        """Test that bare braces become brace kinds."""
        assert classify_line("\t{") == BraceOpen()
        assert classify_line("}  ") == BraceClose()

    def test_scalar_strips_quotes(self) -> None:
        """Test that a single quoted token becomes a scalar."""
        assert classify_line('\t\t"1234"') == Scalar("1234")

    def test_key_value(self) -> None:
        """Test that two tokens become a key/value pair."""
        assert classify_line('"asset"\t"loadingscreens/axe"') == KeyValue("asset", "loadingscreens/axe")

    def test_too_many_tokens(self) -> None:
        """Test that three tokens on one line are rejected."""
        with pytest.raises(ParseError, match="Expected 1 or 2 tokens"):
            classify_line('"a" "b" "c"')
