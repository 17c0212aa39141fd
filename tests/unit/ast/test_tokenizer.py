from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from squiggle_core.ast.tokenizer import TokenKind, tokenize
from squiggle_core.errors import ParseError


class TestTokenizer:
    def test_numbers_keep_int_and_float(self):
        tokens = tokenize("1 2.5 3e2")
        assert [t.value for t in tokens[:-1]] == [1, 2.5, 300.0]
        assert isinstance(tokens[0].value, int)
        assert tokens[-1].kind is TokenKind.EOF

    def test_unit_suffix(self):
        token = tokenize("5k")[0]
        assert token.kind is TokenKind.NUMBER
        assert token.value == 5
        assert token.unit == "k"

    def test_identifier_starting_like_unit_is_not_a_suffix(self):
        tokens = tokenize("5 mean")
        assert tokens[0].unit is None
        assert tokens[1].text == "mean"

    def test_longest_symbol_wins(self):
        texts = [t.text for t in tokenize("a -> b .* c <= d")[:-1]]
        assert texts == ["a", "->", "b", ".*", "c", "<=", "d"]

    def test_comments_and_newlines(self):
        tokens = tokenize("a // line\n/* block\n */ b")
        assert [t.text for t in tokens[:-1]] == ["a", "b"]
        assert tokens[1].newline_before

    def test_string_escapes(self):
        assert tokenize(r'"a\nbA"')[0].value == "a\nbA"
        assert tokenize("'single'")[0].value == "single"

    def test_positions_are_one_based(self):
        token = tokenize("x = 1\n  foo")[3]
        assert token.text == "foo"
        assert (token.start.line, token.start.column) == (2, 3)
        assert token.start.offset == 8

    def test_unterminated_string(self):
        with pytest.raises(ParseError, match="Unterminated string"):
            tokenize('"abc')

    def test_unexpected_character(self):
        with pytest.raises(ParseError, match="Unexpected character"):
            tokenize("a # b")
