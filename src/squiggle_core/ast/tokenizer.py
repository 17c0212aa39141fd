"""
Tokenizer of the language.

Splits source text into :class:`Token` objects carrying their start and end
positions. Whitespace and comments (``// ...`` and ``/* ... */``) are
dropped; a token only remembers whether a line break preceded it, which is
what the parser needs to separate statements.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import bisect
import re
from dataclasses import dataclass
from enum import StrEnum

from squiggle_core.ast.nodes import UNIT_SUFFIXES
from squiggle_core.errors import ParseError
from squiggle_core.types import Location, Position, SourceId


class TokenKind(StrEnum):
    NUMBER = "number"
    STRING = "string"
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    SYMBOL = "symbol"
    EOF = "end of input"


KEYWORDS = frozenset({"true", "false", "if", "then", "else", "to", "export", "import", "as"})

# Longest symbols first so that ``->`` is not read as ``-`` and ``>``.
SYMBOLS: tuple[str, ...] = (
    "->", "==", "!=", "<=", ">=", "&&", "||",
    ".+", ".-", ".*", "./", ".^",
    "+", "-", "*", "/", "^", "<", ">", "!",
    "(", ")", "[", "]", "{", "}",
    ",", ":", ";", "=", "?", ".", "|", "@",
)  # fmt: skip

_RE_NUMBER = re.compile(r"\d+(\.\d+)?([eE][-+]?\d+)?")
_RE_IDENTIFIER = re.compile(r"[A-Za-z_]\w*")
_RE_UNIT = re.compile("(" + "|".join(re.escape(u) for u in UNIT_SUFFIXES) + r")(?![\w])")

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "/": "/",
}


@dataclass(frozen=True, slots=True)
class Token:
    """
    Lexical token.

    ``value`` is the decoded literal for numbers (``int`` or ``float``) and
    strings, and ``text`` otherwise. Number tokens with a unit suffix carry
    it in ``unit``.
    """

    kind: TokenKind
    text: str
    value: object
    start: Position
    end: Position
    newline_before: bool = False
    unit: str | None = None

    def is_symbol(self, *symbols: str) -> bool:
        return self.kind is TokenKind.SYMBOL and self.text in symbols

    def is_keyword(self, *keywords: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.text in keywords

    def describe(self) -> str:
        if self.kind is TokenKind.EOF:
            return "end of input"
        return f'"{self.text}"'


class Tokenizer:
    """
    Converts one source text into tokens.

    Parameters
    ----------
    text : str
        Source text.
    source : SourceId
        Identifier recorded in every location.
    """

    def __init__(self, text: str, source: SourceId = "main") -> None:
        self.text = text
        self.source = source
        self.position = 0
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", text)]

    def position_at(self, offset: int) -> Position:
        line = bisect.bisect_right(self._line_starts, offset) - 1
        return Position(offset, line + 1, offset - self._line_starts[line] + 1)

    def location(self, start: int, end: int) -> Location:
        return Location(self.source, self.position_at(start), self.position_at(end))

    def _error(self, message: str, start: int, end: int | None = None) -> ParseError:
        return ParseError(message, self.location(start, start + 1 if end is None else end))

    def _skip_trivia(self) -> bool:
        """Skip whitespace and comments; report whether a line break was seen."""
        newline = False
        text = self.text
        while self.position < len(text):
            ch = text[self.position]
            if ch == "\n":
                newline = True
                self.position += 1
            elif ch.isspace():
                self.position += 1
            elif text.startswith("//", self.position):
                end = text.find("\n", self.position)
                self.position = len(text) if end == -1 else end
            elif text.startswith("/*", self.position):
                end = text.find("*/", self.position + 2)
                if end == -1:
                    raise self._error("Unterminated comment", self.position, len(text))
                newline = newline or "\n" in text[self.position : end]
                self.position = end + 2
            else:
                break
        return newline

    def _read_string(self, start: int) -> Token:
        quote = self.text[start]
        chars: list[str] = []
        i = start + 1
        text = self.text
        while i < len(text):
            ch = text[i]
            if ch == quote:
                self.position = i + 1
                return Token(
                    TokenKind.STRING,
                    text[start : i + 1],
                    "".join(chars),
                    self.position_at(start),
                    self.position_at(i + 1),
                )
            if ch == "\\":
                if i + 1 >= len(text):
                    break
                escape = text[i + 1]
                if escape == "u":
                    digits = text[i + 2 : i + 6]
                    if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                        raise self._error("Invalid unicode escape", i, i + 2)
                    chars.append(chr(int(digits, 16)))
                    i += 6
                    continue
                if escape not in _ESCAPES:
                    raise self._error(f"Invalid escape sequence \\{escape}", i, i + 2)
                chars.append(_ESCAPES[escape])
                i += 2
                continue
            chars.append(ch)
            i += 1
        raise self._error("Unterminated string", start, len(text))

    def _read_number(self, start: int) -> Token:
        match = _RE_NUMBER.match(self.text, start)
        assert match is not None
        literal = match.group(0)
        value: int | float
        if match.group(1) is None and match.group(2) is None:
            value = int(literal)
        else:
            value = float(literal)
        end = match.end()
        unit = None
        unit_match = _RE_UNIT.match(self.text, end)
        if unit_match is not None:
            unit = unit_match.group(1)
            end = unit_match.end()
        self.position = end
        return Token(
            TokenKind.NUMBER,
            self.text[start:end],
            value,
            self.position_at(start),
            self.position_at(end),
            unit=unit,
        )

    def next_token(self) -> Token:
        newline = self._skip_trivia()
        start = self.position
        text = self.text
        if start >= len(text):
            pos = self.position_at(start)
            return Token(TokenKind.EOF, "", None, pos, pos, newline)

        ch = text[start]
        token: Token
        if ch.isdigit():
            token = self._read_number(start)
        elif ch in "\"'":
            token = self._read_string(start)
        elif (match := _RE_IDENTIFIER.match(text, start)) is not None:
            word = match.group(0)
            self.position = match.end()
            kind = TokenKind.KEYWORD if word in KEYWORDS else TokenKind.IDENTIFIER
            token = Token(kind, word, word, self.position_at(start), self.position_at(match.end()))
        else:
            for symbol in SYMBOLS:
                if text.startswith(symbol, start):
                    self.position = start + len(symbol)
                    token = Token(
                        TokenKind.SYMBOL,
                        symbol,
                        symbol,
                        self.position_at(start),
                        self.position_at(self.position),
                    )
                    break
            else:
                raise self._error(f'Unexpected character "{ch}"', start)

        if newline:
            return Token(
                token.kind, token.text, token.value, token.start, token.end, True, token.unit
            )
        return token

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.kind is TokenKind.EOF:
                return tokens


def tokenize(text: str, source: SourceId = "main") -> list[Token]:
    """Tokens of ``text`` ending with an ``EOF`` token."""
    return Tokenizer(text, source).tokenize()


__all__ = ["TokenKind", "KEYWORDS", "SYMBOLS", "Token", "Tokenizer", "tokenize"]
