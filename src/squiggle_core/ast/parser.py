"""
Recursive-descent parser of the language.

Grammar, loosest binding first::

    program     := import* (statement | expression)*
    statement   := decorator* "export"? (name "=" expr | name "(" params ")" "=" expr)
    expr        := "if" expr "then" expr "else" expr | or ("?" expr ":" expr)?
    or          := and ("||" and)*
    and         := equality ("&&" equality)*
    equality    := relational (("==" | "!=") relational)*
    relational  := interval (("<" | "<=" | ">" | ">=") interval)*
    interval    := additive ("to" additive)*
    additive    := multiplicative (("+" | "-" | ".+" | ".-") multiplicative)*
    multiplicative := power (("*" | "/" | ".*" | "./") power)*
    power       := chain (("^" | ".^") chain)*
    chain       := unary ("->" postfix)*
    unary       := ("-" | "!" | ".-") unary | postfix
    postfix     := atom ("(" args ")" | "[" expr "]" | "." name)*

Statements are separated by line breaks or ``;``. A binary operator must
sit on the same line as its left operand, so a line starting with ``-``
never continues the previous statement; the only exception is ``->``.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import replace

from squiggle_core.ast.nodes import (
    Array,
    Block,
    Boolean,
    BracketLookup,
    Call,
    Decorator,
    DecoratedStatement,
    DefunStatement,
    Dict,
    DotLookup,
    Expression,
    Float,
    Identifier,
    Import,
    InfixCall,
    Integer,
    KeyValue,
    Lambda,
    LetStatement,
    Pipe,
    Program,
    Statement,
    String,
    Ternary,
    TernarySyntax,
    UnaryCall,
    UnitValue,
    Void,
)
from squiggle_core.ast.tokenizer import Token, TokenKind, Tokenizer
from squiggle_core.errors import ParseError
from squiggle_core.types import Location, Position, SourceId

BINARY_LEVELS: tuple[tuple[str, ...], ...] = (
    ("||",),
    ("&&",),
    ("==", "!="),
    ("<", "<=", ">", ">="),
    ("to",),
    ("+", "-", ".+", ".-"),
    ("*", "/", ".*", "./"),
    ("^", ".^"),
)
"""Infix operators grouped by precedence, loosest first. All are left-associative."""

UNARY_OPERATORS = ("-", "!", ".-")


class Parser:
    """
    Parser over the tokens of one source.

    Parameters
    ----------
    text : str
        Source text.
    source : SourceId
        Identifier recorded in node locations.
    """

    def __init__(self, text: str, source: SourceId = "main") -> None:
        self.source = source
        self._tokenizer = Tokenizer(text, source)
        self._tokens = self._tokenizer.tokenize()
        self._index = 0

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    @property
    def _current(self) -> Token:
        return self._tokens[self._index]

    def _peek(self, ahead: int = 1) -> Token:
        index = min(self._index + ahead, len(self._tokens) - 1)
        return self._tokens[index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.kind is not TokenKind.EOF:
            self._index += 1
        return token

    def _location_from(self, start: Position) -> Location:
        end = self._tokens[self._index - 1].end if self._index > 0 else start
        return Location(self.source, start, end)

    def _error(self, message: str, token: Token | None = None) -> ParseError:
        token = self._current if token is None else token
        return ParseError(message, Location(self.source, token.start, token.end))

    def _expect_symbol(self, symbol: str) -> Token:
        if not self._current.is_symbol(symbol):
            raise self._error(f'Expected "{symbol}", got {self._current.describe()}')
        return self._advance()

    def _expect_keyword(self, keyword: str) -> Token:
        if not self._current.is_keyword(keyword):
            raise self._error(f'Expected "{keyword}", got {self._current.describe()}')
        return self._advance()

    def _expect_identifier(self) -> Identifier:
        token = self._current
        if token.kind is not TokenKind.IDENTIFIER:
            raise self._error(f"Expected identifier, got {token.describe()}")
        self._advance()
        return Identifier(token.text, location=self._location_from(token.start))

    def _at_end(self, closing: str | None) -> bool:
        if closing is None:
            return self._current.kind is TokenKind.EOF
        return self._current.is_symbol(closing)

    # ------------------------------------------------------------------
    # Program and statements
    # ------------------------------------------------------------------

    def parse_program(self) -> Program:
        start = self._tokenizer.position_at(0)
        imports: list[Import] = []
        while self._current.is_keyword("import"):
            imports.append(self._parse_import())
            self._end_of_statement(None)
        statements, result = self._parse_statements(None)
        end = self._current.end
        return Program(
            tuple(imports),
            tuple(statements),
            result,
            location=Location(self.source, start, end),
        )

    def _parse_import(self) -> Import:
        start = self._expect_keyword("import").start
        token = self._current
        if token.kind is not TokenKind.STRING:
            raise self._error(f"Expected import path string, got {token.describe()}")
        self._advance()
        path = String(str(token.value), location=self._location_from(token.start))
        self._expect_keyword("as")
        variable = self._expect_identifier()
        return Import(path, variable, location=self._location_from(start))

    def _parse_statements(self, closing: str | None) -> tuple[list[Statement], Expression | None]:
        statements: list[Statement] = []
        while True:
            while self._current.is_symbol(";"):
                self._advance()
            if self._at_end(closing):
                return statements, None
            if self._at_statement():
                statements.append(self._parse_statement())
                self._end_of_statement(closing)
                continue
            result = self._parse_expression()
            while self._current.is_symbol(";"):
                self._advance()
            if not self._at_end(closing):
                expected = "end of input" if closing is None else f'"{closing}"'
                raise self._error(f"Expected {expected}, got {self._current.describe()}")
            return statements, result

    def _end_of_statement(self, closing: str | None) -> None:
        token = self._current
        if token.is_symbol(";") or self._at_end(closing) or token.newline_before:
            return
        raise self._error(f"Expected end of statement, got {token.describe()}")

    def _at_statement(self) -> bool:
        token = self._current
        if token.is_symbol("@") or token.is_keyword("export"):
            return True
        if token.kind is not TokenKind.IDENTIFIER:
            return False
        following = self._peek()
        if following.is_symbol("="):
            return True
        if not following.is_symbol("(") or following.newline_before:
            return False
        depth = 0
        for index in range(self._index + 1, len(self._tokens)):
            candidate = self._tokens[index]
            if candidate.kind is TokenKind.EOF:
                return False
            if candidate.is_symbol("("):
                depth += 1
            elif candidate.is_symbol(")"):
                depth -= 1
                if depth == 0:
                    return self._tokens[index + 1].is_symbol("=")
        return False

    def _parse_statement(self) -> Statement:
        start = self._current.start
        if self._current.is_symbol("@"):
            self._advance()
            name = self._expect_identifier()
            args: tuple[Expression, ...] = ()
            if self._current.is_symbol("(") and not self._current.newline_before:
                args = self._parse_arguments()
            decorator = Decorator(name, args, location=self._location_from(start))
            statement = self._parse_statement()
            return DecoratedStatement(decorator, statement, location=self._location_from(start))

        exported = False
        if self._current.is_keyword("export"):
            self._advance()
            exported = True
        variable = self._expect_identifier()

        if self._current.is_symbol("("):
            parameters = self._parse_parameters("(", ")")
            self._expect_symbol("=")
            body = self._parse_expression()
            fn_location = self._location_from(variable.location.start)
            fn = Lambda(parameters, body, variable.value, location=fn_location)
            return DefunStatement(variable, fn, exported, location=self._location_from(start))

        self._expect_symbol("=")
        value = self._parse_expression()
        if isinstance(value, Lambda) and value.name is None:
            value = replace(value, name=variable.value)
        return LetStatement(variable, value, exported, location=self._location_from(start))

    def _parse_parameters(self, opening: str, closing: str) -> tuple[Identifier, ...]:
        self._expect_symbol(opening)
        parameters: list[Identifier] = []
        while not self._current.is_symbol(closing):
            parameters.append(self._expect_identifier())
            if not self._current.is_symbol(","):
                break
            self._advance()
        self._expect_symbol(closing)
        names = [p.value for p in parameters]
        for index, parameter in enumerate(parameters):
            if parameter.value in names[:index]:
                raise ParseError(f"Duplicate parameter {parameter.value}", parameter.location)
        return tuple(parameters)

    def _parse_arguments(self) -> tuple[Expression, ...]:
        self._expect_symbol("(")
        args: list[Expression] = []
        while not self._current.is_symbol(")"):
            args.append(self._parse_expression())
            if not self._current.is_symbol(","):
                break
            self._advance()
        self._expect_symbol(")")
        return tuple(args)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self) -> Expression:
        if self._current.is_keyword("if"):
            return self._parse_if()
        start = self._current.start
        condition = self._parse_binary(0)
        if self._current.is_symbol("?") and not self._current.newline_before:
            self._advance()
            true_expression = self._parse_expression()
            self._expect_symbol(":")
            false_expression = self._parse_expression()
            return Ternary(
                condition,
                true_expression,
                false_expression,
                TernarySyntax.C,
                location=self._location_from(start),
            )
        return condition

    def _parse_if(self) -> Ternary:
        start = self._expect_keyword("if").start
        condition = self._parse_expression()
        self._expect_keyword("then")
        true_expression = self._parse_expression()
        self._expect_keyword("else")
        false_expression = self._parse_expression()
        return Ternary(
            condition,
            true_expression,
            false_expression,
            TernarySyntax.IF_THEN_ELSE,
            location=self._location_from(start),
        )

    def _match_operator(self, operators: tuple[str, ...]) -> Token | None:
        token = self._current
        if token.newline_before or token.text not in operators:
            return None
        if token.kind is TokenKind.SYMBOL or token.is_keyword("to"):
            return token
        return None

    def _parse_binary(self, level: int) -> Expression:
        if level == len(BINARY_LEVELS):
            return self._parse_chain()
        start = self._current.start
        left = self._parse_binary(level + 1)
        while (operator := self._match_operator(BINARY_LEVELS[level])) is not None:
            self._advance()
            right = self._parse_binary(level + 1)
            left = InfixCall(operator.text, left, right, location=self._location_from(start))
        return left

    def _parse_chain(self) -> Expression:
        start = self._current.start
        left = self._parse_unary()
        while self._current.is_symbol("->"):
            self._advance()
            target = self._parse_postfix()
            if isinstance(target, Call):
                left = Pipe(left, target.fn, target.args, location=self._location_from(start))
            else:
                left = Pipe(left, target, (), location=self._location_from(start))
        return left

    def _parse_unary(self) -> Expression:
        token = self._current
        if token.is_symbol(*UNARY_OPERATORS):
            self._advance()
            arg = self._parse_unary()
            location = self._location_from(token.start)
            if token.text == "-" and isinstance(arg, Float):
                return Float(-arg.value, location=location)
            if token.text == "-" and isinstance(arg, Integer):
                return Integer(-arg.value, location=location)
            return UnaryCall(token.text, arg, location=location)
        return self._parse_postfix()

    def _parse_postfix(self) -> Expression:
        start = self._current.start
        expression = self._parse_atom()
        while True:
            token = self._current
            if token.newline_before:
                return expression
            if token.is_symbol("("):
                args = self._parse_arguments()
                expression = Call(expression, args, location=self._location_from(start))
            elif token.is_symbol("["):
                self._advance()
                key = self._parse_expression()
                self._expect_symbol("]")
                expression = BracketLookup(expression, key, location=self._location_from(start))
            elif token.is_symbol("."):
                self._advance()
                name = self._current
                if name.kind not in (TokenKind.IDENTIFIER, TokenKind.KEYWORD):
                    raise self._error(f"Expected field name, got {name.describe()}")
                self._advance()
                expression = DotLookup(expression, name.text, location=self._location_from(start))
            else:
                return expression

    def _parse_atom(self) -> Expression:
        token = self._current
        start = token.start

        if token.kind is TokenKind.NUMBER:
            self._advance()
            location = self._location_from(start)
            literal: Float | Integer
            if isinstance(token.value, int):
                literal = Integer(token.value, location=location)
            else:
                literal = Float(float(token.value), location=location)  # type: ignore[arg-type]
            if token.unit is not None:
                return UnitValue(literal, token.unit, location=location)
            return literal

        if token.kind is TokenKind.STRING:
            self._advance()
            return String(str(token.value), location=self._location_from(start))

        if token.is_keyword("true", "false"):
            self._advance()
            return Boolean(token.text == "true", location=self._location_from(start))

        if token.is_keyword("if"):
            return self._parse_if()

        if token.kind is TokenKind.IDENTIFIER:
            return self._parse_identifier()

        if token.is_symbol("("):
            self._advance()
            if self._current.is_symbol(")"):
                self._advance()
                return Void(location=self._location_from(start))
            inner = self._parse_expression()
            self._expect_symbol(")")
            return inner

        if token.is_symbol("["):
            self._advance()
            elements: list[Expression] = []
            while not self._current.is_symbol("]"):
                elements.append(self._parse_expression())
                if not self._current.is_symbol(","):
                    break
                self._advance()
            self._expect_symbol("]")
            return Array(tuple(elements), location=self._location_from(start))

        if token.is_symbol("{"):
            return self._parse_curly()

        raise self._error(f"Unexpected {token.describe()}")

    def _parse_identifier(self) -> Identifier:
        token = self._advance()
        name = token.text
        dot, member = self._current, self._peek()
        # ``Module.fn`` is one identifier; ``record.key`` is a lookup.
        if (
            name[0].isupper()
            and dot.is_symbol(".")
            and dot.start.offset == token.end.offset
            and member.kind is TokenKind.IDENTIFIER
            and member.start.offset == dot.end.offset
        ):
            self._advance()
            self._advance()
            name = f"{name}.{member.text}"
        return Identifier(name, location=self._location_from(token.start))

    def _is_dict_start(self) -> bool:
        token, following = self._current, self._peek()
        if token.kind in (TokenKind.IDENTIFIER, TokenKind.STRING, TokenKind.KEYWORD):
            if following.is_symbol(":"):
                return True
        return token.kind is TokenKind.IDENTIFIER and following.is_symbol(",")

    def _parse_curly(self) -> Expression:
        start = self._expect_symbol("{").start

        if self._current.is_symbol("|", "||"):
            if self._current.is_symbol("||"):
                self._advance()
                parameters: tuple[Identifier, ...] = ()
            else:
                parameters = self._parse_parameters("|", "|")
            body_start = self._current.start
            statements, result = self._parse_statements("}")
            if result is None:
                raise self._error("Expected the function body to end with an expression")
            body: Expression = result
            if statements:
                body = Block(tuple(statements), result, location=self._location_from(body_start))
            self._expect_symbol("}")
            return Lambda(parameters, body, location=self._location_from(start))

        if self._current.is_symbol("}"):
            self._advance()
            return Dict((), location=self._location_from(start))

        if self._is_dict_start():
            return self._parse_dict(start)

        statements, result = self._parse_statements("}")
        if result is None:
            raise self._error("Expected the block to end with an expression")
        self._expect_symbol("}")
        return Block(tuple(statements), result, location=self._location_from(start))

    def _parse_dict(self, start: Position) -> Dict:
        elements: list[KeyValue | Identifier] = []
        while not self._current.is_symbol("}"):
            token = self._current
            if token.kind in (TokenKind.IDENTIFIER, TokenKind.KEYWORD, TokenKind.STRING):
                if self._peek().is_symbol(":"):
                    self._advance()
                    key = String(str(token.value), location=self._location_from(token.start))
                    self._advance()
                    value = self._parse_expression()
                    elements.append(KeyValue(key, value, location=self._location_from(token.start)))
                elif token.kind is TokenKind.IDENTIFIER:
                    elements.append(self._expect_identifier())
                else:
                    raise self._error(f"Expected dict entry, got {token.describe()}")
            else:
                raise self._error(f"Expected dict key, got {token.describe()}")
            if not self._current.is_symbol(","):
                break
            self._advance()
        self._expect_symbol("}")
        return Dict(tuple(elements), location=self._location_from(start))


def parse(text: str, source: SourceId = "main") -> Program:
    """
    Parse ``text`` into a :class:`~squiggle_core.ast.nodes.Program`.

    Raises
    ------
    ParseError
        If the text is not a valid program; the error location points at
        the offending token.
    """
    return Parser(text, source).parse_program()


__all__ = ["BINARY_LEVELS", "Parser", "parse"]
