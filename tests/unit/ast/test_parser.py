from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from squiggle_core.ast import nodes
from squiggle_core.ast.parser import parse
from squiggle_core.errors import ParseError


class TestParser:
    def test_statements_and_result(self):
        program = parse("x = 1\ny = 2\nx + y")
        assert [nodes.statement_variable(s).value for s in program.statements] == ["x", "y"]
        assert isinstance(program.result, nodes.InfixCall)
        assert program.result.op == "+"

    def test_program_without_result(self):
        program = parse("x = 1")
        assert program.result is None

    def test_precedence(self):
        result = parse("1 + 2 * 3 ^ 4").result
        assert isinstance(result, nodes.InfixCall) and result.op == "+"
        assert isinstance(result.right, nodes.InfixCall) and result.right.op == "*"
        assert isinstance(result.right.right, nodes.InfixCall) and result.right.right.op == "^"

    def test_to_binds_looser_than_arithmetic(self):
        result = parse("1 + 1 to 10").result
        assert isinstance(result, nodes.InfixCall) and result.op == "to"

    def test_line_starting_with_minus_is_a_new_statement(self):
        with pytest.raises(ParseError):
            parse("x = 1\n- 2\nx")

    def test_pipe_prepends_argument(self):
        result = parse("xs -> List.map(f)").result
        assert isinstance(result, nodes.Pipe)
        assert isinstance(result.fn, nodes.Identifier) and result.fn.value == "List.map"
        assert len(result.args) == 1

    def test_qualified_name_and_lookup(self):
        qualified = parse("Dist.normal").result
        lookup = parse("record.key").result
        assert isinstance(qualified, nodes.Identifier) and qualified.value == "Dist.normal"
        assert isinstance(lookup, nodes.DotLookup) and lookup.key == "key"

    def test_curly_braces(self):
        assert isinstance(parse("{a: 1, b}").result, nodes.Dict)
        assert isinstance(parse("{x = 1; x}").result, nodes.Block)
        assert isinstance(parse("{x}").result, nodes.Block)
        assert isinstance(parse("{}").result, nodes.Dict)
        assert isinstance(parse("{|x| x + 1}").result, nodes.Lambda)

    def test_lambda_without_parameters(self):
        result = parse("{|| 1}").result
        assert isinstance(result, nodes.Lambda)
        assert result.parameters == ()

    def test_defun_is_named(self):
        statement = parse("f(x, y) = x + y").statements[0]
        assert isinstance(statement, nodes.DefunStatement)
        assert statement.value.name == "f"
        assert [p.value for p in statement.value.parameters] == ["x", "y"]

    def test_lambda_binding_takes_its_name(self):
        statement = parse("g = {|x| x}").statements[0]
        assert isinstance(statement, nodes.LetStatement)
        assert statement.value.name == "g"

    def test_duplicate_parameter(self):
        with pytest.raises(ParseError, match="Duplicate parameter x"):
            parse("f(x, x) = x")

    def test_ternaries(self):
        c_style = parse("true ? 1 : 2").result
        keyword = parse("if true then 1 else 2").result
        assert c_style.syntax is nodes.TernarySyntax.C
        assert keyword.syntax is nodes.TernarySyntax.IF_THEN_ELSE

    def test_decorators_and_exports(self):
        program = parse('@name("Price")\nexport price = 5')
        statement = program.statements[0]
        assert isinstance(statement, nodes.DecoratedStatement)
        assert statement.decorator.name.value == "name"
        assert nodes.is_exported(statement)
        assert nodes.statement_variable(statement).value == "price"

    def test_imports(self):
        program = parse('import "./lib" as lib\nlib.x')
        assert len(program.imports) == 1
        assert program.imports[0].path.value == "./lib"
        assert program.imports[0].variable.value == "lib"

    def test_unit_values(self):
        result = parse("5k").result
        assert isinstance(result, nodes.UnitValue)
        assert result.unit == "k"

    def test_negative_literals_are_folded(self):
        result = parse("-3").result
        assert isinstance(result, nodes.Integer) and result.value == -3

    def test_locations(self):
        program = parse("x = 1\ny = x + 22", source="model")
        location = program.statements[1].location
        assert location.source == "model"
        assert (location.start.line, location.start.column) == (2, 1)
        assert (location.end.line, location.end.column) == (2, 11)

    def test_error_location(self):
        with pytest.raises(ParseError) as info:
            parse("x = (1 + 2")
        assert info.value.location.start.line == 1
        assert "Expected" in info.value.message
