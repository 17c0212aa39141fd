"""
Tree-Walking Reducer
====================

Evaluates syntax trees to values.

The :class:`Reducer` carries everything an evaluation needs besides the
scope: the environment used by distribution conversions, the random
generator, the frame stack and the function registry. Scopes are
:class:`~squiggle_core.reducer.bindings.Bindings` passed explicitly down
the tree, so a statement never changes the scope of its parent.

Notes
-----
- Errors are raised as :class:`~squiggle_core.errors.SquiggleError`. The
  innermost failing expression wraps them in
  :class:`~squiggle_core.errors.ErrorWithStack` with a snapshot of the
  frame stack and its own location.
- Nested calls deeper than
  :data:`~squiggle_core.reducer.frame_stack.MAX_STACK_DEPTH` raise
  :class:`~squiggle_core.errors.StackDepthError`.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
import sys
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from squiggle_core.ast import nodes
from squiggle_core.dists.environment import Environment, default_environment
from squiggle_core.errors import (
    ArgumentError,
    BindingError,
    CompileError,
    ErrorWithStack,
    StackDepthError,
    SquiggleError,
    wrap_with_stack,
)
from squiggle_core.reducer.bindings import Bindings, Namespace
from squiggle_core.reducer.frame_stack import MAX_STACK_DEPTH, TOP_FRAME_NAME, Frame, FrameStack
from squiggle_core.reducer.lambdas import Lambda, UserDefinedLambda
from squiggle_core.types import Location
from squiggle_core.value.values import (
    Value,
    VArray,
    VBool,
    VDict,
    VLambda,
    VNumber,
    VString,
    v_array,
    v_bool,
    v_dict,
    v_lambda,
    v_number,
    v_string,
    v_void,
)

if TYPE_CHECKING:
    from squiggle_core.library.registry import Registry

logger = logging.getLogger(__name__)

# Python frames used by one call of the language, with a wide margin.
_PYTHON_FRAMES_PER_CALL = 40


@contextmanager
def _recursion_limit(limit: int) -> Iterator[None]:
    previous = sys.getrecursionlimit()
    if previous >= limit:
        yield
        return
    sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


@dataclass(frozen=True, slots=True)
class RunOutput:
    """
    Outcome of evaluating a program.

    Parameters
    ----------
    result : Value
        Value of the final expression, void if there is none.
    bindings : VDict
        Names defined by the program's own statements.
    exports : VDict
        Subset of ``bindings`` marked with ``export``.
    """

    result: Value
    bindings: VDict
    exports: VDict


class Reducer:
    """
    Evaluator of syntax trees.

    Parameters
    ----------
    environment : Environment, optional
        Settings of distribution conversions.
    registry : Registry, optional
        Function registry, used to report calls of ambiguous names.
    rng : numpy.random.Generator, optional
        Random generator; built from ``environment.seed`` by default.
    """

    def __init__(
        self,
        environment: Environment = default_environment,
        registry: Registry | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.environment = environment
        self.registry = registry
        self.rng = environment.make_rng() if rng is None else rng
        self.frame_stack = FrameStack()
        self.in_function: Lambda | None = None
        self._evaluators: dict[type, Callable[[nodes.Node, Bindings], Value]] = {
            nodes.Float: self._evaluate_number,
            nodes.Integer: self._evaluate_number,
            nodes.Boolean: lambda node, _: v_bool(node.value),  # type: ignore[attr-defined]
            nodes.String: lambda node, _: v_string(node.value),  # type: ignore[attr-defined]
            nodes.Void: lambda node, _: v_void(),
            nodes.Identifier: self._evaluate_identifier,
            nodes.UnitValue: self._evaluate_unit_value,
            nodes.Array: self._evaluate_array,
            nodes.Dict: self._evaluate_dict,
            nodes.Lambda: self._evaluate_lambda,
            nodes.Call: self._evaluate_call,
            nodes.InfixCall: self._evaluate_infix,
            nodes.UnaryCall: self._evaluate_unary,
            nodes.Pipe: self._evaluate_pipe,
            nodes.DotLookup: self._evaluate_dot_lookup,
            nodes.BracketLookup: self._evaluate_bracket_lookup,
            nodes.Ternary: self._evaluate_ternary,
            nodes.Block: self._evaluate_block,
        }  # fmt: skip

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def evaluate_program(self, program: nodes.Program, bindings: Bindings) -> RunOutput:
        """
        Evaluate all statements and the final expression of ``program``.

        ``bindings`` must already hold the standard library and whatever the
        program imports or continues from; the program's own names are
        defined in a new scope on top of it.

        Raises
        ------
        ErrorWithStack
            Any evaluation error, with the frame stack at the point of failure.
        """
        scope = bindings.extend()
        exported: list[str] = []
        with _recursion_limit(MAX_STACK_DEPTH * _PYTHON_FRAMES_PER_CALL):
            try:
                for statement in program.statements:
                    name, value = self._evaluate_statement(statement, scope)
                    scope = scope.set(name, value)
                    if nodes.is_exported(statement):
                        exported.append(name)
                if program.result is None:
                    result: Value = v_void()
                else:
                    result = self.evaluate(program.result, scope)
            except RecursionError:
                raise wrap_with_stack(
                    StackDepthError(MAX_STACK_DEPTH), self.frame_stack.snapshot()
                ) from None
            except SquiggleError as exc:
                if isinstance(exc, ErrorWithStack):
                    raise
                raise wrap_with_stack(exc, self.frame_stack.snapshot()) from exc

        local = scope.local()
        exports = v_dict({name: local[name] for name in dict.fromkeys(exported)})
        return RunOutput(result, local.to_dict_value(), exports)

    def evaluate(self, node: nodes.Node, bindings: Bindings) -> Value:
        """Value of an expression node in ``bindings``."""
        evaluator = self._evaluators.get(type(node))
        if evaluator is None:
            raise wrap_with_stack(
                CompileError(f"Cannot evaluate {type(node).__name__} here"),
                self.frame_stack.snapshot(),
                node.location,
            )
        try:
            return evaluator(node, bindings)
        except ErrorWithStack:
            raise
        except SquiggleError as exc:
            raise wrap_with_stack(exc, self.frame_stack.snapshot(), node.location) from exc

    def current_function_name(self) -> str:
        """Name of the function being evaluated, :data:`TOP_FRAME_NAME` outside any call."""
        return TOP_FRAME_NAME if self.in_function is None else self.in_function.display_name

    def call_lambda(
        self, fn: Lambda, args: Sequence[Value], location: Location | None = None
    ) -> Value:
        """
        Call ``fn`` inside a new frame.

        The frame is named after the calling function and records the call
        site, so the outermost frame is always :data:`TOP_FRAME_NAME`.

        Raises
        ------
        StackDepthError
            If the frame stack already holds ``MAX_STACK_DEPTH`` frames.
        """
        if len(self.frame_stack) >= MAX_STACK_DEPTH:
            raise StackDepthError(MAX_STACK_DEPTH)
        caller = self.in_function
        self.frame_stack.push(Frame(self.current_function_name(), location))
        self.in_function = fn
        try:
            return fn.call(args, self)
        except ErrorWithStack:
            raise
        except SquiggleError as exc:
            raise wrap_with_stack(exc, self.frame_stack.snapshot(), location) from exc
        finally:
            self.in_function = caller
            self.frame_stack.pop()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _evaluate_statement(
        self, statement: nodes.Statement, bindings: Bindings
    ) -> tuple[str, Value]:
        if isinstance(statement, nodes.DecoratedStatement):
            name, value = self._evaluate_statement(statement.statement, bindings)
            return name, self._apply_decorator(statement.decorator, value, bindings)

        if isinstance(statement, nodes.DefunStatement):
            fn = statement.value
            name = statement.variable.value
            user_lambda = UserDefinedLambda(
                name, tuple(p.value for p in fn.parameters), fn.body, bindings, fn.location
            )
            value = v_lambda(user_lambda)
            # Make the function visible to its own body.
            user_lambda.captured = bindings.set(name, value)
            return name, value

        return statement.variable.value, self.evaluate(statement.value, bindings)

    def _apply_decorator(
        self, decorator: nodes.Decorator, value: Value, bindings: Bindings
    ) -> Value:
        name = f"Tag.{decorator.name.value}"
        fn = bindings.get(name)
        if not isinstance(fn, VLambda):
            raise wrap_with_stack(
                BindingError(f"@{decorator.name.value}"),
                self.frame_stack.snapshot(),
                decorator.location,
            )
        args = [value, *(self.evaluate(arg, bindings) for arg in decorator.args)]
        return self.call_lambda(fn.value, args, decorator.location)

    def _evaluate_block(self, node: nodes.Block, bindings: Bindings) -> Value:
        scope = bindings.extend()
        for statement in node.statements:
            name, value = self._evaluate_statement(statement, scope)
            scope = scope.set(name, value)
        return self.evaluate(node.result, scope)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _evaluate_number(self, node: nodes.Float | nodes.Integer, bindings: Bindings) -> Value:
        return v_number(float(node.value))

    def _lookup(self, name: str, bindings: Bindings) -> Value:
        value = bindings.get(name)
        if value is not None:
            return value
        if self.registry is not None and self.registry.is_ambiguous(name):
            raise CompileError(self.registry.ambiguity_message(name))
        raise BindingError(name)

    def _evaluate_identifier(self, node: nodes.Identifier, bindings: Bindings) -> Value:
        return self._lookup(node.value, bindings)

    def _call_by_name(
        self, name: str, args: Sequence[Value], bindings: Bindings, location: Location
    ) -> Value:
        fn = self._lookup(name, bindings)
        if not isinstance(fn, VLambda):
            raise ArgumentError(f"{name} is not a function")
        return self.call_lambda(fn.value, args, location)

    def _evaluate_unit_value(self, node: nodes.UnitValue, bindings: Bindings) -> Value:
        number = v_number(float(node.value.value))
        return self._call_by_name(f"fromUnit_{node.unit}", [number], bindings, node.location)

    def _evaluate_array(self, node: nodes.Array, bindings: Bindings) -> Value:
        return v_array(self.evaluate(element, bindings) for element in node.elements)

    def _evaluate_dict(self, node: nodes.Dict, bindings: Bindings) -> Value:
        items: dict[str, Value] = {}
        for element in node.elements:
            if isinstance(element, nodes.Identifier):
                items[element.value] = self.evaluate(element, bindings)
                continue
            key = self.evaluate(element.key, bindings)
            if not isinstance(key, VString):
                raise ArgumentError(f"Dict keys must be strings, got {key.public_name}")
            items[key.value] = self.evaluate(element.value, bindings)
        return v_dict(items)

    def _evaluate_lambda(self, node: nodes.Lambda, bindings: Bindings) -> Value:
        parameters = tuple(p.value for p in node.parameters)
        fn = UserDefinedLambda(node.name, parameters, node.body, bindings, node.location)
        return v_lambda(fn)

    def _evaluate_call(self, node: nodes.Call, bindings: Bindings) -> Value:
        fn = self.evaluate(node.fn, bindings)
        args = [self.evaluate(arg, bindings) for arg in node.args]
        if not isinstance(fn, VLambda):
            raise ArgumentError(f"{fn.public_name} is not a function")
        return self.call_lambda(fn.value, args, node.location)

    def _evaluate_infix(self, node: nodes.InfixCall, bindings: Bindings) -> Value:
        left = self.evaluate(node.left, bindings)
        # Boolean operators short-circuit.
        if node.op == "&&" and isinstance(left, VBool) and not left.value:
            return v_bool(False)
        if node.op == "||" and isinstance(left, VBool) and left.value:
            return v_bool(True)
        right = self.evaluate(node.right, bindings)
        name = nodes.INFIX_FUNCTIONS[node.op]
        return self._call_by_name(name, [left, right], bindings, node.location)

    def _evaluate_unary(self, node: nodes.UnaryCall, bindings: Bindings) -> Value:
        arg = self.evaluate(node.arg, bindings)
        name = nodes.UNARY_FUNCTIONS[node.op]
        return self._call_by_name(name, [arg], bindings, node.location)

    def _evaluate_pipe(self, node: nodes.Pipe, bindings: Bindings) -> Value:
        left = self.evaluate(node.left, bindings)
        fn = self.evaluate(node.fn, bindings)
        args = [left, *(self.evaluate(arg, bindings) for arg in node.args)]
        if not isinstance(fn, VLambda):
            raise ArgumentError(f"{fn.public_name} is not a function")
        return self.call_lambda(fn.value, args, node.location)

    def _evaluate_dot_lookup(self, node: nodes.DotLookup, bindings: Bindings) -> Value:
        arg = self.evaluate(node.arg, bindings)
        if not isinstance(arg, VDict):
            raise ArgumentError(f"Cannot look up key {node.key} in a {arg.public_name}")
        value = arg.get(node.key)
        if value is None:
            raise ArgumentError(f"Dict property not found: {node.key}")
        return value

    def _evaluate_bracket_lookup(self, node: nodes.BracketLookup, bindings: Bindings) -> Value:
        arg = self.evaluate(node.arg, bindings)
        key = self.evaluate(node.key, bindings)
        if isinstance(arg, VDict) and isinstance(key, VString):
            value = arg.get(key.value)
            if value is None:
                raise ArgumentError(f"Dict property not found: {key.value}")
            return value
        if isinstance(arg, VArray) and isinstance(key, VNumber):
            index = key.value
            if not math.isfinite(index) or not index.is_integer():
                raise ArgumentError(f"Array index must be an integer, got {key}")
            if not 0 <= index < len(arg.value):
                raise ArgumentError(f"Array index not found: {key}")
            return arg.value[int(index)]
        raise ArgumentError(f"Cannot index a {arg.public_name} with a {key.public_name}")

    def _evaluate_ternary(self, node: nodes.Ternary, bindings: Bindings) -> Value:
        condition = self.evaluate(node.condition, bindings)
        if not isinstance(condition, VBool):
            raise ArgumentError(
                f"Conditional expects a Boolean, got {condition.public_name}"
            )
        branch = node.true_expression if condition.value else node.false_expression
        return self.evaluate(branch, bindings)


def evaluate_program(
    program: nodes.Program,
    namespace: Namespace,
    environment: Environment = default_environment,
    registry: Registry | None = None,
) -> RunOutput:
    """Evaluate ``program`` on top of ``namespace`` with a fresh reducer."""
    logger.debug("Evaluating program from %s", program.location.source)
    reducer = Reducer(environment, registry)
    return reducer.evaluate_program(program, Bindings.from_namespace(namespace))


__all__ = ["RunOutput", "Reducer", "evaluate_program"]
