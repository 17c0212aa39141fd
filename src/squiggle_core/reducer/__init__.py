"""
Tree-walking evaluator: scopes, frames, functions and the reducer itself.
"""

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.reducer.bindings import EMPTY_NAMESPACE, Bindings, Namespace
from squiggle_core.reducer.frame_stack import (
    MAX_STACK_DEPTH,
    TOP_FRAME_NAME,
    Frame,
    FrameStack,
)
from squiggle_core.reducer.lambdas import BuiltinLambda, Lambda, UserDefinedLambda
from squiggle_core.reducer.reducer import Reducer, RunOutput, evaluate_program

__all__ = [
    "EMPTY_NAMESPACE",
    "Bindings",
    "Namespace",
    "MAX_STACK_DEPTH",
    "TOP_FRAME_NAME",
    "Frame",
    "FrameStack",
    "BuiltinLambda",
    "Lambda",
    "UserDefinedLambda",
    "Reducer",
    "RunOutput",
    "evaluate_program",
]
