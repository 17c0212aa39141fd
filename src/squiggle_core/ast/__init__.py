"""
Syntax tree, tokenizer and parser of the language.
"""

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.ast import nodes
from squiggle_core.ast.parser import Parser, parse
from squiggle_core.ast.tokenizer import Token, TokenKind, Tokenizer, tokenize
from squiggle_core.ast.utils import find_node_by_path, find_path_by_offset

__all__ = [
    "nodes",
    "Parser",
    "parse",
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
    "find_node_by_path",
    "find_path_by_offset",
]
