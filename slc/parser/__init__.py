"""
SL Parser Package

Turns the lexer's token stream into a list of top-level statements plus an
ordered list of syntax errors.

Key Features:
- Two-token cursor (current + next) over a pull-based lexer
- Recursive descent for statements, Pratt parsing for expressions
- Errors collected as values with statement-level synchronization
- Structural AST equality and an indented debug printer
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, Statement, Expression, VariablesStatement,
    VarDeclaration, Identifier, NumberNode, TypeExpression, PrefixExpression,
    InfixExpression, ast_to_string
)
from .errors import ErrorKind, ParseError
from .parser import Parser, Precedence, parse_string

__all__ = [
    "Parser",
    "Precedence",
    "parse_string",
    "ErrorKind",
    "ParseError",
    "ASTNode",
    "ASTNodeType",
    "Statement",
    "Expression",
    "VariablesStatement",
    "VarDeclaration",
    "Identifier",
    "NumberNode",
    "TypeExpression",
    "PrefixExpression",
    "InfixExpression",
    "ast_to_string",
]
