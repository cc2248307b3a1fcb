"""
SL Compiler Front-End

Lexer and parser for SL, a small line-structured teaching language with
Spanish keywords.

    from slc import parse_string

    statements, errors = parse_string("var\n  x: numerico = 5\n")
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, LexerError, tokenize_string
from .parser import Parser, ParseError, ErrorKind, parse_string
from .logging_config import setup_logging

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "LexerError",
    "tokenize_string",
    "Parser",
    "ParseError",
    "ErrorKind",
    "parse_string",
    "setup_logging",
]
