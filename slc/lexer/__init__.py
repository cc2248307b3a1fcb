"""
SL Lexer Package

Implements a pull-based lexical analyzer (tokenizer) for the SL language.

Key Features:
- One token per next_token() call, one token of look-ahead
- Case-insensitive keyword recognition
- NEWLINE as a first-class token (the language is line-structured)
- `//` line comments
- Line/column tracking on every token
- Fatal error for reserved-but-disallowed keywords
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
]
