"""
SL Lexer - turns source text into tokens, one at a time

The parser pulls tokens on demand through next_token(), so nothing is
materialized up front. look_ahead() buffers exactly one scanned token.

Keywords are matched case-insensitively but keep their original spelling in
the token lexeme. `lib`, `libext` and `archivo` are reserved and fatal.
"""

import logging
from typing import List, Optional

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, DISALLOWED_KEYWORDS, SYMBOLS,
    WHITESPACE, LINE_COMMENT
)
from .errors import create_disallowed_keyword_error

logger = logging.getLogger(__name__)


class Lexer:
    """
    SL lexical analyzer.

    A pull-based state machine over an in-memory string. Each call to
    next_token() scans one token; once the input is exhausted it keeps
    returning EOF.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string, already loaded by the caller
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.line_start = 0  # offset of the first character of the current line

        # Token scanned by look_ahead() and not yet handed out
        self._peeked: Optional[Token] = None

    def next_token(self) -> Token:
        """
        Consume and return the next token.

        Raises:
            LexerError: If a reserved-but-disallowed keyword is found
        """
        if self._peeked is not None:
            token, self._peeked = self._peeked, None
            return token
        return self._scan_token()

    def look_ahead(self) -> Token:
        """Return the next token without consuming it."""
        if self._peeked is None:
            self._peeked = self._scan_token()
        return self._peeked

    def tokenize(self) -> List[Token]:
        """
        Tokenize the rest of the source.

        Returns:
            List of tokens ending with a single EOF token
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def _scan_token(self) -> Token:
        """Scan one token starting at the cursor."""
        self._skip_whitespace_and_comments()

        location = self._location()
        current_char = self._current_char()

        # End of input, returned forever
        if current_char == "":
            return Token(TokenType.EOF, "", location)

        # Newlines are tokens and move the line counter
        if current_char == "\n":
            self._advance()
            self.line += 1
            self.line_start = self.pos
            return Token(TokenType.NEWLINE, "\n", location)

        if current_char in SYMBOLS:
            self._advance()
            return Token(SYMBOLS[current_char], current_char, location)

        if self._is_identifier_start(current_char):
            return self._scan_identifier_or_keyword(location)

        if self._is_digit(current_char):
            return self._scan_number(location)

        self._advance()
        return Token(TokenType.ILLEGAL, current_char, location)

    def _scan_identifier_or_keyword(self, location: SourceLocation) -> Token:
        """Scan the longest run of letters, digits and underscores."""
        start_pos = self.pos
        while self._is_identifier_continue(self._current_char()):
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        token_type = KEYWORDS.get(lexeme.lower(), TokenType.IDENTIFIER)

        if token_type in DISALLOWED_KEYWORDS:
            logger.error("disallowed keyword %r at %s", lexeme, location)
            raise create_disallowed_keyword_error(lexeme, location)

        return Token(token_type, lexeme, location)

    def _scan_number(self, location: SourceLocation) -> Token:
        """Scan a run of digits. Signs and decimals are not part of a number."""
        start_pos = self.pos
        while self._is_digit(self._current_char()):
            self._advance()
        return Token(TokenType.NUMBER, self.source[start_pos:self.pos], location)

    def _skip_whitespace_and_comments(self):
        """Skip spaces, tabs, carriage returns and line comments."""
        while True:
            while self._current_char() in WHITESPACE:
                self._advance()

            if not self.source.startswith(LINE_COMMENT, self.pos):
                return

            # The newline that ends the comment is left for the next token
            while self._current_char() not in ("\n", ""):
                self._advance()

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.pos - self.line_start + 1, self.pos)

    def _current_char(self) -> str:
        """Character under the cursor, or '' at end of input."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ""

    def _advance(self):
        if self.pos < len(self.source):
            self.pos += 1

    @staticmethod
    def _is_identifier_start(char: str) -> bool:
        return char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z")

    @staticmethod
    def _is_identifier_continue(char: str) -> bool:
        return Lexer._is_identifier_start(char) or Lexer._is_digit(char)

    @staticmethod
    def _is_digit(char: str) -> bool:
        return "0" <= char <= "9"


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens, EOF included

    Raises:
        LexerError: If the source uses a disallowed keyword
    """
    return Lexer(source, filename).tokenize()
