"""
Error handling for the SL parser.

Parse errors are plain values collected in order on the parser. They are
never raised: a construct that fails returns None and the parser moves on
to the next statement boundary.
"""

from enum import Enum
from typing import Optional, List, FrozenSet, Tuple
from dataclasses import dataclass

from ..lexer.tokens import Token, TokenType, SourceLocation, STATEMENT_KEYWORDS
from ..lexer.errors import Diagnostic, ErrorRecovery


class ErrorKind(Enum):
    """Kinds of recoverable syntax errors."""
    UNEXPECTED_EXPRESSION = "UnexpectedExpression"
    EXPECTED_NEW_LINE = "ExpectedNewLine"
    EXPECTED_VAR_DECLARATION = "ExpectedVarDeclaration"
    EXPECTED_EQUAL_SIGN = "ExpectedEqualSign"
    NO_PREFIX_FOUND = "NoPrefixFound"
    EXPECTED_TYPE_ANNOTATION = "ExpectedTypeAnnotation"
    EXPECTED_CLOSING_PAREN = "ExpectedClosingParen"


# Parser error codes for categorization
PARSER_ERROR_CODES = {
    ErrorKind.UNEXPECTED_EXPRESSION: "P001",
    ErrorKind.EXPECTED_NEW_LINE: "P002",
    ErrorKind.EXPECTED_VAR_DECLARATION: "P003",
    ErrorKind.EXPECTED_EQUAL_SIGN: "P004",
    ErrorKind.NO_PREFIX_FOUND: "P005",
    ErrorKind.EXPECTED_TYPE_ANNOTATION: "P006",
    ErrorKind.EXPECTED_CLOSING_PAREN: "P007",
}


@dataclass(frozen=True)
class ParseError:
    """
    A recoverable syntax error.

    Created where the problem is detected and never mutated afterwards.
    `token` is the offending token; its position is the error position.
    """
    kind: ErrorKind
    token: Token
    message: str
    help_text: Optional[str] = None
    suggestions: Tuple[str, ...] = ()

    @property
    def location(self) -> SourceLocation:
        return self.token.location

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def column(self) -> int:
        return self.token.column

    @property
    def code(self) -> str:
        return PARSER_ERROR_CODES[self.kind]

    @property
    def diagnostic(self) -> Diagnostic:
        return Diagnostic(
            message=self.message,
            location=self.location,
            severity="error",
            code=self.code,
            help_text=self.help_text,
            suggestions=list(self.suggestions) if self.suggestions else None
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class SyntaxErrorRecovery:
    """
    Utilities for error recovery in the parser.

    After an error the parser discards tokens until the upcoming one starts
    a statement, so each malformed construct yields a single error.
    """

    # Token types that indicate statement boundaries for recovery
    STATEMENT_BOUNDARIES: FrozenSet[TokenType] = STATEMENT_KEYWORDS | {TokenType.EOF}

    @staticmethod
    def is_statement_boundary(token_type: TokenType) -> bool:
        return token_type in SyntaxErrorRecovery.STATEMENT_BOUNDARIES

    @staticmethod
    def suggest_statement_keyword(found: Token) -> List[str]:
        """Suggest a statement keyword when an identifier looks like a typo of one."""
        if found.type != TokenType.IDENTIFIER:
            return []
        return [
            f"Did you mean '{keyword}'?"
            for keyword in ErrorRecovery.suggest_keyword_corrections(found.lexeme)
        ]


# Helper functions for creating common parser errors

def create_unexpected_expression_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start a statement."""
    return ParseError(
        kind=ErrorKind.UNEXPECTED_EXPRESSION,
        token=found,
        message=f"Unexpected expression: {found.lexeme} [{found.type.name}]",
        help_text="Programs are made of declarations; standalone expressions are not allowed.",
        suggestions=tuple(SyntaxErrorRecovery.suggest_statement_keyword(found))
    )


def create_expected_newline_error(declaring: Token) -> ParseError:
    """Create an error for a `var` keyword not followed by a line break."""
    return ParseError(
        kind=ErrorKind.EXPECTED_NEW_LINE,
        token=declaring,
        message="Expected New Line",
        help_text=f"Declarations go on the lines after '{declaring.lexeme}'."
    )


def create_expected_var_declaration_error(found: Token) -> ParseError:
    """Create an error for a variables block without a declaration."""
    return ParseError(
        kind=ErrorKind.EXPECTED_VAR_DECLARATION,
        token=found,
        message=f"Expected variable declaration, got {found.lexeme!r}",
        help_text="A variables block needs at least one 'name = value' line."
    )


def create_expected_equal_sign_error(found: Token) -> ParseError:
    """Create an error for a declaration missing its '='."""
    return ParseError(
        kind=ErrorKind.EXPECTED_EQUAL_SIGN,
        token=found,
        message=f"Expected '=' after identifier, got {found.lexeme!r}",
        suggestions=("Add an assignment operator '='",)
    )


def create_no_prefix_found_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    return ParseError(
        kind=ErrorKind.NO_PREFIX_FOUND,
        token=found,
        message=f"No prefix parser for token {found.type.name}",
        help_text="Expressions start with a number, a name, '(', '-' or 'not'."
    )


def create_expected_type_annotation_error(found: Token) -> ParseError:
    """Create an error for a non-type token after ':'."""
    return ParseError(
        kind=ErrorKind.EXPECTED_TYPE_ANNOTATION,
        token=found,
        message=f"Expected type name after ':', got {found.lexeme!r}",
        suggestions=("numerico", "cadena", "logico")
    )


def create_expected_closing_paren_error(found: Token) -> ParseError:
    """Create an error for a grouped expression that is never closed."""
    return ParseError(
        kind=ErrorKind.EXPECTED_CLOSING_PAREN,
        token=found,
        message=f"Expected ')' to close the group, got {found.lexeme!r}",
        suggestions=("Add a closing parenthesis ')'",)
    )
