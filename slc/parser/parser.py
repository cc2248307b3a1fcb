"""
SL Pratt Parser Implementation

Statement level: recursive descent dispatched on the current token.
Expression level: top-down operator precedence (Pratt) parsing.

The parser pulls tokens from the lexer and holds exactly two of them,
`current` and `next`. Errors are collected instead of raised; after each
one the parser skips ahead to the next statement keyword and carries on.
"""

import logging
from typing import List, Optional, Dict, Callable, Tuple
from enum import IntEnum

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType
from .ast_nodes import (
    Statement, Expression, VariablesStatement, VarDeclaration, Identifier,
    NumberNode, TypeExpression, PrefixExpression, InfixExpression
)
from .errors import (
    ParseError, SyntaxErrorRecovery, create_unexpected_expression_error,
    create_expected_newline_error, create_expected_var_declaration_error,
    create_expected_equal_sign_error, create_no_prefix_found_error,
    create_expected_type_annotation_error, create_expected_closing_paren_error
)

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Operator precedence levels for Pratt parsing."""
    LOWEST = 0
    EQUALITY = 1        # reserved, the language has no equality operator yet
    COMPARISON = 2      # <, >
    TERM = 3            # +, -
    FACTOR = 4          # *, /, ^
    PREFIX = 5          # -x, not x
    CALL = 6            # grouping
    HIGHEST = 7


# Binding power of every infix operator. Anything missing here is LOWEST,
# which ends an expression.
PRECEDENCES: Dict[TokenType, Precedence] = {
    TokenType.LESS_THAN: Precedence.COMPARISON,
    TokenType.GREATER_THAN: Precedence.COMPARISON,
    TokenType.PLUS: Precedence.TERM,
    TokenType.MINUS: Precedence.TERM,
    TokenType.MULTIPLY: Precedence.FACTOR,
    TokenType.DIVIDE: Precedence.FACTOR,
    TokenType.POWER: Precedence.FACTOR,
}

# Tokens that end an expression no matter what follows
EXPRESSION_TERMINATORS = frozenset({
    TokenType.SEMICOLON,
    TokenType.NEWLINE,
    TokenType.EOF,
})

# Statement keywords that are reserved boundaries but not parsed yet
PLACEHOLDER_STATEMENTS = frozenset({
    TokenType.CONST,
    TokenType.CONSTANTES,
    TokenType.RETORNA,
    TokenType.SUBRUTINA,
    TokenType.TIPOS,
    TokenType.TIPO,
    TokenType.INICIO,
})


class Parser:
    """
    SL parser.

    One instance parses one program:

        parser = Parser(Lexer(source))
        has_errors = parser.parse_program()
        statements, errors = parser.get_ast(), parser.get_errors()
    """

    def __init__(self, lexer: Lexer):
        """
        Initialize parser and load the first two tokens.

        Args:
            lexer: Token source

        Raises:
            LexerError: If the first tokens include a disallowed keyword
        """
        self.lexer = lexer
        self.statements: List[Statement] = []
        self.errors: List[ParseError] = []

        self.current: Token = lexer.next_token()
        self.next: Token = lexer.next_token()

        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Initialize the prefix and infix parsing function tables."""

        # Prefix parsing functions (for tokens that can start expressions)
        self.prefix_parsers: Dict[TokenType, Callable[[], Optional[Expression]]] = {
            TokenType.IDENTIFIER: self._parse_identifier,
            TokenType.NUMBER: self._parse_number,
            TokenType.LEFT_PAREN: self._parse_grouping,
            TokenType.MINUS: self._parse_prefix,
            TokenType.NOT: self._parse_prefix,
        }

        # Infix parsing functions (for binary operators)
        self.infix_parsers: Dict[TokenType, Callable[[Expression], Optional[Expression]]] = {
            token_type: self._parse_infix for token_type in PRECEDENCES
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse_program(self) -> bool:
        """
        Parse every top-level statement.

        Returns:
            True if at least one error was recorded
        """
        while self.current.type != TokenType.EOF:
            statement = self._parse_statement()
            if statement is not None:
                self.statements.append(statement)
            self._advance()

        logger.debug("parsed %d statements with %d errors", len(self.statements), len(self.errors))
        return self.has_errors()

    def get_ast(self) -> List[Statement]:
        """Top-level statements in source order."""
        return list(self.statements)

    def get_errors(self) -> List[ParseError]:
        """Recorded errors in the order they were found."""
        return list(self.errors)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def parse_expression(self, precedence: Precedence = Precedence.LOWEST) -> Optional[Expression]:
        """
        Parse an expression starting at the current token.

        Operators bind while their precedence is strictly higher than
        `precedence`, which makes equal levels associate to the left.
        Leaves the last token of the expression as `current`.
        """
        prefix = self.prefix_parsers.get(self.current.type)
        if prefix is None:
            self._error(create_no_prefix_found_error(self.current))
            return None

        expression = prefix()

        while (expression is not None
               and self.next.type not in EXPRESSION_TERMINATORS
               and precedence < self._peek_precedence()):
            infix = self.infix_parsers.get(self.next.type)
            if infix is None:
                logger.debug("no infix parser for %s", self.next.type.name)
                return expression

            self._advance()
            expression = infix(expression)

        return expression

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _parse_statement(self) -> Optional[Statement]:
        """Parse a statement. Leaves its last token as `current`."""
        token_type = self.current.type

        if token_type == TokenType.NEWLINE:
            return None

        if token_type in (TokenType.VAR, TokenType.VARIABLES):
            return self._parse_variables_statement()

        if token_type in PLACEHOLDER_STATEMENTS:
            logger.debug("'%s' statements are not parsed yet (line %d)",
                         self.current.lexeme, self.current.line)
            return None

        # Standalone expressions are not allowed; everything lives in a
        # declaration block or a subprogram
        self._error(create_unexpected_expression_error(self.current))
        return None

    def _parse_variables_statement(self) -> VariablesStatement:
        """
        Parse a `var` block:

            var
                x = 1
                y: numerico = x + 1

        Declarations are separated by line breaks and the block ends at the
        first line that does not start with an identifier.
        """
        statement = VariablesStatement(self.current)

        # A missing line break is reported but the declarations that
        # follow on the same line are still read
        if not self._next_is(TokenType.NEWLINE):
            self._record(create_expected_newline_error(self.current))

        self._consume_newlines()

        if not self._next_is(TokenType.IDENTIFIER):
            self._error(create_expected_var_declaration_error(self.next))
            return statement

        while self._next_is(TokenType.IDENTIFIER):
            self._advance()
            declaration = self._parse_var_declaration()
            if declaration is None:
                break
            statement.declarations.append(declaration)
            self._consume_newlines()

        return statement

    def _parse_var_declaration(self) -> Optional[VarDeclaration]:
        """Parse `name [: type] = expression` with `current` on the name."""
        declaration = VarDeclaration(self.current)

        if self._next_is(TokenType.COLON):
            self._advance()
            if not self.next.is_type_name:
                self._error(create_expected_type_annotation_error(self.next))
                return None
            self._advance()
            declaration.type = TypeExpression(self.current)

        if not self._next_is(TokenType.ASSIGN):
            self._error(create_expected_equal_sign_error(self.next))
            return None

        self._advance()  # onto '='
        self._advance()  # onto the first token of the value

        declaration.value = self.parse_expression(Precedence.LOWEST)
        if declaration.value is None:
            return None

        return declaration

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_identifier(self) -> Identifier:
        return Identifier(self.current)

    def _parse_number(self) -> NumberNode:
        return NumberNode(self.current)

    def _parse_prefix(self) -> Optional[PrefixExpression]:
        """Parse a unary operator and its operand."""
        operator_token = self.current
        self._advance()

        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None

        return PrefixExpression(operator_token, operator_token.lexeme, right)

    def _parse_grouping(self) -> Optional[Expression]:
        """Parse `( expression )`. The parentheses leave no node behind."""
        self._advance()
        self._skip_newlines()

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if not self._next_is(TokenType.RIGHT_PAREN):
            self._error(create_expected_closing_paren_error(self.next))
            return None

        self._advance()
        return expression

    def _parse_infix(self, left: Expression) -> Optional[InfixExpression]:
        """
        Parse a binary operator with `current` on the operator.

        A line break may follow the operator; the right operand continues on
        the next line.
        """
        operator_token = self.current
        expression = InfixExpression(operator_token, operator_token.lexeme, left)
        precedence = self._current_precedence()

        self._advance()
        self._skip_newlines()

        expression.right = self.parse_expression(precedence)
        if expression.right is None:
            return None

        return expression

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _advance(self):
        """Shift `next` into `current` and pull a fresh `next`."""
        self.current = self.next
        self.next = self.lexer.next_token()

    def _next_is(self, token_type: TokenType) -> bool:
        return self.next.type == token_type

    def _consume_newlines(self):
        """
        Advance while `next` is a NEWLINE.

        `current` ends on the last newline of the run, if there was one.
        """
        while self._next_is(TokenType.NEWLINE):
            self._advance()

    def _skip_newlines(self):
        """Advance while `current` is a NEWLINE."""
        while self.current.type == TokenType.NEWLINE:
            self._advance()

    def _current_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.current.type, Precedence.LOWEST)

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.next.type, Precedence.LOWEST)

    # ------------------------------------------------------------------
    # Error handling
    # ------------------------------------------------------------------

    def _record(self, error: ParseError):
        """Store an error without moving."""
        self.errors.append(error)
        logger.debug(
            "%s at %s: %s", error.kind.value, error.location, error.message,
            extra={"extra_data": {"kind": error.kind.value, "line": error.line, "column": error.column}}
        )

    def _error(self, error: ParseError):
        """Store an error and synchronize to the next statement."""
        self._record(error)
        self._synchronize()

    def _synchronize(self):
        """
        Discard tokens until `next` starts a statement or ends the input.

        The boundary is left in `next` so the main loop's advance lands on it.
        """
        while not SyntaxErrorRecovery.is_statement_boundary(self.next.type):
            self._advance()


def parse_string(source: str, filename: str = "<string>") -> Tuple[List[Statement], List[ParseError]]:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        The top-level statements and the recorded errors

    Raises:
        LexerError: If the source uses a disallowed keyword
    """
    parser = Parser(Lexer(source, filename))
    parser.parse_program()
    return parser.get_ast(), parser.get_errors()
