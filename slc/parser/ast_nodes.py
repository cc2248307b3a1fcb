"""
Abstract Syntax Tree node definitions for SL.

The tree is a closed set of variants split into two categories, statements
and expressions. Every node keeps the token it came from, owns its
children exclusively and has no link back to its parent. Nodes compare
structurally, so two parses of the same source give equal trees.

Each node can render itself with string(depth), two spaces per level.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from dataclasses import dataclass, field
from enum import Enum

from ..lexer.tokens import Token


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Statements
    VARIABLES_STATEMENT = "VariablesStatement"
    VAR_DECLARATION = "VarDeclaration"

    # Expressions
    IDENTIFIER = "Identifier"
    NUMBER = "Number"
    TYPE_EXPRESSION = "TypeExpression"
    PREFIX_EXPRESSION = "PrefixExpression"
    INFIX_EXPRESSION = "InfixExpression"


def indent(depth: int) -> str:
    return "  " * depth


class ASTNode(ABC):
    """
    Base class for all AST nodes.

    Subclasses are dataclasses with a `token` field and a class-level
    `node_type`.
    """

    node_type: ASTNodeType

    def token_literal(self) -> str:
        """Source text of the token this node originated from."""
        return self.token.lexeme

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def column(self) -> int:
        return self.token.column

    @abstractmethod
    def string(self, depth: int = 0) -> str:
        """Render this node and its children, one line per node."""
        pass

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    def __str__(self) -> str:
        return self.string(0)


class Statement(ASTNode):
    """Base class for statements."""
    pass


class Expression(ASTNode):
    """Base class for expressions."""
    pass


# ============================================================================
# Expressions
# ============================================================================

@dataclass(eq=True)
class Identifier(Expression):
    """A variable name."""
    token: Token
    value: str = field(init=False)

    node_type = ASTNodeType.IDENTIFIER

    def __post_init__(self):
        self.value = self.token.lexeme

    def string(self, depth: int = 0) -> str:
        return f"{indent(depth)}Identifier ({self.value})\n"

    def children(self) -> List[ASTNode]:
        return []


@dataclass(eq=True)
class NumberNode(Expression):
    """
    A number literal.

    `value` is the digit string as written; turning it into a number is
    left to whatever consumes the tree.
    """
    token: Token
    value: str = field(init=False)

    node_type = ASTNodeType.NUMBER

    def __post_init__(self):
        self.value = self.token.lexeme

    def string(self, depth: int = 0) -> str:
        return f"{indent(depth)}Number ({self.value})\n"

    def children(self) -> List[ASTNode]:
        return []


@dataclass(eq=True)
class TypeExpression(Expression):
    """The type name written in a `name: type` annotation."""
    token: Token
    value: str = field(init=False)

    node_type = ASTNodeType.TYPE_EXPRESSION

    def __post_init__(self):
        self.value = self.token.lexeme

    def string(self, depth: int = 0) -> str:
        return f"{indent(depth)}Type ({self.value})\n"

    def children(self) -> List[ASTNode]:
        return []


@dataclass(eq=True)
class PrefixExpression(Expression):
    """Unary operator applied to the expression on its right (`-x`, `not x`)."""
    token: Token
    operator: str
    right: Expression

    node_type = ASTNodeType.PREFIX_EXPRESSION

    def string(self, depth: int = 0) -> str:
        out = f"{indent(depth)}PrefixExpression ({self.operator})\n"
        out += self.right.string(depth + 1)
        return out

    def children(self) -> List[ASTNode]:
        return [self.right]


@dataclass(eq=True)
class InfixExpression(Expression):
    """
    Binary operator expression.

    `right` is only None while the parser is still reading the right
    operand; a finished tree always has both sides.
    """
    token: Token
    operator: str
    left: Expression
    right: Optional[Expression] = None

    node_type = ASTNodeType.INFIX_EXPRESSION

    def string(self, depth: int = 0) -> str:
        out = f"{indent(depth)}InfixExpression ({self.operator})\n"
        out += f"{indent(depth + 1)}Left:\n"
        out += self.left.string(depth + 2)

        if self.right is not None:
            out += f"{indent(depth + 1)}Right:\n"
            out += self.right.string(depth + 2)

        return out

    def children(self) -> List[ASTNode]:
        if self.right is None:
            return [self.left]
        return [self.left, self.right]


# ============================================================================
# Statements
# ============================================================================

@dataclass(eq=True)
class VarDeclaration(Statement):
    """
    One `name [: type] = value` line inside a variables block.

    `type` stays None when no annotation was written, meaning the type is
    resolved by a later pass.
    """
    token: Token
    identifier: Identifier = field(init=False)
    type: Optional[TypeExpression] = None
    value: Optional[Expression] = None

    node_type = ASTNodeType.VAR_DECLARATION

    def __post_init__(self):
        self.identifier = Identifier(self.token)

    @property
    def name(self) -> str:
        return self.identifier.value

    def string(self, depth: int = 0) -> str:
        out = f"{indent(depth)}VarDeclaration\n"
        out += f"{indent(depth + 1)}Identifier:\n"
        out += self.identifier.string(depth + 2)

        if self.type is not None:
            out += f"{indent(depth + 1)}Type:\n"
            out += self.type.string(depth + 2)

        if self.value is not None:
            out += f"{indent(depth + 1)}Value:\n"
            out += self.value.string(depth + 2)

        return out

    def children(self) -> List[ASTNode]:
        children: List[ASTNode] = [self.identifier]
        if self.type is not None:
            children.append(self.type)
        if self.value is not None:
            children.append(self.value)
        return children


@dataclass(eq=True)
class VariablesStatement(Statement):
    """A `var` / `variables` block and the declarations under it, in source order."""
    token: Token
    declarations: List[VarDeclaration] = field(default_factory=list)

    node_type = ASTNodeType.VARIABLES_STATEMENT

    @property
    def value(self) -> str:
        return self.token.lexeme

    def string(self, depth: int = 0) -> str:
        out = f"{indent(depth)}VariablesStatement\n"
        for declaration in self.declarations:
            out += declaration.string(depth + 1)
        return out

    def children(self) -> List[ASTNode]:
        return list(self.declarations)


# ============================================================================
# Utilities
# ============================================================================

def ast_to_string(statements: Optional[List[Statement]]) -> str:
    """Render a whole program, statement after statement."""
    if statements is None:
        return "Null AST"
    return "".join(statement.string(0) for statement in statements)
