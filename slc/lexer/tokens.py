"""
Token definitions for the SL lexer.

This module defines all token types supported by SL, including:
- Reserved words (declarations, subroutines, program structure, control flow)
- Type-name keywords used in annotations
- Reserved-but-disallowed words (`lib`, `libext`, `archivo`)
- Single-character symbols
- Numbers, identifiers, newlines and end of input

SL is line-structured, so NEWLINE is a real token and not whitespace.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict, FrozenSet


class TokenType(Enum):
    """
    Enumeration of all token types in SL.
    
    Organized by category for clarity and maintainability.
    """
    
    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input
    NEWLINE = auto()                # Newline (statement boundaries)
    ILLEGAL = auto()                # Unrecognized character
    
    # ========================================================================
    # Literals and identifiers
    # ========================================================================
    NUMBER = auto()                 # 42 (digits only, no sign, no decimals)
    IDENTIFIER = auto()             # contador, _tmp, x1
    
    # ========================================================================
    # Keywords
    # ========================================================================
    
    # Declaration keywords
    VAR = auto()                    # var
    VARIABLES = auto()              # variables
    CONST = auto()                  # const
    CONSTANTES = auto()             # constantes
    TIPOS = auto()                  # tipos
    TIPO = auto()                   # tipo
    
    # Subroutine keywords
    SUBRUTINA = auto()              # subrutina
    RETORNA = auto()                # retorna
    REF = auto()                    # ref
    
    # Program structure keywords
    INICIO = auto()                 # inicio
    FIN = auto()                    # fin
    PROGRAMA = auto()               # programa
    
    # Control flow keywords
    SI = auto()                     # si
    SINO = auto()                   # sino
    MIENTRAS = auto()               # mientras
    REPETIR = auto()                # repetir
    PASO = auto()                   # paso
    SALIR = auto()                  # salir
    EVAL = auto()                   # eval
    CASO = auto()                   # caso
    
    # Type-name keywords
    LOGICO = auto()                 # logico
    NUMERICO = auto()               # numerico
    CADENA = auto()                 # cadena
    REGISTRO = auto()               # registro
    VECTOR = auto()                 # vector
    MATRIZ = auto()                 # matriz
    
    # Boolean operators
    AND = auto()                    # and
    OR = auto()                     # or
    NOT = auto()                    # not
    
    # Reserved but never allowed in a program
    LIB = auto()                    # lib
    LIBEXT = auto()                 # libext
    ARCHIVO = auto()                # archivo
    
    # ========================================================================
    # Symbols
    # ========================================================================
    SEMICOLON = auto()              # ;
    DOUBLE_QUOTE = auto()           # "
    SINGLE_QUOTE = auto()           # '
    DIVIDE = auto()                 # /
    MULTIPLY = auto()               # *
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    COLON = auto()                  # :
    ASSIGN = auto()                 # =
    GREATER_THAN = auto()           # >
    LESS_THAN = auto()              # <
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    POWER = auto()                  # ^


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.
    
    Line and column are 1-based; offset is the 0-based index into the source.
    """
    filename: str
    line: int
    column: int
    offset: int
    
    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"
    
    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the SL language.
    
    Tokens are produced once by the lexer and never mutated. Keywords keep
    the casing they were written with in `lexeme`.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    location: SourceLocation        # Where the first character was found
    
    def __str__(self) -> str:
        if self.type == TokenType.NEWLINE:
            return f"{self.type.name}('\\n')"
        return f"{self.type.name}({self.lexeme!r})"
    
    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.location!r})"
    
    @property
    def literal(self) -> str:
        """The raw source text of the token."""
        return self.lexeme
    
    @property
    def line(self) -> int:
        return self.location.line
    
    @property
    def column(self) -> int:
        return self.location.column
    
    @property
    def is_keyword(self) -> bool:
        """Check if this token is a reserved word."""
        return self.type in KEYWORD_TYPES
    
    @property
    def is_type_name(self) -> bool:
        """Check if this token can name a type in an annotation."""
        return self.type in TYPE_KEYWORDS or self.type == TokenType.IDENTIFIER
    
    @property
    def is_statement_start(self) -> bool:
        """Check if this token opens a top-level statement."""
        return self.type in STATEMENT_KEYWORDS


# Lookup tables used by the lexer for keyword and symbol recognition.
# Keyword lookup is case-insensitive, so every key here is lower case.

KEYWORDS: Dict[str, TokenType] = {
    # Declarations
    "var": TokenType.VAR,
    "variables": TokenType.VARIABLES,
    "const": TokenType.CONST,
    "constantes": TokenType.CONSTANTES,
    "tipos": TokenType.TIPOS,
    "tipo": TokenType.TIPO,
    
    # Subroutines
    "subrutina": TokenType.SUBRUTINA,
    "retorna": TokenType.RETORNA,
    "ref": TokenType.REF,
    
    # Program structure
    "inicio": TokenType.INICIO,
    "fin": TokenType.FIN,
    "programa": TokenType.PROGRAMA,
    
    # Control flow
    "si": TokenType.SI,
    "sino": TokenType.SINO,
    "mientras": TokenType.MIENTRAS,
    "repetir": TokenType.REPETIR,
    "paso": TokenType.PASO,
    "salir": TokenType.SALIR,
    "eval": TokenType.EVAL,
    "caso": TokenType.CASO,
    
    # Type names
    "logico": TokenType.LOGICO,
    "numerico": TokenType.NUMERICO,
    "cadena": TokenType.CADENA,
    "registro": TokenType.REGISTRO,
    "vector": TokenType.VECTOR,
    "matriz": TokenType.MATRIZ,
    
    # Boolean operators
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
    
    # Reserved, disallowed
    "lib": TokenType.LIB,
    "libext": TokenType.LIBEXT,
    "archivo": TokenType.ARCHIVO,
}

KEYWORD_TYPES: FrozenSet[TokenType] = frozenset(KEYWORDS.values())

# Words that are reserved but whose use is a fatal lexical error
DISALLOWED_KEYWORDS: FrozenSet[TokenType] = frozenset({
    TokenType.LIB,
    TokenType.LIBEXT,
    TokenType.ARCHIVO,
})

TYPE_KEYWORDS: FrozenSet[TokenType] = frozenset({
    TokenType.LOGICO,
    TokenType.NUMERICO,
    TokenType.CADENA,
    TokenType.REGISTRO,
    TokenType.VECTOR,
    TokenType.MATRIZ,
})

# Keywords that open a top-level statement
STATEMENT_KEYWORDS: FrozenSet[TokenType] = frozenset({
    TokenType.VAR,
    TokenType.VARIABLES,
    TokenType.CONST,
    TokenType.CONSTANTES,
    TokenType.RETORNA,
    TokenType.SUBRUTINA,
    TokenType.TIPOS,
    TokenType.TIPO,
    TokenType.INICIO,
})

SYMBOLS: Dict[str, TokenType] = {
    ";": TokenType.SEMICOLON,
    '"': TokenType.DOUBLE_QUOTE,
    "'": TokenType.SINGLE_QUOTE,
    "/": TokenType.DIVIDE,
    "*": TokenType.MULTIPLY,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    ":": TokenType.COLON,
    "=": TokenType.ASSIGN,
    ">": TokenType.GREATER_THAN,
    "<": TokenType.LESS_THAN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "^": TokenType.POWER,
}

# Whitespace skipped between tokens; newline is deliberately absent
WHITESPACE = frozenset({" ", "\t", "\r"})

LINE_COMMENT = "//"
