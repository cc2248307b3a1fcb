"""
Error handling for the SL lexer.

The lexer has exactly one fatal condition: a reserved-but-disallowed word
(`lib`, `libext`, `archivo`). Unknown characters are not errors at this
layer, they come back as ILLEGAL tokens for the parser to report.
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base record for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None
    
    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"
        
        if self.help_text:
            result += f"  help: {self.help_text}\n"
        
        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"
        
        return result


class LexerError(Exception):
    """
    Exception raised when the lexer meets a disallowed keyword.
    
    This aborts the whole parse; no token is produced for the offending word.
    """
    
    def __init__(
        self, 
        message: str, 
        location: SourceLocation,
        lexeme: str = "",
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.lexeme = lexeme
        self.diagnostic = Diagnostic(
            message=message,
            location=location, 
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
    
    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location
    
    def __str__(self) -> str:
        return str(self.diagnostic)


class ErrorRecovery:
    """
    Helpers for turning lexical mistakes into useful hints.
    """
    
    @staticmethod
    def suggest_keyword_corrections(invalid_word: str) -> List[str]:
        """Suggest corrections for misspelled keywords using edit distance."""
        from .tokens import KEYWORDS, DISALLOWED_KEYWORDS
        
        word = invalid_word.lower()
        suggestions = []
        for keyword, token_type in KEYWORDS.items():
            if token_type in DISALLOWED_KEYWORDS or keyword == word:
                continue
            distance = ErrorRecovery._edit_distance(word, keyword)
            if distance <= 2:  # Allow up to 2 character differences
                suggestions.append(keyword)
        
        return sorted(suggestions, key=lambda k: (ErrorRecovery._edit_distance(word, k), k))[:3]
    
    @staticmethod
    def _edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return ErrorRecovery._edit_distance(s2, s1)
        
        if len(s2) == 0:
            return len(s1)
        
        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row
        
        return previous_row[-1]


# Error codes for categorization
ERROR_CODES = {
    "L001": "Reserved keyword is not allowed",
}


def create_disallowed_keyword_error(lexeme: str, location: SourceLocation) -> LexerError:
    """Create the fatal error for `lib`, `libext` or `archivo`."""
    return LexerError(
        message=f"Token '{lexeme}' is reserved but not allowed",
        location=location,
        lexeme=lexeme,
        code="L001",
        help_text=f"'{lexeme.lower()}' is a reserved word of the language but programs may not use it.",
        suggestions=["Remove the statement", "Rename the identifier"]
    )
