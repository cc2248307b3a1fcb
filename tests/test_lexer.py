"""
Test suite for the SL lexer.

Tests cover:
- Symbol and keyword recognition
- Case-insensitive keywords and the disallowed reserved words
- Numbers, identifiers and illegal characters
- Newlines, whitespace and line comments
- Look-ahead and end-of-stream behavior
- Source positions

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from slc.lexer.lexer import Lexer, tokenize_string
from slc.lexer.tokens import TokenType, SourceLocation
from slc.lexer.errors import LexerError


class TestLexer(unittest.TestCase):
    """Test cases for the lexer."""

    def _types(self, source: str):
        """Helper returning the token types of a source string."""
        return [token.type for token in tokenize_string(source)]

    def test_symbols(self):
        """Every symbol maps to its own token type."""
        self.assertEqual(self._types(';"\'/*{}[]():=><+-^'), [
            TokenType.SEMICOLON, TokenType.DOUBLE_QUOTE, TokenType.SINGLE_QUOTE,
            TokenType.DIVIDE, TokenType.MULTIPLY, TokenType.LEFT_BRACE,
            TokenType.RIGHT_BRACE, TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET,
            TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.COLON,
            TokenType.ASSIGN, TokenType.GREATER_THAN, TokenType.LESS_THAN,
            TokenType.PLUS, TokenType.MINUS, TokenType.POWER, TokenType.EOF,
        ])

    def test_keywords(self):
        """Reserved words are keywords, not identifiers."""
        source = "var variables const constantes tipos tipo subrutina retorna ref inicio fin programa"
        self.assertEqual(self._types(source), [
            TokenType.VAR, TokenType.VARIABLES, TokenType.CONST, TokenType.CONSTANTES,
            TokenType.TIPOS, TokenType.TIPO, TokenType.SUBRUTINA, TokenType.RETORNA,
            TokenType.REF, TokenType.INICIO, TokenType.FIN, TokenType.PROGRAMA,
            TokenType.EOF,
        ])

        source = "si sino mientras repetir paso salir eval caso and or not"
        self.assertEqual(self._types(source), [
            TokenType.SI, TokenType.SINO, TokenType.MIENTRAS, TokenType.REPETIR,
            TokenType.PASO, TokenType.SALIR, TokenType.EVAL, TokenType.CASO,
            TokenType.AND, TokenType.OR, TokenType.NOT, TokenType.EOF,
        ])

        source = "logico numerico cadena registro vector matriz"
        self.assertEqual(self._types(source), [
            TokenType.LOGICO, TokenType.NUMERICO, TokenType.CADENA,
            TokenType.REGISTRO, TokenType.VECTOR, TokenType.MATRIZ, TokenType.EOF,
        ])

    def test_keywords_are_case_insensitive(self):
        """Keyword casing does not matter and the lexeme keeps the original spelling."""
        tokens = tokenize_string("VAR Var vAr NUMERICO")
        self.assertEqual([t.type for t in tokens[:3]], [TokenType.VAR] * 3)
        self.assertEqual([t.lexeme for t in tokens[:3]], ["VAR", "Var", "vAr"])
        self.assertEqual(tokens[3].type, TokenType.NUMERICO)

    def test_disallowed_keywords(self):
        """lib, libext and archivo abort lexing in any casing."""
        for word in ["lib", "LIB", "libext", "LibExt", "archivo", "ARCHIVO"]:
            with self.subTest(word=word):
                with self.assertRaises(LexerError) as ctx:
                    tokenize_string(word)
                self.assertIn("reserved but not allowed", str(ctx.exception))
                self.assertEqual(ctx.exception.lexeme, word)

    def test_disallowed_keyword_is_raised_lazily(self):
        """Tokens before the disallowed word are still handed out."""
        lexer = Lexer("x = lib")
        self.assertEqual(lexer.next_token().type, TokenType.IDENTIFIER)
        self.assertEqual(lexer.next_token().type, TokenType.ASSIGN)
        with self.assertRaises(LexerError) as ctx:
            lexer.next_token()
        self.assertEqual(ctx.exception.location.column, 5)

    def test_disallowed_keyword_is_logged(self):
        with self.assertLogs("slc.lexer.lexer", level="ERROR"):
            with self.assertRaises(LexerError):
                tokenize_string("archivo")

    def test_words_containing_disallowed_keywords(self):
        """Only the exact words are disallowed."""
        self.assertEqual(self._types("library archivos"), [
            TokenType.IDENTIFIER, TokenType.IDENTIFIER, TokenType.EOF,
        ])

    def test_identifiers(self):
        """Letters, digits and underscores after a letter or underscore."""
        tokens = tokenize_string("contador _tmp x1_y2 varx")
        self.assertEqual([t.type for t in tokens[:-1]], [TokenType.IDENTIFIER] * 4)
        self.assertEqual([t.lexeme for t in tokens[:-1]], ["contador", "_tmp", "x1_y2", "varx"])

    def test_numbers(self):
        """Numbers are digit runs with no sign and no decimals."""
        tokens = tokenize_string("42 -7 3.5")
        self.assertEqual([(t.type, t.lexeme) for t in tokens], [
            (TokenType.NUMBER, "42"),
            (TokenType.MINUS, "-"),
            (TokenType.NUMBER, "7"),
            (TokenType.NUMBER, "3"),
            (TokenType.ILLEGAL, "."),
            (TokenType.NUMBER, "5"),
            (TokenType.EOF, ""),
        ])

    def test_number_followed_by_letters(self):
        tokens = tokenize_string("123abc")
        self.assertEqual([(t.type, t.lexeme) for t in tokens[:2]], [
            (TokenType.NUMBER, "123"),
            (TokenType.IDENTIFIER, "abc"),
        ])

    def test_illegal_characters(self):
        """Unknown characters come back one at a time as ILLEGAL."""
        tokens = tokenize_string("@#")
        self.assertEqual([(t.type, t.lexeme) for t in tokens[:2]], [
            (TokenType.ILLEGAL, "@"),
            (TokenType.ILLEGAL, "#"),
        ])

    def test_newlines_are_tokens(self):
        self.assertEqual(self._types("var\n\nx"), [
            TokenType.VAR, TokenType.NEWLINE, TokenType.NEWLINE,
            TokenType.IDENTIFIER, TokenType.EOF,
        ])

    def test_whitespace_is_skipped(self):
        self.assertEqual(self._types(" \t x \r\n"), [
            TokenType.IDENTIFIER, TokenType.NEWLINE, TokenType.EOF,
        ])

    def test_line_comments(self):
        """A comment runs to the end of the line but leaves the newline."""
        self.assertEqual(self._types("x // comment = 5\ny"), [
            TokenType.IDENTIFIER, TokenType.NEWLINE, TokenType.IDENTIFIER, TokenType.EOF,
        ])
        self.assertEqual(self._types("// only a comment"), [TokenType.EOF])
        self.assertEqual(self._types("// one\n  // two\n"), [
            TokenType.NEWLINE, TokenType.NEWLINE, TokenType.EOF,
        ])

    def test_comment_hides_disallowed_keyword(self):
        self.assertEqual(self._types("// lib archivo"), [TokenType.EOF])

    def test_single_slash_is_divide(self):
        self.assertEqual(self._types("a / b"), [
            TokenType.IDENTIFIER, TokenType.DIVIDE, TokenType.IDENTIFIER, TokenType.EOF,
        ])

    def test_positions(self):
        """Tokens record 1-based line and column and 0-based offset."""
        tokens = tokenize_string("var\n  x = 5", filename="prog.sl")
        locations = [t.location for t in tokens]
        self.assertEqual(locations, [
            SourceLocation("prog.sl", 1, 1, 0),    # var
            SourceLocation("prog.sl", 1, 4, 3),    # newline
            SourceLocation("prog.sl", 2, 3, 6),    # x
            SourceLocation("prog.sl", 2, 5, 8),    # =
            SourceLocation("prog.sl", 2, 7, 10),   # 5
            SourceLocation("prog.sl", 2, 8, 11),   # EOF
        ])
        self.assertEqual(str(tokens[2].location), "prog.sl:2:3")

    def test_eof_is_stable(self):
        """EOF is returned forever once the input is exhausted."""
        lexer = Lexer("x")
        self.assertEqual(lexer.next_token().type, TokenType.IDENTIFIER)
        for _ in range(5):
            self.assertEqual(lexer.next_token().type, TokenType.EOF)

    def test_empty_source(self):
        tokens = tokenize_string("")
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].type, TokenType.EOF)

    def test_look_ahead_does_not_consume(self):
        lexer = Lexer("x = 5")
        peeked = lexer.look_ahead()
        self.assertEqual(lexer.look_ahead(), peeked)
        self.assertEqual(lexer.next_token(), peeked)
        self.assertEqual(lexer.next_token().type, TokenType.ASSIGN)

    def test_look_ahead_at_end(self):
        lexer = Lexer("")
        self.assertEqual(lexer.look_ahead().type, TokenType.EOF)
        self.assertEqual(lexer.next_token().type, TokenType.EOF)

    def test_tokenize_ends_with_single_eof(self):
        tokens = Lexer("var\n  x = 1\n").tokenize()
        self.assertEqual(tokens[-1].type, TokenType.EOF)
        self.assertEqual(sum(1 for t in tokens if t.type == TokenType.EOF), 1)

    def test_token_helpers(self):
        var, name, colon, type_name, _ = tokenize_string("var x : cadena")
        self.assertTrue(var.is_keyword)
        self.assertTrue(var.is_statement_start)
        self.assertFalse(name.is_keyword)
        self.assertTrue(name.is_type_name)
        self.assertTrue(type_name.is_type_name)
        self.assertFalse(colon.is_type_name)
        self.assertEqual(name.literal, "x")
        self.assertEqual((name.line, name.column), (1, 5))

    def test_newline_token_str(self):
        newline = tokenize_string("\n")[0]
        self.assertEqual(str(newline), "NEWLINE('\\n')")
        self.assertEqual(str(tokenize_string("x")[0]), "IDENTIFIER('x')")


if __name__ == "__main__":
    unittest.main()
