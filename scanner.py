"""
Scanner for the Lox scripting language.

Overview:
- This module implements a small hand-written lexical analyzer that turns a
    source string into a list of `Token` objects defined in `tokens.py`,
    terminated by a single `EOF` token.
- It recognizes punctuation, one- and two-character operators (`!=`, `==`,
    `<=`, `>=`), string and number literals, identifiers and the keywords in
    `tokens.KEYWORDS`. Whitespace, `// line` comments and `/* block */`
    comments are skipped.

Examples:
    Input:  'var x = 1.5; print x;'
    Tokens: [VAR, IDENTIFIER('x'), EQUAL, NUMBER(1.5), SEMICOLON, PRINT, ...]

Implementation notes:
- The scanner keeps two cursors: `start` marks the first character of the
    lexeme being scanned and `current` is the next character to read. The
    lexeme of every token is `source[start:current]`.
- `line` is incremented for every consumed newline, including newlines in
    string literals and block comments.
- Errors (unexpected characters, unterminated strings or comments) are sent
    to the `ErrorReporter` and scanning continues; the scanner never raises.
"""

from __future__ import annotations
import logging
from typing import List, Optional

from diagnostics import ErrorReporter
from tokens import KEYWORDS, Token, TokenType

logger = logging.getLogger(__name__)


class Scanner:
    def __init__(self, source: str, reporter: Optional[ErrorReporter] = None):
        self.source = source
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.tokens: List[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        """Consume and return the next character."""
        char = self.source[self.current]
        self.current += 1
        return char

    def match(self, expected: str) -> bool:
        """Consume the next character only if it is `expected`."""
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        """Look at the next character without consuming it."""
        if self.is_at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def add_token(self, token_type: TokenType, literal=None) -> None:
        text = self.source[self.start : self.current]
        self.tokens.append(Token(token_type, text, literal, self.line))

    def skip_line_comment(self) -> None:
        """Skip a `// ...` comment up to (not including) the newline."""
        while self.peek() != "\n" and not self.is_at_end():
            self.advance()

    def skip_block_comment(self) -> None:
        """Skip a `/* ... */` comment. Block comments do not nest."""
        while not self.is_at_end():
            if self.peek() == "*" and self.peek_next() == "/":
                self.advance()
                self.advance()
                return
            if self.advance() == "\n":
                self.line += 1

        self.reporter.error(self.line, "Unterminated block comment.")

    def string(self) -> None:
        """Scan a string literal; the opening quote is already consumed."""
        while self.peek() != '"' and not self.is_at_end():
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        if self.is_at_end():
            self.reporter.error(self.line, "Unterminated string.")
            return

        # closing "
        self.advance()

        value = self.source[self.start + 1 : self.current - 1]
        self.add_token(TokenType.STRING, value)

    def number(self) -> None:
        """Scan `digits ('.' digits)?`; a trailing '.' is left for the next token."""
        while _is_digit(self.peek()):
            self.advance()

        if self.peek() == "." and _is_digit(self.peek_next()):
            self.advance()
            while _is_digit(self.peek()):
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.source[self.start : self.current]))

    def identifier(self) -> None:
        while _is_alpha_numeric(self.peek()):
            self.advance()

        text = self.source[self.start : self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def scan_token(self) -> None:
        char = self.advance()

        # Single character tokens and the two-character operators that start
        # with one of them. Two-character operators use one character of
        # lookahead so `==` is not scanned as `=` `=`.
        match char:
            case "(":
                self.add_token(TokenType.LEFT_PAREN)
            case ")":
                self.add_token(TokenType.RIGHT_PAREN)
            case "{":
                self.add_token(TokenType.LEFT_BRACE)
            case "}":
                self.add_token(TokenType.RIGHT_BRACE)
            case ",":
                self.add_token(TokenType.COMMA)
            case ".":
                self.add_token(TokenType.DOT)
            case "-":
                self.add_token(TokenType.MINUS)
            case "+":
                self.add_token(TokenType.PLUS)
            case ";":
                self.add_token(TokenType.SEMICOLON)
            case "*":
                self.add_token(TokenType.STAR)
            case "?":
                self.add_token(TokenType.QUESTION_MARK)
            case ":":
                self.add_token(TokenType.COLON)
            case "!":
                self.add_token(
                    TokenType.BANG_EQUAL if self.match("=") else TokenType.BANG
                )
            case "=":
                self.add_token(
                    TokenType.EQUAL_EQUAL if self.match("=") else TokenType.EQUAL
                )
            case "<":
                self.add_token(
                    TokenType.LESS_EQUAL if self.match("=") else TokenType.LESS
                )
            case ">":
                self.add_token(
                    TokenType.GREATER_EQUAL if self.match("=") else TokenType.GREATER
                )
            case "/":
                if self.match("/"):
                    self.skip_line_comment()
                elif self.match("*"):
                    self.skip_block_comment()
                else:
                    self.add_token(TokenType.SLASH)
            case '"':
                self.string()
            case "\n":
                self.line += 1
            case " " | "\t" | "\r":
                pass
            case _:
                if _is_digit(char):
                    self.number()
                elif _is_alpha(char):
                    self.identifier()
                else:
                    self.reporter.error(self.line, "Unexpected character.")

    def scan_tokens(self) -> List[Token]:
        """Return all tokens from the source, ending with an EOF token."""
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        logger.debug("scanned %d tokens over %d lines", len(self.tokens), self.line)
        return self.tokens


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_alpha(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def _is_alpha_numeric(char: str) -> bool:
    return _is_alpha(char) or _is_digit(char)
