"""Diagnostics accumulator shared by the scanner, parser and interpreter.

`ErrorReporter` is handed to each pipeline stage instead of relying on
process-wide "had error" flags. Every diagnostic is rendered with the exact
text the rest of the toolchain (and the tests) expect:

- scan/parse errors: ``[<line>]: Error <where>: <message>``
- runtime errors:    ``<message>\\n[line <line>]``

`LoxRuntimeError` is the exception the interpreter raises for type errors
and undefined variables; it is caught once per batch and handed to
`ErrorReporter.runtime_error`.

Rendered lines are kept in `messages` and written to `stream` (standard
error unless another stream was supplied).
"""

from __future__ import annotations
import sys
from typing import List, Optional, TextIO

from tokens import Token, TokenType


class LoxRuntimeError(Exception):
    """A recoverable evaluation failure tied to the offending token."""

    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class ErrorReporter:
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.messages: List[str] = []
        self.had_error = False
        self.had_runtime_error = False

    def error(self, line: int, message: str) -> None:
        """Report an error that is only tied to a source line."""
        self.report(line, "", message)

    def token_error(self, token: Token, message: str) -> None:
        """Report an error located at `token`."""
        if token.type == TokenType.EOF:
            self.report(token.line, "at end", message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def report(self, line: int, where: str, message: str) -> None:
        self._emit(f"[{line}]: Error {where}: {message}")
        self.had_error = True

    def runtime_error(self, error: LoxRuntimeError) -> None:
        self._emit(f"{error.message}\n[line {error.token.line}]")
        self.had_runtime_error = True

    def reset(self) -> None:
        """Forget diagnostics and error state between independent batches (REPL lines)."""
        self.messages = []
        self.had_error = False
        self.had_runtime_error = False

    def _emit(self, text: str) -> None:
        self.messages.append(text)
        stream = self.stream if self.stream is not None else sys.stderr
        print(text, file=stream)
