import io
import os

from diagnostics import ErrorReporter
from interpreter import Interpreter
from parser import Parser
from scanner import Scanner
from tokens import Token, TokenType

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def quiet_reporter() -> ErrorReporter:
    """A reporter that records diagnostics without writing to stderr."""
    return ErrorReporter(stream=io.StringIO())


def scan(text: str, reporter=None):
    """Return a list of tokens for the given source text."""
    return Scanner(text, reporter or quiet_reporter()).scan_tokens()


def parse_text(text: str, reporter=None):
    """Convenience: scan+parse a source text into a statement list."""
    reporter = reporter or quiet_reporter()
    return Parser(Scanner(text, reporter).scan_tokens(), reporter).parse()


def parse_expr(text: str):
    """Parse a single expression (a trailing ';' is added)."""
    return parse_text(text + ";")[0].expression


def run_source(text: str, interpreter=None):
    """Scan, parse and interpret `text`; return (stdout text, interpreter)."""
    if interpreter is None:
        interpreter = Interpreter(reporter=quiet_reporter(), out=io.StringIO())
    statements = Parser(
        Scanner(text, interpreter.reporter).scan_tokens(), interpreter.reporter
    ).parse()
    interpreter.interpret(statements)
    return interpreter.out.getvalue(), interpreter


def ident(name: str, line: int = 1) -> Token:
    return Token(TokenType.IDENTIFIER, name, None, line)


def op(token_type: TokenType, lexeme: str = "", line: int = 1) -> Token:
    return Token(token_type, lexeme, None, line)
