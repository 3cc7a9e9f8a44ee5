from __future__ import annotations
import argparse
import json
import logging
import subprocess
import sys
from typing import List, Optional

from graphviz import ExecutableNotFound

from ast_json import program_to_json
from ast_nodes import Stmt
from ast_viz import write_and_render
from diagnostics import ErrorReporter
from interpreter import Interpreter
from parser import Parser
from pretty_printer import AstPrinter
from scanner import Scanner
from tokens import Token

logger = logging.getLogger(__name__)

# Exit statuses, following the BSD sysexits convention.
EX_OK = 0
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70

# Deeply nested programs recurse once per AST level in the parser and
# interpreter.
RECURSION_LIMIT = 10_000


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(format="{levelname}: {name}: {message}", style="{")
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def lex(text: str, reporter: Optional[ErrorReporter] = None) -> List[Token]:
    """Tokenize input string."""
    return Scanner(text, reporter).scan_tokens()


def parse_tokens(
    tokens: List[Token], reporter: Optional[ErrorReporter] = None
) -> List[Optional[Stmt]]:
    """Parse tokens into a list of statements."""
    return Parser(tokens, reporter).parse()


def run(
    text: str,
    interpreter: Interpreter,
    reporter: ErrorReporter,
    *,
    print_tokens: bool = False,
    print_ast: bool = False,
    dump_ast_path: Optional[str] = None,
    viz_path: Optional[str] = None,
    viz_format: str = "svg",
) -> None:
    """Process a single batch of source: scan, parse and, if both succeeded, execute.

    Flags control which intermediate stages are printed or written out.
    """
    tokens = lex(text, reporter)
    if print_tokens:
        print(f"Tokens ({len(tokens)}):")
        for i, token in enumerate(tokens):
            print(f"  {i:3}: {token!r}")

    statements = parse_tokens(tokens, reporter)
    if print_ast:
        print("AST:")
        print(AstPrinter.print_program(statements))

    if dump_ast_path:
        try:
            with open(dump_ast_path, "w", encoding="utf-8") as fh:
                json.dump(program_to_json(statements), fh, indent=2)
            print(f"Wrote AST JSON to {dump_ast_path}")
        except OSError as e:
            print(f"Failed to write AST JSON to {dump_ast_path}: {e}")

    if viz_path:
        try:
            rendered = write_and_render(statements, viz_path, fmt=viz_format)
            print(f"Wrote AST visualization to {rendered}")
        except (ExecutableNotFound, subprocess.CalledProcessError, OSError) as e:
            print(f"Failed to render AST visualization to {viz_path}: {e}")

    if reporter.had_error:
        logger.debug("skipping execution: %d diagnostics", len(reporter.messages))
        return

    interpreter.interpret(statements)


def run_file(path: str, **options) -> int:
    """Run a script file and return the process exit status."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            text = fh.read()
    except OSError as e:
        print(f"Failed to read file {path}: {e}", file=sys.stderr)
        return EX_NOINPUT

    reporter = ErrorReporter()
    interpreter = Interpreter(reporter=reporter)
    run(text, interpreter, reporter, **options)

    if reporter.had_error:
        return EX_DATAERR
    if reporter.had_runtime_error:
        return EX_SOFTWARE
    return EX_OK


def run_prompt(**options) -> int:
    """Run an interactive REPL. Bindings persist across lines; errors do not."""
    reporter = ErrorReporter()
    interpreter = Interpreter(reporter=reporter)

    while True:
        try:
            line = input("> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("\nExiting...")
            break

        run(line, interpreter, reporter, **options)
        reporter.reset()

    return EX_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run a Lox script, or start an interactive prompt when no script is given"
    )
    parser.add_argument("script", nargs="?", help="Path to source file to run")
    # printing/verbosity options
    parser.add_argument(
        "--print-tokens", dest="print_tokens", action="store_true", help="Print tokens"
    )
    parser.add_argument(
        "--print-ast", dest="print_ast", action="store_true", help="Print the parsed AST"
    )
    parser.add_argument(
        "--dump-ast", dest="dump_ast", help="Path to write the AST as JSON"
    )
    parser.add_argument(
        "--viz-ast",
        dest="viz_ast",
        help="Path (without extension) to write Graphviz visualization of the AST",
    )
    parser.add_argument(
        "--viz-format",
        dest="viz_format",
        default="svg",
        help="Format for Graphviz output (svg, png, pdf, etc)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        dest="verbose",
        action="store_true",
        help="Log pipeline progress to standard error",
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    options = dict(
        print_tokens=args.print_tokens,
        print_ast=args.print_ast,
        dump_ast_path=args.dump_ast,
        viz_path=args.viz_ast,
        viz_format=args.viz_format,
    )

    if args.script:
        return run_file(args.script, **options)
    return run_prompt(**options)


if __name__ == "__main__":
    sys.exit(main())
