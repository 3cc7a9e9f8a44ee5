"""
Parser for the Lox scripting language.

Overview and approach:
- This parser is a hand-written recursive-descent parser with one method per
    grammar rule. Expression precedence is encoded by the call chain, lowest
    to highest:

        expression  := assignment
        assignment  := ternary ( '=' assignment )?
        ternary     := logic_or ( '?' expression ':' expression )?
        logic_or    := logic_and ( 'or' logic_and )*
        logic_and   := equality ( 'and' equality )*
        equality    := comparison ( ( '!=' | '==' ) comparison )*
        comparison  := term ( ( '>' | '>=' | '<' | '<=' ) term )*
        term        := factor ( ( '-' | '+' ) factor )*
        factor      := unary ( ( '/' | '*' ) unary )*
        unary       := ( '!' | '-' ) unary | primary
        primary     := NUMBER | STRING | 'true' | 'false' | 'nil'
                     | IDENTIFIER | '(' expression ')'

    All binary levels are left-associative and share
    `_left_associative()`. Assignment and the ternary operator are
    right-associative.

- Statement parsing:
    - `declaration()` handles `var` declarations and falls back to
        `statement()`, which recognizes `for`, `if`, `print`, `while`, blocks
        and expression statements.
    - `for` loops have no node of their own. They are desugared into
        `BlockNode`/`WhileStatementNode`/`ExpressionStatementNode`:

            for (init; cond; incr) body
            =>  { init; while (cond) { body; incr; } }

- Error recovery:
    - A syntax error raises the parser-local `ParseError` after reporting the
        diagnostic. `declaration()` catches it, calls `synchronize()` to skip to
        the next statement boundary and returns `None` for that slot, so one
        pass can surface several independent errors. `ParseError` never
        escapes `parse()`.
    - An invalid assignment target is reported but not raised; the left-hand
        expression is kept and parsing continues.
    - Input nested too deeply for the Python stack is reported as
        `Expression nesting too deep.` and recovered from the same way.
"""

from __future__ import annotations
import logging
from typing import Callable, List, Optional

from ast_nodes import *
from diagnostics import ErrorReporter
from tokens import Token, TokenType

logger = logging.getLogger(__name__)

# Tokens that begin a statement; `synchronize()` stops in front of them.
STATEMENT_STARTERS = {
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
}


class ParseError(Exception):
    pass


class Parser:
    def __init__(self, tokens: List[Token], reporter: Optional[ErrorReporter] = None):
        self.tokens = tokens
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.current = 0

    # Token-stream navigation

    def peek(self) -> Token:
        """Return the current token without consuming it."""
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def advance(self) -> Token:
        """Consume the current token and return it."""
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def check(self, token_type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type == token_type

    def match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it has one of `token_types`."""
        for token_type in token_types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        """Expect and consume a token of the given type."""
        if self.check(token_type):
            return self.advance()
        raise self.error(self.peek(), message)

    def error(self, token: Token, message: str) -> ParseError:
        self.reporter.token_error(token, message)
        return ParseError(message)

    def synchronize(self) -> None:
        """Discard tokens until the start of the next statement."""
        self.advance()

        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_STARTERS:
                return
            self.advance()

    # Statements

    def parse(self) -> List[Optional[Stmt]]:
        """Parse a complete program. Slots that failed to parse are `None`."""
        statements: List[Optional[Stmt]] = []
        while not self.is_at_end():
            try:
                statements.append(self.declaration())
            except RecursionError:
                self.error(self.peek(), "Expression nesting too deep.")
                self.synchronize()
                statements.append(None)
        return statements

    def declaration(self) -> Optional[Stmt]:
        try:
            if self.match(TokenType.VAR):
                return self.variable_declaration()
            return self.statement()
        except ParseError as e:
            logger.debug("recovering from parse error: %s", e)
            self.synchronize()
            return None

    def variable_declaration(self) -> Stmt:
        """Parse `var name ( '=' expression )? ';'` after the `var` keyword."""
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()

        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return VariableDeclarationNode(name, initializer)

    def statement(self) -> Stmt:
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.LEFT_BRACE):
            return BlockNode(self.block())
        return self.expression_statement()

    def for_statement(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.variable_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()

        # Build the desugared loop inside-out.
        if increment is not None:
            body = BlockNode([body, ExpressionStatementNode(increment)])
        if condition is None:
            condition = LiteralNode(True)
        body = WhileStatementNode(condition, body)
        if initializer is not None:
            body = BlockNode([initializer, body])

        return body

    def if_statement(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.statement()

        return IfStatementNode(condition, then_branch, else_branch)

    def print_statement(self) -> Stmt:
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return PrintStatementNode(value)

    def while_statement(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after while condition.")

        body = self.statement()
        return WhileStatementNode(condition, body)

    def block(self) -> List[Optional[Stmt]]:
        """Parse the declarations of a block; the '{' is already consumed."""
        statements: List[Optional[Stmt]] = []

        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            statements.append(self.declaration())

        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self) -> Stmt:
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExpressionStatementNode(value)

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.ternary()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, VariableNode):
                return AssignmentNode(expr.name, value)

            # reported only; parsing continues with `expr`
            self.error(equals, "Invalid assignment target.")

        return expr

    def ternary(self) -> Expr:
        expr = self.logic_or()

        if self.match(TokenType.QUESTION_MARK):
            left = self.expression()
            self.consume(TokenType.COLON, "Expect : after ternary expression.")
            right = self.expression()
            expr = TernaryNode(expr, left, right)

        return expr

    def logic_or(self) -> Expr:
        return self._left_associative(self.logic_and, LogicalOpNode, TokenType.OR)

    def logic_and(self) -> Expr:
        return self._left_associative(self.equality, LogicalOpNode, TokenType.AND)

    def equality(self) -> Expr:
        return self._left_associative(
            self.comparison, BinaryOpNode, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL
        )

    def comparison(self) -> Expr:
        return self._left_associative(
            self.term,
            BinaryOpNode,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        )

    def term(self) -> Expr:
        return self._left_associative(
            self.factor, BinaryOpNode, TokenType.MINUS, TokenType.PLUS
        )

    def factor(self) -> Expr:
        return self._left_associative(
            self.unary, BinaryOpNode, TokenType.SLASH, TokenType.STAR
        )

    def unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            return UnaryOpNode(operator, right)
        return self.primary()

    def primary(self) -> Expr:
        token = self.peek()

        match token.type:
            case TokenType.FALSE:
                self.advance()
                return LiteralNode(False)
            case TokenType.TRUE:
                self.advance()
                return LiteralNode(True)
            case TokenType.NIL:
                self.advance()
                return LiteralNode(None)
            case TokenType.NUMBER | TokenType.STRING:
                self.advance()
                return LiteralNode(token.literal)
            case TokenType.IDENTIFIER:
                self.advance()
                return VariableNode(token)
            case TokenType.LEFT_PAREN:
                self.advance()
                expr = self.expression()
                self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
                return GroupingNode(expr)
            case _:
                raise self.error(token, "Expect expression.")

    def _left_associative(
        self,
        operand: Callable[[], Expr],
        node_class: Callable[[Expr, Token, Expr], Expr],
        *operators: TokenType,
    ) -> Expr:
        """Parse `operand ( op operand )*`, folding into a left-deep tree."""
        expr = operand()

        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = node_class(expr, operator, right)

        return expr
