## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# lox — Recursive-descent parser from significant tokens to a list of statements.
#

from typing import Iterable

from .ast import (
    Span, Expr, Literal, Grouping, Unary, Binary, Ternary, Variable, Assign,
    Stmt, ExprStmt, PrintStmt, VarDecl, Block, BINARY_OPERATORS, UNARY_OPERATORS,
)
from .types import nil
from .errors import LoxParseError, LoxIncompleteParse
from .scanner import Token, scan, significant


class Parser:
    """One token of lookahead over the stream; the first malformed construct aborts the parse.

    Grammar, lowest to highest precedence:

        program     → declaration* EOF
        declaration → "var" IDENTIFIER ( "=" expression )? ";" | statement
        statement   → "print" expression ";" | "{" declaration* "}" | expression ";"
        expression  → assignment
        assignment  → IDENTIFIER "=" assignment | ternary
        ternary     → comma ( "?" ternary ":" ternary )?
        comma       → equality ( "," equality )*
        equality    → comparison ( ( "==" | "!=" ) comparison )*
        comparison  → term ( ( ">" | ">=" | "<" | "<=" ) term )*
        term        → factor ( ( "+" | "-" ) factor )*
        factor      → unary ( ( "*" | "/" ) unary )*
        unary       → ( "!" | "-" ) unary | primary
        primary     → NUMBER | STRING | "true" | "false" | "nil" | IDENTIFIER | "(" expression ")"
    """

    def __init__(self, tokens: Iterable[Token]):
        self._tokens = iter(tokens)
        self._next: Token | None = next(self._tokens, None)
        self._last_end = 0

    # Token stream ───────────────────────────────────────────────────────────────────────────
    def peek(self) -> Token | None:
        return self._next

    def check(self, *kinds: str) -> bool:
        return self._next is not None and self._next.kind in kinds

    def advance(self) -> Token | None:
        token = self._next
        if token is not None:
            self._last_end = token.end
            self._next = next(self._tokens, None)
        return token

    def at_end(self) -> bool:
        return self._next is None

    def _incomplete(self, message: str, span: Span | None = None) -> LoxIncompleteParse:
        span = span or Span(self._last_end, 0)
        return LoxIncompleteParse.at(message, span)

    # Statements ─────────────────────────────────────────────────────────────────────────────
    def parse(self) -> list[Stmt]:
        statements = []
        while not self.at_end():
            start = self._next.offset
            try:
                statements.append(self.declaration())
            except RecursionError:
                raise LoxParseError.at("Statement is nested too deeply to parse.", Span(start, self._last_end - start)) from None
        return statements

    def declaration(self) -> Stmt:
        if self.check('VAR'):
            return self.var_declaration(self.advance())
        return self.statement()

    def var_declaration(self, keyword: Token) -> VarDecl:
        if (name := self.advance()) is None:
            raise self._incomplete("Expected variable name after 'var'.")
        if name.kind != 'IDENTIFIER':
            raise LoxParseError.at("Expected variable name after 'var'.", Span.of(name))

        initializer = None
        if self.check('EQUAL'):
            self.advance()
            initializer = self.expression()
        self._terminate("Expected ';' after variable declaration.")
        return VarDecl(name.value, initializer, Span.of(name))

    def statement(self) -> Stmt:
        if self.check('PRINT'):
            self.advance()
            expr = self.expression()
            self._terminate("Expected ';' after value.", expr)
            return PrintStmt(expr)
        if self.check('LEFT_BRACE'):
            return self.block(self.advance())

        expr = self.expression()
        self._terminate("Expected ';' after value.", expr)
        return ExprStmt(expr)

    def block(self, brace: Token) -> Block:
        statements = []
        while not self.check('RIGHT_BRACE'):
            if self.at_end():
                raise self._incomplete("Expected '}' after block.", Span.of(brace))
            statements.append(self.declaration())
        closing = self.advance()
        return Block(statements, Span.of(brace).to(Span.of(closing)))

    def _terminate(self, message: str, expr: Expr | None = None) -> None:
        # Missing terminators are reported just past the expression they should follow.
        position = Span(expr.span.end if expr is not None else self._last_end, 0)
        if (token := self.advance()) is None:
            raise self._incomplete(message, position)
        if token.kind != 'SEMICOLON':
            raise LoxParseError.at(message, position)

    # Expressions ────────────────────────────────────────────────────────────────────────────
    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.ternary()
        if self.check('EQUAL'):
            self.advance()
            value = self.assignment()
            if not isinstance(expr, Variable):
                raise LoxParseError.at("Invalid assignment target.", expr.span)
            return Assign(expr.name, value, expr.span.to(value.span))
        return expr

    def ternary(self) -> Expr:
        expr = self.comma()
        if self.check('QUESTION'):
            self.advance()
            then_branch = self.ternary()
            if (colon := self.advance()) is None:
                raise self._incomplete("Ternary operation missing one branch, expected colon", then_branch.span)
            if colon.kind != 'COLON':
                raise LoxParseError.at("Ternary operation missing one branch, expected colon instead", Span.of(colon))
            else_branch = self.ternary()
            expr = Ternary(expr, then_branch, else_branch, expr.span.to(else_branch.span))
        return expr

    def _binary(self, operand, *kinds: str) -> Expr:
        expr = operand()
        while self.check(*kinds):
            op = BINARY_OPERATORS[self.advance().kind]
            right = operand()
            expr = Binary(expr, op, right, expr.span.to(right.span))
        return expr

    def comma(self) -> Expr:
        return self._binary(self.equality, 'COMMA')

    def equality(self) -> Expr:
        return self._binary(self.comparison, 'BANG_EQUAL', 'EQUAL_EQUAL')

    def comparison(self) -> Expr:
        return self._binary(self.term, 'GREATER', 'GREATER_EQUAL', 'LESS', 'LESS_EQUAL')

    def term(self) -> Expr:
        return self._binary(self.factor, 'MINUS', 'PLUS')

    def factor(self) -> Expr:
        return self._binary(self.unary, 'SLASH', 'STAR')

    def unary(self) -> Expr:
        if self.check('BANG', 'MINUS'):
            token = self.advance()
            right = self.unary()
            return Unary(UNARY_OPERATORS[token.kind], right, Span.of(token).to(right.span))
        return self.primary()

    def primary(self) -> Expr:
        if (token := self.advance()) is None:
            raise self._incomplete("Expected an expression, but the input ended.")

        span = Span.of(token)
        match token.kind:
            case 'TRUE': return Literal(True, span)
            case 'FALSE': return Literal(False, span)
            case 'NIL': return Literal(nil, span)
            case 'NUMBER': return Literal(token.value, span)
            case 'STRING':
                if not token.terminated:
                    raise LoxParseError.at("Unterminated string.", span)
                return Literal(token.value, span)
            case 'IDENTIFIER':
                return Variable(token.value, span)
            case 'LEFT_PAREN':
                expr = self.expression()
                if (closing := self.advance()) is None:
                    raise self._incomplete("Expected ')' after grouped expression", expr.span)
                if closing.kind != 'RIGHT_PAREN':
                    raise LoxParseError.at(f"The token {closing.kind} was not expected, a ')' was expected", Span.of(closing))
                return Grouping(expr, expr.span)
            case kind:
                raise LoxParseError.at(f"Token \"{kind}\" does not match a valid expression", span)


def parse(tokens: Iterable[Token]) -> list[Stmt]:
    """Parse already-filtered tokens into statements, raising `LoxParseError` on the first problem."""
    return Parser(tokens).parse()


def scan_and_parse(source: str) -> list[Stmt]:
    return parse(significant(scan(source)))
