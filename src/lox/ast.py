## lox — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Syntax tree shared by the parser and the interpreter.  Every expression carries the span
# of source it was parsed from, so that errors can point back at it.
#

from dataclasses import dataclass

from .types import Value


@dataclass(frozen=True)
class Span:
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def to(self, other: "Span") -> "Span":
        """Span starting here and running through the end of `other`."""
        return Span(self.offset, other.end - self.offset)

    @classmethod
    def of(cls, token) -> "Span":
        return cls(token.offset, token.length)


## EXPRESSIONS
class Expr:
    span: Span

    @property
    def offset(self) -> int: return self.span.offset

    @property
    def length(self) -> int: return self.span.length


@dataclass
class Literal(Expr):
    value: Value
    span: Span

@dataclass
class Grouping(Expr):
    expression: Expr
    span: Span

@dataclass
class Unary(Expr):
    op: str                       # '!' or '-'
    right: Expr
    span: Span

@dataclass
class Binary(Expr):
    left: Expr
    op: str                       # operator lexeme, ',' included
    right: Expr
    span: Span

@dataclass
class Ternary(Expr):
    condition: Expr
    then_branch: Expr
    else_branch: Expr
    span: Span

@dataclass
class Variable(Expr):
    name: str
    span: Span

@dataclass
class Assign(Expr):
    name: str
    value: Expr
    span: Span


## STATEMENTS
class Stmt:
    pass


@dataclass
class ExprStmt(Stmt):
    expression: Expr

    @property
    def span(self) -> Span: return self.expression.span

@dataclass
class PrintStmt(Stmt):
    expression: Expr

    @property
    def span(self) -> Span: return self.expression.span

@dataclass
class VarDecl(Stmt):
    name: str
    initializer: Expr | None
    span: Span                    # the name being declared

@dataclass
class Block(Stmt):
    statements: list[Stmt]
    span: Span                    # from the opening to the closing brace


BINARY_OPERATORS: dict[str, str] = {
    'EQUAL_EQUAL': '==', 'BANG_EQUAL': '!=',
    'GREATER': '>', 'GREATER_EQUAL': '>=', 'LESS': '<', 'LESS_EQUAL': '<=',
    'PLUS': '+', 'MINUS': '-', 'STAR': '*', 'SLASH': '/',
    'COMMA': ',',
}

UNARY_OPERATORS: dict[str, str] = {'BANG': '!', 'MINUS': '-'}

OPERATOR_NAMES: dict[str, str] = {
    '+': 'Sum', '-': 'Subtraction', '*': 'Product', '/': 'Division',
    '==': 'Equals', '!=': 'NotEquals',
    '>': 'GreaterThan', '>=': 'GreaterThanEquals', '<': 'LessThan', '<=': 'LessThanEquals',
    ',': 'Comma',
}
