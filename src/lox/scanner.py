## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# lox — Scanner turning source text into a lazy stream of spanned tokens.
#

from typing import Iterable, Iterator
from functools import cache
from dataclasses import dataclass

import lark


# Terminals are tried by priority, then by width; `UNKNOWN` catches anything left so that
# scanning itself never fails.  Keywords are embedded into `IDENTIFIER` by the lexer.
GRAMMAR = r"""start: _token*
_token: LEFT_PAREN | RIGHT_PAREN | LEFT_BRACE | RIGHT_BRACE | COMMA | DOT | MINUS | PLUS
      | SEMICOLON | COLON | QUESTION | SLASH | STAR
      | BANG | BANG_EQUAL | EQUAL | EQUAL_EQUAL | LESS | LESS_EQUAL | GREATER | GREATER_EQUAL
      | STRING | NUMBER | IDENTIFIER | _keyword | COMMENT | WHITESPACE | UNKNOWN
_keyword: AND | CLASS | ELSE | FALSE | FOR | FUN | IF | NIL | OR
        | PRINT | RETURN | SUPER | THIS | TRUE | VAR | WHILE

// PUNCTUATION
LEFT_PAREN: "("
RIGHT_PAREN: ")"
LEFT_BRACE: "{"
RIGHT_BRACE: "}"
COMMA: ","
DOT: "."
MINUS: "-"
PLUS: "+"
SEMICOLON: ";"
COLON: ":"
QUESTION: "?"
SLASH: "/"
STAR: "*"

// OPERATORS
BANG: "!"
BANG_EQUAL: "!="
EQUAL: "="
EQUAL_EQUAL: "=="
LESS: "<"
LESS_EQUAL: "<="
GREATER: ">"
GREATER_EQUAL: ">="

// LITERALS
STRING: /"[^"]*"?/
NUMBER: /[0-9]+(\.[0-9]+)?/
IDENTIFIER: /[^\W\d]\w*/

// KEYWORDS
AND: "and"
CLASS: "class"
ELSE: "else"
FALSE: "false"
FOR: "for"
FUN: "fun"
IF: "if"
NIL: "nil"
OR: "or"
PRINT: "print"
RETURN: "return"
SUPER: "super"
THIS: "this"
TRUE: "true"
VAR: "var"
WHILE: "while"

// TRIVIA
COMMENT: /\/\/[^\n]*/
WHITESPACE: /[\t\n\v\f\r \x85\u200e\u200f\u2028\u2029]+/
UNKNOWN.-1: /./s
"""


KEYWORDS: dict[str, str] = {
    'and': 'AND', 'class': 'CLASS', 'else': 'ELSE', 'false': 'FALSE',
    'for': 'FOR', 'fun': 'FUN', 'if': 'IF', 'nil': 'NIL',
    'or': 'OR', 'print': 'PRINT', 'return': 'RETURN', 'super': 'SUPER',
    'this': 'THIS', 'true': 'TRUE', 'var': 'VAR', 'while': 'WHILE',
}

TRIVIA = frozenset({'WHITESPACE', 'COMMENT'})


@dataclass(frozen=True)
class Token:
    kind: str                     # terminal name, e.g. 'NUMBER', 'EQUAL_EQUAL', 'PRINT'
    offset: int                   # UTF-8 byte offset of the first character in the source
    length: int                   # in bytes
    value: float | str | None = None
    terminated: bool = True       # only meaningful for 'STRING'

    @property
    def end(self) -> int:
        return self.offset + self.length

    def __repr__(self):
        payload = '' if self.value is None else f" {self.value!r}"
        return f"<{self.kind}{payload} @{self.offset}+{self.length}>"


@cache
def _lexer() -> lark.Lark:
    return lark.Lark(GRAMMAR, parser="lalr", lexer="basic")


def _to_token(tok: lark.Token, offset: int) -> Token:
    text = str(tok)
    size = len(text.encode("utf-8"))
    match tok.type:
        case 'NUMBER':
            return Token('NUMBER', offset, size, float(text))
        case 'STRING':
            terminated = len(text) >= 2 and text.endswith('"')
            return Token('STRING', offset, size, text[1:-1] if terminated else text[1:], terminated)
        case 'IDENTIFIER':
            return Token('IDENTIFIER', offset, size, text)
        case kind:
            return Token(kind, offset, size)


def scan(source: str) -> Iterator[Token]:
    """Lazily yield every token of `source`, trivia included, stopping at the end of input.

    Offsets and lengths count UTF-8 bytes, while lark reports positions in characters.
    """
    position, offset = 0, 0
    for tok in _lexer().lex(source, dont_ignore=True):
        offset += len(source[position:tok.start_pos].encode("utf-8"))
        token = _to_token(tok, offset)
        position, offset = tok.end_pos, token.end
        yield token


def significant(tokens: Iterable[Token]) -> Iterator[Token]:
    """Drop whitespace and comments, leaving the tokens the parser cares about."""
    return (t for t in tokens if t.kind not in TRIVIA)
