## lox — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .ast import Stmt, ExprStmt, Span
from .types import Value, nil, is_value
from .errors import LoxParseError
from .parser import scan_and_parse
from .scanner import Token, scan
from .environment import Environment
from .formatting import format_value
from .interpreter import interpret, evaluate


class Runtime:
    """Minimal runtime facade focused on embedding, holding one global scope alive across runs.

    Each call to `run` is an independent attempt: an error aborts the rest of that batch only,
    and bindings made before the error stay in place for the next call.
    """

    def __init__(self, globals_: Environment | None = None):
        self.globals = globals_ or Environment()

    # Front-end ───────────────────────────────────────────────────────────────────────────────
    def tokenize(self, source: str) -> list[Token]:
        return list(scan(source))

    def parse(self, source: str) -> list[Stmt]:
        return scan_and_parse(source)

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def execute(self, statements: list[Stmt], out=None, verbosity: int = 0, stats: dict | None = None) -> Value | None:
        return interpret(statements, self.globals, out=out, verbosity=verbosity, stats=stats)

    def run(self, source: str, out=None, verbosity: int = 0, stats: dict | None = None) -> Value | None:
        return self.execute(self.parse(source), out=out, verbosity=verbosity, stats=stats)

    def eval(self, source: str) -> Value:
        """Evaluate a single expression, without the trailing `;`, against the global scope."""
        statements = self.parse(source.rstrip().rstrip(';') + ';')
        if len(statements) != 1 or not isinstance(statements[0], ExprStmt):
            size = len(source.encode("utf-8"))
            raise LoxParseError.at("Expected a single expression to evaluate.", Span(0, size))
        return evaluate(statements[0].expression, self.globals)

    # Bindings ────────────────────────────────────────────────────────────────────────────────
    def declare(self, name: str, value=None) -> None:
        if isinstance(value, int) and not isinstance(value, bool): value = float(value)
        if value is not None and not is_value(value):
            raise TypeError(f"Cannot bind `{type(value).__name__}` to a Lox variable.")
        self.globals.declare(name, value)

    def lookup(self, name: str) -> Value:
        value = self.globals.get(name)
        return nil if value is None else value

    def format(self, value: Value) -> str:
        return format_value(value)
