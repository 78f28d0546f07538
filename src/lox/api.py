## lox — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .ast import Stmt
from .types import Value, nil
from .errors import *
from .runtime import Runtime
from .environment import Environment
from .parser import scan_and_parse
from .interpreter import interpret

_RUNTIME = Runtime()


def run(statements: list[Stmt], environment: Environment, out=None) -> None:
    """Execute parsed statements against a caller-owned environment, printing to `out`."""
    interpret(statements, environment, out=out)


def __getattr__(name):
    return getattr(_RUNTIME, name)
