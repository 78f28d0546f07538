## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import math

from .ast import Expr, Literal, Grouping, Unary, Binary, Ternary, Variable, Assign, Stmt, ExprStmt, PrintStmt, VarDecl, Block
from .types import Value, nil


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_value(value: Value) -> str:
    """Display form of a value, as written by `print`."""
    if value is nil: return 'nil'
    if isinstance(value, bool): return str(value).lower()
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value)) if value or math.copysign(1.0, value) > 0 else '-0'
        return repr(value)
    return str(value)


def _format_literal(value: Value) -> str:
    return '"' + value.replace('"', '\\"') + '"' if isinstance(value, str) else format_value(value)

def format_expr(expr: Expr) -> str:
    """Fully parenthesized prefix rendering, which makes grouping and precedence explicit."""
    match expr:
        case Literal(value=value): return _format_literal(value)
        case Grouping(expression=inner): return f"(group {format_expr(inner)})"
        case Unary(op=op, right=right): return f"({op} {format_expr(right)})"
        case Binary(left=left, op=op, right=right): return f"({op} {format_expr(left)} {format_expr(right)})"
        case Ternary(condition=c, then_branch=t, else_branch=e): return f"(?: {format_expr(c)} {format_expr(t)} {format_expr(e)})"
        case Variable(name=name): return name
        case Assign(name=name, value=value): return f"(= {name} {format_expr(value)})"
    raise NotImplementedError(f"Unknown expression node `{type(expr).__name__}`.")

def format_stmt(stmt: Stmt) -> str:
    match stmt:
        case ExprStmt(expression=expr): return f"{format_expr(expr)};"
        case PrintStmt(expression=expr): return f"(print {format_expr(expr)});"
        case VarDecl(name=name, initializer=None): return f"(var {name});"
        case VarDecl(name=name, initializer=init): return f"(var {name} {format_expr(init)});"
        case Block(statements=body): return '{ ' + ' '.join(format_stmt(s) for s in body) + ' }' if body else '{ }'
    raise NotImplementedError(f"Unknown statement node `{type(stmt).__name__}`.")


def offset_to_line_column(source: str, offset: int) -> tuple[int, int]:
    """One-based line and column of a character offset."""
    offset = max(0, min(offset, len(source)))
    line = source.count('\n', 0, offset) + 1
    column = offset - (source.rfind('\n', 0, offset) + 1) + 1
    return line, column


def char_offset(source: str, offset: int) -> int:
    """Character index of a UTF-8 byte offset, rounding down inside a multi-byte character."""
    return len(source.encode("utf-8")[:max(0, offset)].decode("utf-8", errors="ignore"))


def format_error_context(source: str, offset: int, length: int, filename: str | None = None) -> str:
    """Render the lines around a byte span, highlighting the span itself on its first line."""
    start = char_offset(source, offset)
    length = char_offset(source, offset + length) - start
    line, column = offset_to_line_column(source, start)
    lines = source.split('\n')
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename or '<input>'}\", line {line}, column {column}\033[0m"]

    for i in range(start_line, end_line):
        line_content = lines[i]
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            # Spans over several lines are highlighted through the end of the first one.
            stop = min(len(line_content), column - 1 + max(length, 1))
            line_content = (
                line_content[:column-1] +
                f"\033[48;5;30m\033[1;97m{line_content[column-1:stop] or ' '}\033[0m" +
                line_content[stop:]
            )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'
