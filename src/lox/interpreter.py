## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math
import operator

from .ast import (
    Expr, Literal, Grouping, Unary, Binary, Ternary, Variable, Assign,
    Stmt, ExprStmt, PrintStmt, VarDecl, Block, OPERATOR_NAMES,
)
from .types import Value, nil, type_name
from .errors import LoxRuntimeError, LoxTypeError, LoxNameError
from .environment import Environment
from .formatting import format_value, format_stmt


def _divide(b: float, a: float) -> float:
    try:
        return b / a
    except ZeroDivisionError:
        # IEEE-754 semantics instead of Python's exception.
        if b == 0 or math.isnan(b): return math.nan
        return math.copysign(math.inf, b) * math.copysign(1.0, a)


ARITHMETIC = {'-': operator.sub, '*': operator.mul, '/': _divide}
COMPARISON = {
    '==': operator.eq, '!=': operator.ne,
    '>': operator.gt, '>=': operator.ge, '<': operator.lt, '<=': operator.le,
}


def _evaluate_binary(expr: Binary, env: Environment) -> Value:
    b = evaluate(expr.left, env)
    a = evaluate(expr.right, env)
    if expr.op == ',': return a

    if (kind := type_name(b)) != (other := type_name(a)):
        raise LoxTypeError.at(f"Cannot operate on {kind} and {other}.", expr.span)

    if expr.op == '+':
        if kind not in ('Number', 'Str'):
            raise LoxTypeError.at(f"Can't perform Sum on {kind}.", expr.span)
        return b + a
    if (fn := ARITHMETIC.get(expr.op)) is not None:
        if kind != 'Number':
            raise LoxTypeError.at(f"Can't perform {OPERATOR_NAMES[expr.op]} on {kind}.", expr.span)
        return fn(b, a)
    return COMPARISON[expr.op](b, a)


def evaluate(expr: Expr, env: Environment) -> Value:
    match expr:
        case Literal(value=value):
            return value
        case Grouping(expression=inner):
            return evaluate(inner, env)
        case Variable(name=name):
            try:
                value = env.get(name)
            except KeyError:
                raise LoxNameError.at(f"Undefined variable `{name}`.", expr.span) from None
            return nil if value is None else value
        case Assign(name=name, value=value_expr):
            if name not in env:
                raise LoxNameError.at(f"Cannot assign to undeclared variable `{name}`.", expr.span)
            value = evaluate(value_expr, env)
            env.set(name, value)
            return value
        case Unary(op='!', right=right):
            if not isinstance(value := evaluate(right, env), bool):
                raise LoxTypeError.at(f"Cannot logically negate type {type_name(value)}.", expr.span)
            return not value
        case Unary(op='-', right=right):
            if not isinstance(value := evaluate(right, env), float):
                raise LoxTypeError.at(f"Cannot negate type {type_name(value)}.", expr.span)
            return -value
        case Ternary(condition=condition, then_branch=then_branch, else_branch=else_branch):
            if not isinstance(value := evaluate(condition, env), bool):
                raise LoxTypeError.at(f"The condition of a ternary operator must resolve to a Bool but was {type_name(value)}.", expr.span)
            return evaluate(then_branch if value else else_branch, env)
        case Binary():
            return _evaluate_binary(expr, env)
    raise NotImplementedError(f"Unknown expression node `{type(expr).__name__}`.")


def execute(stmt: Stmt, env: Environment, out=None, trace=None) -> Value | None:
    """Run one statement for its effects; expression statements hand back their value."""
    match stmt:
        case ExprStmt(expression=expr):
            return evaluate(expr, env)
        case PrintStmt(expression=expr):
            print(format_value(evaluate(expr, env)), file=out)
        case VarDecl(name=name, initializer=initializer):
            env.declare(name, None if initializer is None else evaluate(initializer, env))
        case Block(statements=statements):
            scope = env.child()
            for inner in statements:
                if trace is not None: trace(inner)
                execute(inner, scope, out=out, trace=trace)
        case _:
            raise NotImplementedError(f"Unknown statement node `{type(stmt).__name__}`.")
    return None


def interpret(statements: list[Stmt], env: Environment, out=None, verbosity=0, stats=None) -> Value | None:
    """Execute statements in order against `env`, stopping at the first error raised.

    Printed output goes to `out` (standard output when `None`).  Returns the value of the last
    expression statement at the top level, or `None` if there was none.
    """
    step = 0
    def trace(stmt: Stmt):
        nonlocal step
        if verbosity > 0:
            print(f"\033[90m{step:>3} :\033[0m  {format_stmt(stmt)}")
        step += 1

    result = None
    try:
        for stmt in statements:
            try:
                trace(stmt)
                value = execute(stmt, env, out=out, trace=trace)
            except RecursionError:
                raise LoxRuntimeError.at("Statement is nested too deeply to evaluate.", stmt.span) from None
            if isinstance(stmt, ExprStmt):
                result = value
                if verbosity > 1:
                    print(f"\033[90m    =\033[0m  {format_value(value)}")
    finally:
        if stats is not None:
            stats['steps'] = stats.get('steps', 0) + step

    return result
