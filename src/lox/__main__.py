## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# lox — Command line: run one script against a fresh global scope, or an interactive session.
#

import sys
import time

import click

from .errors import LoxError, LoxParseError, LoxIncompleteParse, LoxNameError, LoxTypeError
from .formatting import write_without_ansi, format_value, format_error_context
from .runtime import Runtime


def _banner(exc: LoxError) -> str:
    match exc:
        case LoxParseError(): return "SYNTAX ERROR."
        case LoxNameError(): return "NAME ERROR."
        case LoxTypeError(): return "TYPE ERROR."
    return "RUNTIME ERROR."


class Session:
    """One `Runtime` kept for the whole command, reporting Lox errors at their source spans."""

    def __init__(self, verbose: int = 0, stats: bool = False):
        self.runtime = Runtime()
        self.verbose = verbose
        self.stats = {'steps': 0} if stats else None
        self.started = time.time()

    def run(self, source: str):
        return self.runtime.run(source, verbosity=self.verbose, stats=self.stats)

    def report(self, exc: LoxError, source: str, filename: str) -> None:
        print(f"\033[30;43m {_banner(exc)} \033[0m {exc.message} (Exception: \033[33m{type(exc).__name__}\033[0m)", file=sys.stderr)
        print(format_error_context(source, exc.offset, exc.length, filename), file=sys.stderr)

    def run_script(self, source: str, filename: str) -> int:
        """Run a whole program; output printed before an error is kept.  Returns the exit code."""
        try:
            self.run(source)
        except LoxError as exc:
            self.report(exc, source, filename)
            return 1
        return 0

    def interact(self, read=input) -> None:
        # Lines accumulate while the parser reports the input as incomplete.
        pending = ""
        while True:
            try:
                line = read("\033[36m... \033[0m" if pending else "\033[36m<<< \033[0m")
            except (KeyboardInterrupt, EOFError):
                print("")
                return
            if not pending and line.strip() in ('quit', 'exit'): return
            if not pending and not line.strip(): continue

            pending += line + "\n"
            try:
                value = self.run(pending)
            except LoxIncompleteParse:
                continue
            except LoxError as exc:
                self.report(exc, pending, '<REPL>')
            else:
                if value is not None: print("\033[90m>>>\033[0m", format_value(value))
            pending = ""

    def summary(self) -> None:
        if self.stats is None: return
        print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
        print(f"step\t\033[97m{self.stats['steps']:,}\033[0m")
        print(f"time\t\033[97m{time.time() - self.started:.3f}s\033[0m")


@click.group()
@click.option('--verbose', '-v', default=0, count=True, help='Trace statements (and values with -vv) as they execute.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, stats: bool, plain: bool) -> None:
    if plain:
        writer = write_without_ansi(sys.stdout.write)
        sys.stdout.write, sys.stderr.write = writer, writer
    ctx.obj = Session(verbose=verbose, stats=stats)


@cli.command('run-file')
@click.argument('script', type=click.File('r', encoding='utf-8'))
@click.pass_context
def run_file(ctx: click.Context, script) -> None:
    """Run SCRIPT, or standard input for `-`, stopping at the first error."""
    session: Session = ctx.obj
    code = session.run_script(script.read(), script.name)
    session.summary()
    ctx.exit(code)


@cli.command('run-repl')
@click.pass_context
def run_repl(ctx: click.Context) -> None:
    """Read statements line by line, sharing one global scope."""
    if sys.platform != "win32": import readline
    session: Session = ctx.obj
    print('lox - Tree-walking scripting language REPL; type Ctrl+C to exit.')
    session.interact()
    session.summary()


def main(argv: list[str] | None = None) -> None:
    args = list(sys.argv[1:] if argv is None else argv)
    options = [a for a in args if a.startswith('-') and a != '-']
    commands = [a for a in args if a not in options]

    # `lox` alone reads piped input or starts a session; `lox script.lox` runs the file.
    if '--help' not in options:
        if not commands:
            commands = ['run-file', '-'] if not sys.stdin.isatty() else ['run-repl']
        elif commands[0] not in cli.commands:
            commands = ['run-file', *commands]

    cli.main(args=[*options, *commands], prog_name='lox')


if __name__ == "__main__":
    main()
