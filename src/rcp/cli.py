"""Command-line interface for rcp.

Usage example:
    rcp notes.txt
    make 2>&1 | rcp
    rcp -e "git diff"
"""

from __future__ import annotations

import logging
import shlex
import sys
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from rcp.config import MAX_BYTES_ENV, load_config
from rcp.errors import CaptureOverflowError, ExitCode, RcpError, UsageError
from rcp.osc52 import render_bytes
from rcp.source import STDIN_MARKER, CaptureRequest, capture

logger = logging.getLogger(__name__)

USAGE = f"""rcp - copy text to clipboard via OSC52 (works over SSH/tmux when supported)

Usage:
  rcp <file>         Copy a file's contents
  rcp                Copy stdin if piped (e.g., command | rcp)
  rcp -              Copy stdin explicitly

Extras:
  rcp -c <file>      Copy: "cat <file>" + newline + file contents
  rcp -e "command"   Copy: "<command>" + newline + command output

Options:
  -v, --verbose      Log debug details to stderr

Notes:
  - If you run rcp with no args on a normal terminal (no pipe), it shows this help.
  - -c only makes sense with a filename (stdin has no name).
  - -e runs the command using: bash -c "<command>"

Env:
  {MAX_BYTES_ENV}=100000
"""

HELP_ALIASES = frozenset({"-?", "/?"})

error_console = Console(stderr=True, highlight=False, emoji=False)


def print_error(message: str) -> None:
    """Print a consistently styled error message to stderr."""
    error_console.print(f"rcp: {escape(message)}", soft_wrap=True)


def print_usage() -> None:
    error_console.print(USAGE, markup=False, soft_wrap=True, end="")


def print_overflow(exc: CaptureOverflowError, hint: str) -> None:
    print_error(f"{exc.attempted} bytes exceeds limit {exc.limit}. Refusing.")
    error_console.print()
    error_console.print("Tip:")
    error_console.print(f"  {MAX_BYTES_ENV}={exc.suggested_limit} rcp {escape(hint)}", soft_wrap=True)
    error_console.print()
    error_console.print(f"(Or export {MAX_BYTES_ENV} for this shell.)")


def retry_hint(request: CaptureRequest) -> str:
    """Re-create the arguments of this invocation for the overflow tip."""
    if request.exec_command:
        return f"-e {shlex.quote(request.exec_command)}"
    if request.path and request.path != STDIN_MARKER:
        quoted = shlex.quote(request.path)
        return f"-c {quoted}" if request.annotate else quoted
    return "<input>"


def stdin_is_piped() -> bool:
    """True when stdin is a pipe or redirect rather than an interactive terminal."""
    try:
        return not sys.stdin.isatty()
    except (AttributeError, ValueError):
        # Closed or missing stdin counts as interactive: nothing to read.
        return False


def emit(sequence: bytes) -> None:
    """Write ``sequence`` to stdout, which carries nothing else."""
    stream = sys.stdout.buffer
    stream.write(sequence)
    stream.flush()


def configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def help_callback(value: bool) -> None:
    if value:
        print_usage()
        raise typer.Exit(code=int(ExitCode.USAGE))


app = typer.Typer(
    name="rcp",
    help="Copy text to the clipboard via OSC52.",
    add_completion=False,
)


@app.command(
    help="Copy a file, stdin, or command output to the clipboard via OSC52.",
    add_help_option=False,
    context_settings={"allow_extra_args": True},
)
def copy(
    ctx: typer.Context,
    path: Annotated[str | None, typer.Argument(help="File to copy, or '-' for stdin.", show_default=False)] = None,
    annotate: Annotated[bool, typer.Option("--cat", "-c", help='Prepend "cat <file>" to the file contents.')] = False,
    exec_command: Annotated[
        str | None, typer.Option("--exec", "-e", help="Run a command via bash -c and copy its output.")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug details to stderr.")] = False,
    show_help: Annotated[
        bool, typer.Option("--help", "-h", is_eager=True, callback=help_callback, help="Show usage and exit.")
    ] = False,
) -> None:
    configure_logging(verbose)
    if ctx.args:
        logger.debug("Ignoring extra arguments: %s", ctx.args)

    config = load_config()
    request = CaptureRequest(
        annotate=annotate,
        exec_command=exec_command or None,
        path=path,
        stdin_is_piped=stdin_is_piped(),
    )
    logger.debug("Capturing %s with limit %d", request, config.max_bytes)

    try:
        data = capture(request, config.max_bytes, stdin=getattr(sys.stdin, "buffer", None))
    except UsageError as exc:
        if exc.show_help:
            print_usage()
        else:
            print_error(str(exc))
        raise typer.Exit(code=int(exc.exit_code)) from None
    except CaptureOverflowError as exc:
        print_overflow(exc, retry_hint(request))
        raise typer.Exit(code=int(exc.exit_code)) from None
    except RcpError as exc:
        print_error(str(exc))
        raise typer.Exit(code=int(exc.exit_code)) from None

    emit(render_bytes(data))
    error_console.print(f"Sent {len(data)} bytes via OSC52")


def main(argv: list[str] | None = None) -> None:
    """Console-script entry point.

    Handles the ``-?`` and ``/?`` help aliases, which are not valid option
    names for the parser, before handing off to the typer app.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    if any(arg in HELP_ALIASES for arg in args):
        print_usage()
        raise SystemExit(int(ExitCode.USAGE))
    app(args=args, prog_name="rcp")


if __name__ == "__main__":
    main()
