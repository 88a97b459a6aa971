"""
Process entry point: `<prog> <command> [flags...] [positional-args...]`.

main() splits argv into the command name and the rest, hands both to an Engine
and returns the exit code; cli() is the console-script wrapper that exits the
process with it. Besides commands, the launcher itself answers:

- no arguments          → program usage on stderr, MissingCommandError (exit 2)
- '--help' or '-h'      → program usage listing every command (exit 0)
- '--version'           → '<prog> <version>' (exit 0)
"""
import logging
import sys

from rich.console import Console

from .config import Settings, configure_logging
from .engine import Engine
from .faults import ExitCode, MissingCommandError, trigger
from .helps import render_program_help, render_version
from .registry import default_registry

logger = logging.getLogger(__name__)


def head(argv, /):
    """
    First token (the command name), or None for an empty argv.
    """
    return argv[0] if argv else None


def tail(argv, /):
    """
    Every token after the command name.
    """
    return list(argv[1:])


def main(argv=None, /, *, registry=None, settings=None, stdout=None, stderr=None):
    """
    Run the launcher and return the process exit code.

    Parameters
    - argv: explicit argument list; sys.argv[1:] when None.
    - registry: the command manifest; the default registry when None.
    - settings: Settings; read from the environment when None.
    - stdout / stderr: real output streams; the sys streams when None.
    """
    argv = sys.argv[1:] if argv is None else list(argv)
    registry = default_registry if registry is None else registry
    settings = Settings.from_environ() if settings is None else settings
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr

    configure_logging(settings.log_level)

    def console(stream):
        return Console(file=stream, force_terminal=settings.colorful, no_color=not settings.colorful)

    if (name := head(argv)) is None:
        render_program_help(registry, console(stderr), settings=settings)
        return int(trigger(
            MissingCommandError(
                "no command given",
                hint="run '%s <command>'; '%s --help' lists the commands" % (settings.prog, settings.prog),
            ),
            console=console(stderr),
            prog=settings.prog,
            colorful=settings.colorful,
            fancy=settings.fancy,
        ))

    if argv in (["--help"], ["-h"]):
        render_program_help(registry, console(stdout), settings=settings)
        return int(ExitCode.SUCCESS)

    if argv == ["--version"]:
        render_version(console(stdout), settings=settings)
        return int(ExitCode.SUCCESS)

    logger.debug("launching %r with %d argument(s)", name, len(argv) - 1)
    return Engine(registry, settings=settings, stdout=stdout, stderr=stderr).execute(name, tail(argv))


def cli(registry=None, /):
    """
    Console-script entry point: run main() and exit with its code.
    """
    try:
        code = main(registry=registry)
    except KeyboardInterrupt:
        code = ExitCode.INTERRUPTED
    sys.exit(int(code))


__all__ = (
    "head",
    "tail",
    "main",
    "cli",
)
