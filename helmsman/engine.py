"""
Execution engine: one command invocation, start to finish.

State machine (no loops, no concurrency)

    IDLE → COMMAND_RESOLVED → SCHEMA_BUILT → PARSED → BOUND → EXECUTED → FLUSHED
      any state ─────────────────────────────────────────────────────→ FAILED

- IDLE → COMMAND_RESOLVED: registry lookup; UnknownCommandError → FAILED (127).
- help side path: when the arguments are exactly one help token, the schema is
  built, the help document is rendered to the real stdout and the engine
  returns 0. No instance is constructed and no sink is created.
- COMMAND_RESOLVED → SCHEMA_BUILT: FlagCollisionError → FAILED (70).
- SCHEMA_BUILT → PARSED: UsageError → FAILED (2).
- PARSED → BOUND: construction or coercion failure → FAILED (70).
- BOUND → EXECUTED: run(context); any Exception → FAILED (70), ctrl+c → FAILED (130).
- EXECUTED → FLUSHED: sinks are copied to the real streams once; run()'s
  integer becomes the exit code (None means 0).

Output is double-buffered: on any failure the sinks are dropped and only the
rendered fault reaches the real stderr.
"""
import logging
import os
import sys
from enum import Enum

from rich.console import Console

from .binder import bind
from .config import Settings
from .context import ExecutionContext, Sink
from .faults import (
    CommandFailedError,
    ConstructionError,
    ExitCode,
    HelmsmanFault,
    InterruptedCommandError,
    InvalidStatusError,
    trigger,
)
from .helps import render_help
from .parser import parse
from .schema import build_schema

logger = logging.getLogger(__name__)


class State(Enum):
    IDLE = "idle"
    COMMAND_RESOLVED = "command-resolved"
    SCHEMA_BUILT = "schema-built"
    PARSED = "parsed"
    BOUND = "bound"
    EXECUTED = "executed"
    FLUSHED = "flushed"
    FAILED = "failed"


class Engine:
    """
    Runs exactly one invocation against a registry.

    Parameters
    - registry: the Registry commands are resolved from.
    - settings: Settings (program name, version, colors); from the environment by default.
    - stdout / stderr: the real output streams (sys.stdout / sys.stderr by default).

    Attributes
    - state: the current State.
    - history: tuple of every State visited, in order.
    - fault: the fault that ended the invocation, if any.
    """

    def __init__(self, registry, *, settings=None, stdout=None, stderr=None):
        self._registry = registry
        self._settings = settings if settings is not None else Settings.from_environ()
        self._stdout = stdout if stdout is not None else sys.stdout
        self._stderr = stderr if stderr is not None else sys.stderr
        self._history = [State.IDLE]
        self._fault = None
        self._used = False

    @property
    def state(self):
        return self._history[-1]

    @property
    def history(self):
        return tuple(self._history)

    @property
    def fault(self):
        return self._fault

    def _advance(self, state):
        logger.debug("%s → %s", self.state.value, state.value)
        self._history.append(state)

    def _console(self, stream):
        return Console(file=stream, force_terminal=self._settings.colorful, no_color=not self._settings.colorful)

    def _fail(self, fault):
        self._fault = fault
        self._advance(State.FAILED)
        logger.info("invocation failed with %s (exit %d)", type(fault).__name__, fault.exit_code)
        return int(trigger(
            fault,
            console=self._console(self._stderr),
            prog=self._settings.prog,
            colorful=self._settings.colorful,
            fancy=self._settings.fancy,
        ))

    def execute(self, name, argv=(), /, cwd=None):
        """
        Run command `name` with arguments `argv` and return the exit code.

        The engine is single-use: a second call raises RuntimeError.
        """
        if self._used:
            raise RuntimeError("an engine runs a single invocation")
        self._used = True
        argv = list(argv)
        try:
            return self._execute(name, argv, os.getcwd() if cwd is None else cwd)
        except HelmsmanFault as fault:
            return self._fail(fault)

    def _execute(self, name, argv, cwd):
        descriptor = self._registry.resolve(name)
        self._advance(State.COMMAND_RESOLVED)

        schema = build_schema(descriptor)
        self._advance(State.SCHEMA_BUILT)

        if schema.is_help_request(argv):
            logger.debug("rendering help for %r", descriptor.name)
            render_help(descriptor, schema, self._console(self._stdout), settings=self._settings)
            return int(ExitCode.SUCCESS)

        parsed = parse(schema, argv)
        self._advance(State.PARSED)

        try:
            instance = descriptor.factory()
        except Exception as exception:
            raise ConstructionError(
                "cannot construct command %r: %s" % (descriptor.name, exception),
                hint="command classes must be constructible without arguments",
                input=descriptor.name,
            ) from exception
        bind(parsed, instance, descriptor)
        self._advance(State.BOUND)

        stdout, stderr = Sink(), Sink()
        context = ExecutionContext(cwd, stdout, stderr)
        try:
            status = instance.run(context)
        except KeyboardInterrupt as exception:
            raise InterruptedCommandError(
                "command %r was interrupted" % descriptor.name,
                input=descriptor.name,
            ) from exception
        except Exception as exception:
            logger.debug("command %r raised", descriptor.name, exc_info=True)
            raise CommandFailedError(
                "command %r failed: %s: %s" % (descriptor.name, type(exception).__name__, exception),
                input=descriptor.name,
                exception=exception,
            ) from exception
        self._advance(State.EXECUTED)

        if status is None:
            status = ExitCode.SUCCESS
        elif isinstance(status, bool) or not isinstance(status, int):
            raise InvalidStatusError(
                "command %r returned %r instead of an integer status" % (descriptor.name, status),
                hint="return an int (or None for success) from run()",
                input=descriptor.name,
            )

        stdout.flush_to(self._stdout)
        stderr.flush_to(self._stderr)
        self._advance(State.FLUSHED)
        return int(status)


def execute(registry, name, argv=(), /, **options):
    """
    Convenience wrapper: Engine(registry, **options).execute(name, argv).
    """
    cwd = options.pop("cwd", None)
    return Engine(registry, **options).execute(name, argv, cwd=cwd)


__all__ = (
    "State",
    "Engine",
    "execute",
)
