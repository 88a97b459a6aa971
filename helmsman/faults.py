"""
Helmsman faults (errors) and rendering.

Scope
- ExitCode: the stable, documented process exit codes of the launcher.
- FaultCode: canonical numeric identifiers for every user-facing fault, grouped
  by domain so messages and log searches stay predictable.
- HelmsmanFault and its five families, one per failure class of the pipeline:
  • UnknownCommandError   → command-not-found (exit 127)
  • UsageError            → parse failures (exit 2)
  • BindingError          → construction/coercion failures (exit 70)
  • ConfigurationError    → malformed command definitions (exit 70)
  • ExecutionError        → the command itself failed (exit 70, or 130 on interrupt)
- trigger(): render a fault to a Rich console and hand back its exit code.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The engine raises faults anywhere in the pipeline and renders them once, at
  the top, through trigger(fault, console=..., prog=..., colorful=..., fancy=...).
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text


class ExitCode(IntEnum):
    """
    process exit codes (stable, documented).

    - SUCCESS: the command ran and returned 0 (or nothing), or help was shown.
    - USAGE_ERROR: the arguments could not be parsed against the command schema.
    - INTERNAL_ERROR: binding, configuration or execution failure (EX_SOFTWARE).
    - COMMAND_NOT_FOUND: the first token names no registered command (shell convention).
    - INTERRUPTED: the command was interrupted with ctrl+c (128 + SIGINT).

    any other integer returned by a command's run() passes through unchanged.
    """
    SUCCESS           = 0
    USAGE_ERROR       = 2
    INTERNAL_ERROR    = 70
    COMMAND_NOT_FOUND = 127
    INTERRUPTED       = 130


class FaultCode(IntEnum):
    """
    canonical fault codes used across the launcher (stable identifiers).

    grouping (by high-level domain)
    - routing (2110x)
      • UNKNOWN_COMMAND, MISSING_COMMAND
    - switches and positionals (2111x)
      • MALFORMED_TOKEN, UNKNOWN_SWITCH, MISSING_VALUE, DUPLICATED_SWITCH,
        UNEXPECTED_POSITIONAL
    - binding (2112x)
      • UNCONVERTIBLE_VALUE, CONSTRUCTION_FAILED
    - configuration (2113x)
      • FLAG_COLLISION, DUPLICATE_COMMAND, UNSUPPORTED_TYPE, INVALID_DECLARATION
    - execution (2114x)
      • COMMAND_FAILED, INVALID_STATUS, INTERRUPTED

    normalize() lets a host relabel codes while keeping the numbers stable.
    """
    # --- routing errors ---
    UNKNOWN_COMMAND       = 21101
    MISSING_COMMAND       = 21102

    # --- switch/positional errors ---
    MALFORMED_TOKEN       = 21111
    UNKNOWN_SWITCH        = 21112
    MISSING_VALUE         = 21113
    DUPLICATED_SWITCH     = 21114
    UNEXPECTED_POSITIONAL = 21115

    # --- binding errors ---
    UNCONVERTIBLE_VALUE   = 21121
    CONSTRUCTION_FAILED   = 21122

    # --- configuration errors ---
    FLAG_COLLISION        = 21131
    DUPLICATE_COMMAND     = 21132
    UNSUPPORTED_TYPE      = 21133
    INVALID_DECLARATION   = 21134

    # --- execution errors ---
    COMMAND_FAILED        = 21141
    INVALID_STATUS        = 21142
    INTERRUPTED           = 21143

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class HelmsmanFault(Exception):
    """
    base type of every launcher fault.

    carries a message plus read-only options. the class decides the fault code,
    the default title and the exit code; options carry the hint, the payload
    (input, value, suggestions, ...) and rendering switches (prog, colorful, fancy).
    """
    code = FaultCode.COMMAND_FAILED
    title = "fault"
    exit_code = ExitCode.INTERNAL_ERROR

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = text(self.options.get("prog", getattr(main, "__prog__", "helmsman")), "prog-name")

        header = Text.assemble(
            "[ ",
            prog,
            " - ",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.options.get("title", self.title).title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" -> ", "hint-arrow"), text(self.hint, "hint")))

        if self.options.get("fancy", False):
            return Panel.fit(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


# --- command-not-found ---

class UnknownCommandError(HelmsmanFault):
    code = FaultCode.UNKNOWN_COMMAND
    title = "unknown command"
    exit_code = ExitCode.COMMAND_NOT_FOUND


# --- usage ---

class UsageError(HelmsmanFault):
    title = "usage error"
    exit_code = ExitCode.USAGE_ERROR


class MissingCommandError(UsageError):
    code = FaultCode.MISSING_COMMAND
    title = "missing command"


class MalformedTokenError(UsageError):
    code = FaultCode.MALFORMED_TOKEN
    title = "malformed option or flag"


class UnknownSwitchError(UsageError):
    code = FaultCode.UNKNOWN_SWITCH
    title = "unknown option or flag"


class MissingValueError(UsageError):
    code = FaultCode.MISSING_VALUE
    title = "missing value"


class DuplicatedSwitchError(UsageError):
    code = FaultCode.DUPLICATED_SWITCH
    title = "duplicated option or flag"


class UnexpectedPositionalError(UsageError):
    code = FaultCode.UNEXPECTED_POSITIONAL
    title = "unexpected positional"


# --- binding ---

class BindingError(HelmsmanFault):
    title = "binding error"


class ParameterConversionError(BindingError):
    code = FaultCode.UNCONVERTIBLE_VALUE
    title = "unconvertible value"


class ConstructionError(BindingError):
    code = FaultCode.CONSTRUCTION_FAILED
    title = "construction failed"


# --- configuration ---

class ConfigurationError(HelmsmanFault):
    title = "configuration error"


class FlagCollisionError(ConfigurationError):
    code = FaultCode.FLAG_COLLISION
    title = "flag collision"


class DuplicateCommandError(ConfigurationError):
    code = FaultCode.DUPLICATE_COMMAND
    title = "duplicate command"


class UnsupportedTypeError(ConfigurationError):
    code = FaultCode.UNSUPPORTED_TYPE
    title = "unsupported type"


class InvalidDeclarationError(ConfigurationError):
    code = FaultCode.INVALID_DECLARATION
    title = "invalid declaration"


# --- execution ---

class ExecutionError(HelmsmanFault):
    title = "execution error"


class CommandFailedError(ExecutionError):
    code = FaultCode.COMMAND_FAILED
    title = "command failed"


class InvalidStatusError(ExecutionError):
    code = FaultCode.INVALID_STATUS
    title = "invalid status"


class InterruptedCommandError(ExecutionError):
    code = FaultCode.INTERRUPTED
    title = "interrupted"
    exit_code = ExitCode.INTERRUPTED


def trigger(fault, /, *, console, **options):
    """
    surface a fault with the given runtime options and return its exit code.

    contract
    - fault must provide __rich__ and __replace__ (see HelmsmanFault).
    - options are merged into the fault via copy.replace() before rendering.
    - rendering goes to the given rich console; nothing is raised.

    typical options
    - prog, colorful, fancy, and any payload the reporter may want to show.
    """
    if not isinstance(fault, HelmsmanFault):
        raise TypeError("trigger() argument must be a helmsman fault")
    fault = copy.replace(fault, **options)
    console.print(fault)
    return fault.exit_code


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "ExitCode",
    "FaultCode",
    "HelmsmanFault",
    "UnknownCommandError",
    "UsageError",
    "MissingCommandError",
    "MalformedTokenError",
    "UnknownSwitchError",
    "MissingValueError",
    "DuplicatedSwitchError",
    "UnexpectedPositionalError",
    "BindingError",
    "ParameterConversionError",
    "ConstructionError",
    "ConfigurationError",
    "FlagCollisionError",
    "DuplicateCommandError",
    "UnsupportedTypeError",
    "InvalidDeclarationError",
    "ExecutionError",
    "CommandFailedError",
    "InvalidStatusError",
    "InterruptedCommandError",
    "trigger",
    "getdoc",
)
