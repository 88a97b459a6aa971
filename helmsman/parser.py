r"""
Argument parser: raw argv against an OptionSchema.

parse(schema, argv) -> ParsedOptions, or a UsageError subclass.

Accepted forms
- '-x'             presence flag, or a valued flag whose value is the next token
- '-x value'       valued short flag
- '-x=value'       valued short flag, inline
- '--long'         presence flag, or a valued flag whose value is the next token
- '--long value'   valued long flag
- '--long=value'   valued long flag, inline ('' when nothing follows '=')
- '--'             every later token is positional
- '-'              positional (conventional stdin placeholder)

Strictness
- a flag missing from the schema is a hard failure (UnknownSwitchError);
- a valued flag without a value is a failure (MissingValueError);
- a presence flag given '=value' is accepted and the value is dropped; a bare
  token after a presence flag is a positional;
- one parameter given twice, under any spelling, is a failure (DuplicatedSwitchError);
- a positional token for a command without a Positionals() field is a failure
  (UnexpectedPositionalError).

Positionals are collected in encounter order, interleaved freely with flags.
Parsing is pure: no I/O and no state survives the call.
"""
import functools
import re
from collections import deque
from types import MappingProxyType

from .faults import (
    DuplicatedSwitchError,
    MalformedTokenError,
    MissingValueError,
    UnexpectedPositionalError,
    UnknownSwitchError,
)
from .utils import Present

_TOKEN = re.compile(r"(?P<input>-[^\W_]|--[^\W\d_](-?[^\W_]+)*)(=(?P<value>[^\r\n]*))?")

TERMINATOR = "--"


class ParsedOptions:
    """
    Result of a successful parse.

    - options: read-only mapping from the flag as typed ('-v' or '--verbose')
      to its raw string value, or Present for presence flags.
    - positionals: tuple of leftover tokens in encounter order.
    """
    __slots__ = ("_options", "_positionals")

    def __init__(self, options=(), positionals=()):
        self._options = MappingProxyType(dict(options))
        self._positionals = tuple(positionals)

    @property
    def options(self):
        return self._options

    @property
    def positionals(self):
        return self._positionals

    def lookup(self, parameter, /):
        """
        Raw value captured for a parameter under either spelling, or None.
        """
        for name in parameter.names:
            if name in self._options:
                return self._options[name]
        return None

    def __contains__(self, flag):
        return flag in self._options

    def __eq__(self, other):
        if not isinstance(other, ParsedOptions):
            return NotImplemented
        return dict(self._options) == dict(other._options) and self._positionals == other._positionals

    def __hash__(self):
        return hash((frozenset(self._options.items()), self._positionals))

    def __rich_repr__(self):
        yield "options", dict(self._options)
        yield "positionals", self._positionals

    def __repr__(self):
        return "parsed-options(options=%r, positionals=%r)" % (dict(self._options), self._positionals)


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _takes_next(schema, tokens):
    # The next token can be a value unless it ends the flags or is itself a known flag.
    if not tokens or tokens[0] == TERMINATOR:
        return False
    match = _TOKEN.fullmatch(tokens[0])
    return not (match and schema.lookup(match["input"]) is not None)


def parse(schema, argv, /):
    """
    Parse `argv` (an iterable of strings, the command name excluded) against `schema`.

    Returns
    - ParsedOptions with the matched flags and leftover positionals.

    Raises
    - MalformedTokenError, UnknownSwitchError, MissingValueError,
      DuplicatedSwitchError, UnexpectedPositionalError (all UsageError).
    """
    tokens = deque(argv)
    options = {}
    positionals = []
    seen = {}
    index = 0

    def positional(token):
        if not schema.accepts_positionals:
            raise UnexpectedPositionalError(
                "unexpected positional argument %r at %s position" % (token, _ordinal(index)),
                hint="'%s' takes no positional arguments; run '%s --help' to see the expected usage" % (
                    schema.name, schema.name
                ),
                input=token,
                index=index,
            )
        positionals.append(token)

    while tokens:
        token = tokens.popleft()
        index += 1

        if token == TERMINATOR:
            while tokens:
                index += 1
                positional(tokens.popleft())
            break

        if token == "-" or not token.startswith("-"):
            positional(token)
            continue

        if not (match := _TOKEN.fullmatch(token)):
            raise MalformedTokenError(
                "bad form of option or flag %r at %s position" % (token, _ordinal(index)),
                hint="use '-x', '--name' or '--name=value'; put '--' before positionals that start with '-'",
                token=token,
                index=index,
            )

        input, value = match["input"], match["value"]

        if (parameter := schema.lookup(input)) is None:
            suggestions = schema.suggest(input)
            try:
                hint = "did you mean %r? you can also run '%s --help' to see all options" % (
                    suggestions[0], schema.name
                )
            except IndexError:
                hint = "run '%s --help' to see all available options" % schema.name
            raise UnknownSwitchError(
                "unknown option or flag %r at %s position" % (input, _ordinal(index)),
                hint=hint,
                input=input,
                index=index,
                suggestions=suggestions,
            )

        if parameter in seen:
            raise DuplicatedSwitchError(
                "%r at %s position repeats %r" % (input, _ordinal(index), seen[parameter]),
                hint="keep a single occurrence; each option or flag can be given only once",
                input=input,
                index=index,
            )
        seen[parameter] = input

        if not parameter.valued:
            options[input] = Present
            continue

        if value is None:
            if not _takes_next(schema, tokens):
                raise MissingValueError(
                    "option %r at %s position requires a value" % (input, _ordinal(index)),
                    hint="pass it as '%s=<%s>' or '%s <%s>'" % (input, parameter.metavar, input, parameter.metavar),
                    input=input,
                    index=index,
                )
            value = tokens.popleft()
            index += 1

        options[input] = value

    return ParsedOptions(options, positionals)


__all__ = (
    "TERMINATOR",
    "ParsedOptions",
    "parse",
)
