"""
Option schema: the parser-ready view of a command descriptor.

build_schema(descriptor) registers one entry per flag spelling (short and long)
and records whether leftover positional tokens are permitted. Two parameters of
the same command claiming one spelling, or a parameter claiming the reserved
help token, is a FlagCollisionError raised before any token is parsed.
"""
import difflib
from types import MappingProxyType

from .faults import FlagCollisionError

HELP_TOKEN = "--help"
SHORT_HELP_TOKEN = "-h"


class OptionSchema:
    """
    Flag table of one command.

    - lookup(flag) -> Parameter | None
    - parameters: declaration-ordered parameters
    - accepts_positionals: True when the command declares a Positionals() field
    """
    __slots__ = ("_name", "_entries", "_parameters", "_accepts_positionals")

    def __init__(self, name, entries, parameters, accepts_positionals):
        self._name = name
        self._entries = MappingProxyType(dict(entries))
        self._parameters = tuple(parameters)
        self._accepts_positionals = bool(accepts_positionals)

    @property
    def name(self):
        return self._name

    @property
    def entries(self):
        return self._entries

    @property
    def parameters(self):
        return self._parameters

    @property
    def accepts_positionals(self):
        return self._accepts_positionals

    def lookup(self, flag, /):
        return self._entries.get(flag)

    def flags(self):
        return tuple(self._entries)

    def is_help_request(self, tokens, /):
        """
        True when `tokens` is exactly one help token.

        '--help' always asks for help; '-h' only when the command does not
        declare '-h' itself.
        """
        if len(tokens) != 1:
            return False
        token, = tokens
        return token == HELP_TOKEN or (token == SHORT_HELP_TOKEN and token not in self._entries)

    def suggest(self, flag, /, count=3):
        """
        Close spellings of an unknown flag, best first.
        """
        return difflib.get_close_matches(flag, self._entries.keys(), count)

    def __repr__(self):
        return "option-schema(name=%r, flags=%r, accepts_positionals=%r)" % (
            self._name, self.flags(), self._accepts_positionals
        )


def build_schema(descriptor, /):
    """
    Turn a CommandDescriptor into an OptionSchema.

    Raises
    - FlagCollisionError when two parameters share a spelling, or when a
      parameter declares the reserved '--help' token.
    """
    entries = {}
    for parameter in descriptor.parameters:
        for flag in parameter.names:
            if flag == HELP_TOKEN:
                raise FlagCollisionError(
                    "command %r declares the reserved flag %r on field %r" % (descriptor.name, flag, parameter.field),
                    hint="'--help' always renders the command help; pick another spelling",
                    flag=flag,
                )
            if (other := entries.get(flag)) is not None:
                raise FlagCollisionError(
                    "command %r declares flag %r on both %r and %r" % (
                        descriptor.name, flag, other.field, parameter.field
                    ),
                    hint="give each parameter its own short and long spelling",
                    flag=flag,
                )
            entries[flag] = parameter
    return OptionSchema(descriptor.name, entries, descriptor.parameters, descriptor.positionals is not None)


__all__ = (
    "HELP_TOKEN",
    "OptionSchema",
    "build_schema",
)
