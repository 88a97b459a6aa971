"""
Command registry: the static manifest of known commands.

A Registry is built once, either from an explicit list of command classes or
by decorating classes with @registry.register, and then resolves invocation
names in O(1). Nothing is scanned at run time: a command exists because some
module registered it.

Duplicate names are a DuplicateCommandError raised at registration time, so a
clash surfaces when the program starts, never as a silent pick of one match.
resolve() of an unknown name raises UnknownCommandError, which maps to its own
exit code.

Usage
    registry = Registry(ListDirectory, FreeDiskSpace)

    @registry.register
    class Greet(Command, name="greet"):
        ...

    registry.resolve("greet")  # -> CommandDescriptor
"""
import difflib
import logging

from .commands import describe
from .faults import DuplicateCommandError, UnknownCommandError

logger = logging.getLogger(__name__)


class Registry:
    """
    Name → CommandDescriptor manifest.

    - register(cls): add a concrete command class (usable as a decorator).
    - resolve(name): descriptor for `name`, or UnknownCommandError.
    - iteration yields names in sorted order; descriptors() yields descriptors in the same order.
    """

    def __init__(self, *commands):
        self._descriptors = {}
        for command in commands:
            self.register(command)

    def register(self, command, /):
        """
        Register a command class and return it unchanged.

        Raises
        - TypeError when `command` is not a concrete command class.
        - DuplicateCommandError when its name is already taken by another class.
        """
        descriptor = describe(command)
        if (other := self._descriptors.get(descriptor.name)) is not None:
            if other.factory is command:
                return command
            raise DuplicateCommandError(
                "command name %r is registered by both %s and %s" % (
                    descriptor.name, other.factory.__qualname__, command.__qualname__
                ),
                hint="give one of the classes another name=... keyword",
                input=descriptor.name,
            )
        self._descriptors[descriptor.name] = descriptor
        logger.debug("registered command %r (%s)", descriptor.name, command.__qualname__)
        return command

    def resolve(self, name, /):
        """
        Return the CommandDescriptor registered under `name`.

        Raises
        - UnknownCommandError with close-match suggestions otherwise.
        """
        try:
            return self._descriptors[name]
        except KeyError:
            pass
        suggestions = difflib.get_close_matches(name, self._descriptors.keys(), 3)
        try:
            hint = "did you mean %r? run with '--help' to list the available commands" % suggestions[0]
        except IndexError:
            hint = "run with '--help' to list the available commands"
        raise UnknownCommandError(
            "unknown command %r" % name,
            hint=hint,
            input=name,
            suggestions=suggestions,
        )

    def descriptors(self):
        return tuple(self._descriptors[name] for name in self)

    def __contains__(self, name):
        return name in self._descriptors

    def __iter__(self):
        return iter(sorted(self._descriptors))

    def __len__(self):
        return len(self._descriptors)

    def __repr__(self):
        return "registry(%s)" % ", ".join(map(repr, self))


default_registry = Registry()


def command(cls, /):
    """
    Class decorator registering a command in the default registry.
    """
    return default_registry.register(cls)


__all__ = (
    "Registry",
    "default_registry",
    "command",
)
