"""
Helmsman command layer: declare commands and derive their descriptors.

What this module provides
- Command: base class of every command. Subclasses declare their parameters as
  class attributes (Option, Flag, Positionals) and implement run(context).
- CommandDescriptor: the static, immutable metadata of one command, derived
  exactly once when the command class is created and stored on it.
- describe(cls): fetch the descriptor of a command class.

Core ideas
- Declaration-driven UX: a class attribute becomes a flag; nothing is looked up
  by name at run time. The descriptor keeps the parameters in declaration order,
  which is the binding order and the help order.
- Fail at import: a command without a callable run(), with two Positionals(), or
  with a malformed parameter raises a ConfigurationError when the class statement
  runs, not when a user invokes it.

Quick start
    from helmsman import Command, Option, Flag, Positionals

    class Greet(Command, name="greet", descr="say hello"):
        name = Option("-n", "--name", default="world", descr="who to greet")
        verbose = Flag("-v", "--verbose", descr="talk more")
        extras = Positionals()

        def run(self, context):
            context.stdout.print("hello, %s" % self.name)
            return 0

See also
- helmsman.parameters for parameter declarations and coercions.
- helmsman.registry for the command manifest.
"""
import inspect
import re

from .faults import InvalidDeclarationError
from .parameters import DescriptorType, Parameter, Positionals
from .utils import *


class CommandDescriptor(metaclass=DescriptorType):
    """
    Static metadata about one command.

    Fields
    - name: invocation name (unique within a registry).
    - descr: human description, or None.
    - parameters: tuple of Parameter in declaration order (inherited ones first).
    - positionals: the Positionals field receiving leftover tokens, or None.
    - factory: the command class; calling it builds a fresh instance.
    """

    __introspectable__ = (
        "name",
        "descr",
        "parameters",
        "positionals",
        "factory",
    )

    def __init__(self, name, descr, parameters, positionals, factory):
        self._name = name
        self._descr = descr
        self._parameters = tuple(parameters)
        self._positionals = positionals
        self._factory = factory

    def __rich_repr__(self):
        yield "name", self.name
        yield "descr", self.descr
        yield "parameters", self.parameters
        yield "positionals", self.positionals


def _derive_name(cls, name):
    if name is Unset:
        return re.sub(r"(?<!^)(?=[A-Z])", r"-", cls.__name__).lower()
    if not isinstance(name, str) or name != name.lower() or not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", name):
        raise InvalidDeclarationError(
            "command name %r must be a lowercase word, optionally hyphenated" % (name,),
            hint="names like 'ls' or 'free-disk' work",
        )
    return name


def _derive_descr(cls, descr):
    if descr is Unset:
        return inspect.getdoc(cls) or None
    if not isinstance(descr, str) or not descr.strip():
        raise InvalidDeclarationError("command %r 'descr' must be a non-empty string" % cls.__name__)
    return descr.strip()


def _collect_fields(cls):
    # Walk the MRO from the farthest base so inherited parameters come first and
    # a subclass may shadow a field by redeclaring it.
    fields = {}
    for klass in reversed(cls.__mro__):
        for name, object in vars(klass).items():
            if isinstance(object, Parameter | Positionals):
                fields.pop(name, None)
                fields[name] = object
            elif name in fields:
                del fields[name]
    parameters = [object for object in fields.values() if isinstance(object, Parameter)]
    positionals = [object for object in fields.values() if isinstance(object, Positionals)]
    if len(positionals) > 1:
        raise InvalidDeclarationError(
            "command %r declares %d Positionals() fields" % (cls.__name__, len(positionals)),
            hint="keep a single Positionals() field; it receives every leftover token",
        )
    return parameters, (positionals[0] if positionals else None)


class CommandType(type):
    """
    Metaclass that derives a CommandDescriptor for every concrete command class.

    Class keywords
    - name: invocation name (default: the class name, hyphenated and lowercased).
    - descr: description (default: the class docstring).
    - abstract: when True, no descriptor is derived (shared bases).
    """

    def __new__(cls, name, bases, namespace, /, *, abstract=False, **options):
        return super().__new__(cls, name, bases, namespace)

    def __init__(self, name, bases, namespace, /, *, abstract=False, **options):
        super().__init__(name, bases, namespace)
        if abstract:
            self.__descriptor__ = None
            return
        if not callable(getattr(self, "run", None)):
            raise InvalidDeclarationError(
                "command %r must define a run(self, context) method" % name,
                hint="return an integer status code from run()",
            )
        parameters, positionals = _collect_fields(self)
        self.__descriptor__ = CommandDescriptor(
            _derive_name(self, options.pop("name", Unset)),
            _derive_descr(self, options.pop("descr", Unset)),
            parameters,
            positionals,
            self,
        )
        if options:
            raise TypeError("unexpected class keywords: %s" % ", ".join(sorted(options)))


class Command(metaclass=CommandType, abstract=True):
    """
    Base class of every command.

    Contract
    - run(self, context) -> int | None: the entry operation. `context` is an
      ExecutionContext (cwd, stdout sink, stderr sink). The returned integer is
      the process exit code; None means success.
    - Class attributes built with Option/Flag/Positionals are the typed write
      targets the binder fills before run() is called.
    - The class must be constructible without arguments; one fresh instance is
      built per invocation.
    """


def describe(cls, /):
    """
    Return the CommandDescriptor of a concrete command class.

    Raises
    - TypeError when `cls` is not a command class or is abstract.
    """
    descriptor = getattr(cls, "__descriptor__", None) if isinstance(cls, CommandType) else None
    if descriptor is None:
        raise TypeError("describe() argument must be a concrete command class")
    return descriptor


__all__ = (
    "Command",
    "CommandDescriptor",
    "describe",
)
