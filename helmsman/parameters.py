r"""
Helmsman parameter descriptors.

Overview
- Parameters
  • Option: named, value-bearing parameter with a short and/or long spelling (-n/--name).
  • Flag: named, presence-only switch (no payload), e.g., -v/--verbose.
  • Positionals: the single field that receives leftover positional tokens.

- Coercion
  • A closed set of semantic types (text, integer, wide integer, single, double,
    boolean), each with exactly one converter from the raw command-line string.
  • Coercion.of(type) maps the declared `type=` (str, int, float, bool or a
    Coercion member) to its member; anything else is a configuration error.

- Binding targets
  • Every parameter is a data descriptor. Declared as a class attribute of a command,
    it learns its field name through __set_name__, reads back its default until
    something is bound, and writes through assign(instance, value).

Metadata (sanitized on construction)
- names: one short (r"-[^\W_]") and/or one long (r"--[^\W\d_](-?[^\W_]+)*") spelling.
- descr: Unset | str (short help), non-empty when provided.
- metavar: Unset | str (label in help), non-empty when provided.

Example
    >>> class Greet(Command, name="greet"):
    ...     name = Option("--name", descr="who to greet")
    ...     verbose = Flag("-v", "--verbose", descr="talk more")
    ...     extras = Positionals()
"""
import builtins
import functools
import math
import operator
import re
import struct
from enum import Enum

from .faults import InvalidDeclarationError, UnsupportedTypeError
from .utils import *

_SHORT = re.compile(r"-[^\W_]")
_LONG = re.compile(r"--[^\W\d_](-?[^\W_]+)*")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _to_text(raw):
    return raw


def _to_integer(raw, bits):
    if not _INTEGER.fullmatch(raw):
        raise ValueError("not a base-10 integer")
    value = int(raw)
    if not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
        raise ValueError("out of range for a %d-bit integer" % bits)
    return value


def _to_double(raw):
    if not _DECIMAL.fullmatch(raw):
        raise ValueError("not a decimal number")
    value = float(raw)
    if math.isinf(value):
        raise ValueError("out of range for a double precision number")
    return value


def _to_single(raw):
    value = _to_double(raw)
    try:
        # Round-trip through IEEE 754 binary32 to get the stored precision.
        value = struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        value = math.inf
    if math.isinf(value):
        raise ValueError("out of range for a single precision number")
    return value


def _to_boolean(raw):
    if raw is Present or not raw.strip():
        return True
    return raw.strip().lower() == "true"


class Coercion(Enum):
    """
    Closed set of semantic target types a parameter can bind to.

    Each member converts a raw string (or the Present sentinel) through
    convert(); a malformed input raises ValueError, which the binder turns
    into a ParameterConversionError.
    """
    TEXT = "text"
    INTEGER = "integer"
    WIDE_INTEGER = "wide-integer"
    SINGLE = "single"
    DOUBLE = "double"
    BOOLEAN = "boolean"

    def convert(self, raw, /):
        return _CONVERTERS[self](raw)

    @classmethod
    def of(cls, type, /):
        """
        Resolve a declared `type=` into a Coercion member.

        - str → TEXT, int → WIDE_INTEGER, float → DOUBLE, bool → BOOLEAN
        - a Coercion member is returned unchanged
        - anything else raises UnsupportedTypeError
        """
        if isinstance(type, cls):
            return type
        try:
            return _BUILTINS[type]
        except (KeyError, TypeError):
            raise UnsupportedTypeError(
                "unsupported parameter type %r" % (type,),
                hint="use str, int, float, bool or a Coercion member",
                type=type,
            ) from None


_CONVERTERS = {
    Coercion.TEXT: _to_text,
    Coercion.INTEGER: functools.partial(_to_integer, bits=32),
    Coercion.WIDE_INTEGER: functools.partial(_to_integer, bits=64),
    Coercion.SINGLE: _to_single,
    Coercion.DOUBLE: _to_double,
    Coercion.BOOLEAN: _to_boolean,
}

_BUILTINS = {
    str: Coercion.TEXT,
    int: Coercion.WIDE_INTEGER,
    float: Coercion.DOUBLE,
    bool: Coercion.BOOLEAN,
}


class DescriptorType(type):
    """
    Metaclass for the static metadata types (parameters and command descriptors).

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in messages and reprs.
    - Expose every name in __introspectable__ as a read-only property mirroring
      the private "_{name}" field (see utils.mirror).
    - Provide stable __repr__/__rich_repr__ implementations.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"

        if "__rich_repr__" not in namespace:
            self.__rich_repr__ = __rich_repr__
        if "__repr__" not in namespace:
            self.__repr__ = __repr__
        return self


def _sanitize_text(cls, label, object):
    # Unset stays None; strings must be non-empty once trimmed.
    if not isinstance(object, str | Unset):
        raise InvalidDeclarationError(f"{cls.__typename__} {label!r} must be a string")
    if isinstance(object, str) and not (object := object.strip()):
        raise InvalidDeclarationError(f"{cls.__typename__} {label!r} cannot be empty")
    return coalesce(object)


def _sanitize_names(cls, names):
    short = long = None
    if not names:
        raise InvalidDeclarationError(f"{cls.__typename__} requires at least one flag")
    for name in names:
        if not isinstance(name, str):
            raise InvalidDeclarationError(f"{cls.__typename__} flags must be strings")
        if _SHORT.fullmatch(name):
            if short is not None:
                raise InvalidDeclarationError(f"{cls.__typename__} accepts a single short flag, got {short!r} and {name!r}")
            short = name
        elif _LONG.fullmatch(name):
            if long is not None:
                raise InvalidDeclarationError(f"{cls.__typename__} accepts a single long flag, got {long!r} and {name!r}")
            long = name
        else:
            raise InvalidDeclarationError(
                f"{cls.__typename__} flag {name!r} must look like '-x' or '--long-name'"
            )
    return short, long


class _Field:
    """
    Shared binding-target behavior: field capture, default read-back, typed write.
    """
    _field = None

    def __set_name__(self, owner, name):
        if self._field is not None:
            raise InvalidDeclarationError(
                f"{type(self).__typename__} is already bound to field {self._field!r}; declare a new one for {name!r}"
            )
        self._field = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance.__dict__.get(self._field, self._default)

    def __set__(self, instance, value):
        instance.__dict__[self._field] = value

    def assign(self, instance, value, /):
        """
        Write a bound value into the command instance (the binder's write target).
        """
        if self._field is None:
            raise InvalidDeclarationError(f"{type(self).__typename__} is not attached to a command")
        self.__set__(instance, value)


class Parameter(_Field, metaclass=DescriptorType):
    """
    Named, bindable parameter (the parameter descriptor).

    Fields
    - short / long: flag spellings; at least one is set.
    - valued: True when the flag takes a value; False for presence flags.
    - coercion: the Coercion applied to the raw value.
    - default: what the field reads until a value is bound.
    - descr / metavar: help metadata.
    - field: the command attribute this parameter writes to.

    Use Option(...) and Flag(...) rather than instantiating Parameter directly.
    """

    __introspectable__ = (
        "short",
        "long",
        "valued",
        "coercion",
        "default",
        "descr",
        "metavar",
        "field",
    )

    def __init__(self, *names, valued, type, default, descr=Unset, metavar=Unset):
        cls = builtins.type(self)
        self._short, self._long = _sanitize_names(cls, names)
        self._valued = bool(valued)
        self._coercion = Coercion.of(type)
        self._default = default
        self._descr = _sanitize_text(cls, "descr", descr)
        self._metavar = _sanitize_text(cls, "metavar", metavar)

    @property
    def names(self):
        """
        Declared spellings, short first.
        """
        return tuple(name for name in (self.short, self.long) if name is not None)

    @property
    def label(self):
        """
        Preferred spelling for messages: the long flag when present.
        """
        return self.long or self.short


class Option(Parameter):
    """
    Value-bearing parameter: `-n VALUE`, `--name VALUE` or `--name=VALUE`.

    Parameters
    - *names: one short and/or one long spelling.
    - type: str (default), int, float, bool or a Coercion member.
    - default: value read until bound (None by default).
    - descr / metavar: help metadata; metavar defaults to the upper-cased field name.
    """

    def __init__(self, *names, type=str, default=None, descr=Unset, metavar=Unset):
        super().__init__(*names, valued=True, type=type, default=default, descr=descr, metavar=metavar)

    def __set_name__(self, owner, name):
        super().__set_name__(owner, name)
        if self._metavar is None:
            self._metavar = name.strip("_").replace("_", "-").upper()


class Flag(Parameter):
    """
    Presence-only parameter: its occurrence binds True; the default is False.
    """

    def __init__(self, *names, descr=Unset):
        super().__init__(*names, valued=False, type=Coercion.BOOLEAN, default=False, descr=descr)


class Positionals(_Field, metaclass=DescriptorType):
    """
    Field receiving the leftover positional tokens as a list of strings.

    The field keeps its default (an empty tuple unless given) when no
    positional tokens are passed on the command line.
    """

    __introspectable__ = (
        "default",
        "descr",
        "metavar",
        "field",
    )

    def __init__(self, *, default=(), descr=Unset, metavar="ARGS"):
        cls = builtins.type(self)
        self._default = default
        self._descr = _sanitize_text(cls, "descr", descr)
        self._metavar = _sanitize_text(cls, "metavar", metavar)


__all__ = (
    "Coercion",
    "DescriptorType",
    "Parameter",
    "Option",
    "Flag",
    "Positionals",
)
