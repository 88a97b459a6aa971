"""
Argument binder: parsed options onto a live command instance.

bind(parsed, instance, descriptor) walks the descriptor's parameters in
declaration order. For each one captured under its short or long spelling it
coerces the raw value through the parameter's Coercion and writes it with
Parameter.assign(). Leftover positionals are written to the Positionals field
in a single assignment, and only when there are any, so the field otherwise
keeps the command's own default.

The first coercion failure raises ParameterConversionError naming the flag and
the raw value; the instance must then be discarded.
"""
import logging

from .faults import ParameterConversionError

logger = logging.getLogger(__name__)


def bind(parsed, instance, descriptor, /):
    """
    Apply `parsed` (ParsedOptions) to `instance` according to `descriptor`.

    Returns
    - the instance, for chaining.

    Raises
    - ParameterConversionError on the first value that does not coerce.
    """
    for parameter in descriptor.parameters:
        if (raw := parsed.lookup(parameter)) is None:
            continue
        try:
            value = parameter.coercion.convert(raw)
        except ValueError as exception:
            flag = next(name for name in parameter.names if name in parsed)
            raise ParameterConversionError(
                "cannot convert %r given to %r into %s: %s" % (raw, flag, parameter.coercion.value, exception),
                hint="pass a valid %s value to %r" % (parameter.coercion.value, flag),
                input=flag,
                value=raw,
                coercion=parameter.coercion,
            ) from exception
        parameter.assign(instance, value)
        logger.debug("bound %s=%r", parameter.field, value)

    if descriptor.positionals is not None and parsed.positionals:
        descriptor.positionals.assign(instance, list(parsed.positionals))
        logger.debug("bound %s=%r", descriptor.positionals.field, list(parsed.positionals))

    return instance


__all__ = (
    "bind",
)
