r"""
Built-in converters.

Every converter here is registered by install() into the registry built by
default_registry(). Hints come from the field tag:

- integers (int, Int8…Int64, UInt, UInt8…UInt64)
  • "base" ∈ {2, 8, 10, 16} selects the radix (default 10; anything else means 10).
  • parsing accepts the radix prefix Python accepts for that base ("0x99" with base 16);
    digit separators ("1_000") and non-ASCII digits are malformed.
  • out-of-range literals for the declared width are rejected (OUT_OF_RANGE).
  • rendering uses the same radix without prefix.

- floats (float, Float64, Float32)
  • decimal and exponential literals, "inf" and "nan"; malformed input is an error.
  • Float32 values are rounded to single precision; overflow is an error.

- bool
  • 1 t T TRUE true True / 0 f F FALSE false False; renders "true"/"false".
  • boolean=True: a bare "-flag" sets it without a value token.

- str: identity.

- datetime.timedelta (durations)
  • compound literals "1h30m", "1.5s", "300ms", "-2m45s", bare "0".
  • units: ns, us, µs, μs, ms, s, m, h; rounded to microseconds.
  • renders like "1h30m0s", "2.5s", "300ms", "0s".

- datetime.datetime
  • "layout" hint in strftime/strptime syntax, DEFAULT_TIME_LAYOUT otherwise.
  • mismatching input is an error (LAYOUT_MISMATCH).

- ipaddress.IPv4Address / IPv6Address / IPv4Network / IPv6Network, pathlib.Path
  • parsed with the class constructor, rendered with str().
"""
import ipaddress
import math
import pathlib
import re
import struct
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN

from .faults import ConversionError, FaultCode, getdoc
from .numbers import *
from .registry import Converter
from .utils import *

DEFAULT_TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"

_RADIXES = {2: "b", 8: "o", 10: "d", 16: "x"}

_INTEGER = re.compile(r"[+-]?(?:0[bBoOxX])?[0-9a-fA-F]+")

_UNITS = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),  # micro sign
    "μs": Decimal(1),  # greek mu
    "ms": Decimal(1000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_UNIT = "(?:ns|us|µs|μs|ms|s|m|h)"
_DURATION = re.compile("([-+]?)((?:%s%s)+)" % (_NUMBER, _UNIT))
_COMPONENT = re.compile("(%s)(%s)" % (_NUMBER, _UNIT))


def _fault(literal, target, reason, /, *, code=FaultCode.MALFORMED_LITERAL, hint=Unset):
    """
    build the ConversionError raised by every converter (literal + target attached).
    """
    return ConversionError(
        "cannot convert %r to %s: %s" % (literal, target, reason),
        title="invalid value",
        code=code,
        literal=literal,
        target=target,
        hint=coalesce(hint, "pass a valid %s literal" % target),
        docs=getdoc(code),
    )


def _radix(hints):
    try:
        base = int(str(hints.get("base", 10)).strip())
    except ValueError:
        return 10
    return base if base in _RADIXES else 10


class IntConverter(Converter):
    __slots__ = ("type",)

    def __init__(self, type, /):
        super().__init__(zero=type(0))
        object.__setattr__(self, "type", type)

    def tostr(self, value, hints, /):
        return format(int(value), _RADIXES[_radix(hints)])

    def fromstr(self, text, hints, /):
        target = describe(self.type)
        base = _radix(hints)
        try:
            if not _INTEGER.fullmatch(literal := text.strip()):
                raise ValueError(literal)
            number = int(literal, base)
        except ValueError:
            raise _fault(text, target, "not a base-%d integer" % base) from None
        low, high = self.type.bounds() if issubclass(self.type, SizedInt) else (None, None)
        if (low is not None and number < low) or (high is not None and number > high):
            raise _fault(
                text,
                target,
                "value out of range",
                code=FaultCode.OUT_OF_RANGE,
                hint="pass a value between %s and %s" % (low, "infinity" if high is None else high),
            )
        return self.type(number)


class FloatConverter(Converter):
    __slots__ = ("type",)

    def __init__(self, type, /):
        super().__init__(zero=type(0.0))
        object.__setattr__(self, "type", type)

    def tostr(self, value, hints, /):
        return repr(float(value))

    def fromstr(self, text, hints, /):
        target = describe(self.type)
        try:
            number = parsed = float(text.strip())
        except ValueError:
            raise _fault(text, target, "not a floating point number") from None
        if getattr(self.type, "width", 64) == 32:
            try:
                number, = struct.unpack("f", struct.pack("f", number))
            except OverflowError:
                raise _fault(text, target, "value out of range", code=FaultCode.OUT_OF_RANGE) from None
            if math.isinf(number) and not math.isinf(parsed):
                raise _fault(text, target, "value out of range", code=FaultCode.OUT_OF_RANGE)
        return self.type(number)


class BoolConverter(Converter):
    __slots__ = ()

    _TRUE = frozenset(("1", "t", "T", "TRUE", "true", "True"))
    _FALSE = frozenset(("0", "f", "F", "FALSE", "false", "False"))

    def __init__(self):
        super().__init__(zero=False, boolean=True)

    def tostr(self, value, hints, /):
        return "true" if value else "false"

    def fromstr(self, text, hints, /):
        if (literal := text.strip()) in self._TRUE:
            return True
        if literal in self._FALSE:
            return False
        raise _fault(text, "bool", "not a boolean", hint="use true or false")


class StrConverter(Converter):
    __slots__ = ()

    def __init__(self):
        super().__init__(zero="")

    def tostr(self, value, hints, /):
        return value

    def fromstr(self, text, hints, /):
        return text


def _decimals(value, unit):
    whole, fraction = divmod(value, unit)
    if not fraction:
        return str(whole)
    return ("%d.%0*d" % (whole, len(str(unit)) - 1, fraction)).rstrip("0")


class DurationConverter(Converter):
    __slots__ = ()

    def __init__(self):
        super().__init__(zero=timedelta())

    def tostr(self, value, hints, /):
        micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
        sign, micros = ("-" if micros < 0 else ""), abs(micros)
        if not micros:
            return "0s"
        if micros < 1000:
            return "%s%dµs" % (sign, micros)
        if micros < 1_000_000:
            return sign + _decimals(micros, 1000) + "ms"
        hours, micros = divmod(micros, 3_600_000_000)
        minutes, micros = divmod(micros, 60_000_000)
        text = _decimals(micros, 1_000_000) + "s"
        if hours:
            return "%s%dh%dm%s" % (sign, hours, minutes, text)
        if minutes:
            return "%s%dm%s" % (sign, minutes, text)
        return sign + text

    def fromstr(self, text, hints, /):
        literal = text.strip()
        if literal in ("0", "+0", "-0"):
            return timedelta()
        if not (match := _DURATION.fullmatch(literal)):
            raise _fault(text, "duration", "not a duration", hint="use a number followed by a unit, e.g. 1h30m or 250ms")
        try:
            micros = sum(Decimal(number) * _UNITS[unit] for number, unit in _COMPONENT.findall(match[2]))
            micros = int(micros.to_integral_value(ROUND_HALF_EVEN))
            return timedelta(microseconds=-micros if match[1] == "-" else micros)
        except (InvalidOperation, OverflowError):
            raise _fault(text, "duration", "value out of range", code=FaultCode.OUT_OF_RANGE) from None


class TimeConverter(Converter):
    __slots__ = ("layout",)

    def __init__(self, layout=DEFAULT_TIME_LAYOUT, /):
        super().__init__(zero=datetime(1970, 1, 1))
        object.__setattr__(self, "layout", layout)

    def tostr(self, value, hints, /):
        return value.strftime(hints.get("layout") or self.layout)

    def fromstr(self, text, hints, /):
        layout = hints.get("layout") or self.layout
        try:
            return datetime.strptime(text.strip(), layout)
        except ValueError:
            raise _fault(
                text,
                "datetime",
                "does not match layout %r" % layout,
                code=FaultCode.LAYOUT_MISMATCH,
                hint="write the time as %s" % datetime(2006, 1, 2, 15, 4, 5).strftime(layout),
            ) from None


class ConstructorConverter(Converter):
    """
    converter for classes whose constructor parses their own str() form.
    """
    __slots__ = ("type",)

    def __init__(self, type, /, *, zero):
        super().__init__(zero=zero)
        object.__setattr__(self, "type", type)

    def tostr(self, value, hints, /):
        return str(value)

    def fromstr(self, text, hints, /):
        try:
            return self.type(text.strip())
        except ValueError as error:
            raise _fault(text, describe(self.type), str(error)) from None


def install(registry, /):
    """
    register every built-in converter into `registry`.
    """
    for type in (int, Int8, Int16, Int32, Int64, UInt, UInt8, UInt16, UInt32, UInt64):
        registry.register(type, IntConverter(type))
    for type in (float, Float64, Float32):
        registry.register(type, FloatConverter(type))
    registry.register(bool, BoolConverter())
    registry.register(str, StrConverter())
    registry.register(timedelta, DurationConverter())
    registry.register(datetime, TimeConverter())
    registry.register(ipaddress.IPv4Address, ConstructorConverter(ipaddress.IPv4Address, zero=ipaddress.IPv4Address(0)))
    registry.register(ipaddress.IPv6Address, ConstructorConverter(ipaddress.IPv6Address, zero=ipaddress.IPv6Address(0)))
    registry.register(ipaddress.IPv4Network, ConstructorConverter(ipaddress.IPv4Network, zero=ipaddress.IPv4Network(0)))
    registry.register(ipaddress.IPv6Network, ConstructorConverter(ipaddress.IPv6Network, zero=ipaddress.IPv6Network(0)))
    registry.register(pathlib.Path, ConstructorConverter(pathlib.Path, zero=pathlib.Path()))


__all__ = (
    "DEFAULT_TIME_LAYOUT",
    "IntConverter",
    "FloatConverter",
    "BoolConverter",
    "StrConverter",
    "DurationConverter",
    "TimeConverter",
    "ConstructorConverter",
    "install",
)
