"""
Sized numeric types.

Python has a single unbounded `int` and a 64-bit `float`; schemas that need a
declared width annotate fields with one of the subclasses below. Instances
behave exactly like the builtin they derive from (they compare, hash and do
arithmetic as plain numbers); the class only carries the width and the
signedness that the registry's converters range-check against.

    Signed   : int (unsized), Int8, Int16, Int32, Int64
    Unsigned : UInt (unsized), UInt8, UInt16, UInt32, UInt64
    Floating : Float32, Float64 (float is 64-bit)

Arithmetic on a sized value returns a plain int/float: the width is a property
of the annotation, enforced when a literal is parsed, not of every value.
"""


class SizedInt(int):
    """
    base for integer types with a declared width.

    width: number of bits, or None for an unbounded width.
    signed: whether negative values are representable.
    """
    width = None
    signed = True

    @classmethod
    def bounds(cls):
        """
        return the inclusive (low, high) bounds; None means unbounded on that side.
        """
        if cls.width is None:
            return (None, None) if cls.signed else (0, None)
        if cls.signed:
            return -(1 << (cls.width - 1)), (1 << (cls.width - 1)) - 1
        return 0, (1 << cls.width) - 1

    def __repr__(self):
        return "%s(%d)" % (type(self).__name__, self)


class Int8(SizedInt):
    width = 8


class Int16(SizedInt):
    width = 16


class Int32(SizedInt):
    width = 32


class Int64(SizedInt):
    width = 64


class UInt(SizedInt):
    signed = False


class UInt8(SizedInt):
    width = 8
    signed = False


class UInt16(SizedInt):
    width = 16
    signed = False


class UInt32(SizedInt):
    width = 32
    signed = False


class UInt64(SizedInt):
    width = 64
    signed = False


class SizedFloat(float):
    width = 64

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, float(self))


class Float32(SizedFloat):
    width = 32


class Float64(SizedFloat):
    width = 64


__all__ = (
    "SizedInt",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "SizedFloat",
    "Float32",
    "Float64",
)
