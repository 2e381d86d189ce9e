"""
Text codec adapter.

Types that are not in the registry can still be bound when they know how to
render and parse themselves. A class is a *text codec* when it defines both

    def __totext__(self) -> str: ...

    @classmethod
    def __fromtext__(cls, text: str) -> Self: ...

TextCodecConverter wraps such a class into the Converter interface so scalar
fields and list elements use it exactly like a registered type. ValueError and
TypeError raised by __fromtext__ become ConversionError.

TextCodec is an optional mixin for classes whose str() is already their text
form and whose constructor accepts it (the common case):

    >>> class Version(TextCodec):
    ...     def __init__(self, text="0.0"):
    ...         self.major, self.minor = map(int, text.split("."))
    ...     def __str__(self):
    ...         return "%d.%d" % (self.major, self.minor)
"""
import inspect

from .faults import ConversionError, FaultCode, getdoc
from .registry import Converter
from .utils import describe


def is_textcodec(type, /):
    """
    whether `type` is a class implementing both __totext__ and __fromtext__.
    """
    return (
        inspect.isclass(type) and
        callable(getattr(type, "__totext__", None)) and
        callable(getattr(type, "__fromtext__", None))
    )


class TextCodecConverter(Converter):
    __slots__ = ("type",)

    def __init__(self, type, /):
        if not is_textcodec(type):
            raise TypeError("TextCodecConverter() argument must implement __totext__ and __fromtext__")
        super().__init__()
        object.__setattr__(self, "type", type)

    def tostr(self, value, hints, /):
        return value.__totext__()

    def fromstr(self, text, hints, /):
        try:
            return self.type.__fromtext__(text)
        except ConversionError:
            raise
        except (ValueError, TypeError) as error:
            target = describe(self.type)
            raise ConversionError(
                "cannot convert %r to %s: %s" % (text, target, error),
                title="invalid value",
                code=FaultCode.MALFORMED_LITERAL,
                literal=text,
                target=target,
                hint="pass a valid %s literal" % target,
                docs=getdoc(FaultCode.MALFORMED_LITERAL),
            ) from error

    def zero(self):
        return self.type()


class TextCodec:
    """
    mixin deriving the text codec dunders from str() and the one-argument constructor.
    """
    __slots__ = ()

    def __totext__(self):
        return str(self)

    @classmethod
    def __fromtext__(cls, text):
        return cls(text)


__all__ = (
    "is_textcodec",
    "TextCodecConverter",
    "TextCodec",
)
