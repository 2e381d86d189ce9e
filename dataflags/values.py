"""
Live option storage.

A Slot points at one attribute of one dataclass instance; flag values write
through it, so parsing mutates the user's object directly. ScalarValue is the
flag-set Value for a single converted field.

Value protocol (what FlagSet.var() accepts)
- __str__()    → current value rendered as text (used for defaults in usage).
- set(text)    → convert and store; raise ConversionError on bad input.
- boolean      → optional attribute; True when the flag needs no value token.
"""
from types import MappingProxyType


class Slot:
    __slots__ = ("owner", "attribute")

    def __init__(self, owner, attribute, /):
        self.owner = owner
        self.attribute = attribute

    def get(self):
        return getattr(self.owner, self.attribute)

    def set(self, value, /):
        setattr(self.owner, self.attribute, value)

    def __repr__(self):
        return "Slot(%s.%s)" % (type(self.owner).__qualname__, self.attribute)


class ScalarValue:
    """
    flag value storing one converted value in a slot.
    """

    def __init__(self, slot, converter, hints=MappingProxyType({}), /):
        self.slot = slot
        self.converter = converter
        self.hints = hints

    @property
    def boolean(self):
        return self.converter.boolean

    def __str__(self):
        if (value := self.slot.get()) is None:
            return ""
        return self.converter.tostr(value, self.hints)

    def set(self, text, /):
        self.slot.set(self.converter.fromstr(text, self.hints))

    def __repr__(self):
        return "ScalarValue(%r, %r)" % (self.slot, self.converter)


__all__ = (
    "Slot",
    "ScalarValue",
)
