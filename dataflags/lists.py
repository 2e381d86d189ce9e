"""
List adapter: one flag carrying a comma-separated sequence.

Encoding
- str(): each element rendered by the element converter, joined with ",";
  None elements render as an empty segment.
- set(text): split on ",", convert every segment with the element converter.
  • optional elements (`list[int | None]`) decode an empty segment to None.
  • variable length (`list[T]`, `tuple[T, ...]`): the slot receives a brand new
    container holding exactly the decoded elements (previous contents are gone).
  • fixed length (`tuple[T, T, T]`): the number of segments must equal the
    declared length; fewer or more segments is a ConversionError.
- conversion is all-or-nothing: when any segment fails, the slot keeps its value.
"""
from types import MappingProxyType

from .faults import ConversionError, FaultCode, getdoc
from .utils import *

SEPARATOR = ","


class ListValue:
    boolean = False

    def __init__(self, slot, converter, hints=MappingProxyType({}), /, *, length=Unset, optional=False, container=list):
        if length is not Unset and (not isinstance(length, int) or length < 1):
            raise ValueError("ListValue() 'length' must be a positive integer")
        self.slot = slot
        self.converter = converter
        self.hints = hints
        self.length = length
        self.optional = optional
        self.container = container

    def __str__(self):
        if not (items := self.slot.get()):
            return ""
        return SEPARATOR.join("" if item is None else self.converter.tostr(item, self.hints) for item in items)

    def _convert(self, segment):
        if self.optional and not segment:
            return None
        return self.converter.fromstr(segment, self.hints)

    def set(self, text, /):
        segments = text.split(SEPARATOR)
        if self.length is not Unset and len(segments) != self.length:
            raise ConversionError(
                "expected %d comma-separated values but got %d in %r" % (self.length, len(segments), text),
                title="wrong number of values",
                code=FaultCode.LENGTH_MISMATCH,
                literal=text,
                target="%d values" % self.length,
                hint="pass exactly %d values separated by %r" % (self.length, SEPARATOR),
                docs=getdoc(FaultCode.LENGTH_MISMATCH),
            )
        self.slot.set(self.container(map(self._convert, segments)))

    def __repr__(self):
        return "ListValue(%r, length=%r)" % (self.slot, self.length)


__all__ = (
    "SEPARATOR",
    "ListValue",
)
