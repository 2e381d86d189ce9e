r"""
Field tags: per-field metadata read by the binder.

Overview
- Tag: validated, read-only bundle of the per-field settings
  • alias:  verbatim option/action name (bypasses renaming and parent prefixes).
  • usage:  help text shown in usage output.
  • skip:   ignore the field entirely.
  • action: the (dataclass) field opens a subcommand scope.
  • hints:  converter hints, e.g. base (2/8/10/16) for integers, layout for datetimes,
            plus any extra keyword a custom converter wants to read.

- option(...): dataclasses.field() carrying a Tag.
- action(...): dataclasses.field() carrying a Tag with action=True.

Where tags live
- Tags are stored in the dataclass field metadata under the key METADATA
  ("dataflags"). The stored value may be a Tag or a plain mapping with the same
  keyword names, so schemas can also be written with dataclasses.field():

      verbose: bool = field(default=False, metadata={"dataflags": {"alias": "v"}})

Validation highlights
- alias must be a non-empty string without whitespace or "=", and must not start with "-".
- usage must be a string; skip/action must be booleans.
- base must be one of 2, 8, 10, 16 (ints or their decimal strings).
- layout must be a non-empty string.

Quick example:
    >>> from dataclasses import dataclass
    >>> from dataflags import option, action
    >>> @dataclass
    ... class Extract:
    ...     input_file: str = option("", usage="input zip file")
    >>> @dataclass
    ... class Cli:
    ...     config: str = option("default.conf", alias="c", usage="working profile")
    ...     mask: int = option(0o022, base=8)
    ...     extract: Extract = action(Extract, usage="to unzip things")
"""
import dataclasses
import re
from collections.abc import Mapping
from types import MappingProxyType

from .utils import *

METADATA = "dataflags"


def _sanitize_alias(alias):
    if not isinstance(alias, str | Unset):
        raise TypeError("tag 'alias' must be a string")
    if isinstance(alias, str) and not re.fullmatch(r"[^\s=\-][^\s=]*", alias):
        raise ValueError("tag 'alias' must be a non-empty name without spaces or '=' and not starting with '-'")
    return alias


def _sanitize_hints(base, layout, hints):
    hints = dict(hints)
    if base is not Unset:
        if isinstance(base, str) and base.strip().isdigit():
            base = int(base.strip())
        if isinstance(base, bool) or not isinstance(base, int):
            raise TypeError("tag 'base' must be an integer")
        if base not in (2, 8, 10, 16):
            raise ValueError("tag 'base' must be one of 2, 8, 10 or 16")
        hints["base"] = base
    if layout is not Unset:
        if not isinstance(layout, str):
            raise TypeError("tag 'layout' must be a string")
        if not layout.strip():
            raise ValueError("tag 'layout' cannot be empty")
        hints["layout"] = layout
    return MappingProxyType(hints)


class Tag:
    __slots__ = ("alias", "usage", "skip", "action", "hints")

    def __init__(self, *, alias=Unset, usage=Unset, skip=False, action=False, base=Unset, layout=Unset, **hints):
        if not isinstance(usage, str | Unset):
            raise TypeError("tag 'usage' must be a string")
        if not isinstance(skip, bool):
            raise TypeError("tag 'skip' must be a boolean")
        if not isinstance(action, bool):
            raise TypeError("tag 'action' must be a boolean")
        object.__setattr__(self, "alias", _sanitize_alias(alias))
        object.__setattr__(self, "usage", coalesce(usage, ""))
        object.__setattr__(self, "skip", skip)
        object.__setattr__(self, "action", action)
        object.__setattr__(self, "hints", _sanitize_hints(base, layout, hints))

    def __setattr__(self, name, value, /):
        raise AttributeError("tags are read-only")

    @classmethod
    def of(cls, field, /):
        """
        return the Tag of a dataclasses.Field (an empty Tag when it has none).
        """
        match field.metadata.get(METADATA):
            case None:
                return cls()
            case Tag() as tag:
                return tag
            case Mapping() as mapping:
                return cls(**mapping)
            case other:
                raise TypeError("field %r metadata %r must be a Tag or a mapping, not %s" % (
                    field.name, METADATA, type(other).__name__
                ))

    def __repr__(self):
        return "Tag(alias=%r, usage=%r, skip=%r, action=%r, hints=%r)" % (
            self.alias, self.usage, self.skip, self.action, dict(self.hints)
        )


def option(default=dataclasses.MISSING, /, *, default_factory=dataclasses.MISSING, alias=Unset, usage=Unset,
           skip=False, base=Unset, layout=Unset, **hints):
    """
    declare a dataclass field bound to an option.

    parameters
    - default / default_factory: as in dataclasses.field().
    - alias: verbatim option name.
    - usage: help text.
    - skip: do not bind this field.
    - base / layout / **hints: converter hints.
    """
    tag = Tag(alias=alias, usage=usage, skip=skip, base=base, layout=layout, **hints)
    return dataclasses.field(default=default, default_factory=default_factory, metadata={METADATA: tag})


def action(default_factory=dataclasses.MISSING, /, *, alias=Unset, usage=Unset):
    """
    declare a dataclass field that opens a subcommand scope.

    without a default_factory the field defaults to None and the binder allocates
    an instance of the annotated dataclass when binding.
    """
    tag = Tag(alias=alias, usage=usage, action=True)
    if default_factory is dataclasses.MISSING:
        return dataclasses.field(default=None, metadata={METADATA: tag})
    return dataclasses.field(default_factory=default_factory, metadata={METADATA: tag})


__all__ = (
    "METADATA",
    "Tag",
    "option",
    "action",
)
