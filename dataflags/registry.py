"""
Type registry: type identity → converter (+ binding factory).

Overview
- Converter: immutable pair of functions translating between a value and its
  literal text, plus the zero value used to allocate `None` fields and the
  "boolean" marker (the option needs no value token).
- identity(type): globally unique key for a type, "<module>=><qualname>", so two
  classes with the same name in different modules never collide.
- TypeRegistry: the table itself. register() overwrites silently (last write
  wins); lookups return None when a type is unknown.
- default_registry(): explicit startup routine that builds the process-wide
  registry (with every built-in converter) once and returns it.
- register(): shortcut registering into the process-wide registry.

Contract
- Registration is a startup-only, single-threaded phase: complete every
  register() call before the first bind/parse.
- A converter's fromstr() raises ConversionError on malformed input; tostr()
  is total over the values of its type.

Example
    >>> from dataflags import Converter, register
    >>> class Celsius(float): ...
    >>> register(Celsius, Converter(
    ...     lambda value, hints: "%gC" % value,
    ...     lambda text, hints: Celsius(text.removesuffix("C")),
    ...     zero=Celsius(0),
    ... ))
"""
import builtins
import functools
import types

from .utils import *
from .values import ScalarValue


class Converter:
    """
    stateless string ⇄ value translation for one type.

    construction
    - Converter(tostr, fromstr, /, *, zero=Unset, boolean=False) wraps two callables:
        tostr(value, hints) -> str
        fromstr(text, hints) -> value (raise ConversionError on bad input)
    - both callables are required when Converter itself is instantiated.
    - subclasses may omit them and override tostr()/fromstr() instead (the built-in
      converters do); a method left to the base then raises NotImplementedError.

    hints
    - a read-only mapping of per-field hints (e.g. {"base": 16} or
      {"layout": "%Y %d %b %H:%M"}) taken from the field's tag.

    immutability
    - attributes cannot be reassigned after construction; converters are shared
      by reference between every field of their type.
    """
    __slots__ = ("_tostr", "_fromstr", "_zero", "boolean")

    def __init__(self, tostr=Unset, fromstr=Unset, /, *, zero=Unset, boolean=False):
        if tostr is not Unset and not callable(tostr):
            raise TypeError("Converter() 'tostr' must be callable")
        if fromstr is not Unset and not callable(fromstr):
            raise TypeError("Converter() 'fromstr' must be callable")
        if type(self) is Converter and (tostr is Unset or fromstr is Unset):
            raise TypeError("Converter() requires both 'tostr' and 'fromstr' callables")
        if not isinstance(boolean, bool):
            raise TypeError("Converter() 'boolean' must be a boolean")
        object.__setattr__(self, "_tostr", tostr)
        object.__setattr__(self, "_fromstr", fromstr)
        object.__setattr__(self, "_zero", zero)
        object.__setattr__(self, "boolean", boolean)

    def __setattr__(self, name, value, /):
        raise AttributeError("converters are immutable")

    def __delattr__(self, name, /):
        raise AttributeError("converters are immutable")

    def tostr(self, value, hints, /):
        if self._tostr is Unset:
            raise NotImplementedError("%s does not define tostr()" % type(self).__name__)
        return self._tostr(value, hints)

    def fromstr(self, text, hints, /):
        if self._fromstr is Unset:
            raise NotImplementedError("%s does not define fromstr()" % type(self).__name__)
        return self._fromstr(text, hints)

    def zero(self):
        """
        value used to allocate a field whose current value is None.
        """
        return coalesce(self._zero)

    def __repr__(self):
        return "%s(boolean=%r)" % (type(self).__name__, self.boolean)


def identity(type, /):
    """
    return the registry key of a class, or None for anything that is not a class
    (generic aliases, unions and other annotations have no identity).
    """
    if not isinstance(type, builtins.type) or isinstance(type, types.GenericAlias):
        return None
    return "%s=>%s" % (type.__module__, type.__qualname__)


def scalar(flagset, slot, binding, converter, /):
    """
    default binding factory: one flag storing a single converted value in `slot`.
    """
    flagset.var(ScalarValue(slot, converter, binding.hints), binding.name, binding.usage)


class TypeRegistry:
    """
    table from type identity to (converter, binding factory).

    factories
    - a binding factory is called as factory(flagset, slot, binding, converter) and must
      install whatever flag storage the field needs. The default, scalar(), registers a
      ScalarValue; custom factories can wire several flags or special storage.
    """

    def __init__(self):
        self._converters = {}
        self._factories = {}

    def register(self, type, converter, /, factory=Unset):
        if identity(type) is None:
            raise TypeError("register() first argument must be a class")
        if not isinstance(converter, Converter):
            raise TypeError("register() second argument must be a Converter")
        if factory is not Unset and not callable(factory):
            raise TypeError("register() 'factory' must be callable")
        key = identity(type)
        self._converters[key] = converter
        self._factories[key] = coalesce(factory, scalar)

    def lookup_type(self, type, /):
        return self._converters.get(identity(type))

    def lookup_value(self, value, /):
        return self.lookup_type(builtins.type(value))

    def lookup_factory(self, type, /):
        return self._factories.get(identity(type))

    def __contains__(self, type, /):
        return identity(type) in self._converters

    def __len__(self):
        return len(self._converters)

    def __repr__(self):
        return "TypeRegistry(%s)" % ", ".join(sorted(self._converters))


@functools.cache
def default_registry():
    """
    build (once) and return the process-wide registry with every built-in converter.

    call it at startup, before registering custom converters through register(); a
    Filler created without an explicit registry uses this one.
    """
    from .converters import install

    registry = TypeRegistry()
    install(registry)
    return registry


def register(type, converter, /, factory=Unset):
    """
    register a converter (and optionally a binding factory) into the process-wide registry.
    """
    default_registry().register(type, converter, factory)


__all__ = (
    "Converter",
    "TypeRegistry",
    "identity",
    "scalar",
    "default_registry",
    "register",
)
