"""
Dataflags faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the binder,
  the converters, the flag sets and the action scanner can raise. Codes are
  grouped by domain to keep copy consistent and make logs/searches predictable.
- DataflagsError: base type that carries message + options and knows how to
  render itself (rich) and how to surface itself according to the configured
  ErrorHandling mode.
- trigger(): central entry point to surface any fault.
- getdoc(): optional description lookup for a code from the host application.

Taxonomy
- RegistrationError  → a field type has no converter (MissingConverterError).
- BindingError       → the schema itself is unusable (invalid root, unsupported list
                       element, duplicate action or flag name, unallocatable field).
- ConversionError    → a literal cannot be turned into the target type.
- FlagError          → the token stream of one scope is not valid flag syntax.
- ActionError        → a bare token is not a known action of the current scope.

Modes (ErrorHandling)
- CONTINUE: the fault is raised to the caller.
- EXIT:     the fault is rendered with rich on stderr and the process exits (status 2).
- PANIC:    a FatalError (BaseException) is raised, chained to the fault, so ordinary
            `except Exception` handlers in the host application do not swallow it.

UX goals
- Position-first messages: flag and action faults include the ordinal position of
  the offending token (“at third position”).
- Short titles, one-sentence bodies, a single clear hint.
- Host overrides through __main__: __styles__ (palette), __prog__ (program name),
  __codes__ (code labels) and __docs__ (per-code docs).
"""
import sys
from collections import defaultdict
from enum import Enum, IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across dataflags (stable identifiers).

    grouping (by high-level domain)
    - registration (1100x)
      • MISSING_CONVERTER
    - binding (1101x)
      • INVALID_ROOT, UNSUPPORTED_ELEMENT, DUPLICATE_ACTION, DUPLICATE_FLAG,
        UNRESOLVED_ANNOTATION, ALLOCATION_FAILED, INVALID_FLAG_NAME
    - conversion (1102x)
      • MALFORMED_LITERAL, OUT_OF_RANGE, LAYOUT_MISMATCH, LENGTH_MISMATCH
    - routing (1110x)
      • UNKNOWN_ACTION
    - flags (111xx)
      • MALFORMED_TOKEN, UNKNOWN_SWITCH, OPTION_VALUE_REQUIRED, HELP_REQUESTED,
        UNPARSED_TOKENS

    notes
    - codes are discoverable (searchable in logs and docs) and normalized to a string
      via normalize() so hosts can remap them if desired.
    """
    # --- registration errors (1100x) ---
    MISSING_CONVERTER           = 11001

    # --- binding errors (1101x) ---
    INVALID_ROOT                = 11011
    UNSUPPORTED_ELEMENT         = 11012
    DUPLICATE_ACTION            = 11013
    DUPLICATE_FLAG              = 11014
    UNRESOLVED_ANNOTATION       = 11015
    ALLOCATION_FAILED           = 11016
    INVALID_FLAG_NAME           = 11017

    # --- conversion errors (1102x) ---
    MALFORMED_LITERAL           = 11021
    OUT_OF_RANGE                = 11022
    LAYOUT_MISMATCH             = 11023
    LENGTH_MISMATCH             = 11024

    # --- routing errors (1110x) ---
    UNKNOWN_ACTION              = 11102

    # --- flag errors (111xx) ---
    MALFORMED_TOKEN             = 11111
    UNKNOWN_SWITCH              = 11112
    OPTION_VALUE_REQUIRED       = 11117
    HELP_REQUESTED              = 11131
    UNPARSED_TOKENS             = 11141

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ErrorHandling(Enum):
    """
    what a parse failure does once it reaches the filler.
    """
    CONTINUE = "continue"
    EXIT = "exit"
    PANIC = "panic"


class FatalError(BaseException):
    """
    raised in PANIC mode; `fault` holds the original DataflagsError.
    """

    def __init__(self, fault, /):
        super().__init__(fault.message)
        self.fault = fault


class DataflagsError(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if isinstance(self.message, str) else ""

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        filler = self.options.get("filler")
        prog = text(getattr(main, "__prog__", getattr(filler, "name", "") or "dataflags"), styler("prog-name"))

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "-", styler("code")),
            " | ",
            text(self.options.get("title", "error").title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint", ""), styler("hint")))

        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self):
        match self.options.get("errors", ErrorHandling.CONTINUE):
            case ErrorHandling.CONTINUE:
                raise self from None
            case ErrorHandling.PANIC:
                raise FatalError(self) from self
            case ErrorHandling.EXIT:
                console.print(self)
                sys.exit(2)
            case errors:
                raise ValueError("unknown error handling %r" % (errors,))

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RegistrationError(DataflagsError): ...
class MissingConverterError(RegistrationError): ...

class BindingError(DataflagsError): ...
class InvalidRootError(BindingError): ...
class UnsupportedElementError(BindingError): ...
class DuplicateActionError(BindingError): ...
class DuplicateFlagError(BindingError): ...
class AllocationError(BindingError): ...


class ConversionError(DataflagsError):
    @property
    def literal(self):
        """the offending input text."""
        return self.options.get("literal")

    @property
    def target(self):
        """human-readable description of the type that was expected."""
        return self.options.get("target")


class FlagError(DataflagsError): ...
class MalformedFlagError(FlagError): ...
class UnknownFlagError(FlagError): ...
class MissingValueError(FlagError): ...
class UnparsedTokensError(FlagError): ...


class HelpRequestedError(FlagError):
    def __trigger__(self):
        if self.options.get("errors") is not ErrorHandling.EXIT:
            return super().__trigger__()
        node = self.options.get("node")
        if node is not None:
            Console().print(node.render(
                colorful=self.options.get("colorful", True),
                fancy=self.options.get("fancy", False),
            ))
        sys.exit(0)


class ActionError(DataflagsError): ...
class UnknownActionError(ActionError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see DataflagsError).
    - options are merged into the fault via __replace__(**options) before triggering.
    - the "errors" option (an ErrorHandling) decides between raising, exiting and panicking.

    typical options
    - filler, errors, fancy, colorful, and any context the reporter may want to
      show (input, index, suggestions, …).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "DataflagsError",
    "RegistrationError",
    "MissingConverterError",
    "BindingError",
    "InvalidRootError",
    "UnsupportedElementError",
    "DuplicateActionError",
    "DuplicateFlagError",
    "AllocationError",
    "ConversionError",
    "FlagError",
    "MalformedFlagError",
    "UnknownFlagError",
    "MissingValueError",
    "UnparsedTokensError",
    "HelpRequestedError",
    "ActionError",
    "UnknownActionError",
    "ErrorHandling",
    "FatalError",
    "FaultCode",
    "trigger",
    "getdoc",
)
