"""
Filler: public facade tying binder, node tree and action scanner together.

Lifecycle
1. Filler(name, usage, ...)     → empty root scope with the chosen options.
2. filler.fill(obj)             → bind the dataclass instance (binding faults always raise).
3. filler.parse(args)           → fill obj from the command line and return the action chain.

Options
- renamer:  (parent, name, is_action) → logical name (default_renamer).
- errors:   ErrorHandling for parse faults (EXIT by default, like a real CLI).
- prefix:   option prefix (default "-"; "--name" is always accepted too).
- registry: TypeRegistry used for binding (default_registry() by default).
- fancy:    render faults and usage inside a rich Panel.
- colorful: style faults and usage with the palette (see __styles__).

Example
    >>> from dataclasses import dataclass
    >>> from dataflags import Filler, ErrorHandling, action, option
    >>> @dataclass
    ... class Act:
    ...     y: int = 0
    >>> @dataclass
    ... class Cli:
    ...     x: int = 0
    ...     act: Act = action(Act)
    >>> cli = Cli()
    >>> filler = Filler("tool", errors=ErrorHandling.CONTINUE)
    >>> filler.fill(cli)
    >>> filler.parse(["-x", "1", "act", "-y", "2"])
    ['act']
    >>> cli
    Cli(x=1, act=Act(y=2))
"""
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .binder import Binder, default_renamer
from .faults import *
from .nodes import ParserNode
from .scanner import ActionScanner
from .utils import *


def _tokenize(args):
    if args is Unset:
        return sys.argv[1:]
    if isinstance(args, str):
        return shlex.split(args)
    if isinstance(args, Iterable):
        tokens = list(args)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


class Filler:
    def __init__(
            self,
            name="",
            usage="",
            /,
            *,
            renamer=default_renamer,
            errors=ErrorHandling.EXIT,
            prefix="-",
            registry=Unset,
            fancy=False,
            colorful=True,
    ):
        if not isinstance(errors, ErrorHandling):
            raise TypeError("Filler() 'errors' must be an ErrorHandling member")
        if not isinstance(prefix, str):
            raise TypeError("Filler() 'prefix' must be a string")
        if not prefix or prefix.isspace() or "=" in prefix:
            raise ValueError("Filler() 'prefix' must be a non-empty string without spaces or '='")
        if not isinstance(fancy, bool):
            raise TypeError("Filler() 'fancy' must be a boolean")
        if not isinstance(colorful, bool):
            raise TypeError("Filler() 'colorful' must be a boolean")
        self._root = ParserNode(name, usage, prefix=prefix)
        self._binder = Binder(self._root, renamer=renamer, registry=registry)
        self._scanner = ActionScanner(prefix)
        self._errors = errors
        self._fancy = fancy
        self._colorful = colorful

    @property
    def name(self):
        return self._root.name

    @property
    def root(self):
        return self._root

    @property
    def flagset(self):
        """
        FlagSet of the root scope.
        """
        return self._root.flagset

    @property
    def errors(self):
        return self._errors

    @property
    def registry(self):
        return self._binder.registry

    def fill(self, obj, /):
        """
        bind `obj` (a dataclass instance); BindingError and RegistrationError always raise.
        """
        self._binder.bind(obj)

    def parse(self, args=Unset, /):
        """
        parse `args` into the bound object and return the invoked action field names.

        args
        - Unset: sys.argv[1:].
        - str: split with shlex.split.
        - Iterable[str]: used as-is.

        faults are surfaced according to the `errors` mode.
        """
        tokens = _tokenize(args)
        try:
            return self._scanner.scan(self._root, tokens)
        except DataflagsError as fault:
            trigger(fault, errors=self._errors, filler=self, fancy=self._fancy, colorful=self._colorful)

    def usage_text(self):
        return self._root.usage_text()

    def usage(self):
        Console().print(self._root.render(colorful=self._colorful, fancy=self._fancy))

    def action_usage(self, field, /):
        """
        usage text of the root action bound to the field named `field` ("" when there is none).
        """
        if (node := self._root.find(field)) is None:
            return ""
        return node.usage_text()

    def __repr__(self):
        return "Filler(%r, errors=%s)" % (self._root.name, self._errors.name)


def fill(obj, args=Unset, /, **options):
    """
    one-shot helper: build a Filler from `options`, bind `obj` and parse `args`.

    `name` and `usage` are accepted as keywords here.
    """
    filler = Filler(options.pop("name", ""), options.pop("usage", ""), **options)
    filler.fill(obj)
    return filler.parse(args)


__all__ = (
    "Filler",
    "fill",
)
