"""
Parser nodes: the subcommand tree built by the binder.

Scope
- ParserNode: one scope of options (its FlagSet) plus its child actions.
  • children are keyed by their logical (renamed or aliased) action name.
  • declaration order of the children is kept for usage output.
  • every key remembers the original field name so parse results and usage
    lookups speak in field names, not in command-line spellings.
- The tree is mutable while the binder walks the schema and read-only afterwards.

Usage output
- render() builds a rich renderable of the node and every descendant:

      a zip command
        -config: working profile
            (default: default.conf)
        = compress: to compress things
          -profile:
          -s:
            (default: false)
          = dry-run: dry run, doesn't actually create any file

- palette keys: usage, flag-name, flag-usage, default, action-marker, action-name
  (override through __styles__ in __main__; colorful=False strips every style).
- usage_text() renders the same thing without colors to a string.
"""
import io
from collections import defaultdict

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .faults import *
from .flagset import FlagSet
from .utils import *


class ParserNode:
    def __init__(self, name="", usage="", /, *, parent=Unset, prefix="-"):
        if not isinstance(name, str):
            raise TypeError("ParserNode() name must be a string")
        if not isinstance(usage, str):
            raise TypeError("ParserNode() usage must be a string")
        if not isinstance(parent, ParserNode | Unset):
            raise TypeError("ParserNode() 'parent' must be a ParserNode")
        self._name = name
        self._usage = usage
        self._parent = coalesce(parent)
        self._prefix = prefix
        self._order = []
        self._children = {}
        self._names = {}
        self._flagset = FlagSet(name, prefix=prefix, owner=self)

    order = mirror("order")
    children = mirror("children")
    names = mirror("names")

    @property
    def name(self):
        return self._name

    @property
    def usage(self):
        return self._usage

    @property
    def parent(self):
        return self._parent

    @property
    def prefix(self):
        return self._prefix

    @property
    def flagset(self):
        return self._flagset

    @property
    def root(self):
        """
        topmost node of the tree this node belongs to.
        """
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def path(self):
        """
        nodes from the root down to this one.
        """
        path = [node := self]
        while node.parent is not None:
            path.append(node := node.parent)
        return tuple(reversed(path))

    def child(self, key, /):
        return self._children.get(key)

    def field(self, key, /):
        return self._names.get(key)

    def attach(self, key, field, usage="", /):
        """
        create, register and return the child scope `key` for the action field `field`.
        """
        if key in self._children:
            route = " ".join(node.name for node in self.path if node.name) or "the root scope"
            raise DuplicateActionError(
                "action %r of field %r is already defined in %s by field %r" % (
                    key, field, route, self._names[key]
                ),
                title="duplicate action",
                code=FaultCode.DUPLICATE_ACTION,
                input=key,
                hint="give one of the action fields a different alias",
                docs=getdoc(FaultCode.DUPLICATE_ACTION),
            )
        node = ParserNode(key, usage, parent=self, prefix=self._prefix)
        self._order.append(key)
        self._children[key] = node
        self._names[key] = field
        return node

    def find(self, field, /):
        """
        child scope bound to the original field name `field`, or None.
        """
        for key in self._order:
            if self._names[key] == field:
                return self._children[key]
        return None

    def render(self, *, colorful=True, fancy=False):
        styles = defaultdict(str, {
            "usage": "italic #A3A3A3",  # neutral gray
            "flag-name": "bold #00E6FF",  # cyan options
            "flag-usage": "#9CA3AF",  # muted gray
            "default": "#FFD600 dim",  # amber defaults
            "action-marker": "#FF4D94 dim",  # magenta marker
            "action-name": "bold #FF4D94",  # magenta actions
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style=""):
            return Text(str(fragment), styles[style] if colorful else "")

        def section(node, indent):
            output = Text()
            output.append(text(node.usage, "usage")).append("\n")
            step = indent + "  "
            for flag in node.flagset.flags:
                output.append(step).append(text("%s%s" % (node.prefix, flag.name), "flag-name")).append(": ")
                output.append(text(flag.usage, "flag-usage")).append("\n")
                if flag.default:
                    output.append(step + "    ").append(text("(default: %s)" % flag.default, "default")).append("\n")
            for key in node._order:
                output.append(step).append(text("=", "action-marker")).append(" ")
                output.append(text(key, "action-name")).append(": ")
                output.append(section(node._children[key], step))
            return output

        renderable = section(self, "")
        renderable.rstrip()

        if fancy:
            route = " ".join(node.name for node in self.path if node.name) or "usage"
            return Panel(renderable, title="[ %s ]" % route.upper(), title_align="left")
        return renderable

    def __rich__(self):
        return self.render()

    def usage_text(self, *, width=100):
        """
        usage of this node and its descendants as plain text.
        """
        buffer = io.StringIO()
        Console(file=buffer, width=width, color_system=None, highlight=False).print(self.render(colorful=False))
        return buffer.getvalue()

    def __repr__(self):
        return "ParserNode(%r, children=%r)" % (self._name, self._order)


__all__ = (
    "ParserNode",
)
