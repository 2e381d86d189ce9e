"""
Action scanner: splits a token stream between a node and one of its actions.

Automaton (per node, left to right, starting BETWEEN_OPTIONS)
- BETWEEN_OPTIONS
  • token without the prefix: candidate action. A child key → split point;
    anything else → UnknownActionError, raised before any flag of the node is parsed.
  • token with the prefix: go to INSIDE_OPTION_VALUE.
- INSIDE_OPTION_VALUE
  • token without the prefix: the option's value, back to BETWEEN_OPTIONS.
  • token with the prefix: stay (boolean flag followed by another flag).
- a prefixed token carrying an inline value ("-name=value") completes its option
  in either state: the scanner goes (or stays) BETWEEN_OPTIONS.

Dispatch
- tokens before the split point (all of them when there is none) go to the node's
  FlagSet; the action token is consumed, its original field name is appended to the
  chain and scanning continues in the child with the tokens after it.

Notes
- a boolean flag written without a value right before an action ("-verbose act")
  hides the action: the automaton reads "act" as the flag value and the flag set
  then rejects it as unparsed input. Write "-verbose=true act" instead.
"""
import enum

from .faults import *
from .utils import *


class State(enum.IntEnum):
    BETWEEN_OPTIONS = 0
    INSIDE_OPTION_VALUE = 1


class ActionScanner:
    def __init__(self, prefix="-", /):
        if not isinstance(prefix, str):
            raise TypeError("ActionScanner() prefix must be a string")
        if not prefix:
            raise ValueError("ActionScanner() prefix cannot be empty")
        self.prefix = prefix

    def split(self, node, tokens, /, *, index=1):
        """
        return the position of the action token in `tokens`, or None when every
        token belongs to `node`.
        """
        state = State.BETWEEN_OPTIONS
        for position, token in enumerate(tokens):
            prefixed = token.startswith(self.prefix)
            match state:
                case State.BETWEEN_OPTIONS if not prefixed:
                    if node.child(token) is not None:
                        return position
                    suggestions = suggest(token, node.order)
                    route = " ".join(step.name for step in node.path if step.name)
                    try:
                        hint = "did you mean %r? run '%s %shelp' to see the available actions" % (
                            suggestions[0], route, self.prefix
                        )
                    except IndexError:
                        if node.order:
                            hint = "available actions: %s" % ", ".join(node.order)
                        else:
                            hint = "%s takes no actions; remove the extra input" % (route or "the command")
                    raise UnknownActionError(
                        "unknown action %r at %s position" % (token, ordinal(index + position)),
                        title="unknown action",
                        code=FaultCode.UNKNOWN_ACTION,
                        input=token,
                        index=index + position,
                        suggestions=suggestions,
                        hint=hint,
                        docs=getdoc(FaultCode.UNKNOWN_ACTION),
                    )
                case _ if prefixed and "=" in token:
                    state = State.BETWEEN_OPTIONS
                case State.BETWEEN_OPTIONS:
                    state = State.INSIDE_OPTION_VALUE
                case State.INSIDE_OPTION_VALUE if not prefixed:
                    state = State.BETWEEN_OPTIONS
        return None

    def scan(self, node, tokens, /, *, index=1):
        """
        parse `tokens` across `node` and its descendants; return the chain of
        original action field names, root to leaf.
        """
        tokens = list(tokens)
        chain = []
        while True:
            split = self.split(node, tokens, index=index)
            node.flagset.parse(tokens if split is None else tokens[:split], index=index)
            if split is None:
                return chain
            key = tokens[split]
            chain.append(node.field(key))
            node, tokens, index = node.child(key), tokens[split + 1:], index + split + 1


__all__ = (
    "State",
    "ActionScanner",
)
