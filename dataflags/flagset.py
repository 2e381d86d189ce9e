r"""
Flag set: named, mutable option slots for one scope.

What it stores
- Flag records (name, usage, value, default) in declaration order. `value` is any
  object following the Value protocol (see dataflags.values): __str__(), set(text)
  and an optional `boolean` attribute. `default` is str(value) captured when the
  flag is registered, which is what usage output shows.

Token grammar (prefix "-" shown; any non-empty prefix works)
- "-name" / "--name"              boolean flag set to true, or option taking the next token
- "-name=value" / "--name=value"  inline value (the only way to pass false to a boolean)
- "-name value"                   spaced value; the next token is taken verbatim, even
                                  if it starts with the prefix ("-offset -5")
- "--"                            ends flag parsing
- the first token that is not a flag ends flag parsing as well

Faults (position-first: every message names the ordinal of the token)
- MalformedFlagError   "---x", "-=x"
- UnknownFlagError     name not registered (with close-match suggestions)
- HelpRequestedError   "-h" / "-help" when no such flag was registered
- MissingValueError    option at the end of the tokens without a value
- ConversionError      value rejected by the converter (flag name and position attached)
- UnparsedTokensError  tokens left once flag parsing stops
"""
from .faults import *
from .utils import *


class Flag:
    __slots__ = ("name", "usage", "value", "default")

    def __init__(self, name, usage, value, default, /):
        self.name = name
        self.usage = usage
        self.value = value
        self.default = default

    @property
    def boolean(self):
        return bool(getattr(self.value, "boolean", False))

    def __repr__(self):
        return "Flag(name=%r, default=%r)" % (self.name, self.default)


class FlagSet:
    def __init__(self, name="", /, *, prefix="-", owner=None):
        if not isinstance(name, str):
            raise TypeError("FlagSet() name must be a string")
        if not isinstance(prefix, str):
            raise TypeError("FlagSet() 'prefix' must be a string")
        if not prefix or prefix.isspace():
            raise ValueError("FlagSet() 'prefix' cannot be empty")
        self.name = name
        self.prefix = prefix
        self.owner = owner
        self._flags = {}

    @property
    def flags(self):
        return tuple(self._flags.values())

    def lookup(self, name, /):
        return self._flags.get(name)

    def _route(self):
        if self.owner is not None:
            return " ".join(node.name for node in self.owner.path if node.name) or self.name
        return self.name

    def var(self, value, name, usage="", /):
        """
        register `value` under `name`; the name is used without the prefix.
        """
        if not callable(getattr(value, "set", None)):
            raise TypeError("var() first argument must implement set(text)")
        if not isinstance(name, str) or not name or name.startswith(self.prefix) or "=" in name:
            raise BindingError(
                "flag name %r cannot be empty, start with %r or contain '='" % (name, self.prefix),
                title="invalid flag name",
                code=FaultCode.INVALID_FLAG_NAME,
                input=name,
                hint="rename the field or give it an alias",
                docs=getdoc(FaultCode.INVALID_FLAG_NAME),
            )
        if name in self._flags:
            raise DuplicateFlagError(
                "flag %s%s is defined twice in %r" % (self.prefix, name, self._route() or "the root scope"),
                title="duplicate flag",
                code=FaultCode.DUPLICATE_FLAG,
                input=name,
                hint="give one of the fields a different alias",
                docs=getdoc(FaultCode.DUPLICATE_FLAG),
            )
        self._flags[name] = Flag(name, usage, value, str(value))

    def parse(self, tokens, /, *, index=1):
        """
        parse `tokens` into the registered values; `index` is the 1-based position of
        the first token in the whole command line (used in messages only).
        """
        tokens = list(tokens)
        double = self.prefix * 2
        position = 0

        while position < len(tokens):
            token = tokens[position]
            where = ordinal(index + position)

            if len(token) <= len(self.prefix) or not token.startswith(self.prefix):
                break
            if token == double:
                position += 1
                break

            body = token[len(double):] if token.startswith(double) else token[len(self.prefix):]
            if not body or body.startswith(self.prefix) or body.startswith("="):
                raise MalformedFlagError(
                    "bad flag syntax %r at %s position" % (token, where),
                    title="malformed flag",
                    code=FaultCode.MALFORMED_TOKEN,
                    input=token,
                    index=index + position,
                    hint="write flags as %sname or %sname=value" % (self.prefix, self.prefix),
                    docs=getdoc(FaultCode.MALFORMED_TOKEN),
                )

            name, assigned, value = body.partition("=")
            if (flag := self._flags.get(name)) is None:
                if name in ("h", "help"):
                    raise HelpRequestedError(
                        "help requested at %s position" % where,
                        title="help requested",
                        code=FaultCode.HELP_REQUESTED,
                        node=self.owner,
                        index=index + position,
                        hint="see the usage above",
                        docs=getdoc(FaultCode.HELP_REQUESTED),
                    )
                suggestions = suggest(name, self._flags)
                try:
                    hint = "did you mean %r? you can also run '%s %shelp' to see all options" % (
                        self.prefix + suggestions[0], self._route(), self.prefix
                    )
                except IndexError:
                    hint = "run '%s %shelp' to see all available options" % (self._route(), self.prefix)
                raise UnknownFlagError(
                    "unknown flag %r at %s position" % (self.prefix + name, where),
                    title="unknown flag",
                    code=FaultCode.UNKNOWN_SWITCH,
                    input=name,
                    index=index + position,
                    suggestions=suggestions,
                    hint=hint,
                    docs=getdoc(FaultCode.UNKNOWN_SWITCH),
                )

            consumed = 1
            if assigned:
                text = value
            elif flag.boolean:
                text = "true"
            elif position + 1 < len(tokens):
                text = tokens[position + 1]
                consumed = 2
            else:
                raise MissingValueError(
                    "flag %r at %s position needs a value" % (self.prefix + name, where),
                    title="missing value",
                    code=FaultCode.OPTION_VALUE_REQUIRED,
                    input=name,
                    index=index + position,
                    hint="pass a value after it (%s%s <value>) or inline (%s%s=<value>)" % (
                        self.prefix, name, self.prefix, name
                    ),
                    docs=getdoc(FaultCode.OPTION_VALUE_REQUIRED),
                )

            try:
                flag.value.set(text)
            except ConversionError as error:
                raise type(error)(
                    "invalid value for flag %r at %s position: %s" % (self.prefix + name, where, error.message),
                    **{**error.options, "flag": name, "index": index + position}
                ) from error

            position += consumed

        if position < len(tokens):
            raise UnparsedTokensError(
                "unexpected %r at %s position" % (tokens[position], ordinal(index + position)),
                title="unparsed input",
                code=FaultCode.UNPARSED_TOKENS,
                leftover=tokens[position:],
                index=index + position,
                hint="boolean flags only take inline values (%sname=false); remove the extra input otherwise" % self.prefix,
                docs=getdoc(FaultCode.UNPARSED_TOKENS),
            )

    def __repr__(self):
        return "FlagSet(%r, flags=%r)" % (self.name, list(self._flags))


__all__ = (
    "Flag",
    "FlagSet",
)
