r"""
Binder: one-time walk turning a dataclass instance into live flags and a node tree.

Walk (per exported field, declaration order)
- exported = the field name does not start with "_"; fields tagged skip=True are ignored.
- logical name = tag alias verbatim, or renamer(parent, field name, is_action) where
  is_action tells whether the enclosing scope is an action scope.
- a field holding None is allocated first (zero value of its type) so every bound
  field is live right after binding.
- resolution, first match wins:
  1. registered type              → the registered binding factory (scalar() by default)
  2. text codec                   → ScalarValue over a TextCodecConverter
  3. list[T] / tuple[T, ...] /
     tuple[T, T, ...]             → ListValue (element registered or text codec, else
                                    UnsupportedElementError)
  4. dataclass tagged action=True → child ParserNode keyed by the logical name
  5. dataclass                    → flattened into the current scope, names prefixed
  6. anything else                → MissingConverterError

Annotations
- `T | None` / Optional[T] unwrap to T (the field may hold None until bound).
- Annotated[T, ...] unwraps to T.
- annotations are resolved with typing.get_type_hints(); unresolvable forward
  references are a BindingError (UNRESOLVED_ANNOTATION).

Failures abort the whole walk; nothing is rolled back.
"""
import dataclasses
import enum
import types
import typing

from .faults import *
from .lists import ListValue
from .nodes import ParserNode
from .registry import default_registry, scalar
from .tags import Tag
from .text import TextCodecConverter, is_textcodec
from .utils import *
from .values import Slot


class Kind(enum.Enum):
    SCALAR = "scalar"
    LIST = "list"
    FLATTENED = "flattened"
    ACTION = "action"


def default_renamer(parent, name, is_action, /):
    """
    lowercase `name`, drop trailing underscores and turn the rest into dashes;
    prefix it with `parent-` unless the enclosing scope is an action scope.

        >>> default_renamer("", "config_file", False)
        'config-file'
        >>> default_renamer("compress", "dry_run", False)
        'compress-dry-run'
        >>> default_renamer("compress", "dry_run", True)
        'dry-run'
    """
    name = name.rstrip("_").replace("_", "-")
    if parent and not is_action:
        return ("%s-%s" % (parent, name)).lower()
    return name.lower()


def _unwrap(annotation):
    """
    strip Annotated and a single `| None`; return (annotation, optional).
    """
    if typing.get_origin(annotation) is typing.Annotated:
        annotation = typing.get_args(annotation)[0]
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        members = [member for member in typing.get_args(annotation) if member is not types.NoneType]
        if len(members) == 1:
            return _unwrap(members[0])[0], True
    return annotation, False


class FieldBinding:
    __slots__ = ("name", "field", "tag", "annotation", "optional", "kind", "converter", "sequence")

    def __init__(self, name, field, tag, annotation, optional, /):
        self.name = name
        self.field = field
        self.tag = tag
        self.annotation = annotation
        self.optional = optional
        self.kind = Unset
        self.converter = None
        self.sequence = None

    @property
    def usage(self):
        return self.tag.usage

    @property
    def hints(self):
        return self.tag.hints

    def __repr__(self):
        return "FieldBinding(%r, kind=%s, type=%s)" % (self.name, self.kind, describe(self.annotation))


class Binder:
    def __init__(self, node, /, *, renamer=default_renamer, registry=Unset):
        if not isinstance(node, ParserNode):
            raise TypeError("Binder() first argument must be a ParserNode")
        if not callable(renamer):
            raise TypeError("Binder() 'renamer' must be callable")
        self._node = node
        self._renamer = renamer
        self._registry = default_registry() if registry is Unset else registry

    @property
    def node(self):
        return self._node

    @property
    def registry(self):
        return self._registry

    def bind(self, root, /):
        """
        bind every field of the dataclass instance `root` to the node tree.
        """
        if not dataclasses.is_dataclass(root) or isinstance(root, type):
            raise InvalidRootError(
                "cannot bind %s: only dataclass instances are supported" % describe(type(root)),
                title="invalid root",
                code=FaultCode.INVALID_ROOT,
                hint="pass an instance of a @dataclass class, not the class itself",
                docs=getdoc(FaultCode.INVALID_ROOT),
            )
        self._walk(self._node, root, "", False)

    def _walk(self, node, owner, prefix, is_action):
        cls = type(owner)
        if cls.__dataclass_params__.frozen:
            raise InvalidRootError(
                "cannot bind %s: frozen dataclasses cannot be filled" % describe(cls),
                title="invalid root",
                code=FaultCode.INVALID_ROOT,
                hint="drop frozen=True from the @dataclass decorator of %s" % describe(cls),
                docs=getdoc(FaultCode.INVALID_ROOT),
            )
        try:
            annotations = typing.get_type_hints(cls, include_extras=True)
        except (NameError, TypeError) as error:
            raise BindingError(
                "cannot resolve the annotations of %s: %s" % (describe(cls), error),
                title="unresolved annotation",
                code=FaultCode.UNRESOLVED_ANNOTATION,
                hint="make sure every type used by %s is importable from its module" % describe(cls),
                docs=getdoc(FaultCode.UNRESOLVED_ANNOTATION),
            ) from error

        for field in dataclasses.fields(owner):
            if field.name.startswith("_"):
                continue
            if (tag := Tag.of(field)).skip:
                continue
            name = tag.alias if tag.alias else self._renamer(prefix, field.name, is_action)
            binding = FieldBinding(name, field, tag, *_unwrap(annotations[field.name]))
            self._resolve(binding)

            slot = Slot(owner, field.name)
            if slot.get() is None:
                slot.set(self._allocate(binding))

            match binding.kind:
                case Kind.SCALAR:
                    factory = self._registry.lookup_factory(binding.annotation) or scalar
                    factory(node.flagset, slot, binding, binding.converter)
                case Kind.LIST:
                    element, optional, length, container = binding.sequence
                    node.flagset.var(
                        ListValue(
                            slot,
                            binding.converter,
                            binding.hints,
                            length=length,
                            optional=optional,
                            container=container,
                        ),
                        name,
                        binding.usage,
                    )
                case Kind.ACTION:
                    self._walk(node.attach(name, field.name, binding.usage), slot.get(), name, True)
                case Kind.FLATTENED:
                    self._walk(node, slot.get(), name, False)

    def _converter(self, annotation):
        if (converter := self._registry.lookup_type(annotation)) is not None:
            return converter
        if is_textcodec(annotation):
            return TextCodecConverter(annotation)
        return None

    def _resolve(self, binding):
        annotation = binding.annotation
        if (converter := self._converter(annotation)) is not None:
            binding.kind, binding.converter = Kind.SCALAR, converter
        elif (typing.get_origin(annotation) or annotation) in (list, tuple):
            self._sequence(binding)
        elif dataclasses.is_dataclass(annotation) and isinstance(annotation, type):
            binding.kind = Kind.ACTION if binding.tag.action else Kind.FLATTENED
        else:
            raise MissingConverterError(
                "field %r has type %s, which has no converter" % (binding.field.name, describe(annotation)),
                title="missing converter",
                code=FaultCode.MISSING_CONVERTER,
                input=binding.field.name,
                hint="register a Converter for %s or give it __totext__/__fromtext__" % describe(annotation),
                docs=getdoc(FaultCode.MISSING_CONVERTER),
            )

    def _sequence(self, binding):
        annotation = binding.annotation
        container = typing.get_origin(annotation) or annotation
        members = typing.get_args(annotation)
        length = Unset

        if container is list and len(members) == 1:
            element = members[0]
        elif container is tuple and len(members) == 2 and members[1] is Ellipsis:
            element = members[0]
        elif container is tuple and members and Ellipsis not in members and all(
            member == members[0] for member in members
        ):
            element, length = members[0], len(members)
        else:
            raise UnsupportedElementError(
                "field %r has type %s; only list[T], tuple[T, ...] and tuple[T, T, ...] are supported" % (
                    binding.field.name, describe(annotation)
                ),
                title="unsupported element type",
                code=FaultCode.UNSUPPORTED_ELEMENT,
                input=binding.field.name,
                hint="use a single element type for the whole sequence",
                docs=getdoc(FaultCode.UNSUPPORTED_ELEMENT),
            )

        element, optional = _unwrap(element)
        if (converter := self._converter(element)) is None:
            raise UnsupportedElementError(
                "field %r is a sequence of %s, which has no converter" % (binding.field.name, describe(element)),
                title="unsupported element type",
                code=FaultCode.UNSUPPORTED_ELEMENT,
                input=binding.field.name,
                hint="register a Converter for %s or give it __totext__/__fromtext__" % describe(element),
                docs=getdoc(FaultCode.UNSUPPORTED_ELEMENT),
            )
        binding.kind, binding.converter = Kind.LIST, converter
        binding.sequence = (element, optional, length, container)

    def _allocate(self, binding):
        """
        zero value for a field currently holding None.
        """
        annotation = binding.annotation
        try:
            match binding.kind:
                case Kind.SCALAR:
                    if (zero := binding.converter.zero()) is not None:
                        return zero
                    return annotation()
                case Kind.LIST:
                    element, optional, length, container = binding.sequence
                    if length is Unset:
                        return container()
                    if optional:
                        return container([None] * length)
                    zero = binding.converter.zero()
                    return container([element() if zero is None else zero] * length)
                case _:
                    return annotation()
        except Exception as error:
            raise AllocationError(
                "cannot allocate a zero value of %s for field %r: %s" % (
                    describe(annotation), binding.field.name, error
                ),
                title="allocation failed",
                code=FaultCode.ALLOCATION_FAILED,
                input=binding.field.name,
                hint="give the field a default value or default_factory",
                docs=getdoc(FaultCode.ALLOCATION_FAILED),
            ) from error


__all__ = (
    "Kind",
    "FieldBinding",
    "Binder",
    "default_renamer",
)
