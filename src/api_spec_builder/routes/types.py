"""Type introspection for request samples and response models.

Routes carry opaque type handles: a Python class or annotation, a sample
instance, or a textual type expression such as ``[]*store.Pet``. The
builder never inspects those directly. It resolves them through
``describe`` into a TypeDescriptor, which exposes only a structural kind,
an element type (for sequences and pointers) and a raw textual name.
"""

import collections.abc
import datetime
import re
import types
import typing
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

from api_spec_builder.config import Config
from api_spec_builder.errors import InvalidTypeReference

# Raw names the document treats as primitives rather than definitions.
PRIMITIVE_NAMES = frozenset({
    "uint", "uint8", "uint16", "uint32", "uint64",
    "int", "int8", "int16", "int32", "int64",
    "float32", "float64",
    "bool", "string", "byte", "rune",
    "datetime", "timedelta", "time.Time", "time.Duration",
})

_PYTHON_PRIMITIVES = {
    bool: "bool",
    int: "int",
    float: "float64",
    str: "string",
    datetime.datetime: "datetime",
    datetime.timedelta: "timedelta",
}

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, collections.abc.Sequence, collections.abc.Set)

_ARRAY_PREFIX = re.compile(r"^\[([0-9]*)\]")


class TypeKind(str, Enum):
    PRIMITIVE = "primitive"
    ARRAY = "array"
    SLICE = "slice"
    POINTER = "pointer"
    COMPOSITE = "composite"


class TypeDescriptor(BaseModel):
    """Structural description of a type handle."""

    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    name: str = ""
    element: "TypeDescriptor | None" = None
    length: int | None = None  # fixed-size arrays only

    @model_validator(mode="after")
    def _check_shape(self) -> "TypeDescriptor":
        if self.kind in (TypeKind.ARRAY, TypeKind.SLICE, TypeKind.POINTER):
            if self.element is None:
                raise ValueError(f"{self.kind.value} descriptor requires an element type")
        elif not self.name:
            raise ValueError(f"{self.kind.value} descriptor requires a name")
        return self

    @classmethod
    def primitive(cls, name: str) -> "TypeDescriptor":
        return cls(kind=TypeKind.PRIMITIVE, name=name)

    @classmethod
    def composite(cls, name: str) -> "TypeDescriptor":
        return cls(kind=TypeKind.COMPOSITE, name=name)

    @classmethod
    def slice_of(cls, element: "TypeDescriptor") -> "TypeDescriptor":
        return cls(kind=TypeKind.SLICE, element=element)

    @classmethod
    def array_of(cls, element: "TypeDescriptor", length: int) -> "TypeDescriptor":
        return cls(kind=TypeKind.ARRAY, element=element, length=length)

    @classmethod
    def pointer_to(cls, element: "TypeDescriptor") -> "TypeDescriptor":
        return cls(kind=TypeKind.POINTER, element=element)

    @property
    def is_sequence(self) -> bool:
        return self.kind in (TypeKind.ARRAY, TypeKind.SLICE)

    @property
    def is_named(self) -> bool:
        return self.kind in (TypeKind.PRIMITIVE, TypeKind.COMPOSITE)

    @property
    def type_name(self) -> str:
        """Raw textual name, e.g. ``[]*store.Pet`` or ``int64``."""
        if self.kind == TypeKind.SLICE:
            return "[]" + self.element.type_name
        if self.kind == TypeKind.ARRAY:
            return f"[{self.length}]" + self.element.type_name
        if self.kind == TypeKind.POINTER:
            return "*" + self.element.type_name
        return self.name

    def element_type(self) -> "TypeDescriptor":
        if self.element is None:
            raise InvalidTypeReference(f"{self.type_name} has no element type", self)
        return self.element

    def dereference(self) -> "TypeDescriptor":
        descriptor = self
        while descriptor.kind == TypeKind.POINTER:
            descriptor = descriptor.element
        return descriptor

    def __str__(self) -> str:
        return self.type_name


def parse_type(expression: str) -> TypeDescriptor:
    """Parse a textual type expression such as ``[]*store.Pet`` or ``[4]int``."""
    text = expression.strip()
    if not text:
        raise InvalidTypeReference(f"empty type expression {expression!r}", expression)
    if text.startswith("*"):
        return TypeDescriptor.pointer_to(parse_type(text[1:]))
    match = _ARRAY_PREFIX.match(text)
    if match:
        element = parse_type(text[match.end():])
        if match.group(1):
            return TypeDescriptor.array_of(element, int(match.group(1)))
        return TypeDescriptor.slice_of(element)
    if text in PRIMITIVE_NAMES:
        return TypeDescriptor.primitive(text)
    return TypeDescriptor.composite(text)


def describe(handle: typing.Any) -> TypeDescriptor:
    """Resolve a type handle into a TypeDescriptor.

    Strings are always read as type expressions, never as sample values.
    Raises InvalidTypeReference for None or any handle that has no
    structural reading (empty samples, bare containers, mixed unions).
    """
    if handle is None:
        raise InvalidTypeReference("missing type handle", handle)
    if isinstance(handle, TypeDescriptor):
        return handle
    if isinstance(handle, str):
        return parse_type(handle)
    if isinstance(handle, type) or typing.get_origin(handle) is not None:
        return _describe_annotation(handle)
    return _describe_sample(handle)


def canonical_name(descriptor: TypeDescriptor, config: Config) -> str:
    """Name a descriptor for use in ``#/definitions/`` references.

    The configured model_type_name_handler wins when it returns a name;
    otherwise the raw type name is used. Unnamed (sequence) types lose a
    leading ``[]`` and have any other ``[]`` replaced by ``||``.
    """
    key = descriptor.type_name
    handler = config.model_type_name_handler
    if handler is not None:
        try:
            name = handler(descriptor)
        except Exception as e:
            raise InvalidTypeReference(f"naming policy failed for {key}: {e}", descriptor) from e
        if name:
            key = name
    if not descriptor.is_named:
        key = key.removeprefix("[]").replace("[]", "||")
    if not key:
        raise InvalidTypeReference(f"no definition name for {descriptor.type_name!r}", descriptor)
    return key


def _describe_annotation(tp: typing.Any) -> TypeDescriptor:
    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is typing.Annotated:
        return _describe_annotation(args[0])

    # Optional[X] reads as a pointer to X
    if origin is typing.Union or origin is types.UnionType:
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1 and len(args) == 2:
            return TypeDescriptor.pointer_to(_describe_annotation(non_none[0]))
        raise InvalidTypeReference(f"cannot describe union {tp!r}", tp)

    if origin is not None:
        if isinstance(origin, type) and issubclass(origin, _SEQUENCE_ORIGINS):
            return _describe_sequence(tp, origin, args)
        raise InvalidTypeReference(f"unsupported generic type {tp!r}", tp)

    if tp is type(None):
        raise InvalidTypeReference("NoneType has no schema", tp)
    if tp in _PYTHON_PRIMITIVES:
        return TypeDescriptor.primitive(_PYTHON_PRIMITIVES[tp])
    if tp in (bytes, bytearray):
        return TypeDescriptor.slice_of(TypeDescriptor.primitive("byte"))
    if tp in (list, tuple, set, frozenset, dict):
        raise InvalidTypeReference(f"container {tp.__name__} has no element type", tp)
    if isinstance(tp, type):
        return TypeDescriptor.composite(_qualified_name(tp))
    raise InvalidTypeReference(f"unsupported type handle {tp!r}", tp)


def _describe_sequence(tp, origin, args) -> TypeDescriptor:
    if not args:
        raise InvalidTypeReference(f"{tp!r} has no element type", tp)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return TypeDescriptor.slice_of(_describe_annotation(args[0]))
        if len(set(args)) == 1:
            return TypeDescriptor.array_of(_describe_annotation(args[0]), len(args))
        raise InvalidTypeReference(f"heterogeneous tuple {tp!r} has no single element type", tp)
    return TypeDescriptor.slice_of(_describe_annotation(args[0]))


def _describe_sample(sample: typing.Any) -> TypeDescriptor:
    if isinstance(sample, (list, tuple)):
        if not sample:
            raise InvalidTypeReference("cannot infer the element type of an empty sample", sample)
        return TypeDescriptor.slice_of(_describe_sample(sample[0]))
    return _describe_annotation(type(sample))


def _qualified_name(cls: type) -> str:
    module = cls.__module__.rpartition(".")[2]
    return f"{module}.{cls.__qualname__}"
