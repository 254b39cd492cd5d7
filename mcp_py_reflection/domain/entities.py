"""Domain entities: read-only descriptors of runtime class members."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .enums import MemberKind, Visibility
from .type_rules import simple_type_name


@dataclass(frozen=True)
class ParameterDescriptor:
    name: str
    annotation: Any = Any
    kind: str = "POSITIONAL_OR_KEYWORD"
    has_default: bool = False

    @property
    def type_name(self) -> str:
        return simple_type_name(self.annotation)


@dataclass(frozen=True)
class FieldDescriptor:
    owner: type
    name: str
    field_type: Any = Any
    visibility: Visibility = Visibility.PUBLIC
    kind: MemberKind = MemberKind.FIELD
    target: Any = field(default=None, compare=False, repr=False)

    @property
    def attribute_name(self) -> str:
        """Name under which the attribute is stored (mangled for private names)."""
        return mangle(self.owner, self.name)

    @property
    def type_name(self) -> str:
        return simple_type_name(self.field_type)

    @property
    def is_public(self) -> bool:
        return self.visibility is Visibility.PUBLIC


@dataclass(frozen=True)
class MethodDescriptor:
    owner: type
    name: str
    parameters: tuple[ParameterDescriptor, ...] = ()
    return_type: Any = Any
    visibility: Visibility = Visibility.PUBLIC
    kind: MemberKind = MemberKind.METHOD
    is_async: bool = False
    has_signature: bool = True
    target: Any = field(default=None, compare=False, repr=False)

    @property
    def attribute_name(self) -> str:
        return mangle(self.owner, self.name)

    @property
    def parameter_types(self) -> tuple[Any, ...]:
        return tuple(p.annotation for p in self.parameters)

    @property
    def parameter_type_names(self) -> tuple[str, ...]:
        return tuple(p.type_name for p in self.parameters)

    @property
    def parameter_count(self) -> int:
        return len(self.parameters)

    @property
    def return_type_name(self) -> str:
        return simple_type_name(self.return_type)

    @property
    def is_public(self) -> bool:
        return self.visibility is Visibility.PUBLIC


@dataclass(frozen=True)
class ConstructorDescriptor:
    owner: type
    parameters: tuple[ParameterDescriptor, ...] = ()
    visibility: Visibility = Visibility.PUBLIC
    has_signature: bool = True
    target: Any = field(default=None, compare=False, repr=False)

    @property
    def name(self) -> str:
        return self.owner.__name__

    @property
    def kind(self) -> MemberKind:
        return MemberKind.CONSTRUCTOR

    @property
    def parameter_types(self) -> tuple[Any, ...]:
        return tuple(p.annotation for p in self.parameters)

    @property
    def parameter_count(self) -> int:
        return len(self.parameters)


@dataclass(frozen=True)
class TypeDescriptor:
    target: type
    fields: list[FieldDescriptor] = field(default_factory=list)
    methods: list[MethodDescriptor] = field(default_factory=list)
    constructor: ConstructorDescriptor | None = None

    @property
    def name(self) -> str:
        return self.target.__name__

    @property
    def qualified_name(self) -> str:
        return f"{self.target.__module__}.{self.target.__qualname__}"

    @property
    def bases(self) -> list[str]:
        return [f"{b.__module__}.{b.__qualname__}" for b in self.target.__bases__ if b is not object]

    @property
    def description(self) -> str:
        doc = self.target.__doc__ or ""
        return doc.strip().split("\n\n", 1)[0]

    def has_fields(self) -> bool:
        return len(self.fields) > 0

    def has_methods(self) -> bool:
        return len(self.methods) > 0


MemberDescriptor = Union[FieldDescriptor, MethodDescriptor, ConstructorDescriptor]


def mangle(owner: type, name: str) -> str:
    """Apply Python's private name mangling for ``owner``."""
    if Visibility.of(name) is not Visibility.PRIVATE:
        return name
    stripped = owner.__name__.lstrip("_")
    if not stripped:
        return name
    return f"_{stripped}{name}"


def demangle(owner: type, attribute_name: str) -> str:
    """Inverse of :func:`mangle`: ``_Cls__x`` -> ``__x``."""
    stripped = owner.__name__.lstrip("_")
    prefix = f"_{stripped}__"
    if stripped and attribute_name.startswith(prefix) and len(attribute_name) > len(prefix):
        candidate = attribute_name[len(prefix) - 2:]
        if Visibility.of(candidate) is Visibility.PRIVATE:
            return candidate
    return attribute_name
