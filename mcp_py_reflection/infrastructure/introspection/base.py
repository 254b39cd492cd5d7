"""Introspection capability consumed by the reflection helpers."""

from __future__ import annotations

from typing import Any, Protocol

from mcp_py_reflection.domain.entities import (
    ConstructorDescriptor,
    FieldDescriptor,
    MethodDescriptor,
)


class Introspector(Protocol):
    """Resolves types and members, raising on absence.

    ``get_*`` lookups see public members including inherited ones;
    ``get_declared_*`` lookups see every member declared by the class
    itself. Single lookups raise ``TypeNotFoundException`` or
    ``MemberNotFoundException`` when nothing matches.

    ``constructor_of`` never raises: it describes the effective constructor
    of any class, whatever its visibility, with ``has_signature`` False when
    the signature cannot be inspected.
    """

    def find_type(self, path: str) -> type: ...

    def get_field(self, cls: type, name: str) -> FieldDescriptor: ...
    def get_declared_field(self, cls: type, name: str) -> FieldDescriptor: ...

    def get_method(
        self, cls: type, name: str, parameter_types: tuple[Any, ...]
    ) -> MethodDescriptor: ...
    def get_declared_method(
        self, cls: type, name: str, parameter_types: tuple[Any, ...]
    ) -> MethodDescriptor: ...

    def get_constructor(
        self, cls: type, parameter_types: tuple[Any, ...]
    ) -> ConstructorDescriptor: ...
    def get_declared_constructor(
        self, cls: type, parameter_types: tuple[Any, ...]
    ) -> ConstructorDescriptor: ...

    def get_fields(self, cls: type) -> list[FieldDescriptor]: ...
    def get_declared_fields(self, cls: type) -> list[FieldDescriptor]: ...

    def get_methods(self, cls: type) -> list[MethodDescriptor]: ...
    def get_declared_methods(self, cls: type) -> list[MethodDescriptor]: ...

    def constructor_of(self, cls: type) -> ConstructorDescriptor: ...
