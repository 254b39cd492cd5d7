"""Domain service: ReflectionService."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, TypeVar

from .entities import (
    ConstructorDescriptor,
    FieldDescriptor,
    MemberDescriptor,
    MethodDescriptor,
    TypeDescriptor,
)
from .enums import Visibility
from .exceptions import (
    InvalidLookupException,
    MemberNotFoundException,
    TypeNotFoundException,
)
from .value_objects import QualifiedName

if TYPE_CHECKING:
    from mcp_py_reflection.infrastructure.introspection.base import Introspector
    from mcp_py_reflection.reflection import ReflectionHelper

logger = logging.getLogger(__name__)

D = TypeVar("D", FieldDescriptor, MethodDescriptor)


class ReflectionService:
    """Lookups for tool callers: absence becomes a domain exception."""

    def __init__(self, helper: ReflectionHelper, introspector: Introspector) -> None:
        self._helper = helper
        self._introspector = introspector

    def get_type(self, path: str) -> type:
        _require(path, "Type path")
        name = QualifiedName.parse(path)
        if name is None:
            raise InvalidLookupException(f"Malformed type path: '{path}'")
        cls = self._helper.resolve_type(str(name))
        if cls is None:
            raise TypeNotFoundException(f"Type '{path}' not found")
        return cls

    def describe_type(self, path: str, ignore_access: bool = False) -> TypeDescriptor:
        cls = self.get_type(path)
        constructor = self._introspector.constructor_of(cls)
        if not ignore_access and constructor.visibility is not Visibility.PUBLIC:
            constructor = None
        return TypeDescriptor(
            target=cls,
            fields=_sorted(self._helper.list_fields(cls, ignore_access)),
            methods=_sorted(self._helper.list_methods(cls, ignore_access)),
            constructor=constructor,
        )

    def find_member(
        self, path: str, member_name: str, ignore_access: bool = False
    ) -> MemberDescriptor:
        _require(member_name, "Member name")
        cls = self.get_type(path)
        name = member_name.strip()

        field = self._helper.resolve_field(cls, name, ignore_access)
        if field is not None:
            return field

        methods = _sorted(
            self._helper.list_methods(
                cls, ignore_access, lambda m: name in (m.name, m.attribute_name)
            )
        )
        if methods:
            return methods[0]

        raise MemberNotFoundException(
            f"Member '{member_name}' not found in type '{path}'"
        )

    def find_members(self, path: str, ignore_access: bool = False) -> list[MemberDescriptor]:
        cls = self.get_type(path)
        members: list[MemberDescriptor] = []
        members.extend(_sorted(self._helper.list_fields(cls, ignore_access)))
        members.extend(_sorted(self._helper.list_methods(cls, ignore_access)))
        return members

    def find_constructor(self, path: str, ignore_access: bool = False) -> ConstructorDescriptor:
        cls = self.get_type(path)
        constructor = self._introspector.constructor_of(cls)
        if not ignore_access and constructor.visibility is not Visibility.PUBLIC:
            raise MemberNotFoundException(
                f"No accessible constructor for type '{path}'"
            )
        return constructor

    def find_fields_by_type_name(
        self, path: str, type_name: str, ignore_access: bool = False
    ) -> list[FieldDescriptor]:
        _require(type_name, "Type name")
        cls = self.get_type(path)
        return _sorted(
            self._helper.list_fields_of_type_name(cls, type_name.strip(), ignore_access)
        )

    def find_methods_by_signature(
        self,
        path: str,
        method_name: str,
        parameter_type_names: list[str],
        ignore_access: bool = False,
    ) -> list[MethodDescriptor]:
        _require(method_name, "Method name")
        cls = self.get_type(path)
        names = [n.strip() for n in parameter_type_names]
        return _sorted(
            self._helper.list_methods_with_parameter_names(
                cls, ignore_access, method_name.strip(), *names
            )
        )


def _require(value: str | None, label: str) -> None:
    if not value or not value.strip():
        raise InvalidLookupException(f"{label} cannot be empty")


def _sorted(members: Iterable[D]) -> list[D]:
    return sorted(members, key=lambda m: (m.name, m.owner.__qualname__))
