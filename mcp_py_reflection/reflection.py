"""Absence-safe reflection helpers.

Every lookup returns ``None`` (or an empty set) instead of raising when a
type or member does not exist. Lookups that take ``ignore_access`` try the
public view first and, only when asked, fall back to the members declared
by the class itself regardless of visibility::

    >>> from mcp_py_reflection import reflection
    >>> reflection.resolve_type("collections.OrderedDict")
    <class 'collections.OrderedDict'>
    >>> reflection.resolve_type("no.such.Type") is None
    True

The module-level functions are bound to a shared :class:`ReflectionHelper`
that uses :class:`RuntimeIntrospector`.
"""

from __future__ import annotations

import logging
import types
from typing import Any, Callable, TypeVar

from mcp_py_reflection.domain.entities import (
    ConstructorDescriptor,
    FieldDescriptor,
    MethodDescriptor,
)
from mcp_py_reflection.domain.exceptions import (
    MemberNotFoundException,
    TypeNotFoundException,
)
from mcp_py_reflection.domain.type_rules import is_assignable, simple_type_name
from mcp_py_reflection.domain.value_objects import QualifiedName
from mcp_py_reflection.infrastructure.introspection.base import Introspector
from mcp_py_reflection.infrastructure.introspection.runtime import RuntimeIntrospector

logger = logging.getLogger(__name__)

T = TypeVar("T")

FieldPredicate = Callable[[FieldDescriptor], bool]
MethodPredicate = Callable[[MethodDescriptor], bool]


class ReflectionHelper:
    def __init__(self, introspector: Introspector | None = None) -> None:
        self._introspector = introspector or RuntimeIntrospector()

    # Types

    def resolve_type(self, path: str) -> type | None:
        try:
            return self._introspector.find_type(path)
        except TypeNotFoundException as e:
            logger.debug("%s", e)
            return None

    def resolve_inner_type(self, cls: type, simple_name: str) -> type | None:
        return self.resolve_type(str(QualifiedName.of(cls).child(simple_name)))

    def resolve_type_in_namespace(
        self, namespace: types.ModuleType | str, simple_name: str
    ) -> type | None:
        prefix = namespace.__name__ if isinstance(namespace, types.ModuleType) else namespace
        return self.resolve_type(f"{prefix}.{simple_name}")

    # Single members

    def resolve_method(
        self, cls: type, name: str, ignore_access: bool, *parameter_types: Any
    ) -> MethodDescriptor | None:
        return self._escalate(
            lambda: self._introspector.get_method(cls, name, parameter_types),
            lambda: self._introspector.get_declared_method(cls, name, parameter_types),
            ignore_access,
        )

    def resolve_public_method(
        self, cls: type, name: str, *parameter_types: Any
    ) -> MethodDescriptor | None:
        return self.resolve_method(cls, name, False, *parameter_types)

    def resolve_constructor(
        self, cls: type, ignore_access: bool, *parameter_types: Any
    ) -> ConstructorDescriptor | None:
        return self._escalate(
            lambda: self._introspector.get_constructor(cls, parameter_types),
            lambda: self._introspector.get_declared_constructor(cls, parameter_types),
            ignore_access,
        )

    def resolve_public_constructor(
        self, cls: type, *parameter_types: Any
    ) -> ConstructorDescriptor | None:
        return self.resolve_constructor(cls, False, *parameter_types)

    def resolve_field(
        self, cls: type, name: str, ignore_access: bool
    ) -> FieldDescriptor | None:
        return self._escalate(
            lambda: self._introspector.get_field(cls, name),
            lambda: self._introspector.get_declared_field(cls, name),
            ignore_access,
        )

    def resolve_public_field(self, cls: type, name: str) -> FieldDescriptor | None:
        return self.resolve_field(cls, name, False)

    # Fields

    def list_fields(
        self,
        cls: type,
        ignore_access: bool,
        predicate: FieldPredicate | None = None,
    ) -> set[FieldDescriptor]:
        fields = set(self._introspector.get_fields(cls))
        if ignore_access:
            fields.update(self._introspector.get_declared_fields(cls))
        if predicate is None:
            return fields
        return {f for f in fields if predicate(f)}

    def list_public_fields(
        self, cls: type, predicate: FieldPredicate | None = None
    ) -> set[FieldDescriptor]:
        return self.list_fields(cls, False, predicate)

    def list_fields_of_type(
        self, cls: type, target_type: Any, ignore_access: bool
    ) -> set[FieldDescriptor]:
        return self.list_fields(
            cls, ignore_access, lambda f: is_assignable(target_type, f.field_type)
        )

    def list_public_fields_of_type(self, cls: type, target_type: Any) -> set[FieldDescriptor]:
        return self.list_fields_of_type(cls, target_type, False)

    def list_fields_of_type_name(
        self, cls: type, type_name: str, ignore_access: bool
    ) -> set[FieldDescriptor]:
        return self.list_fields(
            cls, ignore_access, lambda f: simple_type_name(f.field_type) == type_name
        )

    # Methods

    def list_methods(
        self,
        cls: type,
        ignore_access: bool,
        predicate: MethodPredicate | None = None,
    ) -> set[MethodDescriptor]:
        methods = set(self._introspector.get_methods(cls))
        if ignore_access:
            methods.update(self._introspector.get_declared_methods(cls))
        if predicate is None:
            return methods
        return {m for m in methods if predicate(m)}

    def list_public_methods(
        self, cls: type, predicate: MethodPredicate | None = None
    ) -> set[MethodDescriptor]:
        return self.list_methods(cls, False, predicate)

    def list_methods_of_type(
        self, cls: type, return_type: Any, ignore_access: bool
    ) -> set[MethodDescriptor]:
        return self.list_methods(
            cls, ignore_access, lambda m: is_assignable(return_type, m.return_type)
        )

    def list_public_methods_of_type(self, cls: type, return_type: Any) -> set[MethodDescriptor]:
        return self.list_methods_of_type(cls, return_type, False)

    def list_methods_with_parameter_names(
        self,
        cls: type,
        ignore_access: bool,
        method_name: str,
        *type_names: str,
        predicate: MethodPredicate | None = None,
    ) -> set[MethodDescriptor]:
        """Methods called ``method_name`` whose parameters' simple type names
        equal ``type_names`` position by position.

        Names are compared as text, so ``bool`` does not match ``int``.
        ``predicate`` is applied before the name and signature checks.
        """

        def accept(method: MethodDescriptor) -> bool:
            if predicate is not None and not predicate(method):
                return False
            if method.name != method_name:
                return False
            if not method.has_signature or method.parameter_count != len(type_names):
                return False
            return method.parameter_type_names == tuple(type_names)

        return self.list_methods(cls, ignore_access, accept)

    def _escalate(
        self,
        public_lookup: Callable[[], T],
        declared_lookup: Callable[[], T],
        ignore_access: bool,
    ) -> T | None:
        try:
            return public_lookup()
        except MemberNotFoundException as e:
            if not ignore_access:
                logger.debug("%s", e)
                return None
            logger.debug("%s; retrying among declared members", e)
        try:
            return declared_lookup()
        except MemberNotFoundException as e:
            logger.debug("%s", e)
            return None


_default = ReflectionHelper()

resolve_type = _default.resolve_type
resolve_inner_type = _default.resolve_inner_type
resolve_type_in_namespace = _default.resolve_type_in_namespace
resolve_method = _default.resolve_method
resolve_public_method = _default.resolve_public_method
resolve_constructor = _default.resolve_constructor
resolve_public_constructor = _default.resolve_public_constructor
resolve_field = _default.resolve_field
resolve_public_field = _default.resolve_public_field
list_fields = _default.list_fields
list_public_fields = _default.list_public_fields
list_fields_of_type = _default.list_fields_of_type
list_public_fields_of_type = _default.list_public_fields_of_type
list_fields_of_type_name = _default.list_fields_of_type_name
list_methods = _default.list_methods
list_public_methods = _default.list_public_methods
list_methods_of_type = _default.list_methods_of_type
list_public_methods_of_type = _default.list_public_methods_of_type
list_methods_with_parameter_names = _default.list_methods_with_parameter_names
