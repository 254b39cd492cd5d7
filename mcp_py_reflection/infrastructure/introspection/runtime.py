"""Introspector over live classes of the running interpreter."""

from __future__ import annotations

import functools
import inspect
import logging
import pkgutil
import sys
import types
from typing import Any, Iterator

from mcp_py_reflection.domain.entities import (
    ConstructorDescriptor,
    FieldDescriptor,
    MethodDescriptor,
    ParameterDescriptor,
    demangle,
)
from mcp_py_reflection.domain.enums import MemberKind, Visibility
from mcp_py_reflection.domain.exceptions import (
    MemberNotFoundException,
    TypeNotFoundException,
)
from mcp_py_reflection.domain.type_rules import normalize_annotation

logger = logging.getLogger(__name__)

_CONSTRUCTOR_NAMES = frozenset({"__init__", "__new__"})
# interpreter-generated entries of a class namespace
_GENERATED_NAMES = frozenset({"__annotate__", "__annotate_func__"})
_PROPERTY_TYPES = (property, functools.cached_property)
_RECEIVER_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)
_MISSING = object()


class RuntimeIntrospector:
    """Resolves classes with ``pkgutil.resolve_name`` and describes their
    members with ``inspect``.

    Public lookups walk the MRO (``object`` excluded) so inherited public
    members are visible, with the most derived definition winning. Declared
    lookups only look at the class's own namespace and annotations, and
    include protected (``_x``) and private (``__x``) names.
    """

    def find_type(self, path: str) -> type:
        if not isinstance(path, str) or not path.strip():
            raise TypeNotFoundException("Type path cannot be empty")
        try:
            resolved = pkgutil.resolve_name(path.strip())
        except (ImportError, AttributeError, ValueError) as e:
            raise TypeNotFoundException(f"Type '{path}' not found: {e}") from e
        if not inspect.isclass(resolved):
            raise TypeNotFoundException(f"'{path}' is not a class")
        return resolved

    # Fields

    def get_field(self, cls: type, name: str) -> FieldDescriptor:
        return _find_named(self.get_fields(cls), name, cls, "Field")

    def get_declared_field(self, cls: type, name: str) -> FieldDescriptor:
        return _find_named(self.get_declared_fields(cls), name, cls, "Field")

    def get_fields(self, cls: type) -> list[FieldDescriptor]:
        return [
            d for d in self._inherited(cls, self._declared_fields) if d.is_public
        ]

    def get_declared_fields(self, cls: type) -> list[FieldDescriptor]:
        return list(self._declared_fields(cls).values())

    # Methods

    def get_method(
        self, cls: type, name: str, parameter_types: tuple[Any, ...] = ()
    ) -> MethodDescriptor:
        candidates = [d for d in self.get_methods(cls) if _matches(d, parameter_types)]
        return _find_named(candidates, name, cls, "Method")

    def get_declared_method(
        self, cls: type, name: str, parameter_types: tuple[Any, ...] = ()
    ) -> MethodDescriptor:
        candidates = [
            d for d in self.get_declared_methods(cls) if _matches(d, parameter_types)
        ]
        return _find_named(candidates, name, cls, "Method")

    def get_methods(self, cls: type) -> list[MethodDescriptor]:
        return [
            d for d in self._inherited(cls, self._declared_methods) if d.is_public
        ]

    def get_declared_methods(self, cls: type) -> list[MethodDescriptor]:
        return list(self._declared_methods(cls).values())

    # Constructors

    def get_constructor(
        self, cls: type, parameter_types: tuple[Any, ...] = ()
    ) -> ConstructorDescriptor:
        constructor = self.constructor_of(cls)
        if constructor.visibility is not Visibility.PUBLIC:
            raise MemberNotFoundException(
                f"Constructor of '{cls.__qualname__}' is not public"
            )
        return _require_signature(constructor, parameter_types)

    def get_declared_constructor(
        self, cls: type, parameter_types: tuple[Any, ...] = ()
    ) -> ConstructorDescriptor:
        return _require_signature(self.constructor_of(cls), parameter_types)

    # Internals

    def _inherited(self, cls: type, declared_fn) -> list:
        """Merge per-class member maps along the MRO; derived names shadow base names."""
        merged: dict[str, Any] = {}
        shadowed: set[str] = set()
        for klass in _hierarchy(cls):
            for attr, descriptor in declared_fn(klass).items():
                if attr not in shadowed:
                    merged[attr] = descriptor
            shadowed.update(vars(klass))
            shadowed.update(_raw_annotations(klass))
        return list(merged.values())

    def _declared_fields(self, klass: type) -> dict[str, FieldDescriptor]:
        annotations = _class_annotations(klass)
        namespace = vars(klass)
        names = list(annotations) + [n for n in namespace if n not in annotations]

        result: dict[str, FieldDescriptor] = {}
        for attr in names:
            if _is_dunder(attr):
                continue
            value = namespace.get(attr, _MISSING)
            kind = MemberKind.FIELD if value is _MISSING else _classify(value)
            if kind not in (MemberKind.FIELD, MemberKind.PROPERTY):
                continue

            if attr in annotations:
                field_type = annotations[attr]
            elif kind is MemberKind.PROPERTY:
                field_type = self._property_type(klass, value)
            elif isinstance(value, (types.MemberDescriptorType, types.GetSetDescriptorType)):
                field_type = Any
            else:
                field_type = type(value)

            name = demangle(klass, attr)
            result[attr] = FieldDescriptor(
                owner=klass,
                name=name,
                field_type=normalize_annotation(field_type),
                visibility=Visibility.of(name),
                kind=kind,
                target=None if value is _MISSING else value,
            )
        return result

    def _declared_methods(self, klass: type) -> dict[str, MethodDescriptor]:
        result: dict[str, MethodDescriptor] = {}
        for attr, value in vars(klass).items():
            if attr in _CONSTRUCTOR_NAMES or attr in _GENERATED_NAMES:
                continue
            kind = _classify(value)
            if kind not in (MemberKind.METHOD, MemberKind.STATIC_METHOD, MemberKind.CLASS_METHOD):
                continue

            func = value.__func__ if isinstance(value, (staticmethod, classmethod)) else value
            parameters, return_type, has_signature = _describe_callable(
                func, klass, drop_receiver=kind is not MemberKind.STATIC_METHOD
            )
            name = demangle(klass, attr)
            result[attr] = MethodDescriptor(
                owner=klass,
                name=name,
                parameters=parameters,
                return_type=return_type,
                visibility=Visibility.of(name),
                kind=kind,
                is_async=inspect.iscoroutinefunction(func),
                has_signature=has_signature,
                target=value,
            )
        return result

    def constructor_of(self, cls: type) -> ConstructorDescriptor:
        """Effective constructor of ``cls``, whatever its visibility."""
        # inspect.signature(cls) already omits the receiver; annotations are
        # evaluated where __init__/__new__ is defined, which may be a base
        # class in another module
        definer, func = _constructor_definition(cls)
        parameters, _, has_signature = _describe_callable(
            cls,
            definer,
            drop_receiver=False,
            globalns=getattr(func, "__globals__", None),
        )
        return ConstructorDescriptor(
            owner=cls,
            parameters=parameters,
            visibility=Visibility.of(cls.__name__),
            has_signature=has_signature,
            target=cls,
        )

    def _property_type(self, klass: type, value: Any) -> Any:
        getter = value.fget if isinstance(value, property) else value.func
        if getter is None:
            return Any
        _, return_type, _ = _describe_callable(getter, klass, drop_receiver=True)
        return return_type


def _hierarchy(cls: type) -> Iterator[type]:
    for klass in inspect.getmro(cls):
        if klass is not object:
            yield klass


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _classify(value: Any) -> MemberKind | None:
    """Kind of a class namespace entry; None for nested classes."""
    if isinstance(value, _PROPERTY_TYPES):
        return MemberKind.PROPERTY
    if isinstance(value, staticmethod):
        return MemberKind.STATIC_METHOD
    if isinstance(value, (classmethod, types.ClassMethodDescriptorType)):
        return MemberKind.CLASS_METHOD
    if inspect.isclass(value):
        return None
    if inspect.isroutine(value):
        return MemberKind.METHOD
    return MemberKind.FIELD


def _find_named(descriptors, name: str, cls: type, label: str):
    for descriptor in descriptors:
        if descriptor.name == name or descriptor.attribute_name == name:
            return descriptor
    raise MemberNotFoundException(f"{label} '{name}' not found in '{cls.__qualname__}'")


def _matches(descriptor, parameter_types: tuple[Any, ...]) -> bool:
    if not descriptor.has_signature:
        return False
    expected = tuple(normalize_annotation(t) for t in parameter_types)
    return descriptor.parameter_types == expected


def _require_signature(
    constructor: ConstructorDescriptor, parameter_types: tuple[Any, ...]
) -> ConstructorDescriptor:
    if not _matches(constructor, parameter_types):
        raise MemberNotFoundException(
            f"No constructor of '{constructor.owner.__qualname__}' takes {parameter_types!r}"
        )
    return constructor


def _constructor_definition(cls: type) -> tuple[type, Any]:
    """Class and function that define the constructor ``inspect.signature(cls)`` reports.

    Mirrors inspect's choice: the first class in the MRO defining ``__new__``
    or ``__init__`` wins, ``__new__`` first within one class.
    """
    for klass in _hierarchy(cls):
        namespace = vars(klass)
        for name in ("__new__", "__init__"):
            if name in namespace:
                value = namespace[name]
                return klass, getattr(value, "__func__", value)
    return cls, None


def _describe_callable(
    func: Any, owner: type, drop_receiver: bool, globalns: dict | None = None
) -> tuple[tuple[ParameterDescriptor, ...], Any, bool]:
    """Parameters, return type and whether a signature was available.

    String annotations are evaluated in ``globalns`` (default: the
    function's own globals, then the module of ``owner``) with the
    namespace of ``owner`` as locals.
    """
    try:
        sig = _signature(func)
    except (ValueError, TypeError) as e:
        logger.debug("No signature for %r: %s", func, e)
        return (), Any, False

    params = list(sig.parameters.values())
    if drop_receiver and params and params[0].kind in _RECEIVER_KINDS:
        params = params[1:]

    if globalns is None:
        globalns = getattr(func, "__globals__", None)
    if globalns is None:
        globalns = _module_namespace(owner)
    localns = dict(vars(owner))

    parameters = tuple(
        ParameterDescriptor(
            name=p.name,
            annotation=_resolve_annotation(p.annotation, globalns, localns),
            kind=p.kind.name,
            has_default=p.default is not inspect.Parameter.empty,
        )
        for p in params
    )
    return_type = _resolve_annotation(sig.return_annotation, globalns, localns)
    return parameters, return_type, True


def _signature(func: Any) -> inspect.Signature:
    try:
        return inspect.signature(func)
    except NameError:
        # lazily evaluated annotations that reference undefined names
        import annotationlib

        return inspect.signature(func, annotation_format=annotationlib.Format.STRING)


def _raw_annotations(klass: type) -> dict[str, Any]:
    try:
        return inspect.get_annotations(klass)
    except NameError:
        import annotationlib

        return inspect.get_annotations(klass, format=annotationlib.Format.STRING)


def _class_annotations(klass: type) -> dict[str, Any]:
    globalns = _module_namespace(klass)
    localns = dict(vars(klass))
    return {
        name: _resolve_annotation(value, globalns, localns)
        for name, value in _raw_annotations(klass).items()
    }


def _module_namespace(klass: type) -> dict[str, Any]:
    module = sys.modules.get(getattr(klass, "__module__", ""), None)
    return dict(vars(module)) if module is not None else {}


def _resolve_annotation(annotation: Any, globalns: dict, localns: dict) -> Any:
    if annotation is inspect.Parameter.empty:
        return Any
    if isinstance(annotation, str):
        try:
            annotation = eval(annotation, globalns, localns)
        except Exception as e:
            # keep the source text of annotations that do not evaluate
            logger.debug("Cannot evaluate annotation %r: %s", annotation, e)
    return normalize_annotation(annotation)
