"""Naming and assignability rules for declared types (annotations)."""

from __future__ import annotations

import types
import typing
from typing import Any, Annotated, ClassVar, Final, ForwardRef, Union

_WRAPPER_ORIGINS = (Annotated, ClassVar, Final)
_UNION_ORIGINS: tuple[Any, ...] = (Union, types.UnionType)


def normalize_annotation(annotation: Any) -> Any:
    """Strip ``Annotated``/``ClassVar``/``Final`` wrappers and forward refs.

    The result is always hashable: anything that still refuses to hash is
    replaced by its ``repr``.
    """
    while typing.get_origin(annotation) in _WRAPPER_ORIGINS:
        args = typing.get_args(annotation)
        if not args:
            # bare ClassVar / Final
            return Any
        annotation = args[0]
    if annotation is ClassVar or annotation is Final:
        return Any
    if isinstance(annotation, ForwardRef):
        annotation = annotation.__forward_arg__
    try:
        hash(annotation)
    except TypeError:
        return repr(annotation)
    return annotation


def is_union(annotation: Any) -> bool:
    return typing.get_origin(annotation) in _UNION_ORIGINS


def simple_type_name(annotation: Any) -> str:
    """Short name of a declared type, e.g. ``list`` for ``list[int]``."""
    annotation = normalize_annotation(annotation)
    if annotation is Any:
        return "Any"
    if annotation is None or annotation is type(None):
        return "None"
    if isinstance(annotation, str):
        # unresolved forward reference: "pkg.mod.Name[int]" -> "Name"
        return annotation.split("[", 1)[0].rsplit(".", 1)[-1].strip()
    if is_union(annotation):
        return "Union"

    origin = typing.get_origin(annotation)
    if origin is not None:
        name = getattr(origin, "__name__", None) or getattr(origin, "_name", None)
        if name:
            return name

    name = getattr(annotation, "__name__", None) or getattr(annotation, "_name", None)
    return name or repr(annotation)


def erase(annotation: Any) -> type | None:
    """Runtime class behind a declared type, or None if it has none."""
    annotation = normalize_annotation(annotation)
    if annotation is None:
        return type(None)
    if isinstance(annotation, type):
        return annotation
    origin = typing.get_origin(annotation)
    if isinstance(origin, type) and not is_union(annotation):
        return origin
    return None


def is_assignable(target: Any, declared: Any) -> bool:
    """True if a value of type ``declared`` may be used where ``target`` is expected."""
    target = normalize_annotation(target)
    declared = normalize_annotation(declared)

    if target is Any or target is object:
        return True
    if declared == target:
        return True
    if is_union(target):
        return any(is_assignable(member, declared) for member in typing.get_args(target))
    if is_union(declared):
        return all(is_assignable(target, member) for member in typing.get_args(declared))

    target_cls = erase(target)
    declared_cls = erase(declared)
    if target_cls is None or declared_cls is None:
        return False
    try:
        return issubclass(declared_cls, target_cls)
    except TypeError:
        return False
