"""Tests for declared-type naming and assignability."""

import typing
from collections.abc import Sequence
from pathlib import Path, PurePath
from typing import Annotated, Any, ClassVar, Optional, Union

from mcp_py_reflection.domain.type_rules import (
    erase,
    is_assignable,
    normalize_annotation,
    simple_type_name,
)


class TestSimpleTypeName:
    def test_plain_classes(self):
        assert simple_type_name(int) == "int"
        assert simple_type_name(Path) == "Path"

    def test_generic_aliases_use_origin(self):
        assert simple_type_name(list[int]) == "list"
        assert simple_type_name(typing.List[int]) == "list"
        assert simple_type_name(dict[str, int]) == "dict"

    def test_special_forms(self):
        assert simple_type_name(Any) == "Any"
        assert simple_type_name(None) == "None"
        assert simple_type_name(type(None)) == "None"
        assert simple_type_name(Optional[int]) == "Union"
        assert simple_type_name(int | str) == "Union"

    def test_wrappers_are_stripped(self):
        assert simple_type_name(Annotated[int, "meta"]) == "int"
        assert simple_type_name(ClassVar[str]) == "str"

    def test_unresolved_strings(self):
        assert simple_type_name("Widget") == "Widget"
        assert simple_type_name("pkg.mod.Thing[int]") == "Thing"


class TestNormalize:
    def test_bare_classvar(self):
        assert normalize_annotation(ClassVar) is Any

    def test_forward_ref(self):
        assert normalize_annotation(typing.ForwardRef("Later")) == "Later"

    def test_unhashable_metadata_dropped(self):
        assert normalize_annotation(Annotated[int, {"a": 1}]) is int


class TestErase:
    def test_class(self):
        assert erase(int) is int

    def test_generic(self):
        assert erase(list[int]) is list

    def test_union_has_no_runtime_class(self):
        assert erase(Union[int, str]) is None

    def test_string_has_no_runtime_class(self):
        assert erase("Widget") is None


class TestIsAssignable:
    def test_same_type(self):
        assert is_assignable(int, int)

    def test_subclass(self):
        assert is_assignable(int, bool)
        assert is_assignable(PurePath, Path)

    def test_superclass_is_not_assignable(self):
        assert not is_assignable(bool, int)
        assert not is_assignable(Path, PurePath)

    def test_object_and_any_accept_everything(self):
        assert is_assignable(object, str)
        assert is_assignable(Any, list[int])
        assert is_assignable(object, Any)

    def test_unknown_declared_type(self):
        assert not is_assignable(int, Any)
        assert not is_assignable(int, "SomethingElse")

    def test_generic_declared_type(self):
        assert is_assignable(Sequence, list[int])
        assert is_assignable(list, list[int])

    def test_union_target(self):
        assert is_assignable(int | str, bool)
        assert not is_assignable(int | str, bytes)

    def test_union_declared(self):
        assert not is_assignable(int, Optional[int])
        assert is_assignable(int, Union[int, bool])
