"""Tests for domain entities, enums and value objects."""

import dataclasses

import pytest

from mcp_py_reflection.domain.entities import (
    ConstructorDescriptor,
    FieldDescriptor,
    MethodDescriptor,
    ParameterDescriptor,
    TypeDescriptor,
    demangle,
    mangle,
)
from mcp_py_reflection.domain.enums import MemberKind, Visibility
from mcp_py_reflection.domain.value_objects import QualifiedName

from sample_types import Widget, _Internal


class TestDescriptors:
    def test_field_descriptor_frozen(self):
        f = FieldDescriptor(owner=Widget, name="count", field_type=int)
        with pytest.raises(dataclasses.FrozenInstanceError):
            f.name = "other"

    def test_target_ignored_by_equality(self):
        a = FieldDescriptor(owner=Widget, name="count", field_type=int, target=1)
        b = FieldDescriptor(owner=Widget, name="count", field_type=int, target=2)
        assert a == b
        assert len({a, b}) == 1

    def test_owner_part_of_identity(self):
        a = FieldDescriptor(owner=Widget, name="count", field_type=int)
        b = FieldDescriptor(owner=_Internal, name="count", field_type=int)
        assert a != b

    def test_private_field_attribute_name(self):
        f = FieldDescriptor(owner=Widget, name="__secret", visibility=Visibility.PRIVATE)
        assert f.attribute_name == "_Widget__secret"
        assert f.is_public is False

    def test_method_parameter_views(self):
        m = MethodDescriptor(
            owner=Widget,
            name="foo",
            parameters=(
                ParameterDescriptor(name="a", annotation=int),
                ParameterDescriptor(name="b", annotation=list[str]),
            ),
            return_type=bool,
        )
        assert m.parameter_types == (int, list[str])
        assert m.parameter_type_names == ("int", "list")
        assert m.parameter_count == 2
        assert m.return_type_name == "bool"

    def test_constructor_name_and_kind(self):
        c = ConstructorDescriptor(owner=Widget)
        assert c.name == "Widget"
        assert c.kind is MemberKind.CONSTRUCTOR
        assert c.parameter_count == 0

    def test_type_descriptor(self):
        t = TypeDescriptor(target=Widget)
        assert t.name == "Widget"
        assert t.qualified_name.endswith("sample_types.Widget")
        assert t.bases[0].endswith("Base")
        assert t.description == "A configurable widget."
        assert t.has_fields() is False


class TestMangling:
    def test_mangle_private(self):
        assert mangle(Widget, "__secret") == "_Widget__secret"

    def test_mangle_leading_underscores_in_class_name(self):
        assert mangle(_Internal, "__x") == "_Internal__x"

    def test_public_and_dunder_untouched(self):
        assert mangle(Widget, "count") == "count"
        assert mangle(Widget, "__len__") == "__len__"

    def test_demangle(self):
        assert demangle(Widget, "_Widget__secret") == "__secret"
        assert demangle(Widget, "_Other__secret") == "_Other__secret"
        assert demangle(Widget, "count") == "count"


class TestVisibility:
    def test_of(self):
        assert Visibility.of("count") is Visibility.PUBLIC
        assert Visibility.of("_cache") is Visibility.PROTECTED
        assert Visibility.of("__secret") is Visibility.PRIVATE
        assert Visibility.of("__len__") is Visibility.PUBLIC


class TestMemberKind:
    def test_display_name(self):
        assert MemberKind.STATIC_METHOD.get_display_name() == "Static method"


class TestQualifiedName:
    def test_parse_colon_form(self):
        q = QualifiedName.parse("pkg.mod:Outer.Inner")
        assert q.module == "pkg.mod"
        assert q.qualname == "Outer.Inner"
        assert str(q) == "pkg.mod:Outer.Inner"

    def test_parse_dotted_form_kept_whole(self):
        q = QualifiedName.parse("pkg.mod.Thing")
        assert q.module == "pkg.mod.Thing"
        assert q.qualname == ""

    def test_parse_invalid(self):
        assert QualifiedName.parse("") is None
        assert QualifiedName.parse("pkg..mod") is None
        assert QualifiedName.parse("1pkg.mod") is None
        assert QualifiedName.parse("pkg:") is None

    def test_of_and_child(self):
        q = QualifiedName.of(Widget).child("Part")
        assert str(q) == f"{Widget.__module__}:Widget.Part"

    def test_child_of_module(self):
        assert str(QualifiedName("collections").child("deque")) == "collections:deque"
