"""Member kind and visibility enumerations."""

from __future__ import annotations

from enum import Enum


class MemberKind(Enum):
    FIELD = "field"
    PROPERTY = "property"
    METHOD = "method"
    STATIC_METHOD = "staticmethod"
    CLASS_METHOD = "classmethod"
    CONSTRUCTOR = "constructor"

    def get_display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    MemberKind.FIELD: "Field",
    MemberKind.PROPERTY: "Property",
    MemberKind.METHOD: "Method",
    MemberKind.STATIC_METHOD: "Static method",
    MemberKind.CLASS_METHOD: "Class method",
    MemberKind.CONSTRUCTOR: "Constructor",
}


class Visibility(Enum):
    """Access level implied by an attribute name."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"

    @classmethod
    def of(cls, name: str) -> Visibility:
        """Classify a name as written in source.

        Dunder names (``__call__``) are public; ``__name`` is private
        (name-mangled); ``_name`` is protected; everything else is public.
        """
        if name.startswith("__") and name.endswith("__") and len(name) > 4:
            return cls.PUBLIC
        if name.startswith("__"):
            return cls.PRIVATE
        if name.startswith("_"):
            return cls.PROTECTED
        return cls.PUBLIC
