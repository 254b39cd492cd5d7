"""Markdown formatter for reflected types and members."""

from __future__ import annotations

from mcp_py_reflection.domain.entities import (
    ConstructorDescriptor,
    FieldDescriptor,
    MemberDescriptor,
    MethodDescriptor,
    ParameterDescriptor,
    TypeDescriptor,
)
from mcp_py_reflection.domain.enums import MemberKind, Visibility


class MarkdownFormatter:
    """Formats reflection results as Markdown for MCP tool responses."""

    def __init__(self, max_members: int = 50) -> None:
        self._max_members = max_members

    def format_error(self, exception: Exception) -> str:
        return f"**Error:** {exception}\n"

    def format_type(self, type_desc: TypeDescriptor) -> str:
        parts: list[str] = [f"## {type_desc.name}\n", f"`{type_desc.qualified_name}`\n"]

        if type_desc.bases:
            bases = ", ".join(f"`{b}`" for b in type_desc.bases)
            parts.append(f"**Bases:** {bases}\n")

        if type_desc.description:
            parts.append(type_desc.description)
            parts.append("")

        if type_desc.constructor is not None:
            parts.append(f"```\n{_signature(type_desc.constructor)}\n```\n")

        if type_desc.has_fields():
            parts.append(f"**Fields ({len(type_desc.fields)}):**\n")
            parts.extend(self._bullets([f"`{f.name}: {f.type_name}`" for f in type_desc.fields]))
            parts.append("")

        if type_desc.has_methods():
            parts.append(f"**Methods ({len(type_desc.methods)}):**\n")
            parts.extend(self._bullets([f"`{_signature(m)}`" for m in type_desc.methods]))
            parts.append("")

        return "\n".join(parts)

    def format_member(self, member: MemberDescriptor) -> str:
        if isinstance(member, FieldDescriptor):
            return self._format_field(member)
        if isinstance(member, MethodDescriptor):
            return self._format_method(member)
        if isinstance(member, ConstructorDescriptor):
            return self.format_constructor(member)
        return f"**{member.name}**\n"

    def format_type_members(self, members: list[MemberDescriptor]) -> str:
        fields = [m for m in members if isinstance(m, FieldDescriptor)]
        methods = [m for m in members if isinstance(m, MethodDescriptor)]

        parts: list[str] = []

        if fields:
            parts.append("## Fields\n")
            parts.extend(
                self._bullets(
                    [f"**{f.name}**: `{f.type_name}`{_qualifiers(f)}" for f in fields]
                )
            )
            parts.append("")

        if methods:
            parts.append("## Methods\n")
            parts.extend(
                self._bullets([f"**{m.name}** `{_signature(m)}`{_qualifiers(m)}" for m in methods])
            )
            parts.append("")

        if not parts:
            return "No members found.\n"

        return "\n".join(parts)

    def format_member_list(self, members: list[MemberDescriptor], title: str) -> str:
        if not members:
            return "Nothing found.\n"
        parts = [f"Found {len(members)} for {title}:\n"]
        parts.extend(self._bullets([_qualified_line(m) for m in members]))
        parts.append("")
        return "\n".join(parts)

    def format_constructor(self, constructor: ConstructorDescriptor) -> str:
        parts: list[str] = [f"## Constructor for {constructor.name}\n"]
        if not constructor.has_signature:
            parts.append("*Signature not available.*\n")
            return "\n".join(parts)

        parts.append(f"```\n{_signature(constructor)}\n```\n")
        if constructor.parameters:
            parts.append("**Parameters:**\n")
            parts.extend(_parameter_lines(constructor.parameters))
            parts.append("")
        return "\n".join(parts)

    def _format_field(self, field: FieldDescriptor) -> str:
        parts: list[str] = [f"## {field.owner.__qualname__}.{field.name}\n"]
        parts.append(f"**{field.kind.get_display_name()}**{_qualifiers(field)}\n")
        parts.append(f"**Type:** `{field.type_name}`\n")
        if field.attribute_name != field.name:
            parts.append(f"**Stored as:** `{field.attribute_name}`\n")
        return "\n".join(parts)

    def _format_method(self, method: MethodDescriptor) -> str:
        parts: list[str] = [f"## {method.owner.__qualname__}.{method.name}\n"]
        parts.append(f"**{method.kind.get_display_name()}**{_qualifiers(method)}\n")
        if not method.has_signature:
            parts.append("*Signature not available.*\n")
            return "\n".join(parts)

        parts.append(f"```\n{_signature(method)}\n```\n")
        if method.parameters:
            parts.append("**Parameters:**\n")
            parts.extend(_parameter_lines(method.parameters))
            parts.append("")
        parts.append(f"**Returns:** `{method.return_type_name}`\n")

        doc = getattr(method.target, "__doc__", None)
        if doc:
            parts.append(doc.strip().split("\n\n", 1)[0])
            parts.append("")
        return "\n".join(parts)

    def _bullets(self, lines: list[str]) -> list[str]:
        shown = [f"- {line}" for line in lines[: self._max_members]]
        if len(lines) > self._max_members:
            shown.append(f"- ... and {len(lines) - self._max_members} more")
        return shown


def _signature(member: MethodDescriptor | ConstructorDescriptor) -> str:
    params = ", ".join(f"{p.name}: {p.type_name}" for p in member.parameters)
    prefix = "async " if getattr(member, "is_async", False) else ""
    if isinstance(member, MethodDescriptor):
        return f"{prefix}{member.name}({params}) -> {member.return_type_name}"
    return f"{member.name}({params})"


def _qualified_line(member: FieldDescriptor | MethodDescriptor) -> str:
    if isinstance(member, MethodDescriptor):
        return f"`{member.owner.__qualname__}.{_signature(member)}`"
    return f"`{member.owner.__qualname__}.{member.name}: {member.type_name}`"


def _parameter_lines(parameters: tuple[ParameterDescriptor, ...]) -> list[str]:
    lines = []
    for p in parameters:
        opt = " *(optional)*" if p.has_default else ""
        lines.append(f"- `{p.name}`: `{p.type_name}`{opt}")
    return lines


def _qualifiers(member: FieldDescriptor | MethodDescriptor) -> str:
    notes = []
    if member.visibility is not Visibility.PUBLIC:
        notes.append(member.visibility.value)
    if member.kind is MemberKind.PROPERTY:
        notes.append("property")
    elif member.kind in (MemberKind.STATIC_METHOD, MemberKind.CLASS_METHOD):
        notes.append(member.kind.value)
    return f" *({', '.join(notes)})*" if notes else ""
