"""FastMCP server exposing reflection lookups as tools."""

from __future__ import annotations

import logging
import sys

from mcp_py_reflection.config import AppConfig, search_directories
from mcp_py_reflection.domain.exceptions import DomainException
from mcp_py_reflection.domain.services import ReflectionService
from mcp_py_reflection.infrastructure.introspection.runtime import RuntimeIntrospector
from mcp_py_reflection.presentation.formatter import MarkdownFormatter
from mcp_py_reflection.reflection import ReflectionHelper

logger = logging.getLogger(__name__)


def create_server(config: AppConfig):
    """Create and configure the MCP server.

    Args:
        config: Application configuration (YAML + env + CLI merged).
    """
    from fastmcp import FastMCP

    mcp = FastMCP("mcp-py-reflection")

    _extend_search_path(config)

    # Wire dependencies
    introspector = RuntimeIntrospector()
    helper = ReflectionHelper(introspector)
    service = ReflectionService(helper, introspector)
    formatter = MarkdownFormatter(max_members=config.output.max_members)

    def effective(ignore_access: bool | None) -> bool:
        return config.reflection.ignore_access if ignore_access is None else ignore_access

    @mcp.tool()
    def resolve_type(path: str, ignore_access: bool | None = None) -> str:
        """Describe a Python class: bases, constructor, fields and methods.

        Args:
            path: Fully-qualified class name (e.g., 'collections.OrderedDict',
                  'json.decoder:JSONDecoder')
            ignore_access: Include protected/private members declared by the class
        """
        try:
            return formatter.format_type(service.describe_type(path, effective(ignore_access)))
        except DomainException as e:
            return formatter.format_error(e)

    @mcp.tool()
    def get_member(type_path: str, member_name: str, ignore_access: bool | None = None) -> str:
        """Get a field, property or method of a class by name.

        Args:
            type_path: Fully-qualified class name
            member_name: Member name (e.g., 'move_to_end', '__secret')
            ignore_access: Fall back to non-public members declared by the class
        """
        try:
            member = service.find_member(type_path, member_name, effective(ignore_access))
            return formatter.format_member(member)
        except DomainException as e:
            return formatter.format_error(e)

    @mcp.tool()
    def get_members(type_path: str, ignore_access: bool | None = None) -> str:
        """List the fields and methods of a class.

        Args:
            type_path: Fully-qualified class name
            ignore_access: Include protected/private members declared by the class
        """
        try:
            members = service.find_members(type_path, effective(ignore_access))
            return formatter.format_type_members(members)
        except DomainException as e:
            return formatter.format_error(e)

    @mcp.tool()
    def get_constructor(type_path: str, ignore_access: bool | None = None) -> str:
        """Get the constructor signature of a class.

        Args:
            type_path: Fully-qualified class name
            ignore_access: Allow constructors of non-public classes
        """
        try:
            return formatter.format_constructor(
                service.find_constructor(type_path, effective(ignore_access))
            )
        except DomainException as e:
            return formatter.format_error(e)

    @mcp.tool()
    def find_fields_of_type(
        type_path: str, type_name: str, ignore_access: bool | None = None
    ) -> str:
        """Find fields whose declared type has the given simple name.

        Matching is textual: 'int' does not match a 'bool' field.

        Args:
            type_path: Fully-qualified class name
            type_name: Simple type name (e.g., 'int', 'list', 'Path')
            ignore_access: Include protected/private fields declared by the class
        """
        try:
            fields = service.find_fields_by_type_name(
                type_path, type_name, effective(ignore_access)
            )
            return formatter.format_member_list(fields, f"type `{type_name}`")
        except DomainException as e:
            return formatter.format_error(e)

    @mcp.tool()
    def find_methods(
        type_path: str,
        method_name: str,
        parameter_types: list[str] | None = None,
        ignore_access: bool | None = None,
    ) -> str:
        """Find methods by name and exact parameter type names, in order.

        Args:
            type_path: Fully-qualified class name
            method_name: Method name
            parameter_types: Simple type names of the parameters, excluding
                             self/cls (e.g., ['int', 'str']); empty for none
            ignore_access: Include protected/private methods declared by the class
        """
        try:
            methods = service.find_methods_by_signature(
                type_path, method_name, parameter_types or [], effective(ignore_access)
            )
            signature = ", ".join(parameter_types or [])
            return formatter.format_member_list(methods, f"`{method_name}({signature})`")
        except DomainException as e:
            return formatter.format_error(e)

    return mcp


def _extend_search_path(config: AppConfig) -> None:
    """Prepend configured directories to sys.path so their modules resolve."""
    for directory in reversed(search_directories(config.reflection)):
        if directory not in sys.path:
            sys.path.insert(0, directory)
            logger.info("Added to import path: %s", directory)
