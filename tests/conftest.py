"""Shared test fixtures for mcp_py_reflection tests."""

from __future__ import annotations

import pytest

from mcp_py_reflection.domain.services import ReflectionService
from mcp_py_reflection.infrastructure.introspection.runtime import RuntimeIntrospector
from mcp_py_reflection.reflection import ReflectionHelper

from sample_types import Widget


@pytest.fixture
def introspector() -> RuntimeIntrospector:
    return RuntimeIntrospector()


@pytest.fixture
def helper(introspector) -> ReflectionHelper:
    return ReflectionHelper(introspector)


@pytest.fixture
def service(helper, introspector) -> ReflectionService:
    return ReflectionService(helper, introspector)


@pytest.fixture
def widget_path() -> str:
    return f"{Widget.__module__}.Widget"
