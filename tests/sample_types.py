"""Sample classes reflected by the tests."""

from __future__ import annotations

import functools
from pathlib import Path, PurePath
from typing import ClassVar

from sample_bases import Priced


class Example:
    """One public and one private field, nothing else."""

    x: int
    __y: str


class Base:
    base_value: int = 1
    _base_hidden: str = "hidden"

    def greet(self, name: str) -> str:
        return f"hello {name}"

    def _helper(self) -> None:
        pass


class Widget(Base):
    """A configurable widget.

    Used to exercise every member kind.
    """

    count: int = 0
    flag: bool = False
    label: str = ""
    location: PurePath
    path: Path
    registry: ClassVar[dict[str, int]] = {}
    _cache: list[int]
    __secret: bytes = b""

    def __init__(self, count: int, label: str = "") -> None:
        self.count = count
        self.label = label

    @property
    def size(self) -> int:
        return self.count

    @functools.cached_property
    def description(self) -> str:
        return f"{self.label} x{self.count}"

    def foo(self, a: int, b: str) -> bool:
        """Check something."""
        return bool(a) and bool(b)

    def resize(self, factor: float) -> Widget:
        return Widget(int(self.count * factor), self.label)

    def untyped(self, value):
        return value

    def _internal(self) -> int:
        return 0

    def __hidden(self, value: int) -> None:
        pass

    @staticmethod
    def create(count: int) -> Widget:
        return Widget(count)

    @classmethod
    def default(cls) -> Widget:
        return cls(0)

    async def fetch(self, key: str) -> bytes:
        return key.encode()

    def __len__(self) -> int:
        return self.count

    class Part:
        weight: float = 0.0


class SpecialWidget(Widget):
    count: int = 5

    def greet(self, name: str) -> str:
        return f"hi {name}"


class Reversed:
    def foo(self, a: str, b: int) -> bool:
        return True


class _Internal:
    def __init__(self, token: str) -> None:
        self.token = token


class PricedWidget(Priced):
    """Inherits a constructor annotated in another module."""


NOT_A_CLASS = 42
