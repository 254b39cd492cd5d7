"""Qualified type name value object."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class QualifiedName:
    """Location of a class: importable module plus qualified name inside it.

    Renders in the ``module:Outer.Inner`` form accepted by
    :func:`pkgutil.resolve_name`, which keeps the module/attribute boundary
    unambiguous for nested classes.
    """

    module: str
    qualname: str = ""

    _IDENTIFIER_RE: ClassVar[re.Pattern[str]] = re.compile(r"^[^\W\d]\w*$")

    @classmethod
    def of(cls, klass: type) -> QualifiedName:
        return cls(klass.__module__, klass.__qualname__)

    @classmethod
    def parse(cls, path: str) -> QualifiedName | None:
        """Parse ``pkg.mod:Outer.Inner``.

        A dotted path without a colon cannot be split without importing,
        so it is kept whole as the module part. Returns None for blank or
        malformed input.
        """
        if not path or not path.strip():
            return None
        module, sep, qualname = path.strip().partition(":")
        if not cls._is_dotted(module):
            return None
        if sep and not cls._is_dotted(qualname):
            return None
        return cls(module, qualname)

    def child(self, simple_name: str) -> QualifiedName:
        if self.qualname:
            return QualifiedName(self.module, f"{self.qualname}.{simple_name}")
        return QualifiedName(self.module, simple_name)

    @classmethod
    def _is_dotted(cls, value: str) -> bool:
        return all(cls._IDENTIFIER_RE.match(part) for part in value.split("."))

    def __str__(self) -> str:
        return f"{self.module}:{self.qualname}" if self.qualname else self.module
