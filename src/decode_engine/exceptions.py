"""
Custom exception classes for the Decode Engine.

This module defines structured exception types for schema lookup, manifest
loading and value conversion failures.
"""

from typing import Any, List, Optional, Union

PathSegment = Union[str, int]


class DecodeEngineError(Exception):
    """Base exception for all Decode Engine errors."""
    pass


class SchemaNotFound(DecodeEngineError):
    """Module has no type catalog."""

    def __init__(self, module: str):
        self.module = module
        super().__init__(f"module not found: {module}")


class TypeNotFound(DecodeEngineError):
    """Module exists but holds no matching type."""

    def __init__(self, module: str, name: str, arity: Optional[int] = None):
        self.module = module
        self.name = name
        self.arity = arity
        if arity is None:
            super().__init__(f"type not found: {module}.{name}")
        else:
            super().__init__(f"type not found: {module}.{name}/{arity}")


class UnboundTypeVariable(DecodeEngineError):
    """A type variable was used outside of any instantiation that binds it."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"unbound type variable: {token}")


class ManifestLoadError(DecodeEngineError):
    """Error loading manifest file."""

    def __init__(self, file_name: str, message: str):
        self.file_name = file_name
        self.message = message
        super().__init__(f"Error loading {file_name}: {message}")


class SchemaValidationError(DecodeEngineError):
    """Schema validation error in manifest."""

    def __init__(self, file_name: str, field_path: str, message: str):
        self.file_name = file_name
        self.field_path = field_path
        self.message = message
        super().__init__(
            f"Schema validation error in {file_name} at {field_path}: {message}"
        )


class ConvertError(DecodeEngineError):
    """A value could not be converted to the type its schema declares.

    ``expected`` describes the schema shape, ``found`` is the offending input
    and ``path`` lists the keys/indices leading from the root value to it. The
    path is filled in from the inside out while the error propagates through
    composite nodes (see ``within``).
    """

    def __init__(
        self,
        expected: str,
        found: Any,
        reason: Optional[str] = None,
        path: Optional[List[PathSegment]] = None,
    ):
        self.expected = expected
        self.found = found
        self.reason = reason
        self.path: List[PathSegment] = list(path or [])
        super().__init__(self.expected, self.found)

    def within(self, segment: PathSegment) -> "ConvertError":
        """Prefix the error path with the segment of the enclosing container."""
        self.path.insert(0, segment)
        return self

    @property
    def location(self) -> str:
        parts = ["$"]
        for segment in self.path:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            else:
                parts.append(f".{segment}")
        return "".join(parts)

    @property
    def message(self) -> str:
        text = f"expected: {self.expected}, found: {self.found!r}"
        if self.reason:
            text = f"{text} ({self.reason})"
        if self.path:
            text = f"at {self.location}: {text}"
        return text

    def __str__(self) -> str:
        return self.message
