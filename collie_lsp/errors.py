"""Error model for the grammar language server."""

from __future__ import annotations

from typing import Optional


class CollieLspError(Exception):
    """Base class for errors raised inside the language server."""

    hint: Optional[str] = None

    def __init__(self, message: str, *, hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


class ConfigError(CollieLspError):
    """Raised when the workspace configuration cannot be loaded."""


class EngineError(CollieLspError):
    """Raised when the Grammar Engine fails while analysing a document."""

    def __init__(self, message: str, *, operation: str, hint: Optional[str] = None) -> None:
        super().__init__(message, hint=hint)
        self.operation = operation


class SchemaError(EngineError):
    """Raised when Grammar Engine output does not match the expected schema."""


__all__ = [
    "CollieLspError",
    "ConfigError",
    "EngineError",
    "SchemaError",
]
