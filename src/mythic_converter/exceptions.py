"""
Exception hierarchy for the item conversion engine.

Nothing raised here is meant to reach the host process: registry problems
degrade to empty tables, and item failures are caught at the item boundary
and reported as annotations.
"""

from __future__ import annotations

from typing import Any


class ConverterError(Exception):
    """Base exception for all converter errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary of additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class RegistryLoadError(ConverterError):
    """Raised when a mapping configuration file cannot be read or parsed.

    Malformed sections inside a readable document never raise; they load
    as empty tables instead.
    """


class ItemTranslationError(ConverterError):
    """Raised by a structural handler when a required sub-section is malformed.

    Attributes:
        item_id: Identifier of the source item being translated
        field: Source field that triggered the failure
    """

    def __init__(
        self,
        message: str,
        item_id: str = "",
        field: str = "",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.item_id = item_id
        self.field = field


class DocumentParseError(ConverterError):
    """Raised when rendered target text cannot be read back."""
