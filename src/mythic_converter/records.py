"""
Read-only view over one source item's nested key/value tree.

Adapters build a ``SourceItemRecord`` per item entry; handlers and the
classifier read it through the typed accessors, which mirror how the source
plugins themselves read their configuration (defaults for missing or
mistyped values, never exceptions).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field

from .values import coerce_number


class SourceItemRecord(BaseModel):
    """One source item: identifier plus fields in source declaration order."""

    model_config = ConfigDict(frozen=True)

    item_id: str = Field(description="Item identifier in the source document")
    data: dict[str, Any] = Field(default_factory=dict, description="Field key -> raw value, ordered")
    type_name: str = Field(default="", description="Source item type (e.g. SWORD), when the schema has one")
    namespace: str = Field(default="", description="Source namespace, when the schema has one")
    source_name: str = Field(default="", description="Name of the document the item came from")

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def keys(self) -> list[str]:
        return list(self.data.keys())

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter(self.data.items())

    def contains(self, key: str) -> bool:
        return key in self.data

    def raw(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def is_section(self, key: str) -> bool:
        return isinstance(self.data.get(key), Mapping)

    def is_list(self, key: str) -> bool:
        return isinstance(self.data.get(key), list)

    def is_string(self, key: str) -> bool:
        return isinstance(self.data.get(key), str)

    def section(self, key: str) -> SourceItemRecord | None:
        """Return a nested section as a record, or None if the key is not a mapping."""
        value = self.data.get(key)
        if not isinstance(value, Mapping):
            return None
        return SourceItemRecord(
            item_id=f"{self.item_id}.{key}",
            data={str(k): v for k, v in value.items()},
            type_name=self.type_name,
            namespace=self.namespace,
            source_name=self.source_name,
        )

    def path(self, dotted: str) -> Any:
        """Resolve a dotted path (``placed_model.type``) through nested sections."""
        current: Any = self.data
        for part in dotted.split("."):
            if not isinstance(current, Mapping) or part not in current:
                return None
            current = current[part]
        return current

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    def get_str(self, key: str, default: str | None = None) -> str | None:
        """Return a scalar as a string; sections and lists yield the default."""
        value = self.data.get(key)
        if value is None or isinstance(value, (Mapping, list)):
            return default
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_number(self, key: str, default: float = 0.0) -> float:
        number = coerce_number(self.data.get(key))
        return default if number is None else number

    def get_int(self, key: str, default: int = 0) -> int:
        number = coerce_number(self.data.get(key))
        return default if number is None else int(number)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.data.get(key)
        return value if isinstance(value, bool) else default

    def get_list(self, key: str) -> list[str]:
        """Return a list of scalars as strings; anything else yields an empty list."""
        value = self.data.get(key)
        if not isinstance(value, list):
            return []
        return [str(v) for v in value if v is not None and not isinstance(v, (Mapping, list))]
