"""
Structural handler base class and helpers shared by both source schemas.

A handler owns a fixed set of source keys. The translator runs every handler
once, in order, and only fields outside the union of the handlers' keys reach
the field classifier.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping

from ..exceptions import ItemTranslationError
from ..records import SourceItemRecord
from .builder import TargetItemBuilder


class ItemHandler(ABC):
    """One structural translation step.

    Subclasses set ``keys`` to the source keys they consume, whether or not
    the item carries them.
    """

    keys: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        """Read this handler's keys from ``record`` and write into ``builder``."""


def require_section(record: SourceItemRecord, key: str) -> SourceItemRecord | None:
    """Return ``record[key]`` as a nested record.

    Returns None when the key is absent or null.

    Raises:
        ItemTranslationError: If the key holds something other than a section.
    """
    value = record.raw(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ItemTranslationError(
            f"'{key}' must be a section, got {type(value).__name__}",
            item_id=record.item_id,
            field=key,
        )
    return record.section(key)


def require_list(record: SourceItemRecord, key: str) -> list[str]:
    """Return ``record[key]`` as a list of strings; a lone string is a one-item list.

    Raises:
        ItemTranslationError: If the key holds a section.
    """
    value = record.raw(key)
    if value is None:
        return []
    if isinstance(value, Mapping):
        raise ItemTranslationError(
            f"'{key}' must be a list, got a section",
            item_id=record.item_id,
            field=key,
        )
    if isinstance(value, list):
        return record.get_list(key)
    return [record.get_str(key, "")]


def iter_sections(section: SourceItemRecord) -> list[tuple[str, SourceItemRecord]]:
    """Child sections of ``section`` in declaration order, skipping scalar entries."""
    children = []
    for key in section.keys():
        child = section.section(key)
        if child is not None:
            children.append((key, child))
    return children


def is_number_like(text: str) -> bool:
    try:
        int(text)
    except ValueError:
        return False
    return True


class LoreHandler(ItemHandler):
    keys = ("lore",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        builder.record.lore.extend(require_list(record, "lore"))

