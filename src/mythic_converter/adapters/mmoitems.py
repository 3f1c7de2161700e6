"""
MMOItems type files.

One file per item type (``SWORD.yml``), items keyed at the top level, and
each item's stats under a ``base`` sub-section::

    FIRE_BLADE:
      base:
        material: DIAMOND_SWORD
        name: '&cFire Blade'
        attack-damage: 10
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import PurePath
from typing import Any

from ..records import SourceItemRecord
from ..registry import MappingRegistry
from ..translation.handlers import ItemHandler
from ..translation.mmoitems_handlers import mmoitems_handlers
from ..translation.schema import DEFAULT_MMOITEMS_MATERIAL, MMOITEMS_HEADER_NOTES
from ..translation.translator import IdentityResolver, ItemIdentity
from .base import SchemaAdapter

logger = logging.getLogger("mythic-converter")


def type_name_from_source(source_name: str) -> str:
    """``sword.yml`` -> ``SWORD``."""
    return PurePath(source_name).stem.upper()


class MMOItemsIdentity(IdentityResolver):
    keys = ("material",)

    def resolve(self, record: SourceItemRecord, registry: MappingRegistry) -> ItemIdentity:
        item_id = f"{record.type_name}_{record.item_id}" if record.type_name else record.item_id
        material = record.get_str("material") or DEFAULT_MMOITEMS_MATERIAL
        return ItemIdentity(
            item_id=item_id.replace(" ", "_").replace("-", "_"),
            material=material.upper(),
            slot=registry.slot_for(record.type_name),
        )


class MMOItemsAdapter(SchemaAdapter):
    """Adapter for MMOItems type files.

    Args:
        type_name: Item type; derived from the source file name when omitted.
    """

    name = "mmoitems"

    def __init__(self, type_name: str | None = None):
        self.type_name = type_name

    def resolve_type(self, source_name: str) -> str:
        return (self.type_name or type_name_from_source(source_name)).upper()

    def records(self, document: Mapping[str, Any], source_name: str) -> list[SourceItemRecord]:
        type_name = self.resolve_type(source_name)
        records = []
        for item_id, entry in (document or {}).items():
            if not isinstance(entry, Mapping):
                logger.debug(f"Skipping non-section entry '{item_id}' in {source_name}")
                continue
            base = entry.get("base")
            data = base if isinstance(base, Mapping) else entry
            records.append(SourceItemRecord(
                item_id=str(item_id),
                data={str(k): v for k, v in data.items()},
                type_name=type_name,
                source_name=source_name,
            ))
        if not records:
            logger.warning(f"No items found in {source_name}")
        return records

    def identity(self) -> IdentityResolver:
        return MMOItemsIdentity()

    def handlers(self) -> list[ItemHandler]:
        return mmoitems_handlers()

    def header(self, document: Mapping[str, Any], source_name: str) -> list[str]:
        return [
            f"MythicCrucible items converted from MMOItems type: {self.resolve_type(source_name)}",
            f"Source: {PurePath(source_name).name}",
            *MMOITEMS_HEADER_NOTES,
        ]
