"""
ItemsAdder content files.

The namespace lives under ``info`` and items under ``items``::

    info:
      namespace: myitems
    items:
      ruby_sword:
        name: Ruby Sword
        resource:
          material: DIAMOND_SWORD
          model_path: item/ruby_sword
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..records import SourceItemRecord
from ..registry import MappingRegistry
from ..translation.handlers import ItemHandler
from ..translation.itemsadder_handlers import infer_slot_from_material, itemsadder_handlers
from ..translation.schema import DEFAULT_ITEMSADDER_MATERIAL, ITEMSADDER_GENERATOR_NOTE
from ..translation.translator import IdentityResolver, ItemIdentity
from .base import SchemaAdapter

logger = logging.getLogger("mythic-converter")


def namespace_of(document: Mapping[str, Any]) -> str:
    info = (document or {}).get("info")
    if not isinstance(info, Mapping):
        return ""
    namespace = info.get("namespace")
    return str(namespace) if namespace is not None else ""


class ItemsAdderIdentity(IdentityResolver):
    """Upper-case id; material from ``resource.material``; slot inferred from the material."""

    keys = ("enabled",)

    def resolve(self, record: SourceItemRecord, registry: MappingRegistry) -> ItemIdentity:
        material = record.path("resource.material")
        if material is None or isinstance(material, (Mapping, list)) or not str(material):
            material = DEFAULT_ITEMSADDER_MATERIAL
        material = str(material).upper()
        return ItemIdentity(
            item_id=record.item_id.upper(),
            material=material,
            slot=infer_slot_from_material(material),
        )


class ItemsAdderAdapter(SchemaAdapter):
    name = "itemsadder"

    def records(self, document: Mapping[str, Any], source_name: str) -> list[SourceItemRecord]:
        namespace = namespace_of(document)
        items = (document or {}).get("items")
        if not isinstance(items, Mapping):
            logger.warning(f"No 'items' section in {source_name}")
            return []

        records = []
        for item_id, entry in items.items():
            if not isinstance(entry, Mapping):
                logger.debug(f"Skipping non-section item '{item_id}' in {source_name}")
                continue
            record = SourceItemRecord(
                item_id=str(item_id),
                data={str(k): v for k, v in entry.items()},
                namespace=namespace,
                source_name=source_name,
            )
            if not record.get_bool("enabled", True):
                logger.debug(f"Skipping disabled item '{item_id}' in {source_name}")
                continue
            records.append(record)
        return records

    def identity(self) -> IdentityResolver:
        return ItemsAdderIdentity()

    def handlers(self) -> list[ItemHandler]:
        return itemsadder_handlers()

    def header(self, document: Mapping[str, Any], source_name: str) -> list[str]:
        namespace = namespace_of(document)
        title = "MythicCrucible items converted from ItemsAdder"
        if namespace:
            title += f" namespace: {namespace}"
        return [title, ITEMSADDER_GENERATOR_NOTE]
