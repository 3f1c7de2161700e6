"""Mutable accumulator shared by the handlers translating one item."""

from __future__ import annotations

from typing import Any

from ..models import (
    UNSLOTTED,
    Annotation,
    AttributeValue,
    StatLine,
    TargetItemRecord,
)


class TargetItemBuilder:
    """Collects target fields and annotations for one item.

    Handlers write into ``record`` directly for single-valued fields and go
    through the helpers for the accumulating ones (attributes, stats, hide
    flags, options, annotations).
    """

    def __init__(self, item_id: str, material: str, slot: str):
        self.record = TargetItemRecord(item_id=item_id, material=material)
        self.slot = slot
        self.annotations: list[Annotation] = []

    @property
    def material(self) -> str:
        return self.record.material

    def set_attribute(
        self,
        name: str,
        value: float,
        operation: str | None = None,
        slot: str | None = None,
    ) -> None:
        """Set an attribute under ``slot`` (the item's slot when omitted).

        A later value for the same slot and attribute replaces the earlier one.
        """
        target_slot = self.slot if slot is None else slot
        slot_attributes = self.record.attributes.setdefault(target_slot or UNSLOTTED, {})
        slot_attributes[name] = AttributeValue(value=value, operation=operation)

    def add_stat(self, name: str, value: float) -> None:
        self.record.stats.append(StatLine(name=name, value=value))

    def add_enchantment(self, entry: str) -> None:
        self.record.enchantments.append(entry)

    def add_hide(self, flag: str) -> None:
        if flag not in self.record.hide:
            self.record.hide.append(flag)

    def set_option(self, key: str, value: Any) -> None:
        self.record.options[key] = value

    def annotate(self, annotation: Annotation) -> None:
        self.annotations.append(annotation)

    def build(self) -> tuple[TargetItemRecord, list[Annotation]]:
        return self.record, list(self.annotations)
