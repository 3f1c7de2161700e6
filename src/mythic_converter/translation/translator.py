"""
ItemTranslator - one source item in, one target item plus annotations out.

Translation runs in a fixed order:
  1. identity (target id, material, slot) from the schema's resolver
  2. every structural handler, once, in list order
  3. every remaining field through the field classifier, in source order

Any exception raised while translating an item is caught here, so a single
bad item never stops a batch.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models import ItemResult
from ..records import SourceItemRecord
from ..registry import MappingRegistry
from . import annotations
from .builder import TargetItemBuilder
from .classifier import FieldClassifier
from .handlers import ItemHandler

logger = logging.getLogger("mythic-converter")


@dataclass(frozen=True)
class ItemIdentity:
    item_id: str
    material: str
    slot: str


class IdentityResolver(ABC):
    """Computes the target id, material and slot of a source item.

    ``keys`` lists the source keys read here, so the classifier skips them.
    """

    keys: tuple[str, ...] = ()

    @abstractmethod
    def resolve(self, record: SourceItemRecord, registry: MappingRegistry) -> ItemIdentity:
        ...


class ItemTranslator:
    """Translates source items with one registry snapshot and one handler list."""

    def __init__(
        self,
        registry: MappingRegistry,
        identity: IdentityResolver,
        handlers: list[ItemHandler],
    ):
        self.registry = registry
        self.identity = identity
        self.handlers = list(handlers)
        self.classifier = FieldClassifier(registry)

        consumed = set(identity.keys)
        for handler in self.handlers:
            consumed.update(handler.keys)
        self.consumed_keys = frozenset(consumed)

    def translate(self, record: SourceItemRecord) -> ItemResult:
        """Translate one item; failures come back as a failed ItemResult."""
        try:
            return self._translate(record)
        except Exception as e:
            reason = str(e) or type(e).__name__
            logger.warning(f"Failed to convert item '{record.item_id}': {reason}")
            return ItemResult(
                source_id=record.item_id,
                annotations=[annotations.conversion_failed(record.item_id, reason)],
                error=reason,
            )

    def _translate(self, record: SourceItemRecord) -> ItemResult:
        identity = self.identity.resolve(record, self.registry)
        builder = TargetItemBuilder(identity.item_id, identity.material, identity.slot)

        for handler in self.handlers:
            handler.apply(record, builder)

        for key, value in record.items():
            if key in self.consumed_keys:
                continue
            kind = self.classifier.apply(key, value, builder)
            logger.debug(f"{record.item_id}: field '{key}' classified as {kind.value}")

        target, item_annotations = builder.build()
        return ItemResult(source_id=record.item_id, target=target, annotations=item_annotations)
