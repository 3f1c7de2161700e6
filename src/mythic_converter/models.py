"""
Data models for the item conversion engine.

Source items come in as ``SourceItemRecord`` (see ``records.py``); the
translator produces a ``TargetItemRecord`` in MythicCrucible terms plus an
ordered list of ``Annotation``s for everything without a direct equivalent.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .values import format_number

# Slot key used for attributes that have no equipment slot (accessories, consumables)
UNSLOTTED = ""


class AnnotationCategory(str, Enum):
    """Why a source field ended up as an advisory comment."""
    UNSUPPORTED_FEATURE = "unsupported-feature"
    UNMAPPED_NUMERIC_STAT = "unmapped-numeric-stat"
    UNMAPPED_STRING_FIELD = "unmapped-string-field"
    UNMAPPED_SECTION = "unmapped-section"
    UNMAPPED_VALUE = "unmapped-value"
    UNSUPPORTED_FLAG = "unsupported-flag"
    DURABILITY_NOTE = "durability-note"
    ABILITY = "ability"
    PERMANENT_EFFECT = "permanent-effect"
    MANUAL_REVIEW = "manual-review"
    SOURCE_REFERENCE = "source-reference"
    NOTE = "note"
    CONVERSION_FAILED = "conversion-failed"


class Annotation(BaseModel):
    """A structured note documenting a source feature with no target representation.

    ``message`` is the rendered comment text; ``details`` are extra comment
    lines printed right below it (already indented).
    """
    category: AnnotationCategory = Field(description="Annotation category tag")
    field: str = Field(default="", description="Originating source field key")
    value: Any = Field(default=None, description="Raw source value")
    guidance: str = Field(default="", description="Migration guidance for manual follow-up")
    message: str = Field(description="Comment text emitted into the output")
    details: list[str] = Field(default_factory=list, description="Additional comment lines")

    def comment_lines(self) -> list[str]:
        """All comment lines for this annotation, in output order."""
        return [self.message, *self.details]


class AttributeValue(BaseModel):
    """A vanilla attribute modifier value with an optional operation override."""
    value: float
    operation: str | None = Field(
        default=None,
        description="ADD_SCALAR or MULTIPLY; None means the target default (ADD)",
    )

    def render(self) -> str:
        text = format_number(self.value)
        if self.operation:
            text = f"{text} {self.operation}"
        return text


class StatLine(BaseModel):
    """A custom stat emitted as a flat ``Name value`` line."""
    name: str
    value: float

    def render(self) -> str:
        return f"{self.name} {format_number(self.value)}"


class HitBox(BaseModel):
    height: float = 1
    width: float = 1


class GenerationBlock(BaseModel):
    """Resource-pack generation settings for custom armor."""
    texture: str | None = Field(default=None, description="Inventory texture path")
    armor_texture: str = Field(description="Worn armor texture path")
    armor_type: str = Field(default="TRIMS", description="Armor rendering type")


class FurnitureBlock(BaseModel):
    """MythicCrucible furniture settings."""
    entity_type: str = "DISPLAY"
    placement: str = "FLOOR"
    solid: bool | None = None
    lock_rotation: bool | None = None
    hitbox: HitBox | None = None
    lights: list[str] = Field(default_factory=list)
    barriers: list[str] = Field(default_factory=list)


class CustomBlockSection(BaseModel):
    """MythicCrucible custom block settings."""
    block_type: str = "NOTEBLOCK"
    hardness: int | None = None
    blast_resistance: float | None = None
    tools: list[str] = Field(default_factory=list)


class TargetItemRecord(BaseModel):
    """One item in MythicCrucible terms, ready for the assembler."""
    item_id: str = Field(description="Top-level item key in the output document")
    material: str = Field(description="Bukkit material name")
    item_type: str | None = Field(default=None, description="FURNITURE or BLOCK; None for plain items")
    display: str | None = None
    item_model: str | None = None
    model: str | None = None
    tooltip_style: str | None = None
    equip_level: int | None = None
    lore: list[str] = Field(default_factory=list)
    enchantments: list[str] = Field(default_factory=list)
    attributes: dict[str, dict[str, AttributeValue]] = Field(
        default_factory=dict,
        description="Slot name -> attribute name -> value; slot UNSLOTTED for slot-less items",
    )
    stats: list[StatLine] = Field(default_factory=list)
    hide: list[str] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)
    generation: GenerationBlock | None = None
    furniture: FurnitureBlock | None = None
    custom_block: CustomBlockSection | None = None


class ItemResult(BaseModel):
    """Outcome of translating one source item."""
    source_id: str = Field(description="Item identifier in the source document")
    target: TargetItemRecord | None = Field(default=None, description="None when translation failed")
    annotations: list[Annotation] = Field(default_factory=list)
    error: str | None = Field(default=None, description="Failure reason when translation failed")

    @property
    def ok(self) -> bool:
        return self.target is not None and self.error is None


class ItemFailure(BaseModel):
    """A failed item and the reason it failed."""
    item_id: str
    reason: str


class BatchResult(BaseModel):
    """Summary of a batch translation, in source order."""
    results: list[ItemResult] = Field(default_factory=list)
    seen: int = 0
    converted: int = 0
    failed: int = 0

    @property
    def failures(self) -> list[ItemFailure]:
        return [
            ItemFailure(item_id=r.source_id, reason=r.error or "unknown error")
            for r in self.results
            if not r.ok
        ]

    @property
    def annotations(self) -> dict[str, list[Annotation]]:
        """Annotations per source item, for surfacing to an operator."""
        return {r.source_id: r.annotations for r in self.results}

    @classmethod
    def from_results(cls, results: list[ItemResult]) -> "BatchResult":
        converted = sum(1 for r in results if r.ok)
        return cls(
            results=results,
            seen=len(results),
            converted=converted,
            failed=len(results) - converted,
        )

    def summary(self) -> str:
        return f"{self.seen} item(s) seen, {self.converted} converted, {self.failed} failed"
