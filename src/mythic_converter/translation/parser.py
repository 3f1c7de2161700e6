"""
Read rendered MythicCrucible text back into TargetItemRecords.

This is the parser-of-record for the assembler's output: the YAML body is
loaded with PyYAML, and the indented comment lines under each item are
recovered as ``note`` annotations so the item can be rendered again
unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..exceptions import DocumentParseError
from ..models import (
    UNSLOTTED,
    Annotation,
    AttributeValue,
    CustomBlockSection,
    FurnitureBlock,
    GenerationBlock,
    HitBox,
    StatLine,
    TargetItemRecord,
)
from ..values import coerce_number
from . import annotations as annotation_factory
from .assembler import INDENT

logger = logging.getLogger("mythic-converter")

COMMENT_PREFIX = f"{INDENT}#"
FAILURE_PREFIX = "FAILED TO CONVERT:"


class ParsedItem(BaseModel):
    target: TargetItemRecord
    annotations: list[Annotation] = Field(default_factory=list)


class ParsedDocument(BaseModel):
    """A rendered document split back into its parts."""
    header: list[str] = Field(default_factory=list, description="Top-of-file comment lines")
    items: list[ParsedItem] = Field(default_factory=list)
    failures: list[str] = Field(default_factory=list, description="FAILED TO CONVERT comment lines")


class TargetDocumentParser:
    """Parses documents produced by ``OutputAssembler``."""

    def parse(self, text: str) -> ParsedDocument:
        """Parse a rendered document.

        Raises:
            DocumentParseError: If the text is not valid YAML or not a mapping of items.
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise DocumentParseError(f"Invalid YAML in rendered document: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise DocumentParseError(f"Rendered document must be a mapping, got {type(data).__name__}")

        document = ParsedDocument()
        item_ids = list(data.keys())
        comments: list[list[str]] = []

        for line in text.splitlines():
            if not line.strip():
                continue
            if line.startswith("#"):
                comment = line[1:].strip()
                if comment.startswith(FAILURE_PREFIX):
                    document.failures.append(comment)
                elif not comments:
                    document.header.append(comment)
                continue
            if not line[0].isspace():
                comments.append([])
            elif line.startswith(COMMENT_PREFIX) and comments:
                comments[-1].append(_comment_text(line))

        if len(comments) != len(item_ids):
            raise DocumentParseError(
                f"Found {len(comments)} item blocks but {len(item_ids)} top-level keys"
            )

        for item_id, item_comments in zip(item_ids, comments):
            target = self.to_record(str(item_id), data[item_id])
            notes = [annotation_factory.note(c) for c in item_comments]
            document.items.append(ParsedItem(target=target, annotations=notes))

        logger.debug(f"Parsed {len(document.items)} item(s), {len(document.failures)} failure(s)")
        return document

    def parse_item(self, text: str) -> ParsedItem:
        """Parse a single rendered item block."""
        document = self.parse(text)
        if len(document.items) != 1:
            raise DocumentParseError(f"Expected one item, found {len(document.items)}")
        return document.items[0]

    def to_record(self, item_id: str, data: Any) -> TargetItemRecord:
        """Build a TargetItemRecord from one item's loaded YAML mapping."""
        if not isinstance(data, Mapping):
            raise DocumentParseError(f"Item '{item_id}' must be a mapping", {"item_id": item_id})

        try:
            return TargetItemRecord(
                item_id=item_id,
                material=str(data.get("Material", "")),
                item_type=_optional_str(data.get("Type")),
                display=_optional_str(data.get("Display")),
                item_model=_optional_str(data.get("ItemModel")),
                model=_optional_str(data.get("Model")),
                tooltip_style=_optional_str(data.get("TooltipStyle")),
                equip_level=data.get("EquipLevel"),
                lore=_str_list(data.get("Lore")),
                enchantments=_str_list(data.get("Enchantments")),
                attributes=_attributes(data.get("Attributes")),
                stats=[_stat(line) for line in _str_list(data.get("Stats"))],
                hide=_str_list(data.get("Hide")),
                options=dict(data.get("Options") or {}),
                generation=_generation(data.get("Generation")),
                furniture=_furniture(data.get("Furniture")),
                custom_block=_custom_block(data.get("CustomBlock")),
            )
        except (ValidationError, TypeError, ValueError) as e:
            raise DocumentParseError(f"Item '{item_id}' is malformed: {e}", {"item_id": item_id}) from e


def _comment_text(line: str) -> str:
    text = line[len(COMMENT_PREFIX):]
    return text[1:] if text.startswith(" ") else text


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _str_list(value: Any) -> list[str]:
    if not value:
        return []
    return [str(v) for v in value]


def _attribute_value(value: Any) -> AttributeValue:
    number = coerce_number(value)
    if number is not None:
        return AttributeValue(value=number)
    amount, _, operation = str(value).partition(" ")
    number = coerce_number(amount)
    if number is None:
        raise ValueError(f"attribute value {value!r} is not numeric")
    return AttributeValue(value=number, operation=operation.strip() or None)


def _attributes(value: Any) -> dict[str, dict[str, AttributeValue]]:
    if not value:
        return {}
    attributes: dict[str, dict[str, AttributeValue]] = {}
    for key, entry in value.items():
        if isinstance(entry, Mapping):
            attributes[str(key)] = {str(k): _attribute_value(v) for k, v in entry.items()}
        else:
            attributes.setdefault(UNSLOTTED, {})[str(key)] = _attribute_value(entry)
    return attributes


def _stat(line: str) -> StatLine:
    name, _, amount = line.rpartition(" ")
    number = coerce_number(amount)
    if not name or number is None:
        raise ValueError(f"stat line {line!r} is not 'Name value'")
    return StatLine(name=name, value=number)


def _generation(value: Any) -> GenerationBlock | None:
    if value is None:
        return None
    armor = value.get("Armor") or {}
    return GenerationBlock(
        texture=_optional_str(value.get("Texture")),
        armor_texture=str(armor.get("Texture", "")),
        armor_type=str(armor.get("Type", "TRIMS")),
    )


def _furniture(value: Any) -> FurnitureBlock | None:
    if value is None:
        return None
    hitbox = value.get("Hitbox")
    return FurnitureBlock(
        entity_type=str(value.get("Type", "DISPLAY")),
        placement=str(value.get("Placement", "FLOOR")),
        solid=value.get("IsSolid"),
        lock_rotation=value.get("LockRotation"),
        hitbox=HitBox(height=hitbox.get("Height", 1), width=hitbox.get("Width", 1)) if hitbox else None,
        lights=_str_list(value.get("Lights")),
        barriers=_str_list(value.get("Barriers")),
    )


def _custom_block(value: Any) -> CustomBlockSection | None:
    if value is None:
        return None
    return CustomBlockSection(
        block_type=str(value.get("Type", "NOTEBLOCK")),
        hardness=value.get("Hardness"),
        blast_resistance=value.get("BlastResistance"),
        tools=_str_list(value.get("Tools")),
    )
