"""
Render translated items as MythicCrucible YAML text.

Output is written line by line rather than through ``yaml.dump`` so that the
section order, the list style and the trailing advisory comments are exactly
what MythicCrucible users expect to read. PyYAML is still the judge of when a
plain scalar needs quoting.
"""

from __future__ import annotations

from typing import Any

import yaml

from ..models import (
    UNSLOTTED,
    Annotation,
    AttributeValue,
    ItemResult,
    TargetItemRecord,
)
from ..values import format_number

INDENT = "  "


def quote(text: str) -> str:
    """Quote a string so it loads back unchanged.

    Printable single-line text is single-quoted with embedded quotes doubled.
    Line breaks and control characters need a double-quoted scalar with
    escapes; a single-quoted one would fold breaks into spaces.
    """
    if text.isprintable():
        return "'" + text.replace("'", "''") + "'"
    dumped = yaml.safe_dump(text, default_style='"', width=float("inf"), allow_unicode=True)
    return dumped.removesuffix("\n...\n").rstrip("\n")


def needs_quoting(text: str) -> bool:
    """Check whether a plain scalar would be read back as something else."""
    if not text or text != text.strip():
        return True
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError:
        return True
    return not isinstance(loaded, str) or loaded != text


def render_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if value is None:
        return "null"
    text = str(value)
    return quote(text) if needs_quoting(text) else text


def render_model(model: str) -> str:
    # Numeric custom model data is written as a bare number
    return model if model.isdigit() else render_scalar(model)


class OutputAssembler:
    """Deterministic text rendering for items and whole documents."""

    def render_item(self, target: TargetItemRecord, annotations: list[Annotation] | None = None) -> str:
        """Render one item block, ending with a blank line."""
        lines: list[str] = [f"{render_scalar(target.item_id)}:"]
        field = _FieldWriter(lines, INDENT)

        field.scalar("Material", target.material)
        if target.item_type:
            field.scalar("Type", target.item_type)
        if target.display is not None:
            field.raw("Display", quote(target.display))
        if target.item_model:
            field.scalar("ItemModel", target.item_model)
        if target.model:
            field.raw("Model", render_model(target.model))
        if target.tooltip_style:
            field.scalar("TooltipStyle", target.tooltip_style)
        if target.equip_level is not None:
            field.scalar("EquipLevel", target.equip_level)
        if target.lore:
            field.sequence("Lore", [quote(line) for line in target.lore])
        if target.enchantments:
            field.sequence("Enchantments", [render_scalar(e) for e in target.enchantments])
        if any(target.attributes.values()):
            self._render_attributes(field, target.attributes)
        if target.stats:
            field.sequence("Stats", [render_scalar(stat.render()) for stat in target.stats])
        if target.hide:
            field.sequence("Hide", [render_scalar(flag) for flag in target.hide])
        if target.options:
            field.header("Options")
            options = field.nested()
            for key, value in target.options.items():
                options.scalar(key, value)

        if target.generation is not None:
            field.header("Generation")
            generation = field.nested()
            if target.generation.texture:
                generation.scalar("Texture", target.generation.texture)
            generation.header("Armor")
            armor = generation.nested()
            armor.scalar("Texture", target.generation.armor_texture)
            armor.scalar("Type", target.generation.armor_type)

        if target.furniture is not None:
            furniture = target.furniture
            field.header("Furniture")
            section = field.nested()
            section.scalar("Type", furniture.entity_type)
            section.scalar("Placement", furniture.placement)
            if furniture.solid is not None:
                section.scalar("IsSolid", furniture.solid)
            if furniture.lock_rotation is not None:
                section.scalar("LockRotation", furniture.lock_rotation)
            if furniture.hitbox is not None:
                section.header("Hitbox")
                hitbox = section.nested()
                hitbox.scalar("Height", furniture.hitbox.height)
                hitbox.scalar("Width", furniture.hitbox.width)
            if furniture.lights:
                section.sequence("Lights", [render_scalar(light) for light in furniture.lights])
            if furniture.barriers:
                section.sequence("Barriers", [render_scalar(b) for b in furniture.barriers])

        if target.custom_block is not None:
            block = target.custom_block
            field.header("CustomBlock")
            section = field.nested()
            section.scalar("Type", block.block_type)
            if block.hardness is not None:
                section.scalar("Hardness", block.hardness)
            if block.blast_resistance is not None:
                section.scalar("BlastResistance", block.blast_resistance)
            if block.tools:
                section.sequence("Tools", [render_scalar(tool) for tool in block.tools])

        for annotation in annotations or []:
            lines.extend(self.render_comment(line) for line in annotation.comment_lines())

        return "\n".join(lines) + "\n\n"

    def render_result(self, result: ItemResult) -> str:
        """Render a translated item, or the failure comment for a failed one."""
        if result.ok:
            return self.render_item(result.target, result.annotations)
        lines = [line for a in result.annotations for line in a.comment_lines()]
        if not lines:
            lines = [f"FAILED TO CONVERT: {result.source_id} - {result.error}"]
        return "".join(f"# {line}\n" for line in lines) + "\n"

    def render_document(self, header: list[str], results: list[ItemResult]) -> str:
        """Render a header comment block followed by every result in order."""
        parts = []
        if header:
            parts.append("".join(f"# {line}\n" for line in header) + "\n")
        parts.extend(self.render_result(result) for result in results)
        return "".join(parts)

    @staticmethod
    def render_comment(line: str) -> str:
        return f"{INDENT}# {line}".rstrip()

    @staticmethod
    def _render_attributes(field: _FieldWriter, attributes: dict[str, dict[str, AttributeValue]]) -> None:
        field.header("Attributes")
        section = field.nested()
        # Slot-less attributes form a flat map ahead of any slot maps
        for name, value in attributes.get(UNSLOTTED, {}).items():
            section.raw(name, value.render())
        for slot, slot_attributes in attributes.items():
            if slot == UNSLOTTED or not slot_attributes:
                continue
            section.header(slot)
            slot_section = section.nested()
            for name, value in slot_attributes.items():
                slot_section.raw(name, value.render())


class _FieldWriter:
    """Appends ``key: value`` lines at a fixed indent."""

    def __init__(self, lines: list[str], indent: str):
        self.lines = lines
        self.indent = indent

    def nested(self) -> _FieldWriter:
        return _FieldWriter(self.lines, self.indent + INDENT)

    def header(self, key: str) -> None:
        self.lines.append(f"{self.indent}{key}:")

    def raw(self, key: str, rendered: str) -> None:
        self.lines.append(f"{self.indent}{key}: {rendered}")

    def scalar(self, key: str, value: Any) -> None:
        self.raw(key, render_scalar(value))

    def sequence(self, key: str, rendered_items: list[str]) -> None:
        self.header(key)
        self.lines.extend(f"{self.indent}- {item}" for item in rendered_items)
