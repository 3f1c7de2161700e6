"""
Structural handlers for ItemsAdder items.

ItemsAdder keeps most of an item under nested sections (``resource``,
``behaviours``, ``specific_properties``), so these handlers are larger than
their MMOItems counterparts and produce more advisory notes.
"""

from __future__ import annotations

import logging

from ..models import (
    CustomBlockSection,
    FurnitureBlock,
    GenerationBlock,
    HitBox,
)
from ..records import SourceItemRecord
from ..values import number_or_zero
from . import annotations
from .builder import TargetItemBuilder
from .handlers import ItemHandler, LoreHandler, iter_sections, require_list, require_section
from .schema import (
    BLOCK_TYPE_MAP,
    BOW_PULL_SUFFIXES,
    CROSSBOW_PULL_SUFFIXES,
    DEFAULT_ARMOR_TYPE,
    DEFAULT_BLOCK_TYPE,
    DEFAULT_FURNITURE_PLACEMENT,
    DEFAULT_FURNITURE_TYPE,
    DEFAULT_MATERIAL_SLOT,
    DEFAULT_MAX_STACK_SIZE,
    FURNITURE_TYPE_MAP,
    HANDLED_BEHAVIOURS,
    IA_ATTRIBUTE_MAP,
    IA_SLOT_MAP,
    MATERIAL_SLOT_HINTS,
)

logger = logging.getLogger("mythic-converter")


def map_attribute_name(key: str) -> str:
    return IA_ATTRIBUTE_MAP.get(key.lower(), key.upper())


def map_slot_name(key: str) -> str:
    return IA_SLOT_MAP.get(key.lower(), key)


def infer_slot_from_material(material: str) -> str:
    """Guess the equipment slot of an item from its base material name."""
    upper = material.upper()
    for fragments, slot in MATERIAL_SLOT_HINTS:
        if any(fragment in upper for fragment in fragments):
            return slot
    return DEFAULT_MATERIAL_SLOT


def map_furniture_type(entity: str) -> str:
    return FURNITURE_TYPE_MAP.get(entity.lower(), DEFAULT_FURNITURE_TYPE)


def map_block_type(placed_type: str) -> str:
    return BLOCK_TYPE_MAP.get(placed_type.upper(), DEFAULT_BLOCK_TYPE)


def first_texture(record: SourceItemRecord) -> str:
    resource = record.section("resource")
    if resource is None:
        return ""
    textures = resource.get_list("textures")
    return textures[0] if textures else ""


class DisplayNameHandler(ItemHandler):
    """``name`` (ItemsAdder 4.0.9+) with ``display_name`` as the older fallback."""

    keys = ("name", "display_name")

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        name = record.get_str("name") or record.get_str("display_name") or ""
        if name:
            builder.record.display = name


class ResourceHandler(ItemHandler):
    """resource: model path, custom model data and custom armor generation.

    ``resource.material`` is read by the identity resolver.
    """

    keys = ("resource",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        resource = require_section(record, "resource")
        if resource is None:
            return

        generation = self._custom_armor(resource)

        model_path = resource.get_str("model_path", "")
        if model_path:
            if ":" in model_path or not record.namespace:
                builder.record.item_model = model_path
            else:
                builder.record.item_model = f"{record.namespace}:{model_path}"
            if generation is None:
                builder.record.model = model_path

        if generation is not None:
            model_id = resource.get_int("model_id", resource.get_int("custom_model_data"))
            if model_id > 0:
                builder.record.model = str(model_id)
            builder.record.generation = generation

    @staticmethod
    def _custom_armor(resource: SourceItemRecord) -> GenerationBlock | None:
        armor = resource.section("generate_custom_armor")
        if armor is None or not armor.get_bool("enabled", True):
            return None
        armor_texture = armor.get_str("armor_texture_path", "")
        if not armor_texture:
            return None
        textures = resource.get_list("textures")
        return GenerationBlock(
            texture=textures[0] if textures else None,
            armor_texture=armor_texture,
            armor_type=(armor.get_str("type") or DEFAULT_ARMOR_TYPE).upper(),
        )


class EnchantmentHandler(ItemHandler):
    """``name:level`` strings -> ``NAME:level``."""

    keys = ("enchants",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        for entry in require_list(record, "enchants"):
            parts = entry.split(":")
            name = parts[0].upper().replace(" ", "_")
            if len(parts) > 1:
                builder.add_enchantment(f"{name}:{parts[1].strip()}")
            else:
                builder.add_enchantment(name)


class AttributeModifierHandler(ItemHandler):
    """attribute_modifiers.<slot>.<attribute>: value, zero values included."""

    keys = ("attribute_modifiers",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        modifiers = require_section(record, "attribute_modifiers")
        if modifiers is None:
            return
        for slot_key, slot_section in iter_sections(modifiers):
            slot = map_slot_name(slot_key)
            for attribute, value in slot_section.items():
                builder.set_attribute(map_attribute_name(attribute), number_or_zero(value), slot=slot)


class SlotAttributeModifierHandler(ItemHandler):
    """slot_attribute_modifiers carry no slot; it is inferred from the material."""

    keys = ("slot_attribute_modifiers",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        modifiers = require_section(record, "slot_attribute_modifiers")
        if modifiers is None:
            return
        slot = infer_slot_from_material(builder.material)
        for attribute, value in modifiers.items():
            builder.set_attribute(map_attribute_name(attribute), number_or_zero(value), slot=slot)


class GlintHandler(ItemHandler):
    keys = ("glint",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        if record.contains("glint"):
            builder.set_option("EnchantGlint", record.get_bool("glint"))


class ItemFlagHandler(ItemHandler):
    """Bukkit ItemFlag names -> Hide flags (``HIDE_ENCHANTS`` -> ``ENCHANTS``)."""

    keys = ("item_flags",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        for flag in require_list(record, "item_flags"):
            builder.add_hide(flag.upper().replace("HIDE_", ""))


class DurabilityHandler(ItemHandler):
    keys = ("durability",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        durability = record.section("durability")
        if durability is None:
            return
        max_durability = durability.get_int("max_durability")
        if max_durability > 0:
            builder.annotate(annotations.durability_note("max_durability", max_durability))


class EventsHandler(ItemHandler):
    keys = ("events",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        events = record.section("events")
        if events is None:
            return
        details = []
        for event in events.keys():
            details.append(f"  - {event}")
            actions = events.section(event)
            if actions is not None:
                details.extend(f"    - {action}" for action in actions.keys())
        builder.annotate(annotations.unsupported_feature(
            "EVENTS: This item has ItemsAdder events. Recreate as MythicMobs Skills.",
            field="events",
            value=events.keys(),
            details=details,
        ))


class FurnitureHandler(ItemHandler):
    """behaviours: furniture becomes a Furniture section, the rest is reported."""

    keys = ("behaviours",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        behaviours = require_section(record, "behaviours")
        if behaviours is None:
            return

        furniture = behaviours.section("furniture")
        if furniture is not None:
            builder.record.item_type = "FURNITURE"
            builder.record.furniture = self._furniture(furniture, builder)

        for behaviour in behaviours.keys():
            if behaviour in HANDLED_BEHAVIOURS:
                continue
            builder.annotate(annotations.unsupported_feature(
                f"BEHAVIOUR: {behaviour} - No direct MythicCrucible equivalent.",
                field=f"behaviours.{behaviour}",
                value=behaviours.raw(behaviour),
            ))

    @staticmethod
    def _furniture(section: SourceItemRecord, builder: TargetItemBuilder) -> FurnitureBlock:
        furniture = FurnitureBlock(
            entity_type=map_furniture_type(section.get_str("entity", "item_display")),
            placement=section.get_str("placement", DEFAULT_FURNITURE_PLACEMENT).upper(),
        )
        if section.contains("solid"):
            furniture.solid = section.get_bool("solid", True)
        if section.contains("fixed_rotation"):
            furniture.lock_rotation = section.get_bool("fixed_rotation")

        hitbox = section.section("hitbox")
        if hitbox is not None:
            furniture.hitbox = HitBox(
                height=hitbox.get_number("height", hitbox.get_number("length", 1)),
                width=hitbox.get_number("width", 1),
            )

        light_level = section.get_int("light_level")
        if light_level > 0:
            furniture.lights.append(f"0,0,0 {light_level}")
        furniture.barriers.extend(section.get_list("barriers"))

        if section.is_list("seats") or section.is_section("seats"):
            builder.annotate(annotations.unsupported_feature(
                "SEATS: This furniture has seats. Configure using MythicCrucible FurnitureSkills ~onInteract.",
                field="behaviours.furniture.seats",
                value=section.raw("seats"),
            ))
        if section.get_bool("opposite_direction"):
            builder.annotate(annotations.unsupported_feature(
                "opposite_direction: true - Adjust model rotation in MythicCrucible.",
                field="behaviours.furniture.opposite_direction",
                value=True,
            ))
        if section.contains("gravity"):
            gravity = "true" if section.get_bool("gravity") else "false"
            builder.annotate(annotations.unsupported_feature(
                f"gravity: {gravity} - ArmorStand gravity; configure in MythicCrucible Furniture entity settings.",
                field="behaviours.furniture.gravity",
                value=section.raw("gravity"),
            ))
        if section.get_bool("small"):
            builder.annotate(annotations.unsupported_feature(
                "small: true - Use small armor stand; configure in MythicCrucible Furniture.Small.",
                field="behaviours.furniture.small",
                value=True,
            ))
        if section.is_section("sound"):
            builder.annotate(annotations.unsupported_feature(
                "SOUNDS: Furniture has custom sounds. Configure via FurnitureSkills in MythicCrucible.",
                field="behaviours.furniture.sound",
                value=section.raw("sound"),
            ))
        return furniture


class CustomBlockHandler(ItemHandler):
    """specific_properties.block -> CustomBlock section."""

    keys = ("specific_properties",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        properties = require_section(record, "specific_properties")
        if properties is None:
            return
        block = properties.section("block")
        if block is None:
            return

        if builder.record.item_type is None:
            builder.record.item_type = "BLOCK"

        custom_block = CustomBlockSection()
        if block.is_section("placed_model"):
            placed_type = block.path("placed_model.type")
            custom_block.block_type = map_block_type(str(placed_type or "REAL_NOTE"))
        if block.contains("hardness"):
            custom_block.hardness = block.get_int("hardness")
        if block.contains("blast_resistance"):
            custom_block.blast_resistance = block.get_number("blast_resistance")
        custom_block.tools.extend(tool.upper() for tool in block.get_list("break_tools_whitelist"))
        builder.record.custom_block = custom_block

        self._annotate_block(block, builder)

    @staticmethod
    def _annotate_block(block: SourceItemRecord, builder: TargetItemBuilder) -> None:
        prefix = "specific_properties.block"
        if block.contains("drop_when_mined") and not block.get_bool("drop_when_mined", True):
            builder.annotate(annotations.unsupported_feature(
                "drop_when_mined: false - Configure CustomBlock.Drops to control drops.",
                field=f"{prefix}.drop_when_mined",
                value=False,
            ))
        light_level = block.get_int("light_level")
        if light_level > 0:
            builder.annotate(annotations.unsupported_feature(
                f"light_level: {light_level} - MythicCrucible blocks don't natively emit light. "
                "Use light blocks or furniture overlay.",
                field=f"{prefix}.light_level",
                value=light_level,
            ))
        if block.contains("break_particles"):
            particles = block.get_str("break_particles", "")
            builder.annotate(annotations.unsupported_feature(
                f"break_particles: {particles} - Configure via CustomBlockSkills in MythicCrucible.",
                field=f"{prefix}.break_particles",
                value=particles,
            ))
        if block.is_section("sound"):
            builder.annotate(annotations.unsupported_feature(
                "SOUNDS: Block has custom sounds. Configure via CustomBlockSkills in MythicCrucible.",
                field=f"{prefix}.sound",
                value=block.raw("sound"),
            ))
        if block.get_bool("no_explosion"):
            builder.annotate(annotations.unsupported_feature(
                "no_explosion: true - Set a very high BlastResistance value.",
                field=f"{prefix}.no_explosion",
                value=True,
            ))
        if block.is_list("break_tools_blacklist"):
            tools = block.get_list("break_tools_blacklist")
            builder.annotate(annotations.unsupported_feature(
                f"BREAK TOOLS BLACKLIST: {', '.join(tools)} - No direct MythicCrucible equivalent; "
                "use CustomBlockSkills.",
                field=f"{prefix}.break_tools_blacklist",
                value=tools,
            ))


class EquipmentHandler(ItemHandler):
    keys = ("equipment",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        equipment = record.section("equipment")
        if equipment is None:
            return
        equipment_id = equipment.get_str("id", "")
        if equipment_id:
            builder.annotate(annotations.unsupported_feature(
                f"EQUIPMENT: {equipment_id} - Configure armor model in MythicCrucible Generation section.",
                field="equipment",
                value=equipment_id,
            ))


class BlockedEnchantsHandler(ItemHandler):
    keys = ("blocked_enchants",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        if not record.is_list("blocked_enchants"):
            return
        enchants = record.get_list("blocked_enchants")
        builder.annotate(annotations.unsupported_feature(
            f"BLOCKED ENCHANTS: {', '.join(enchants)} - No direct MythicCrucible equivalent.",
            field="blocked_enchants",
            value=enchants,
        ))


class MaxStackSizeHandler(ItemHandler):
    keys = ("max_stack_size",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        if not record.contains("max_stack_size"):
            return
        size = record.get_int("max_stack_size", DEFAULT_MAX_STACK_SIZE)
        if size != DEFAULT_MAX_STACK_SIZE:
            builder.annotate(annotations.unsupported_feature(
                f"max_stack_size: {size}",
                field="max_stack_size",
                value=size,
            ))


class BowTextureNoteHandler(ItemHandler):
    """Bows and crossbows need their pull-state textures recreated."""

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        texture = first_texture(record)
        if builder.material == "BOW":
            details = ["  MythicCrucible handles bow pull states via resource pack Generation."]
            if texture:
                details.append(f"  Base texture: {texture}")
                details.append(f"  Expected pull textures: {texture}{BOW_PULL_SUFFIXES}")
            builder.annotate(annotations.note(
                f"BOW: Pull textures use suffixes {BOW_PULL_SUFFIXES} in ItemsAdder.",
                field="resource.textures",
                details=details,
            ))
        elif builder.material == "CROSSBOW":
            details = ["  MythicCrucible handles crossbow states via resource pack Generation."]
            if texture:
                details.append(f"  Base texture: {texture}")
            builder.annotate(annotations.note(
                f"CROSSBOW: Pull textures use suffixes {CROSSBOW_PULL_SUFFIXES} in ItemsAdder.",
                field="resource.textures",
                details=details,
            ))


class SourceReferenceHandler(ItemHandler):
    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        if record.namespace:
            builder.annotate(annotations.source_reference(record.namespace, record.item_id))


def itemsadder_handlers() -> list[ItemHandler]:
    """Handlers for an ItemsAdder item, in translation order."""
    return [
        DisplayNameHandler(),
        LoreHandler(),
        ResourceHandler(),
        EnchantmentHandler(),
        AttributeModifierHandler(),
        SlotAttributeModifierHandler(),
        GlintHandler(),
        ItemFlagHandler(),
        DurabilityHandler(),
        EventsHandler(),
        FurnitureHandler(),
        CustomBlockHandler(),
        EquipmentHandler(),
        BlockedEnchantsHandler(),
        MaxStackSizeHandler(),
        BowTextureNoteHandler(),
        SourceReferenceHandler(),
    ]
