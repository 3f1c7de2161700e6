"""
Structural handlers for MMOItems items.

Each handler mirrors one MMOItems stat family. Keys are matched exactly as
MMOItems writes them (dash-case); variants fall through to the classifier.
"""

from __future__ import annotations

import logging

from ..records import SourceItemRecord
from ..values import number_or_zero
from . import annotations
from .builder import TargetItemBuilder
from .handlers import (
    ItemHandler,
    LoreHandler,
    is_number_like,
    iter_sections,
    require_section,
)
from .schema import (
    ABILITY_TRIGGER_MAP,
    DEFAULT_ABILITY_MODE,
    DEFAULT_ABILITY_TRIGGER,
    DEFAULT_ABILITY_TYPE,
    MMOITEMS_HIDE_FLAGS,
    MMOITEMS_MANUAL_REVIEW_KEYS,
)

logger = logging.getLogger("mythic-converter")


def map_ability_trigger(mode: str | None) -> str:
    """Map an MMOItems ability cast mode to a MythicMobs skill trigger."""
    if not mode:
        return DEFAULT_ABILITY_TRIGGER
    return ABILITY_TRIGGER_MAP.get(mode.upper(), DEFAULT_ABILITY_TRIGGER)


class DisplayNameHandler(ItemHandler):
    keys = ("name",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        name = record.get_str("name")
        if name is not None:
            builder.record.display = name


class ModelHandler(ItemHandler):
    """custom-model-data -> Model; namespaced model/item-model -> ItemModel."""

    keys = ("custom-model-data", "model", "item-model")

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        custom_model_data = record.get_int("custom-model-data")
        if custom_model_data > 0:
            builder.record.model = str(custom_model_data)

        item_model = record.get_str("model") or record.get_str("item-model") or ""
        if not item_model:
            return
        if is_number_like(item_model):
            # Legacy numeric model ids are custom model data
            if builder.record.model is None and int(item_model) > 0:
                builder.record.model = str(int(item_model))
            return
        builder.record.item_model = item_model


class TooltipStyleHandler(ItemHandler):
    keys = ("tooltip-style",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        style = record.get_str("tooltip-style", "")
        if style:
            builder.record.tooltip_style = style


class EnchantmentHandler(ItemHandler):
    keys = ("enchants",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        enchants = require_section(record, "enchants")
        if enchants is None:
            return
        for key, value in enchants.items():
            level = int(number_or_zero(value))
            name = key.upper()
            builder.add_enchantment(f"{name}:{level}" if level > 0 else name)


class UnbreakableHandler(ItemHandler):
    keys = ("unbreakable",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        if record.get_bool("unbreakable"):
            builder.set_option("Unbreakable", True)


class DyeColorHandler(ItemHandler):
    keys = ("dye-color",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        dye = record.section("dye-color")
        if dye is not None:
            red, green, blue = (dye.get_int(c) for c in ("red", "green", "blue"))
            builder.set_option("Color", f"{red},{green},{blue}")
        elif record.is_string("dye-color"):
            builder.set_option("Color", record.get_str("dye-color"))


class HideFlagHandler(ItemHandler):
    keys = tuple(MMOITEMS_HIDE_FLAGS)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        for key, flag in MMOITEMS_HIDE_FLAGS.items():
            if record.get_bool(key):
                builder.add_hide(flag)


class SkullTextureHandler(ItemHandler):
    keys = ("skull-texture",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        skull = record.section("skull-texture")
        if skull is None:
            return
        texture = skull.get_str("value") or skull.get_str("url") or ""
        if texture:
            builder.set_option("SkinTexture", texture)


class DurabilityHandler(ItemHandler):
    keys = ("max-durability",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        durability = record.get_int("max-durability")
        if durability > 0:
            builder.annotate(annotations.durability_note("max-durability", durability))


class RequiredLevelHandler(ItemHandler):
    keys = ("required-level",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        level = record.get_int("required-level")
        if level > 0:
            builder.record.equip_level = level


class AbilityHandler(ItemHandler):
    """Abilities become skill suggestions; MythicMobs skills are written by hand."""

    keys = ("ability",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        abilities = require_section(record, "ability")
        if abilities is None:
            return

        builder.annotate(annotations.note(
            "--- Abilities (need manual conversion to MythicMobs Skills) ---",
            field="ability",
        ))
        for name, ability in iter_sections(abilities):
            ability_type = ability.get_str("type", DEFAULT_ABILITY_TYPE)
            mode = ability.get_str("mode", DEFAULT_ABILITY_MODE)
            modifiers = [(k, v) for k, v in ability.items() if k not in ("type", "mode")]
            builder.annotate(annotations.ability(
                name, ability_type, mode, map_ability_trigger(mode), modifiers,
            ))


class PermanentEffectHandler(ItemHandler):
    keys = ("perm-effects",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        effects = require_section(record, "perm-effects")
        if effects is None:
            return

        builder.annotate(annotations.note(
            "--- Permanent Effects (use MythicMobs Skills ~onEquip) ---",
            field="perm-effects",
        ))
        for effect, value in effects.items():
            effect_section = effects.section(effect)
            if effect_section is not None:
                amplifier = effect_section.get_int("amplifier")
            else:
                # Short form: EFFECT: amplifier
                amplifier = int(number_or_zero(value))
            builder.annotate(annotations.permanent_effect(effect, amplifier))


class ElementHandler(ItemHandler):
    """element.<element>.<stat> -> ``ELEMENT_STAT value`` stat lines."""

    keys = ("element",)

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        elements = require_section(record, "element")
        if elements is None:
            return
        for element, element_stats in iter_sections(elements):
            for stat, value in element_stats.items():
                number = number_or_zero(value)
                if number != 0:
                    builder.add_stat(f"{element.upper()}_{stat.upper()}", number)


class ManualReviewHandler(ItemHandler):
    """MMOItems-only features that need an alternative implementation."""

    keys = MMOITEMS_MANUAL_REVIEW_KEYS

    def apply(self, record: SourceItemRecord, builder: TargetItemBuilder) -> None:
        for key in self.keys:
            if record.contains(key):
                builder.annotate(annotations.manual_review(key, record.raw(key)))


def mmoitems_handlers() -> list[ItemHandler]:
    """Handlers for an MMOItems item, in translation order."""
    return [
        DisplayNameHandler(),
        LoreHandler(),
        ModelHandler(),
        TooltipStyleHandler(),
        EnchantmentHandler(),
        UnbreakableHandler(),
        DyeColorHandler(),
        HideFlagHandler(),
        SkullTextureHandler(),
        DurabilityHandler(),
        RequiredLevelHandler(),
        AbilityHandler(),
        PermanentEffectHandler(),
        ElementHandler(),
        ManualReviewHandler(),
    ]
