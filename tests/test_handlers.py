"""Tests for the structural handlers of both source schemas."""

import pytest

from mythic_converter.exceptions import ItemTranslationError
from mythic_converter.models import AnnotationCategory
from mythic_converter.records import SourceItemRecord
from mythic_converter.translation import itemsadder_handlers as ia
from mythic_converter.translation import mmoitems_handlers as mmo
from mythic_converter.translation.builder import TargetItemBuilder
from mythic_converter.translation.handlers import require_list, require_section


def record(namespace="", **data):
    return SourceItemRecord(item_id="test_item", data=data, namespace=namespace)


@pytest.fixture
def builder():
    return TargetItemBuilder("TEST", "DIAMOND_SWORD", "MainHand")


class TestSectionHelpers:
    """Test structural access that fails the item."""

    def test_require_section(self):
        assert require_section(record(), "enchants") is None
        assert require_section(record(enchants={"a": 1}), "enchants").raw("a") == 1

        with pytest.raises(ItemTranslationError) as exc_info:
            require_section(record(enchants="sharpness"), "enchants")
        assert exc_info.value.field == "enchants"
        assert str(exc_info.value) == "'enchants' must be a section, got str"

    def test_require_list(self):
        assert require_list(record(lore="single"), "lore") == ["single"]
        assert require_list(record(lore=["a", "b"]), "lore") == ["a", "b"]
        with pytest.raises(ItemTranslationError):
            require_list(record(lore={"a": 1}), "lore")


class TestMMOItemsHandlers:
    """Test MMOItems stat families."""

    def test_model_prefers_custom_model_data(self, builder):
        mmo.ModelHandler().apply(record(**{"custom-model-data": 12, "model": "5"}), builder)
        assert builder.record.model == "12"
        assert builder.record.item_model is None

    def test_numeric_model_is_custom_model_data(self, builder):
        mmo.ModelHandler().apply(record(model=7), builder)
        assert builder.record.model == "7"

    def test_namespaced_model(self, builder):
        mmo.ModelHandler().apply(record(**{"item-model": "pack:blade"}), builder)
        assert builder.record.item_model == "pack:blade"
        assert builder.record.model is None

    def test_enchantments(self, builder):
        mmo.EnchantmentHandler().apply(record(enchants={"sharpness": 5, "mending": 0, "luck": "2"}), builder)
        assert builder.record.enchantments == ["SHARPNESS:5", "MENDING", "LUCK:2"]

    def test_dye_color_forms(self, builder):
        mmo.DyeColorHandler().apply(record(**{"dye-color": {"red": 255, "green": 0}}), builder)
        assert builder.record.options == {"Color": "255,0,0"}

        other = TargetItemBuilder("TEST", "LEATHER_HELMET", "Head")
        mmo.DyeColorHandler().apply(record(**{"dye-color": "10,10,10"}), other)
        assert other.record.options == {"Color": "10,10,10"}

    def test_hide_flags(self, builder):
        mmo.HideFlagHandler().apply(record(**{"hide-enchants": True, "hide-dye": True, "hide-armor-trim": False}), builder)
        assert builder.record.hide == ["ENCHANTS", "DYE"]

    def test_skull_texture(self, builder):
        mmo.SkullTextureHandler().apply(record(**{"skull-texture": {"value": "abc123"}}), builder)
        assert builder.record.options == {"SkinTexture": "abc123"}

    def test_required_level(self, builder):
        mmo.RequiredLevelHandler().apply(record(**{"required-level": 0}), builder)
        assert builder.record.equip_level is None
        mmo.RequiredLevelHandler().apply(record(**{"required-level": 20}), builder)
        assert builder.record.equip_level == 20

    @pytest.mark.parametrize("mode,trigger", [
        ("RIGHT_CLICK", "onInteract"),
        ("left_click", "onAttack"),
        ("SNEAK", "onCrouch"),
        ("TIMER", "onTimer:20"),
        ("SOMETHING_ELSE", "onInteract"),
        (None, "onInteract"),
    ])
    def test_ability_trigger(self, mode, trigger):
        assert mmo.map_ability_trigger(mode) == trigger

    def test_abilities(self, builder):
        mmo.AbilityHandler().apply(record(ability={
            "ability1": {"type": "FIREBOLT", "mode": "LEFT_CLICK", "damage": 6},
            "ability2": {"cooldown": 3},
        }), builder)

        messages = [a.message for a in builder.annotations]
        assert messages == [
            "--- Abilities (need manual conversion to MythicMobs Skills) ---",
            "Ability 'ability1': type=FIREBOLT, trigger=LEFT_CLICK -> Skills: skill{FIREBOLT} ~onAttack",
            "Ability 'ability2': type=UNKNOWN, trigger=RIGHT_CLICK -> Skills: skill{UNKNOWN} ~onInteract",
        ]
        assert builder.annotations[1].category is AnnotationCategory.ABILITY
        assert builder.annotations[1].details == ["  damage: 6"]

    def test_permanent_effects(self, builder):
        mmo.PermanentEffectHandler().apply(record(**{"perm-effects": {
            "SPEED": {"amplifier": 2},
            "NIGHT_VISION": 1,
        }}), builder)

        assert [a.message for a in builder.annotations[1:]] == [
            "perm-effect: SPEED amplifier 2",
            "perm-effect: NIGHT_VISION amplifier 1",
        ]

    def test_elements(self, builder):
        mmo.ElementHandler().apply(record(element={
            "water": {"damage": 4, "defense": 0},
            "earth": {"defense": "2.5"},
        }), builder)

        assert [s.render() for s in builder.record.stats] == ["WATER_DAMAGE 4", "EARTH_DEFENSE 2.5"]

    def test_manual_review(self, builder):
        mmo.ManualReviewHandler().apply(record(**{"two-handed": True, "item-set": "dragon"}), builder)

        assert [a.message for a in builder.annotations] == [
            "item-set: dragon (MMOItems-specific, needs manual conversion)",
            "two-handed: true (MMOItems-specific, needs manual conversion)",
        ]
        assert {a.category for a in builder.annotations} == {AnnotationCategory.MANUAL_REVIEW}


class TestItemsAdderHandlers:
    """Test ItemsAdder structural sections."""

    @pytest.mark.parametrize("material,slot", [
        ("DIAMOND_HELMET", "Head"),
        ("PLAYER_HEAD", "Head"),
        ("ELYTRA", "Chest"),
        ("IRON_LEGGINGS", "Legs"),
        ("GOLDEN_BOOTS", "Feet"),
        ("SHIELD", "OffHand"),
        ("PAPER", "MainHand"),
    ])
    def test_infer_slot(self, material, slot):
        assert ia.infer_slot_from_material(material) == slot

    def test_attribute_and_slot_names(self):
        assert ia.map_attribute_name("attackDamage") == "ATTACK_DAMAGE"
        assert ia.map_attribute_name("jumpStrength") == "JUMP_HEIGHT"
        assert ia.map_attribute_name("customThing") == "CUSTOMTHING"
        assert ia.map_slot_name("offhand") == "OffHand"
        assert ia.map_slot_name("body") == "body"

    def test_display_name_fallback(self, builder):
        ia.DisplayNameHandler().apply(record(display_name="Old Style"), builder)
        assert builder.record.display == "Old Style"

    def test_resource_model_path(self, builder):
        ia.ResourceHandler().apply(record(namespace="pack", resource={"model_path": "item/blade"}), builder)
        assert builder.record.item_model == "pack:item/blade"
        assert builder.record.model == "item/blade"

    def test_resource_model_path_already_namespaced(self, builder):
        ia.ResourceHandler().apply(record(namespace="pack", resource={"model_path": "other:item/blade"}), builder)
        assert builder.record.item_model == "other:item/blade"

    def test_custom_armor(self):
        builder = TargetItemBuilder("HELM", "LEATHER_HELMET", "Head")
        ia.ResourceHandler().apply(record(namespace="pack", resource={
            "model_path": "item/helm",
            "custom_model_data": 9,
            "textures": ["item/helm"],
            "generate_custom_armor": {"armor_texture_path": "armor/helm", "type": "component"},
        }), builder)

        assert builder.record.model == "9"
        assert builder.record.item_model == "pack:item/helm"
        assert builder.record.generation.texture == "item/helm"
        assert builder.record.generation.armor_texture == "armor/helm"
        assert builder.record.generation.armor_type == "COMPONENT"

    def test_disabled_custom_armor_is_ignored(self, builder):
        ia.ResourceHandler().apply(record(resource={
            "generate_custom_armor": {"enabled": False, "armor_texture_path": "armor/helm"},
        }), builder)
        assert builder.record.generation is None

    def test_enchantments(self, builder):
        ia.EnchantmentHandler().apply(record(enchants=["sharpness:3", "fire aspect: 2", "mending"]), builder)
        assert builder.record.enchantments == ["SHARPNESS:3", "FIRE_ASPECT:2", "MENDING"]

    def test_attribute_modifiers_keep_zero(self, builder):
        ia.AttributeModifierHandler().apply(record(attribute_modifiers={
            "offhand": {"armor": 0, "luck": 1},
        }), builder)

        attributes = builder.record.attributes["OffHand"]
        assert attributes["ARMOR"].value == 0
        assert attributes["LUCK"].value == 1

    def test_slot_attribute_modifiers_use_material(self):
        builder = TargetItemBuilder("BOOTS", "IRON_BOOTS", "Feet")
        ia.SlotAttributeModifierHandler().apply(record(slot_attribute_modifiers={"movementSpeed": 0.1}), builder)
        assert builder.record.attributes["Feet"]["MOVEMENT_SPEED"].value == 0.1

    def test_item_flags(self, builder):
        ia.ItemFlagHandler().apply(record(item_flags=["HIDE_ENCHANTS", "hide_dye", "HIDE_ENCHANTS"]), builder)
        assert builder.record.hide == ["ENCHANTS", "DYE"]

    def test_glint(self, builder):
        ia.GlintHandler().apply(record(glint=False), builder)
        assert builder.record.options == {"EnchantGlint": False}

    def test_events(self, builder):
        ia.EventsHandler().apply(record(events={"attack": {"entity": {"damage": 1}}, "wear": None}), builder)

        (annotation,) = builder.annotations
        assert annotation.category is AnnotationCategory.UNSUPPORTED_FEATURE
        assert annotation.details == ["  - attack", "    - entity", "  - wear"]

    def test_furniture_defaults(self):
        builder = TargetItemBuilder("CHAIR", "PAPER", "MainHand")
        ia.FurnitureHandler().apply(record(behaviours={"furniture": {"gravity": False}}), builder)

        furniture = builder.record.furniture
        assert builder.record.item_type == "FURNITURE"
        assert furniture.entity_type == "DISPLAY"
        assert furniture.placement == "FLOOR"
        assert furniture.solid is None
        assert [a.message for a in builder.annotations] == [
            "gravity: false - ArmorStand gravity; configure in MythicCrucible Furniture entity settings.",
        ]

    def test_other_behaviours_annotated(self, builder):
        ia.FurnitureHandler().apply(record(behaviours={"vehicle": {"speed": 1}, "music_disc": True}), builder)

        assert builder.record.furniture is None
        assert [a.field for a in builder.annotations] == ["behaviours.vehicle", "behaviours.music_disc"]

    def test_custom_block(self):
        builder = TargetItemBuilder("ORE", "PAPER", "MainHand")
        ia.CustomBlockHandler().apply(record(specific_properties={"block": {
            "placed_model": {"type": "REAL_WIRE"},
            "light_level": 7,
            "break_tools_blacklist": ["wooden_pickaxe"],
        }}), builder)

        assert builder.record.item_type == "BLOCK"
        assert builder.record.custom_block.block_type == "TRIPWIRE"
        assert [a.field for a in builder.annotations] == [
            "specific_properties.block.light_level",
            "specific_properties.block.break_tools_blacklist",
        ]

    def test_custom_block_keeps_furniture_type(self):
        builder = TargetItemBuilder("LAMP", "PAPER", "MainHand")
        builder.record.item_type = "FURNITURE"
        ia.CustomBlockHandler().apply(record(specific_properties={"block": {}}), builder)

        assert builder.record.item_type == "FURNITURE"
        assert builder.record.custom_block.block_type == "NOTEBLOCK"

    def test_max_stack_size_default_is_silent(self, builder):
        ia.MaxStackSizeHandler().apply(record(max_stack_size=64), builder)
        assert builder.annotations == []

    def test_crossbow_note(self):
        builder = TargetItemBuilder("XBOW", "CROSSBOW", "MainHand")
        ia.BowTextureNoteHandler().apply(record(resource={"textures": ["item/xbow"]}), builder)

        (annotation,) = builder.annotations
        assert annotation.message == "CROSSBOW: Pull textures use suffixes _0, _1, _2, _charged, _firework in ItemsAdder."
        assert annotation.details[-1] == "  Base texture: item/xbow"

    def test_source_reference_needs_namespace(self, builder):
        ia.SourceReferenceHandler().apply(record(), builder)
        assert builder.annotations == []
        ia.SourceReferenceHandler().apply(record(namespace="pack"), builder)
        assert builder.annotations[0].message == "Source: pack:test_item"
