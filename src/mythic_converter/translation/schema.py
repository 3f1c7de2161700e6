"""
Fixed lookup tables for translating source item fields into MythicCrucible terms.

These tables are part of the translation rules themselves; everything a
server owner is expected to tune lives in the mapping registry instead.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# MMOItems
# ---------------------------------------------------------------------------

DEFAULT_MMOITEMS_MATERIAL = "STONE"

# Ability cast mode -> MythicMobs skill trigger
ABILITY_TRIGGER_MAP: dict[str, str] = {
    "RIGHT_CLICK": "onInteract",
    "LEFT_CLICK": "onAttack",
    "SHIFT_RIGHT_CLICK": "onInteract",
    "SHIFT_LEFT_CLICK": "onAttack",
    "WHEN_HIT": "onDamaged",
    "SNEAK": "onCrouch",
    "TIMER": "onTimer:20",
}
DEFAULT_ABILITY_TRIGGER = "onInteract"
DEFAULT_ABILITY_MODE = "RIGHT_CLICK"
DEFAULT_ABILITY_TYPE = "UNKNOWN"

# MMOItems boolean stat -> MythicCrucible Hide flag
MMOITEMS_HIDE_FLAGS: dict[str, str] = {
    "hide-enchants": "ENCHANTS",
    "hide-potion-effects": "POTION_EFFECTS",
    "hide-dye": "DYE",
    "hide-armor-trim": "ARMOR_TRIM",
}

# MMOItems features with no MythicCrucible equivalent; reported for manual review
MMOITEMS_MANUAL_REVIEW_KEYS: tuple[str, ...] = (
    "soulbound-level",
    "soulbinding-chance",
    "success-rate",
    "gem-sockets",
    "item-level",
    "item-set",
    "item-tier",
    "upgrade",
    "two-handed",
)

MMOITEMS_HEADER_NOTES: tuple[str, ...] = (
    "NOTE: Some MMOItems features have no direct MythicCrucible equivalent.",
    "Look for comments starting with '#' for items needing manual review.",
    "Abilities must be manually converted to MythicMobs Skills.",
    "Gem sockets, soulbound, and item sets need alternative implementations.",
)

# ---------------------------------------------------------------------------
# ItemsAdder
# ---------------------------------------------------------------------------

DEFAULT_ITEMSADDER_MATERIAL = "PAPER"
DEFAULT_MAX_STACK_SIZE = 64

# ItemsAdder attribute_modifiers slot -> MythicCrucible slot
IA_SLOT_MAP: dict[str, str] = {
    "mainhand": "MainHand",
    "offhand": "OffHand",
    "head": "Head",
    "chest": "Chest",
    "legs": "Legs",
    "feet": "Feet",
}

# ItemsAdder attribute name -> vanilla attribute; unknown names are uppercased
IA_ATTRIBUTE_MAP: dict[str, str] = {
    "attackdamage": "ATTACK_DAMAGE",
    "attackspeed": "ATTACK_SPEED",
    "maxhealth": "MAX_HEALTH",
    "movementspeed": "MOVEMENT_SPEED",
    "armor": "ARMOR",
    "armortoughness": "ARMOR_TOUGHNESS",
    "attackknockback": "ATTACK_KNOCKBACK",
    "knockbackresistance": "KNOCKBACK_RESISTANCE",
    "luck": "LUCK",
    "flyingspeed": "FLYING_SPEED",
    "followrange": "FOLLOW_RANGE",
    "maxabsorption": "MAX_ABSORPTION",
    "scale": "SCALE",
    "stepheight": "STEP_HEIGHT",
    "jumpstrength": "JUMP_HEIGHT",
    "gravity": "GRAVITY",
    "safefalldistance": "SAFE_FALL_DISTANCE",
    "falldamagemultiplier": "FALL_DAMAGE_MULTIPLIER",
    "burningtime": "BURNING_TIME",
    "explosionknockbackresistance": "EXPLOSION_KNOCKBACK_RESISTANCE",
    "miningefficiency": "MINING_EFFICIENCY",
    "movementefficiency": "MOVEMENT_EFFICIENCY",
    "oxygenbonus": "OXYGEN",
    "sneakingspeed": "SNEAKING_SPEED",
    "submergedminingspeed": "SUBMERGED_MINING_SPEED",
    "sweepingdamageratio": "SWEEPING_DAMAGE_RATIO",
    "watermovementefficiency": "WATER_MOVEMENT_EFFICIENCY",
    "blockbreakspeed": "BLOCK_BREAK_SPEED",
    "blockinteractionrange": "BLOCK_INTERACTION_RANGE",
    "entityinteractionrange": "ENTITY_INTERACTION_RANGE",
}

# Material name fragment -> slot, checked in order; anything else is MainHand
MATERIAL_SLOT_HINTS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("HELMET", "HEAD", "SKULL"), "Head"),
    (("CHESTPLATE", "ELYTRA"), "Chest"),
    (("LEGGINGS",), "Legs"),
    (("BOOTS",), "Feet"),
    (("SHIELD",), "OffHand"),
)
DEFAULT_MATERIAL_SLOT = "MainHand"

# furniture.entity -> MythicCrucible furniture type; anything else is DISPLAY
FURNITURE_TYPE_MAP: dict[str, str] = {
    "armor_stand": "ARMOR_STAND",
    "armorstand": "ARMOR_STAND",
    "item_frame": "ITEM_FRAME",
    "itemframe": "ITEM_FRAME",
}
DEFAULT_FURNITURE_TYPE = "DISPLAY"
DEFAULT_FURNITURE_PLACEMENT = "FLOOR"

# specific_properties.block.placed_model.type -> MythicCrucible block type
BLOCK_TYPE_MAP: dict[str, str] = {
    "REAL_NOTE": "NOTEBLOCK",
    "REAL": "MUSHROOM",
    "REAL_WIRE": "TRIPWIRE",
    "REAL_TRANSPARENT": "TRIPWIRE",
    "FIRE": "CHORUS",
    "TILE": "NOTEBLOCK",
}
DEFAULT_BLOCK_TYPE = "NOTEBLOCK"

DEFAULT_ARMOR_TYPE = "TRIMS"

# Behaviours with a dedicated handler; every other behaviour is reported as unsupported
HANDLED_BEHAVIOURS = frozenset({"furniture"})

BOW_PULL_SUFFIXES = "_0, _1, _2"
CROSSBOW_PULL_SUFFIXES = "_0, _1, _2, _charged, _firework"

ITEMSADDER_GENERATOR_NOTE = "Generated by MythicConverter"
