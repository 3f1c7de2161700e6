"""
Pytest configuration and fixtures for mythic-converter tests.
"""

import sys
from pathlib import Path

import pytest
import yaml

# Add src directory to Python path to allow importing mythic_converter
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from mythic_converter.registry import MappingRegistry  # noqa: E402

FIXTURES = Path(__file__).parent / "fixtures"


# Configure anyio to only use asyncio (not trio)
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def mapping_config() -> dict:
    """A small mapping configuration covering every section."""
    return {
        "attribute-mappings": {
            "attack-damage": "ATTACK_DAMAGE",
            "attack-speed": "ATTACK_SPEED ADD_SCALAR",
            "max-health": "MAX_HEALTH",
            "movement-speed": "MOVEMENT_SPEED MULTIPLY",
        },
        "stat-mappings": {
            "critical-strike-chance": "CriticalStrikeChance",
            "pve-damage": "PveDamage",
            "defense": "Defense",
            # Also an attribute; the attribute mapping wins
            "attack-damage": "WeaponDamage",
        },
        "slot-mappings": {
            "SWORD": "MainHand",
            "HELMET": "Head",
            "ACCESSORY": "",
            "CONSUMABLE": None,
        },
        "percent-stats": ["critical-strike-chance", "pve-damage"],
    }


@pytest.fixture
def registry(mapping_config) -> MappingRegistry:
    return MappingRegistry.load(mapping_config)


@pytest.fixture
def mmoitems_document() -> dict:
    with open(FIXTURES / "SWORD.yml", encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def itemsadder_document() -> dict:
    with open(FIXTURES / "itemsadder_content.yml", encoding="utf-8") as f:
        return yaml.safe_load(f)
