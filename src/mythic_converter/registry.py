"""
MappingRegistry - the lookup tables that drive stat translation.

A registry is built wholesale from a configuration document and never
mutated afterwards. Reloading means building a new registry and publishing
it through ``ActiveRegistry``, so translations already running keep the
snapshot they started with.

Configuration format::

    default-slot: MainHand
    attribute-mappings:
      attack-damage: ATTACK_DAMAGE
      attack-speed: ATTACK_SPEED ADD_SCALAR
    stat-mappings:
      critical-strike-chance: CriticalStrikeChance
    slot-mappings:
      SWORD: MainHand
      CONSUMABLE: ""
    percent-stats:
      - critical-strike-chance
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from threading import RLock
from types import MappingProxyType
from typing import Any, Callable

import yaml

from .exceptions import RegistryLoadError
from .values import normalize_key

logger = logging.getLogger("mythic-converter")

DEFAULT_SLOT = "MainHand"
DEFAULT_MAPPINGS_RESOURCE = "default_mappings.yml"

ATTRIBUTE_SECTION = "attribute-mappings"
STAT_SECTION = "stat-mappings"
SLOT_SECTION = "slot-mappings"
PERCENT_SECTION = "percent-stats"


def _empty() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class MappingRegistry:
    """Immutable mapping tables for one load of the configuration.

    Stat and attribute keys are stored normalized (lowercase, ``_`` folded to
    ``-``); type keys are stored uppercase. A key present in both the
    attribute and stat tables resolves to the attribute: ``stat_for`` never
    returns a target for it.
    """

    attributes: Mapping[str, str] = field(default_factory=_empty)
    stats: Mapping[str, str] = field(default_factory=_empty)
    slots: Mapping[str, str] = field(default_factory=_empty)
    percent_stats: frozenset[str] = frozenset()
    default_slot: str = DEFAULT_SLOT

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, config: Mapping[str, Any] | None) -> MappingRegistry:
        """Build a registry from a parsed configuration document.

        Never raises: a missing or malformed section loads as an empty table.
        """
        if not isinstance(config, Mapping):
            if config is not None:
                logger.warning(
                    f"Mapping configuration must be a mapping, got {type(config).__name__}; "
                    "loading empty registry"
                )
            config = {}

        attributes = _load_target_section(config, ATTRIBUTE_SECTION)
        stats = _load_target_section(config, STAT_SECTION)
        slots = _load_slot_section(config, SLOT_SECTION)
        percent = _load_percent_list(config, PERCENT_SECTION)

        default_slot = config.get("default-slot", DEFAULT_SLOT)
        if not isinstance(default_slot, str):
            logger.warning(f"Ignoring non-string default-slot {default_slot!r}")
            default_slot = DEFAULT_SLOT

        registry = cls(
            attributes=MappingProxyType(attributes),
            stats=MappingProxyType(stats),
            slots=MappingProxyType(slots),
            percent_stats=frozenset(percent),
            default_slot=default_slot,
        )

        if registry.conflicts:
            logger.warning(
                "Keys mapped as both attribute and stat (attribute wins): "
                + ", ".join(registry.conflicts)
            )

        logger.info(
            f"Loaded mappings: {len(attributes)} attributes, {len(stats)} stats, "
            f"{len(slots)} slot mappings, {len(percent)} percent stats"
        )
        return registry

    @classmethod
    def from_yaml(cls, path: Path | str) -> MappingRegistry:
        """Load a registry from a YAML configuration file.

        Raises:
            RegistryLoadError: If the file cannot be read or is not valid YAML.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise RegistryLoadError(f"Cannot read mapping file: {e}", {"path": str(path)}) from e
        return cls.from_yaml_string(text, origin=str(path))

    @classmethod
    def from_yaml_string(cls, text: str, origin: str = "<string>") -> MappingRegistry:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise RegistryLoadError(f"Invalid YAML in mapping file: {e}", {"path": origin}) from e
        return cls.load(data)

    @classmethod
    def default(cls) -> MappingRegistry:
        """Load the mappings shipped with the package."""
        text = (
            resources.files("mythic_converter")
            .joinpath("data")
            .joinpath(DEFAULT_MAPPINGS_RESOURCE)
            .read_text(encoding="utf-8")
        )
        return cls.from_yaml_string(text, origin=DEFAULT_MAPPINGS_RESOURCE)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def conflicts(self) -> list[str]:
        """Keys present in both the attribute and stat tables."""
        return sorted(set(self.attributes) & set(self.stats))

    def attribute_for(self, key: str) -> str | None:
        return self.attributes.get(normalize_key(key))

    def stat_for(self, key: str) -> str | None:
        normalized = normalize_key(key)
        if normalized in self.attributes:
            return None
        return self.stats.get(normalized)

    def is_percent(self, key: str) -> bool:
        return normalize_key(key) in self.percent_stats

    def slot_for(self, type_name: str) -> str:
        """Return the equipment slot for a source item type.

        Unmapped types get the default slot; types mapped to an empty value
        return "" (no slot).
        """
        return self.slots.get(str(type_name).strip().upper(), self.default_slot)


def _load_target_section(config: Mapping[str, Any], name: str) -> dict[str, str]:
    """Load a key -> target section, dropping entries with empty targets."""
    section = config.get(name)
    if section is None:
        logger.warning(f"Mapping section '{name}' is missing; loading it empty")
        return {}
    if not isinstance(section, Mapping):
        logger.warning(f"Mapping section '{name}' is not a mapping; loading it empty")
        return {}

    table: dict[str, str] = {}
    for key, value in section.items():
        if value is None or isinstance(value, (Mapping, list)):
            continue
        target = str(value).strip()
        if target:
            table[normalize_key(key)] = target
    return table


def _load_slot_section(config: Mapping[str, Any], name: str) -> dict[str, str]:
    """Load type -> slot mappings; empty or null slots mean "no slot"."""
    section = config.get(name)
    if section is None:
        logger.warning(f"Mapping section '{name}' is missing; loading it empty")
        return {}
    if not isinstance(section, Mapping):
        logger.warning(f"Mapping section '{name}' is not a mapping; loading it empty")
        return {}

    table: dict[str, str] = {}
    for key, value in section.items():
        if isinstance(value, (Mapping, list)):
            continue
        table[str(key).strip().upper()] = "" if value is None else str(value).strip()
    return table


def _load_percent_list(config: Mapping[str, Any], name: str) -> set[str]:
    section = config.get(name)
    if section is None:
        return set()
    if not isinstance(section, list):
        logger.warning(f"Mapping section '{name}' is not a list; loading it empty")
        return set()
    return {normalize_key(key) for key in section if key is not None}


class ActiveRegistry:
    """Holds the currently published registry.

    Readers take ``current`` once per translation (a single reference read);
    reloads build the next registry first and publish it in one assignment.
    """

    def __init__(self, registry: MappingRegistry | None = None):
        self._registry = registry or MappingRegistry()
        self._lock = RLock()
        self._generation = 0

    @property
    def current(self) -> MappingRegistry:
        return self._registry

    @property
    def generation(self) -> int:
        """Number of publishes since construction."""
        return self._generation

    def publish(self, registry: MappingRegistry) -> None:
        with self._lock:
            self._registry = registry
            self._generation += 1

    def reload(self, loader: Callable[[], MappingRegistry]) -> MappingRegistry:
        """Build a new registry with ``loader`` and publish it.

        If the loader raises, the previously published registry stays active.
        """
        with self._lock:
            registry = loader()
            self.publish(registry)
        logger.info(f"Mapping registry reloaded (generation {self._generation})")
        return registry
