"""
Field classification for source fields no structural handler consumed.

Order of precedence:
  1. attribute-mapped   -> vanilla attribute under the item's slot
  2. stat-mapped        -> custom stat line
  3. ``disable-*``/``hide-*`` flag -> unsupported-flag annotation
  4. unclassified       -> one advisory annotation, by value shape
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from ..registry import MappingRegistry
from ..values import (
    coerce_number,
    normalize_key,
    number_or_zero,
    parse_attribute_mapping,
    scale_percent,
)
from . import annotations
from .builder import TargetItemBuilder

logger = logging.getLogger("mythic-converter")

FLAG_PREFIXES: tuple[str, ...] = ("disable-", "hide-")


class FieldKind(str, Enum):
    ATTRIBUTE = "attribute"
    STAT = "stat"
    FLAG = "flag"
    UNCLASSIFIED = "unclassified"


class FieldClassifier:
    """Routes leftover source fields into attributes, stats or annotations."""

    def __init__(self, registry: MappingRegistry):
        self.registry = registry

    def kind_of(self, key: str) -> FieldKind:
        if self.registry.attribute_for(key) is not None:
            return FieldKind.ATTRIBUTE
        if self.registry.stat_for(key) is not None:
            return FieldKind.STAT
        if normalize_key(key).startswith(FLAG_PREFIXES):
            return FieldKind.FLAG
        return FieldKind.UNCLASSIFIED

    def apply(self, key: str, value: Any, builder: TargetItemBuilder) -> FieldKind:
        """Classify one field and record its effect on ``builder``."""
        kind = self.kind_of(key)

        if kind is FieldKind.ATTRIBUTE:
            number = self._mapped_value(key, value)
            if number is not None:
                name, operation = parse_attribute_mapping(self.registry.attribute_for(key))
                builder.set_attribute(name, number, operation)
        elif kind is FieldKind.STAT:
            number = self._mapped_value(key, value)
            if number is not None:
                builder.add_stat(self.registry.stat_for(key), number)
        elif kind is FieldKind.FLAG:
            builder.annotate(annotations.unsupported_flag(key, value))
        else:
            self._annotate_unclassified(key, value, builder)

        return kind

    def _mapped_value(self, key: str, value: Any) -> float | None:
        number = number_or_zero(value)
        if number == 0:
            logger.debug(f"Skipping zero value for mapped key '{key}'")
            return None
        if self.registry.is_percent(key):
            number = scale_percent(number)
        return number

    def _annotate_unclassified(self, key: str, value: Any, builder: TargetItemBuilder) -> None:
        number = coerce_number(value)
        if number is not None and number != 0:
            builder.annotate(annotations.unmapped_numeric_stat(key, value, number))
        elif isinstance(value, str):
            builder.annotate(annotations.unmapped_string_field(key, value))
        elif isinstance(value, Mapping):
            builder.annotate(annotations.unmapped_section(key, value))
        elif _is_native_zero(value):
            logger.debug(f"Skipping unset field '{key}'")
        else:
            builder.annotate(annotations.unmapped_value(key, value))


def _is_native_zero(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0
