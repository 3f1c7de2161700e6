"""
Value coercion, scaling and formatting rules.

Source plugins store numbers in three shapes: native numbers, numeric
strings, and a sub-section carrying a ``base`` value (a leveled stat).
Everything here accepts all three and fails soft by returning ``None``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

logger = logging.getLogger("mythic-converter")

VALID_OPERATIONS: tuple[str, ...] = ("ADD", "ADD_SCALAR", "MULTIPLY")
DEFAULT_OPERATION = "ADD"


def normalize_key(key: Any) -> str:
    """Normalize a stat/attribute key for lookup.

    ``Attack_Damage`` and ``attack-damage`` resolve to the same entry.
    """
    return str(key).strip().lower().replace("_", "-")


def coerce_number(value: Any) -> float | None:
    """Coerce a source value to a float.

    Args:
        value: Native number, numeric string, or mapping with a ``base`` key.

    Returns:
        The finite float value, or None when the value is not numeric.
        Booleans are never numbers.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Mapping):
        if "base" not in value:
            return None
        return coerce_number(value["base"])

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        # float() accepts digit separators, YAML sources never mean that
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def number_or_zero(value: Any) -> float:
    """Coerce a value declared numeric, treating failures as zero."""
    number = coerce_number(value)
    if number is None:
        if value is not None:
            logger.debug(f"Could not coerce {value!r} to a number, using 0")
        return 0.0
    return number


def scale_percent(value: float) -> float:
    """Convert a whole-number percentage (25) to a fraction (0.25)."""
    return value / 100


def format_number(value: float | int) -> str:
    """Render a number, dropping the fractional part of whole values.

    Fractions are written positionally: YAML 1.1 reads ``5e-05`` as a string.

    >>> format_number(12.0)
    '12'
    >>> format_number(0.25)
    '0.25'
    >>> format_number(0.00005)
    '0.00005'
    """
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return format(Decimal(repr(number)), "f")


def parse_attribute_mapping(mapping: str) -> tuple[str, str | None]:
    """Split an attribute mapping into attribute name and operation.

    ``"ATTACK_DAMAGE"`` maps with the default operation, returned as None;
    ``"ATTACK_SPEED ADD_SCALAR"`` carries an explicit one.
    """
    parts = mapping.split(None, 1)
    name = parts[0]
    if len(parts) == 1:
        return name, None

    operation = parts[1].strip().upper()
    if operation not in VALID_OPERATIONS:
        logger.warning(
            f"Unknown attribute operation '{operation}' for {name}; "
            f"expected one of {', '.join(VALID_OPERATIONS)}"
        )
    return name, operation


def suggest_stat_key(key: str) -> str:
    """Derive an upper-snake-case stat key suggestion (``magic-find`` → ``MAGIC_FIND``)."""
    return str(key).upper().replace("-", "_").replace(" ", "_")


def describe_value(value: Any) -> str:
    """Render a raw source value for an advisory comment."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        number = coerce_number(value)
        return format_number(number) if number is not None else str(value)
    if isinstance(value, Mapping):
        inner = ", ".join(f"{k}: {describe_value(v)}" for k, v in value.items())
        return "{" + inner + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(describe_value(v) for v in value) + "]"
    return str(value)
