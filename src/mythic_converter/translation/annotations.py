"""
Factory functions for advisory annotations.

Each factory fixes the category and the comment wording for one kind of
untranslatable source field, so the same situation always reads the same way
in the output.
"""

from __future__ import annotations

from typing import Any

from ..models import Annotation, AnnotationCategory
from ..values import describe_value, format_number, suggest_stat_key


def _one_line(text: str) -> str:
    # Comment lines cannot span lines in the output
    return " ".join(str(text).splitlines())


def make_annotation(
    category: AnnotationCategory,
    message: str,
    *,
    field: str = "",
    value: Any = None,
    guidance: str = "",
    details: list[str] | None = None,
) -> Annotation:
    return Annotation(
        category=category,
        field=field,
        value=value,
        guidance=guidance,
        message=_one_line(message),
        details=[_one_line(d) for d in details or []],
    )


def note(message: str, field: str = "", details: list[str] | None = None) -> Annotation:
    return make_annotation(AnnotationCategory.NOTE, message, field=field, details=details)


def manual_review(key: str, value: Any) -> Annotation:
    """A source-plugin feature that needs to be rebuilt by hand."""
    guidance = "needs manual conversion"
    return make_annotation(
        AnnotationCategory.MANUAL_REVIEW,
        f"{key}: {describe_value(value)} (MMOItems-specific, {guidance})",
        field=key,
        value=value,
        guidance=guidance,
    )


def unsupported_flag(key: str, value: Any) -> Annotation:
    guidance = "check MythicCrucible Options or Hide flags"
    return make_annotation(
        AnnotationCategory.UNSUPPORTED_FLAG,
        f"{key}: {describe_value(value)} ({guidance})",
        field=key,
        value=value,
        guidance=guidance,
    )


def unmapped_numeric_stat(key: str, value: Any, number: float) -> Annotation:
    stat_key = suggest_stat_key(key)
    return make_annotation(
        AnnotationCategory.UNMAPPED_NUMERIC_STAT,
        f"unmapped-stat: {key} = {format_number(number)} (STAT_KEY: {stat_key})",
        field=key,
        value=value,
        guidance=f"add '{key}' to stat-mappings or attribute-mappings",
    )


def unmapped_string_field(key: str, value: str) -> Annotation:
    return make_annotation(
        AnnotationCategory.UNMAPPED_STRING_FIELD,
        f"unmapped: {key} = {value}",
        field=key,
        value=value,
    )


def unmapped_section(key: str, value: Any) -> Annotation:
    return make_annotation(
        AnnotationCategory.UNMAPPED_SECTION,
        f"unmapped-section: {key}",
        field=key,
        value=value,
    )


def unmapped_value(key: str, value: Any) -> Annotation:
    return make_annotation(
        AnnotationCategory.UNMAPPED_VALUE,
        f"unmapped: {key} = {describe_value(value)}",
        field=key,
        value=value,
    )


def durability_note(key: str, durability: int) -> Annotation:
    guidance = "MythicCrucible uses custom durability via Skills or ItemData"
    return make_annotation(
        AnnotationCategory.DURABILITY_NOTE,
        f"{key}: {durability} ({guidance})",
        field=key,
        value=durability,
        guidance=guidance,
    )


def ability(
    name: str,
    ability_type: str,
    mode: str,
    trigger: str,
    modifiers: list[tuple[str, Any]],
) -> Annotation:
    """One ability with its suggested skill line and modifier detail lines."""
    return make_annotation(
        AnnotationCategory.ABILITY,
        f"Ability '{name}': type={ability_type}, trigger={mode} -> Skills: skill{{{ability_type}}} ~{trigger}",
        field="ability",
        value=name,
        guidance="recreate as a MythicMobs skill",
        details=[f"  {key}: {describe_value(value)}" for key, value in modifiers],
    )


def permanent_effect(effect: str, amplifier: int) -> Annotation:
    return make_annotation(
        AnnotationCategory.PERMANENT_EFFECT,
        f"perm-effect: {effect} amplifier {amplifier}",
        field="perm-effects",
        value=effect,
        guidance="use MythicMobs Skills ~onEquip",
    )


def unsupported_feature(
    message: str,
    field: str = "",
    value: Any = None,
    details: list[str] | None = None,
) -> Annotation:
    return make_annotation(
        AnnotationCategory.UNSUPPORTED_FEATURE,
        message,
        field=field,
        value=value,
        details=details,
    )


def source_reference(namespace: str, item_id: str) -> Annotation:
    return make_annotation(
        AnnotationCategory.SOURCE_REFERENCE,
        f"Source: {namespace}:{item_id}",
        value=f"{namespace}:{item_id}",
    )


def conversion_failed(item_id: str, reason: str) -> Annotation:
    return make_annotation(
        AnnotationCategory.CONVERSION_FAILED,
        f"FAILED TO CONVERT: {item_id} - {reason}",
        field=item_id,
        value=reason,
    )
