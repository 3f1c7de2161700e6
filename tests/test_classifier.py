"""Tests for the field classifier and its annotations."""

import pytest

from mythic_converter.models import AnnotationCategory
from mythic_converter.translation.builder import TargetItemBuilder
from mythic_converter.translation.classifier import FieldClassifier, FieldKind


@pytest.fixture
def classifier(registry):
    return FieldClassifier(registry)


@pytest.fixture
def builder():
    return TargetItemBuilder("SWORD_TEST", "DIAMOND_SWORD", "MainHand")


class TestFieldKinds:
    """Test classification order."""

    @pytest.mark.parametrize("key,kind", [
        ("attack-damage", FieldKind.ATTRIBUTE),
        ("critical-strike-chance", FieldKind.STAT),
        ("disable-repairing", FieldKind.FLAG),
        ("hide-unbreakable", FieldKind.FLAG),
        ("rarity", FieldKind.UNCLASSIFIED),
    ])
    def test_kind_of(self, classifier, key, kind):
        assert classifier.kind_of(key) is kind

    def test_attribute_beats_stat(self, classifier, builder):
        classifier.apply("attack-damage", 10, builder)

        assert builder.record.attributes["MainHand"]["ATTACK_DAMAGE"].value == 10
        assert builder.record.stats == []


class TestMappedFields:
    """Test attribute and stat transformation."""

    def test_attribute_with_operation(self, classifier, builder):
        classifier.apply("attack-speed", 1.6, builder)

        value = builder.record.attributes["MainHand"]["ATTACK_SPEED"]
        assert value.value == 1.6
        assert value.operation == "ADD_SCALAR"
        assert value.render() == "1.6 ADD_SCALAR"

    def test_percent_stat_scaled(self, classifier, builder):
        classifier.apply("critical-strike-chance", 25, builder)

        assert [s.render() for s in builder.record.stats] == ["CriticalStrikeChance 0.25"]

    def test_leveled_stat_uses_base(self, classifier, builder):
        classifier.apply("pve-damage", {"base": 12, "scale": 1.5}, builder)

        assert [s.render() for s in builder.record.stats] == ["PveDamage 0.12"]

    def test_zero_mapped_values_skipped(self, classifier, builder):
        classifier.apply("attack-damage", 0, builder)
        classifier.apply("defense", "0", builder)

        assert builder.record.attributes == {}
        assert builder.record.stats == []
        assert builder.annotations == []

    def test_unslotted_attributes(self, classifier):
        builder = TargetItemBuilder("ACCESSORY_RING", "GOLD_NUGGET", "")
        classifier.apply("max-health", 4, builder)

        assert list(builder.record.attributes) == [""]
        assert builder.record.attributes[""]["MAX_HEALTH"].value == 4


class TestUnclassifiedFields:
    """Test that each unmapped field yields exactly one annotation."""

    def test_unmapped_number(self, classifier, builder):
        classifier.apply("magic-find", 3, builder)

        (annotation,) = builder.annotations
        assert annotation.category is AnnotationCategory.UNMAPPED_NUMERIC_STAT
        assert annotation.message == "unmapped-stat: magic-find = 3 (STAT_KEY: MAGIC_FIND)"

    def test_unmapped_numeric_string_and_base(self, classifier, builder):
        classifier.apply("luck-bonus", "2.5", builder)
        classifier.apply("arcane", {"base": 4}, builder)

        assert [a.category for a in builder.annotations] == [
            AnnotationCategory.UNMAPPED_NUMERIC_STAT,
            AnnotationCategory.UNMAPPED_NUMERIC_STAT,
        ]
        assert builder.annotations[1].message == "unmapped-stat: arcane = 4 (STAT_KEY: ARCANE)"

    def test_unmapped_string(self, classifier, builder):
        classifier.apply("rarity", "legendary", builder)

        (annotation,) = builder.annotations
        assert annotation.category is AnnotationCategory.UNMAPPED_STRING_FIELD
        assert annotation.field == "rarity"
        assert annotation.value == "legendary"
        assert annotation.message == "unmapped: rarity = legendary"

    def test_unmapped_section(self, classifier, builder):
        classifier.apply("commands", {"cmd1": {"format": "say hi"}}, builder)

        (annotation,) = builder.annotations
        assert annotation.category is AnnotationCategory.UNMAPPED_SECTION
        assert annotation.message == "unmapped-section: commands"

    @pytest.mark.parametrize("value,rendered", [
        (True, "true"),
        (["a", "b"], "[a, b]"),
        (None, "null"),
    ])
    def test_unmapped_other_values(self, classifier, builder, value, rendered):
        classifier.apply("craftable", value, builder)

        (annotation,) = builder.annotations
        assert annotation.category is AnnotationCategory.UNMAPPED_VALUE
        assert annotation.message == f"unmapped: craftable = {rendered}"

    def test_native_zero_is_unset(self, classifier, builder):
        classifier.apply("magic-find", 0, builder)
        assert builder.annotations == []

    def test_flag(self, classifier, builder):
        classifier.apply("disable-repairing", True, builder)

        (annotation,) = builder.annotations
        assert annotation.category is AnnotationCategory.UNSUPPORTED_FLAG
        assert annotation.message == "disable-repairing: true (check MythicCrucible Options or Hide flags)"
