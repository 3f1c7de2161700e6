"""Tests for whole-document conversion."""

import pytest

from mythic_converter import convert_document, convert_document_concurrently, get_adapter
from mythic_converter.translation.parser import TargetDocumentParser


class RecordingWriter:
    def __init__(self):
        self.written = {}

    def write(self, destination, text):
        self.written[destination] = text


class TestConvertDocument:
    """Test one-call conversion."""

    def test_mmoitems(self, registry, mmoitems_document):
        conversion = convert_document(get_adapter("mmoitems"), mmoitems_document, "SWORD.yml", registry)

        assert conversion.batch.summary() == "3 item(s) seen, 3 converted, 0 failed"
        assert conversion.text.startswith("# MythicCrucible items converted from MMOItems type: SWORD\n")
        parsed = TargetDocumentParser().parse(conversion.text)
        assert [i.target.item_id for i in parsed.items] == [
            "SWORD_FIRE_BLADE", "SWORD_FROST_EDGE", "SWORD_PLAIN_STICK",
        ]

    def test_failed_item_kept_in_output(self, registry):
        document = {
            "GOOD": {"base": {"name": "Good"}},
            "BAD": {"base": {"ability": "fireball"}},
        }
        conversion = convert_document(get_adapter("mmoitems"), document, "STAFF.yml", registry)

        assert conversion.batch.failed == 1
        assert "# FAILED TO CONVERT: BAD - 'ability' must be a section, got str\n" in conversion.text
        parsed = TargetDocumentParser().parse(conversion.text)
        assert [i.target.item_id for i in parsed.items] == ["STAFF_GOOD"]
        assert len(parsed.failures) == 1

    def test_colliding_ids_keep_document_parseable(self, registry):
        document = {
            "a-b": {"base": {"name": "First"}},
            "a_b": {"base": {"name": "Second"}},
        }
        conversion = convert_document(get_adapter("mmoitems"), document, "SWORD.yml", registry)

        assert conversion.batch.summary() == "2 item(s) seen, 1 converted, 1 failed"
        parsed = TargetDocumentParser().parse(conversion.text)
        assert [i.target.display for i in parsed.items] == ["First"]
        assert parsed.failures == [
            "FAILED TO CONVERT: a_b - duplicate target id 'SWORD_a_b' (already produced by 'a-b')",
        ]

    def test_write_to(self, registry, itemsadder_document):
        conversion = convert_document(get_adapter("itemsadder"), itemsadder_document, "content.yml", registry)
        writer = RecordingWriter()

        conversion.write_to(writer)
        conversion.write_to(writer, "mythic/items.yml")

        assert writer.written["content.yml"] == conversion.text
        assert writer.written["mythic/items.yml"] == conversion.text


@pytest.mark.anyio
async def test_concurrent_matches_sequential(registry, itemsadder_document):
    adapter = get_adapter("itemsadder")

    sequential = convert_document(adapter, itemsadder_document, "content.yml", registry)
    concurrent = await convert_document_concurrently(
        adapter, itemsadder_document, "content.yml", registry, max_concurrent=2,
    )

    assert concurrent.text == sequential.text
