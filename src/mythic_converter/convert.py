"""
One-call conversion of a parsed source document.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import BaseModel, Field

from .adapters.base import SchemaAdapter
from .models import BatchResult
from .registry import MappingRegistry
from .translation.assembler import OutputAssembler
from .translation.batch import translate_batch, translate_batch_concurrently

logger = logging.getLogger("mythic-converter")


class DocumentWriter(Protocol):
    """Anything that can store rendered text under a destination name."""

    def write(self, destination: str, text: str) -> None: ...


class DocumentConversion(BaseModel):
    """Rendered text for one source document plus what happened per item."""
    source_name: str
    text: str = Field(description="Complete MythicCrucible document")
    batch: BatchResult

    def write_to(self, writer: DocumentWriter, destination: str | None = None) -> None:
        writer.write(destination or self.source_name, self.text)


def convert_document(
    adapter: SchemaAdapter,
    document: Mapping[str, Any],
    source_name: str,
    registry: MappingRegistry,
) -> DocumentConversion:
    """Translate every item of a parsed document and render the result.

    Args:
        adapter: Adapter for the document's source schema
        document: Parsed source document
        source_name: Name of the source (file name), used for headers and type names
        registry: Mapping registry snapshot used for every item

    Returns:
        DocumentConversion with the rendered text and the batch result
    """
    records = adapter.records(document, source_name)
    batch = translate_batch(adapter.translator(registry), records)
    return _render(adapter, document, source_name, batch)


async def convert_document_concurrently(
    adapter: SchemaAdapter,
    document: Mapping[str, Any],
    source_name: str,
    registry: MappingRegistry,
    max_concurrent: int = 4,
) -> DocumentConversion:
    """Like ``convert_document``, translating items on worker threads."""
    records = adapter.records(document, source_name)
    batch = await translate_batch_concurrently(adapter.translator(registry), records, max_concurrent)
    return _render(adapter, document, source_name, batch)


def _render(
    adapter: SchemaAdapter,
    document: Mapping[str, Any],
    source_name: str,
    batch: BatchResult,
) -> DocumentConversion:
    text = OutputAssembler().render_document(adapter.header(document, source_name), batch.results)
    logger.info(f"Converted {source_name} ({adapter.name}): {batch.summary()}")
    return DocumentConversion(source_name=source_name, text=text, batch=batch)
