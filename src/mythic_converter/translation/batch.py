"""
Batch translation of many source items.

Both runners translate every item against a single ItemTranslator (and so a
single registry snapshot) and return results in source order. Counters are
computed once all items have finished.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable

from ..models import BatchResult, ItemResult
from ..records import SourceItemRecord
from . import annotations
from .translator import ItemTranslator

logger = logging.getLogger("mythic-converter")

DEFAULT_MAX_CONCURRENT = 4


def reject_duplicate_ids(results: list[ItemResult]) -> list[ItemResult]:
    """Fail every item whose target id an earlier item already produced.

    Source ids like ``a-b`` and ``a_b`` normalize to the same target key, and
    a document can hold each key once.
    """
    owners: dict[str, str] = {}
    checked: list[ItemResult] = []
    for result in results:
        if not result.ok:
            checked.append(result)
            continue
        target_id = result.target.item_id
        owner = owners.setdefault(target_id, result.source_id)
        if owner == result.source_id:
            checked.append(result)
            continue
        reason = f"duplicate target id '{target_id}' (already produced by '{owner}')"
        logger.warning(f"Failed to convert item '{result.source_id}': {reason}")
        checked.append(ItemResult(
            source_id=result.source_id,
            annotations=[annotations.conversion_failed(result.source_id, reason)],
            error=reason,
        ))
    return checked


def translate_batch(translator: ItemTranslator, records: Iterable[SourceItemRecord]) -> BatchResult:
    """Translate items one after another."""
    start_time = time.perf_counter()
    results = [translator.translate(record) for record in records]
    batch = BatchResult.from_results(reject_duplicate_ids(results))
    logger.info(f"Batch finished in {time.perf_counter() - start_time:.3f}s: {batch.summary()}")
    return batch


async def translate_batch_concurrently(
    translator: ItemTranslator,
    records: Iterable[SourceItemRecord],
    max_concurrent: int = DEFAULT_MAX_CONCURRENT,
) -> BatchResult:
    """Translate items on worker threads, at most ``max_concurrent`` at a time.

    Args:
        translator: Translator shared by every item
        records: Items to translate
        max_concurrent: Upper bound on items translating at once

    Returns:
        BatchResult with results in the same order as ``records``

    Raises:
        ValueError: If max_concurrent is less than 1
    """
    if max_concurrent < 1:
        raise ValueError(f"max_concurrent must be at least 1, got {max_concurrent}")

    records = list(records)
    if not records:
        return BatchResult()

    semaphore = asyncio.Semaphore(max_concurrent)
    start_time = time.perf_counter()

    async def run(record: SourceItemRecord) -> ItemResult:
        async with semaphore:
            return await asyncio.to_thread(translator.translate, record)

    outcomes = await asyncio.gather(*(run(record) for record in records), return_exceptions=True)

    results: list[ItemResult] = []
    for record, outcome in zip(records, outcomes):
        if isinstance(outcome, ItemResult):
            results.append(outcome)
            continue
        # translate() catches item errors; this is the worker itself failing
        reason = str(outcome) or type(outcome).__name__
        logger.warning(f"Worker failed on item '{record.item_id}': {reason}")
        results.append(ItemResult(
            source_id=record.item_id,
            annotations=[annotations.conversion_failed(record.item_id, reason)],
            error=reason,
        ))

    batch = BatchResult.from_results(reject_duplicate_ids(results))
    logger.info(
        f"Concurrent batch finished in {time.perf_counter() - start_time:.3f}s "
        f"(max_concurrent={max_concurrent}): {batch.summary()}"
    )
    return batch
