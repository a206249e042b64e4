"""
Reduction of per-notification results into a single index write batch.
"""

from typing import Iterable

from ..schema.record import NotificationResult, WriteBatch


def reduce_results(results: Iterable[NotificationResult]) -> WriteBatch:
    """
    Merge notification results into one batch.

    Upserts are keyed by objectID; when two notifications produce the same
    objectID the later one wins. Deletions are collected as a set.
    """
    batch = WriteBatch()
    for result in results:
        for record in result.records_to_upsert:
            batch.records_to_upsert[record.object_id] = record
        batch.object_ids_to_delete.update(result.object_ids_to_delete)
    return batch
