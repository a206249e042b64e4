"""
Sync pipeline: webhook body in, index writes out.

Flow:
1. Parse the webhook body into content item notifications
2. For each notification, concurrently: resolve the item graph and build its record
3. Reduce the per-notification results into one write batch
4. Send at most one upsert call and one delete call to the search index
"""

import asyncio
from typing import Iterable, List, Protocol, Sequence, Union

from ..schema.notification import ItemNotification
from ..schema.record import NotificationResult, SearchRecord, SyncOutcome, WriteBatch
from ..utils.logging import get_sync_logger, log_sync_event
from .config import SyncConfig
from .graph_resolver import ContentGraphResolver
from .notification_parser import parse_notifications
from .record_builder import build_record
from .write_reducer import reduce_results

logger = get_sync_logger(__name__)


class SearchIndexGateway(Protocol):
    async def save_objects(self, records: Iterable[SearchRecord]) -> List[str]: ...

    async def delete_objects(self, object_ids: Iterable[str]) -> List[str]: ...


class SyncPipeline:
    """
    Turns content change notifications into a search index write batch.

    Notifications are processed independently; a notification whose item
    cannot be resolved contributes nothing and does not affect the others.
    """

    def __init__(self, resolver: ContentGraphResolver, config: SyncConfig):
        self.resolver = resolver
        self.config = config

    async def process_notification(self, notification: ItemNotification) -> NotificationResult:
        """Resolve and transform the item of one notification."""
        graph = await self.resolver.resolve(
            notification.environment_id, notification.codename, notification.language, self.config.max_depth
        )

        item = graph.get(notification.codename)
        if item is None:
            reason = graph.unresolved
            log_sync_event(
                logger,
                "notification_skipped",
                notification.codename,
                language=notification.language,
                transient=bool(reason and reason.transient),
            )
            return NotificationResult()

        record = build_record(item, graph, self.config.slug_element)
        log_sync_event(
            logger, "record_built", item.codename, object_id=record.object_id, linked_items=len(graph) - 1
        )
        return NotificationResult(records_to_upsert=[record])

    async def build_batch(self, notifications: Sequence[ItemNotification]) -> WriteBatch:
        """Process all notifications concurrently and merge the results."""
        results = await asyncio.gather(*(self.process_notification(n) for n in notifications))
        return reduce_results(results)

    async def sync(self, body: Union[str, bytes], gateway: SearchIndexGateway) -> SyncOutcome:
        """
        Run the full pipeline for one webhook delivery.

        Raises:
            InvalidPayload: the body could not be parsed
            SearchIndexException: the index rejected a write
        """
        notifications = parse_notifications(body)
        logger.info("webhook_received", notifications=len(notifications))

        batch = await self.build_batch(notifications)
        return await write_batch(batch, gateway)


async def write_batch(batch: WriteBatch, gateway: SearchIndexGateway) -> SyncOutcome:
    """Send the batch; each of the two calls is made only when it has work."""
    re_indexed: List[str] = []
    deleted: List[str] = []

    if batch.is_empty:
        logger.info("batch_empty")
        return SyncOutcome()

    if batch.records_to_upsert:
        re_indexed = await gateway.save_objects(list(batch.records_to_upsert.values()))
    if batch.object_ids_to_delete:
        deleted = await gateway.delete_objects(sorted(batch.object_ids_to_delete))

    logger.info("batch_written", re_indexed=len(re_indexed), deleted=len(deleted))
    return SyncOutcome(deleted_object_ids=deleted, re_indexed_object_ids=re_indexed)
