"""
Resolution of a content item and its transitively linked items.
"""

from ..schema.content import ContentGraph
from ..utils.logging import get_sync_logger, log_sync_event
from .delivery_client import DeliveryClient
from .exceptions import DeliveryFetchError, UnresolvedItem

logger = get_sync_logger(__name__)


class ContentGraphResolver:
    """
    Fetches an item plus its linked items and returns them keyed by codename.

    Any fetch failure yields an empty graph. The failure is not raised: an
    unpublished item and an unreachable one both mean "nothing to index" to the
    caller. The reason is kept on ``graph.unresolved`` and logged, with
    transient failures at warning level since they can hide a missed update.
    """

    def __init__(self, delivery_client: DeliveryClient):
        self.delivery_client = delivery_client

    async def resolve(self, environment_id: str, codename: str, language: str, max_depth: int) -> ContentGraph:
        try:
            items = await self.delivery_client.get_item_with_linked(environment_id, codename, language, max_depth)
        except UnresolvedItem as e:
            log_sync_event(logger, "item_unpublished", codename, language=language)
            return ContentGraph(unresolved=e)
        except DeliveryFetchError as e:
            log_sync_event(
                logger, "item_unreachable", codename, language=language, status_code=e.status_code, error=str(e)
            )
            return ContentGraph(
                unresolved=UnresolvedItem(str(e), codename=codename, language=language, transient=True)
            )

        return ContentGraph.from_items(items)
