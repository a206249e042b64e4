"""
Algolia client for writing search records to a hosted index.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

import aiohttp

from ..schema.record import SearchRecord
from .config import AlgoliaConfig
from .exceptions import SearchIndexException

logger = logging.getLogger(__name__)

USER_AGENT = "searchsync/1.0 (Kontent.ai integration)"


class AlgoliaClient:
    """
    Async client for batched upserts and deletes against one Algolia index.

    Each write waits until Algolia reports the task as published, so the
    caller's response reflects what is searchable.
    """

    def __init__(self, config: AlgoliaConfig, session: Optional[aiohttp.ClientSession] = None):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.index_path = f"/1/indexes/{quote(config.index_name, safe='')}"
        self.session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self.session is None or self.session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self.session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self.session

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def _headers(self) -> Dict[str, str]:
        return {
            "X-Algolia-Application-Id": self.config.app_id,
            "X-Algolia-API-Key": self.config.api_key,
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
        }

    async def save_objects(self, records: Iterable[SearchRecord]) -> List[str]:
        """Replace (or create) the given records. Returns the written objectIDs."""
        requests = [{"action": "updateObject", "body": record.to_index_object()} for record in records]
        if not requests:
            return []
        return await self._batch(requests)

    async def delete_objects(self, object_ids: Iterable[str]) -> List[str]:
        """Delete records by objectID. Returns the deleted objectIDs."""
        requests = [{"action": "deleteObject", "body": {"objectID": object_id}} for object_id in object_ids]
        if not requests:
            return []
        return await self._batch(requests)

    async def _batch(self, requests: List[Dict[str, Any]]) -> List[str]:
        result = await self._request("POST", f"{self.index_path}/batch", json={"requests": requests})
        task_id = result.get("taskID")
        if task_id is not None:
            await self.wait_task(task_id)
        object_ids = result.get("objectIDs", [])
        logger.info(f"Algolia batch of {len(requests)} operation(s) on '{self.config.index_name}' completed")
        return object_ids

    async def wait_task(self, task_id: int):
        """Poll until the task is published."""
        for _ in range(self.config.wait_max_attempts):
            result = await self._request("GET", f"{self.index_path}/task/{task_id}")
            if result.get("status") == "published":
                return
            await asyncio.sleep(self.config.wait_poll_interval)
        raise SearchIndexException(f"Algolia task {task_id} was not published in time")

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            session = await self._get_session()
            async with session.request(method, f"{self.base_url}{path}", json=json, headers=self._headers()) as response:
                if response.status not in (200, 201):
                    error_text = await response.text()
                    logger.error(f"Algolia {method} {path} failed: {response.status} - {error_text}")
                    raise SearchIndexException(
                        f"Algolia {method} {path} returned {response.status}: {error_text[:200]}",
                        status_code=response.status,
                    )
                return await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error calling Algolia {method} {path}: {e}")
            raise SearchIndexException(f"Algolia {method} {path} failed: {e}") from e
