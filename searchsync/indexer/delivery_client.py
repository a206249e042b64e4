"""
Kontent.ai Delivery API client for fetching published content items.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import aiohttp
from pydantic import ValidationError

from ..schema.content import ContentItem
from .config import DeliveryConfig
from .exceptions import DeliveryFetchError, ItemNotFound

logger = logging.getLogger(__name__)

USER_AGENT = "searchsync/1.0"


class DeliveryClient:
    """
    Async client for the Delivery API item endpoint.

    One client serves every environment; the environment id is part of each request.
    """

    def __init__(self, config: DeliveryConfig, session: Optional[aiohttp.ClientSession] = None):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self.session is None or self.session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self.session = aiohttp.ClientSession(timeout=timeout, headers={"User-Agent": USER_AGENT})
            self._owns_session = True
        return self.session

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.wait_for_new_content:
            # Bypass the CDN cache so a just-published change is visible
            headers["X-KC-Wait-For-Loading-New-Content"] = "true"
        return headers

    async def get_item_with_linked(
        self, environment_id: str, codename: str, language: str, depth: int
    ) -> List[ContentItem]:
        """
        Fetch a published item together with its linked items.

        Returns:
            The requested item first, followed by every linked item within ``depth``

        Raises:
            ItemNotFound: the item is not published in ``language``
            DeliveryFetchError: network failure, timeout, or unexpected response
        """
        url = f"{self.base_url}/{quote(environment_id, safe='')}/items/{quote(codename, safe='')}"
        params = {"language": language, "depth": str(depth)}

        try:
            session = await self._get_session()
            async with session.get(url, params=params, headers=self._headers()) as response:
                if response.status == 404:
                    raise ItemNotFound(codename, language)
                if response.status != 200:
                    error_text = await response.text()
                    raise DeliveryFetchError(
                        f"Delivery API returned {response.status} for '{codename}': {error_text[:200]}",
                        status_code=response.status,
                    )
                payload = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DeliveryFetchError(f"Delivery API request for '{codename}' failed: {e}") from e
        except ValueError as e:
            # Malformed JSON in a 200 response
            raise DeliveryFetchError(f"Delivery API returned invalid JSON for '{codename}': {e}") from e

        return self._parse_item_response(payload)

    @staticmethod
    def _parse_item_response(payload: Dict[str, Any]) -> List[ContentItem]:
        """Convert an item response into the requested item plus its linked items."""
        try:
            item = ContentItem.model_validate(payload["item"])
            linked = [ContentItem.model_validate(raw) for raw in (payload.get("modular_content") or {}).values()]
        except (KeyError, TypeError, ValidationError) as e:
            raise DeliveryFetchError(f"Unexpected Delivery API response shape: {e}") from e

        return [item, *linked]
