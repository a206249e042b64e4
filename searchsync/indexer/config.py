"""
Configuration management for the search sync service.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class SyncConfig:
    """Values consumed by the transformation pipeline."""

    slug_element: str = "url"
    max_depth: int = 100

    def __post_init__(self):
        if not self.slug_element:
            raise ValueError("slug_element must not be empty")
        if self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")


@dataclass
class DeliveryConfig:
    """Kontent.ai Delivery API client configuration."""

    base_url: str = "https://deliver.kontent.ai"
    timeout: int = 30
    wait_for_new_content: bool = True


@dataclass
class AlgoliaConfig:
    """Algolia write API client configuration."""

    app_id: str
    api_key: str
    index_name: str
    timeout: int = 30
    wait_poll_interval: float = 0.5
    wait_max_attempts: int = 60

    @property
    def base_url(self) -> str:
        return f"https://{self.app_id}.algolia.net"


@dataclass
class ServiceConfig:
    """Main service configuration."""

    kontent_secret: Optional[str]
    algolia_api_key: Optional[str]
    sync_config: SyncConfig
    delivery_config: DeliveryConfig

    # Used by the CLI; the webhook takes these from query parameters
    algolia_app_id: Optional[str] = None
    algolia_index: Optional[str] = None

    def missing_secrets(self) -> List[str]:
        """Names of required secret environment variables that are not set."""
        missing = []
        if not self.kontent_secret:
            missing.append("KONTENT_SECRET")
        if not self.algolia_api_key:
            missing.append("ALGOLIA_API_KEY")
        return missing

    def algolia_config(self, app_id: Optional[str] = None, index_name: Optional[str] = None) -> AlgoliaConfig:
        """Build the Algolia client config, falling back to the environment for app id and index."""
        app_id = app_id or self.algolia_app_id
        index_name = index_name or self.algolia_index
        if not self.algolia_api_key:
            raise ValueError("ALGOLIA_API_KEY environment variable is required")
        if not app_id or not index_name:
            raise ValueError("Algolia app id and index name are required")
        return AlgoliaConfig(app_id=app_id, api_key=self.algolia_api_key, index_name=index_name)

    @classmethod
    def from_environment(cls) -> "ServiceConfig":
        """Create configuration from environment variables."""

        sync_config = SyncConfig(
            slug_element=os.getenv("SEARCHSYNC_SLUG_ELEMENT", "url"),
            max_depth=int(os.getenv("SEARCHSYNC_MAX_DEPTH", "100")),
        )

        delivery_config = DeliveryConfig(
            base_url=os.getenv("KONTENT_DELIVERY_URL", "https://deliver.kontent.ai"),
            timeout=int(os.getenv("KONTENT_DELIVERY_TIMEOUT", "30")),
            wait_for_new_content=os.getenv("KONTENT_WAIT_FOR_NEW_CONTENT", "true").lower() == "true",
        )

        return cls(
            kontent_secret=os.getenv("KONTENT_SECRET"),
            algolia_api_key=os.getenv("ALGOLIA_API_KEY"),
            sync_config=sync_config,
            delivery_config=delivery_config,
            algolia_app_id=os.getenv("ALGOLIA_APP_ID"),
            algolia_index=os.getenv("ALGOLIA_INDEX"),
        )
