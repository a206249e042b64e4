"""
Webhook router receiving Kontent.ai content change notifications.
"""

import logging
from dataclasses import replace
from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ...indexer.algolia_client import AlgoliaClient
from ...indexer.config import AlgoliaConfig, ServiceConfig
from ...indexer.delivery_client import DeliveryClient
from ...indexer.exceptions import ConfigurationException, SignatureException
from ...indexer.graph_resolver import ContentGraphResolver
from ...indexer.pipeline import SearchIndexGateway, SyncPipeline
from ...indexer.signature import SIGNATURE_HEADER, HmacSignatureVerifier
from ...schema.record import SyncOutcome

logger = logging.getLogger(__name__)

GatewayFactory = Callable[[AlgoliaConfig], SearchIndexGateway]

# Initialized on startup
_service_config: Optional[ServiceConfig] = None
_delivery_client: Optional[DeliveryClient] = None

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


def get_service_config() -> ServiceConfig:
    if _service_config is None:
        raise HTTPException(status_code=503, detail="Sync service not initialized")
    return _service_config


def get_delivery_client() -> DeliveryClient:
    if _delivery_client is None:
        raise HTTPException(status_code=503, detail="Sync service not initialized")
    return _delivery_client


def get_gateway_factory() -> GatewayFactory:
    return AlgoliaClient


@router.post("/kontent", response_model=SyncOutcome, response_model_by_alias=True)
async def kontent_webhook(
    request: Request,
    slug: Optional[str] = Query(None, description="Codename of the slug element"),
    app_id: Optional[str] = Query(None, alias="appId", description="Algolia application id"),
    index: Optional[str] = Query(None, description="Algolia index name"),
    config: ServiceConfig = Depends(get_service_config),
    delivery_client: DeliveryClient = Depends(get_delivery_client),
    gateway_factory: GatewayFactory = Depends(get_gateway_factory),
) -> SyncOutcome:
    """
    Re-index the content items named in a webhook delivery.

    Responds with the objectIDs written to and deleted from the index.
    """
    body = await request.body()
    if not body:
        raise HTTPException(status_code=400, detail="Missing Data")

    missing = config.missing_secrets()
    if missing:
        raise ConfigurationException(missing)

    verifier = HmacSignatureVerifier(config.kontent_secret)
    if not verifier.is_valid(body, request.headers.get(SIGNATURE_HEADER)):
        raise SignatureException("Unauthorized")

    if not slug or not app_id or not index:
        raise HTTPException(
            status_code=400,
            detail="Missing query parameters (slug, appId, index), please check the documentation",
        )

    sync_config = config.sync_config
    if slug != sync_config.slug_element:
        sync_config = replace(sync_config, slug_element=slug)

    pipeline = SyncPipeline(ContentGraphResolver(delivery_client), sync_config)
    gateway = gateway_factory(config.algolia_config(app_id=app_id, index_name=index))
    try:
        return await pipeline.sync(body, gateway)
    finally:
        close = getattr(gateway, "close", None)
        if close is not None:
            await close()


async def initialize_sync_service(config: Optional[ServiceConfig] = None):
    """Initialize the shared configuration and Delivery client on startup."""
    global _service_config, _delivery_client

    _service_config = config or ServiceConfig.from_environment()
    _delivery_client = DeliveryClient(_service_config.delivery_config)

    missing = _service_config.missing_secrets()
    if missing:
        # Requests are answered with 500 until the variables are set
        logger.warning(f"Sync service started without {', '.join(missing)}")
    else:
        logger.info("Sync service initialized successfully")


async def shutdown_sync_service():
    """Cleanup on shutdown."""
    global _service_config, _delivery_client

    if _delivery_client:
        try:
            await _delivery_client.close()
            logger.info("Sync service shutdown completed")
        except Exception as e:
            logger.error(f"Error during sync service shutdown: {e}")
        finally:
            _delivery_client = None
    _service_config = None
