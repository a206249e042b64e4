from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

CONTENT_ITEM_OBJECT_TYPE = "content_item"


class WebhookMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    environment_id: Optional[str] = None
    object_type: Optional[str] = None
    action: Optional[str] = None


class WebhookItemSystem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    codename: str
    language: str
    type: Optional[str] = None
    collection: Optional[str] = None


class WebhookItemData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    system: WebhookItemSystem


class WebhookNotification(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: WebhookMessage
    data: Optional[dict] = None


class WebhookBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    notifications: List[WebhookNotification] = Field(min_length=1)


class ItemNotification(BaseModel):
    """A content item change, reduced to what the sync needs."""

    model_config = ConfigDict(frozen=True)

    environment_id: str
    codename: str
    language: str
    id: Optional[str] = None
    type: Optional[str] = None
    action: Optional[str] = None
