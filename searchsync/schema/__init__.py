from .common import ErrorResponse, HealthStatus
from .content import ContentGraph, ContentItem, ElementKind, ElementValue, ItemKey, ItemSystem, TaxonomyTerm
from .notification import ItemNotification, WebhookBody, WebhookMessage, WebhookNotification
from .record import (
    AnyRecord,
    ContentBlock,
    GenericRecord,
    NotificationResult,
    SearchRecord,
    StructuredRecord,
    SyncOutcome,
    WriteBatch,
    make_object_id,
)

__all__ = [
    # common
    "ErrorResponse",
    "HealthStatus",
    # content
    "ContentGraph",
    "ContentItem",
    "ElementKind",
    "ElementValue",
    "ItemKey",
    "ItemSystem",
    "TaxonomyTerm",
    # notification
    "ItemNotification",
    "WebhookBody",
    "WebhookMessage",
    "WebhookNotification",
    # record
    "AnyRecord",
    "ContentBlock",
    "GenericRecord",
    "NotificationResult",
    "SearchRecord",
    "StructuredRecord",
    "SyncOutcome",
    "WriteBatch",
    "make_object_id",
]
