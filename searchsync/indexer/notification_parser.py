"""
Webhook payload validation and filtering to content item notifications.
"""

import json
from typing import List, Union

from pydantic import ValidationError

from ..schema.notification import CONTENT_ITEM_OBJECT_TYPE, ItemNotification, WebhookBody, WebhookItemData
from ..utils.logging import get_sync_logger
from .exceptions import InvalidPayload

logger = get_sync_logger(__name__)


def parse_notifications(body: Union[str, bytes]) -> List[ItemNotification]:
    """
    Parse a (signature-verified) webhook body into item notifications.

    Notifications about anything other than content items are dropped.
    Order of the surviving notifications is preserved.

    Raises:
        InvalidPayload: body is not JSON, the notifications list is missing or
            empty, or a content item notification lacks its identifying fields
    """
    try:
        raw = json.loads(body)
    except (TypeError, ValueError) as e:
        raise InvalidPayload(f"Webhook body is not valid JSON: {e}") from e

    try:
        webhook = WebhookBody.model_validate(raw)
    except ValidationError as e:
        raise InvalidPayload(f"Webhook body has no notifications: {e.error_count()} validation error(s)") from e

    notifications: List[ItemNotification] = []
    for index, notification in enumerate(webhook.notifications):
        message = notification.message
        if message.object_type != CONTENT_ITEM_OBJECT_TYPE:
            logger.debug("notification_dropped", index=index, object_type=message.object_type)
            continue

        try:
            data = WebhookItemData.model_validate(notification.data or {})
        except ValidationError as e:
            raise InvalidPayload(f"Notification {index} is missing item codename or language") from e

        if not message.environment_id:
            raise InvalidPayload(f"Notification {index} is missing environment_id")

        notifications.append(
            ItemNotification(
                environment_id=message.environment_id,
                codename=data.system.codename,
                language=data.system.language,
                id=data.system.id,
                type=data.system.type,
                action=message.action,
            )
        )

    return notifications
