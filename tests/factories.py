"""Builders and in-memory fakes shared by the tests.

Content items are built from Delivery API shaped dicts so tests exercise the
same validation as real responses. The Delivery API and Algolia are replaced
by in-memory fakes.
"""

from typing import Any, Dict, List, Optional

from searchsync.indexer.exceptions import ItemNotFound
from searchsync.schema.content import ContentItem


def element(type_: str, value: Any) -> Dict[str, Any]:
    return {"type": type_, "name": type_, "value": value}


def make_item(
    codename: str,
    type_: str = "article",
    elements: Optional[Dict[str, Dict[str, Any]]] = None,
    language: str = "en",
    item_id: Optional[str] = None,
    collection: Optional[str] = "default",
) -> ContentItem:
    return ContentItem.model_validate(
        {
            "system": {
                "id": item_id or f"id-{codename}",
                "name": codename.replace("_", " ").title(),
                "codename": codename,
                "language": language,
                "type": type_,
                "collection": collection,
            },
            "elements": elements or {},
        }
    )


class FakeDeliveryClient:
    """Serves items from memory; a codename mapped to an exception raises it."""

    def __init__(self, items: Optional[List[ContentItem]] = None, errors: Optional[Dict[str, Exception]] = None):
        self.items = {item.codename: item for item in items or []}
        self.errors = errors or {}
        self.calls: List[tuple] = []

    async def get_item_with_linked(self, environment_id: str, codename: str, language: str, depth: int):
        self.calls.append((environment_id, codename, language, depth))
        if codename in self.errors:
            raise self.errors[codename]
        if codename not in self.items:
            raise ItemNotFound(codename, language)
        root = self.items[codename]
        return [root, *(item for name, item in self.items.items() if name != codename)]

    async def close(self):
        pass


class FakeGateway:
    def __init__(self):
        self.saved: List[Dict[str, Any]] = []
        self.deleted: List[str] = []
        self.save_calls = 0
        self.delete_calls = 0
        self.closed = False

    async def save_objects(self, records) -> List[str]:
        self.save_calls += 1
        objects = [record.to_index_object() for record in records]
        self.saved.extend(objects)
        return [obj["objectID"] for obj in objects]

    async def delete_objects(self, object_ids) -> List[str]:
        self.delete_calls += 1
        ids = list(object_ids)
        self.deleted.extend(ids)
        return ids

    async def close(self):
        self.closed = True


def notification(codename: str, language: str = "en", object_type: str = "content_item") -> Dict[str, Any]:
    return {
        "message": {
            "environment_id": "env-1",
            "object_type": object_type,
            "action": "published",
            "delivery_slot": "published",
        },
        "data": {"system": {"id": f"id-{codename}", "codename": codename, "language": language, "type": "article"}},
    }
