from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field


def make_object_id(item_id: str, language: str) -> str:
    return f"{item_id}_{language}"


class ContentBlock(BaseModel):
    id: str
    codename: str
    name: str
    type: str
    language: str
    collection: str
    # Linked items with their own slug; indexed separately, referenced by id only
    parents: List[str] = Field(default_factory=list)
    contents: str = ""


class SearchRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    object_id: str = Field(alias="objectID")
    codename: str
    name: str
    language: str
    type: str
    slug: Optional[str] = None
    collection: str = ""
    content: List[ContentBlock] = Field(default_factory=list)

    def to_index_object(self) -> Dict[str, Any]:
        """Convert to the object sent to the search index; absent fields are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class GenericRecord(SearchRecord):
    variant: Literal["generic"] = Field(default="generic", exclude=True)


class StructuredRecord(SearchRecord):
    variant: Literal["structured"] = Field(default="structured", exclude=True)

    campground_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    amenities: Optional[List[str]] = None
    ways_to_stay: Optional[List[str]] = None
    region: Optional[str] = None
    google_place_id: Optional[str] = None


AnyRecord = Union[StructuredRecord, GenericRecord]


class NotificationResult(BaseModel):
    """Outcome of one notification; both lists empty means skip."""

    records_to_upsert: List[AnyRecord] = Field(default_factory=list)
    object_ids_to_delete: List[str] = Field(default_factory=list)


class WriteBatch(BaseModel):
    records_to_upsert: Dict[str, AnyRecord] = Field(default_factory=dict)
    object_ids_to_delete: Set[str] = Field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return not self.records_to_upsert and not self.object_ids_to_delete


class SyncOutcome(BaseModel):
    """Response body of one webhook invocation."""

    model_config = ConfigDict(populate_by_name=True)

    deleted_object_ids: List[str] = Field(default_factory=list, alias="deletedObjectIds")
    re_indexed_object_ids: List[str] = Field(default_factory=list, alias="reIndexedObjectIds")
