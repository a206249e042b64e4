from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..indexer.exceptions import UnresolvedItem

# (id, language) pair; one search record per key
ItemKey = Tuple[str, str]


class ElementKind(str, Enum):
    """Kontent element types the sync distinguishes"""

    TEXT = "text"
    RICH_TEXT = "rich_text"
    NUMBER = "number"
    TAXONOMY = "taxonomy"
    MODULAR_CONTENT = "modular_content"
    URL_SLUG = "url_slug"
    OTHER = "other"


class TaxonomyTerm(BaseModel):
    name: Optional[str] = None
    codename: str


class ElementValue(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    name: Optional[str] = None
    value: Any = None
    # Only set on rich text elements
    modular_content: List[str] = Field(default_factory=list)

    @property
    def kind(self) -> ElementKind:
        try:
            return ElementKind(self.type)
        except ValueError:
            return ElementKind.OTHER

    def text(self) -> Optional[str]:
        return self.value if isinstance(self.value, str) else None

    def number(self) -> Optional[float]:
        # bool is an int subclass; never a number element value
        if isinstance(self.value, (int, float)) and not isinstance(self.value, bool):
            return self.value
        return None

    def terms(self) -> Optional[List[TaxonomyTerm]]:
        # Taxonomy and multiple choice values share the {name, codename} shape
        if not isinstance(self.value, list):
            return None
        return [TaxonomyTerm.model_validate(t) for t in self.value if isinstance(t, dict) and t.get("codename")]

    def linked_codenames(self) -> List[str]:
        if self.kind is not ElementKind.MODULAR_CONTENT or not isinstance(self.value, list):
            return []
        return [c for c in self.value if isinstance(c, str)]


class ItemSystem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    codename: str
    language: str
    type: str
    collection: Optional[str] = None


class ContentItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    system: ItemSystem
    elements: Dict[str, ElementValue] = Field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.system.id

    @property
    def codename(self) -> str:
        return self.system.codename

    @property
    def name(self) -> str:
        return self.system.name

    @property
    def language(self) -> str:
        return self.system.language

    @property
    def type(self) -> str:
        return self.system.type

    @property
    def collection(self) -> str:
        return self.system.collection or ""

    @property
    def key(self) -> ItemKey:
        return (self.system.id, self.system.language)

    def element(self, codename: str) -> Optional[ElementValue]:
        return self.elements.get(codename)

    def slug(self, slug_element: str) -> Optional[str]:
        """Non-empty string value of the slug element, else None."""
        element = self.elements.get(slug_element)
        value = element.text() if element else None
        return value or None


class ContentGraph(Mapping[str, ContentItem]):
    """
    Read-only lookup of a resolved item and its linked items, keyed by codename.

    Built once per notification. An empty graph carries the reason it could
    not be resolved in ``unresolved``.
    """

    def __init__(self, items: Optional[Mapping[str, ContentItem]] = None, unresolved: Optional["UnresolvedItem"] = None):
        self._items: Dict[str, ContentItem] = dict(items or {})
        self.unresolved = unresolved

    @classmethod
    def from_items(cls, items: List[ContentItem]) -> "ContentGraph":
        graph: Dict[str, ContentItem] = {}
        for item in items:
            graph.setdefault(item.codename, item)
        return cls(graph)

    def __getitem__(self, codename: str) -> ContentItem:
        return self._items[codename]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ContentGraph({list(self._items)!r}, unresolved={self.unresolved!r})"
