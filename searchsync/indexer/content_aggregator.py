"""
Flattening of an item and its slug-less linked items into one content block.
"""

from typing import FrozenSet, List, Mapping, Tuple

from ..schema.content import ContentItem, ElementKind, ItemKey
from ..schema.record import ContentBlock
from ..utils.text import collapse_whitespace, strip_html

# SEO metadata snippet; not part of the searchable text
SKIPPED_ELEMENTS = frozenset({"metadata"})

Visited = FrozenSet[ItemKey]


class ContentAggregator:
    """
    Builds the text of a generic search record.

    Linked items that have their own slug are indexed on their own, so they
    are only referenced by id in ``parents``. Linked items without a slug have
    their text inlined, depth first, in element order.

    The visited set is immutable: each call takes the set seen so far and
    returns it extended, so an item reachable through several paths (or a
    cycle) is inlined once, at its first position.
    """

    def __init__(self, slug_element: str = "url"):
        self.slug_element = slug_element

    def flatten(
        self, item: ContentItem, graph: Mapping[str, ContentItem], visited: Visited = frozenset()
    ) -> Tuple[ContentBlock, Visited]:
        visited = visited | {item.key}
        parts: List[str] = []
        parents: List[str] = []

        for codename, element in item.elements.items():
            if codename in SKIPPED_ELEMENTS:
                continue

            if element.kind is ElementKind.MODULAR_CONTENT:
                for linked_codename in element.linked_codenames():
                    linked = graph.get(linked_codename)
                    # Beyond the resolved depth
                    if linked is None:
                        continue

                    if linked.slug(self.slug_element):
                        if linked.id not in parents:
                            parents.append(linked.id)
                        continue

                    if linked.key in visited:
                        continue

                    block, visited = self.flatten(linked, graph, visited)
                    if block.contents:
                        parts.append(block.contents)
                    for parent_id in block.parents:
                        if parent_id not in parents:
                            parents.append(parent_id)
                continue

            value = element.text()
            if value is None:
                continue
            text = strip_html(value) if element.kind is ElementKind.RICH_TEXT else collapse_whitespace(value)
            if text:
                parts.append(text)

        block = ContentBlock(
            id=item.id,
            codename=item.codename,
            name=item.name,
            type=item.type,
            language=item.language,
            collection=item.collection,
            parents=parents,
            contents=" ".join(parts),
        )
        return block, visited
