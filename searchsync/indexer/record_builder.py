"""
Transformation of a resolved content item into a search record.

Content types listed in ``STRUCTURED_BUILDERS`` get typed fields extracted
from their elements; every other type gets a generic record whose text is
aggregated from the item and its slug-less linked items.
"""

import re
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..schema.content import ContentItem
from ..schema.record import AnyRecord, GenericRecord, StructuredRecord, make_object_id
from ..utils.text import strip_html
from .content_aggregator import ContentAggregator

# "City, ST 12345" or "City, ST 12345-6789"
CITY_STATE_ZIP = re.compile(r"^([^,]+),\s*([A-Z]{2})\s+(\d{5}(?:-\d{4})?)$")


def parse_address(address: str) -> Dict[str, str]:
    """
    Split the last line of a multi-line address into city, state and zip.

    Returns an empty dict when the address has fewer than two non-blank lines
    or the last line does not match; never raises.
    """
    if not address:
        return {}

    lines = [line for line in address.splitlines() if line.strip()]
    if len(lines) < 2:
        return {}

    match = CITY_STATE_ZIP.match(lines[-1].strip())
    if not match:
        return {}

    return {"city": match.group(1).strip(), "state": match.group(2), "zip": match.group(3)}


def _common_fields(item: ContentItem, slug_element: str) -> Dict[str, Any]:
    return {
        "id": item.id,
        "object_id": make_object_id(item.id, item.language),
        "codename": item.codename,
        "name": item.name,
        "language": item.language,
        "type": item.type,
        "slug": item.slug(slug_element),
        "collection": item.collection,
    }


def _text(item: ContentItem, codename: str) -> Optional[str]:
    element = item.element(codename)
    return element.text() if element else None


def _number(item: ContentItem, codename: str) -> Optional[float]:
    element = item.element(codename)
    return element.number() if element else None


def _term_codenames(item: ContentItem, codename: str) -> Optional[List[str]]:
    element = item.element(codename)
    terms = element.terms() if element else None
    if terms is None:
        return None
    return [term.codename for term in terms]


def build_campground_record(item: ContentItem, graph: Mapping[str, ContentItem], slug_element: str) -> StructuredRecord:
    address = _text(item, "address") or ""
    banner_body = _text(item, "banner_body")
    regions = _term_codenames(item, "region")

    return StructuredRecord(
        **_common_fields(item, slug_element),
        campground_name=_text(item, "name"),
        phone=_text(item, "phone_number"),
        email=_text(item, "email_address"),
        address=address,
        **parse_address(address),
        description=strip_html(banner_body) if banner_body else None,
        latitude=_number(item, "latitude_coordinate"),
        longitude=_number(item, "longitude_coordinate"),
        amenities=_term_codenames(item, "amenities"),
        ways_to_stay=_term_codenames(item, "ways_to_stay"),
        region=regions[0] if regions else None,
        google_place_id=_text(item, "google_place_id"),
        content=[],
    )


def build_generic_record(item: ContentItem, graph: Mapping[str, ContentItem], slug_element: str) -> GenericRecord:
    block, _ = ContentAggregator(slug_element).flatten(item, graph)
    return GenericRecord(**_common_fields(item, slug_element), content=[block])


StructuredBuilder = Callable[[ContentItem, Mapping[str, ContentItem], str], StructuredRecord]

# Content type codename -> structured extractor
STRUCTURED_BUILDERS: Dict[str, StructuredBuilder] = {
    "campground": build_campground_record,
}


def build_record(item: ContentItem, graph: Mapping[str, ContentItem], slug_element: str = "url") -> AnyRecord:
    """Build the search record for ``item``, dispatching on its content type."""
    builder = STRUCTURED_BUILDERS.get(item.type)
    if builder is not None:
        return builder(item, graph, slug_element)
    return build_generic_record(item, graph, slug_element)
