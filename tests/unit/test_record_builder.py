"""Unit tests for search record construction."""

import pytest

from searchsync.indexer.record_builder import STRUCTURED_BUILDERS, build_record, parse_address
from searchsync.schema.content import ContentGraph
from searchsync.schema.record import GenericRecord, StructuredRecord
from searchsync.utils.text import strip_html

from ..factories import element, make_item


def campground(**overrides):
    elements = {
        "name": element("text", "Pine Hollow"),
        "url": element("url_slug", "pine-hollow"),
        "phone_number": element("text", "555-0100"),
        "email_address": element("text", "hello@pinehollow.test"),
        "address": element("text", "123 Main St\nAnytown, CA 90210"),
        "banner_body": element("rich_text", "<p>Quiet&nbsp;<em>lakeside</em> sites</p>"),
        "latitude_coordinate": element("number", 38.5),
        "longitude_coordinate": element("number", -120.25),
        "amenities": element(
            "taxonomy", [{"name": "Showers", "codename": "showers"}, {"name": "Wi-Fi", "codename": "wifi"}]
        ),
        "ways_to_stay": element("taxonomy", [{"name": "Cabins", "codename": "cabins"}]),
        "region": element(
            "taxonomy", [{"name": "Sierra", "codename": "sierra"}, {"name": "North", "codename": "north"}]
        ),
        "google_place_id": element("text", "ChIJ123"),
        "related": element("modular_content", ["nearby"]),
    }
    elements.update(overrides)
    return make_item("pine_hollow", type_="campground", elements=elements)


def test_address_with_zip() -> None:
    assert parse_address("123 Main St\nAnytown, CA 90210") == {"city": "Anytown", "state": "CA", "zip": "90210"}


def test_address_with_zip_plus_four_and_blank_lines() -> None:
    assert parse_address("Unit 4\n\n123 Main St\n  Anytown,CA 90210-1234  \n") == {
        "city": "Anytown",
        "state": "CA",
        "zip": "90210-1234",
    }


@pytest.mark.parametrize(
    "address",
    [
        "",
        "123 Main St",
        "123 Main St\nAnytown CA 90210",
        "123 Main St\nAnytown, California 90210",
        "123 Main St\nAnytown, ca 90210",
        "123 Main St\nAnytown, CA 9021",
        "123 Main St\n   \n",
    ],
)
def test_malformed_address_yields_no_fields(address: str) -> None:
    assert parse_address(address) == {}


def test_strip_html_collapses_whitespace() -> None:
    assert strip_html("<p>Hello&nbsp;<b>world</b></p>") == "Hello world"
    assert strip_html("<ul>\n  <li>one</li>\n  <li>two</li>\n</ul>") == "one two"
    assert strip_html("") == ""


def test_campground_yields_structured_record() -> None:
    item = campground()

    record = build_record(item, ContentGraph.from_items([item]))

    assert isinstance(record, StructuredRecord)
    assert record.content == []
    assert record.object_id == "id-pine_hollow_en"
    assert record.slug == "pine-hollow"
    assert record.campground_name == "Pine Hollow"
    assert record.phone == "555-0100"
    assert record.email == "hello@pinehollow.test"
    assert record.address == "123 Main St\nAnytown, CA 90210"
    assert (record.city, record.state, record.zip) == ("Anytown", "CA", "90210")
    assert record.description == "Quiet lakeside sites"
    assert (record.latitude, record.longitude) == (38.5, -120.25)
    assert record.amenities == ["showers", "wifi"]
    assert record.ways_to_stay == ["cabins"]
    assert record.region == "sierra"
    assert record.google_place_id == "ChIJ123"


def test_campground_absent_elements_are_absent_fields() -> None:
    item = make_item("bare", type_="campground", elements={"name": element("text", "Bare")})

    record = build_record(item, ContentGraph.from_items([item]))
    document = record.to_index_object()

    assert document["address"] == ""
    assert document["content"] == []
    for field in ("phone", "email", "city", "state", "zip", "description", "latitude", "amenities", "region", "slug"):
        assert field not in document


def test_campground_null_number_and_empty_region() -> None:
    item = campground(latitude_coordinate=element("number", None), region=element("taxonomy", []))

    record = build_record(item, ContentGraph.from_items([item]))

    assert record.latitude is None
    assert record.region is None
    assert record.longitude == -120.25


def test_campground_with_malformed_address_keeps_raw_address() -> None:
    item = campground(address=element("text", "123 Main St"))

    record = build_record(item, ContentGraph.from_items([item]))

    assert record.address == "123 Main St"
    assert record.city is None and record.state is None and record.zip is None


def test_other_types_yield_generic_record() -> None:
    child = make_item("faq", type_="faq", elements={"answer": element("text", "Yes")})
    item = make_item(
        "rules",
        elements={"url": element("url_slug", "rules"), "title": element("text", "Rules"), "faqs": element("modular_content", ["faq"])},
    )

    record = build_record(item, ContentGraph.from_items([item, child]))

    assert isinstance(record, GenericRecord)
    assert len(record.content) == 1
    assert record.content[0].contents == "rules Rules Yes"
    assert record.slug == "rules"


@pytest.mark.parametrize("slug_value", [None, "", 42])
def test_slug_is_absent_when_missing_empty_or_not_a_string(slug_value) -> None:
    elements = {} if slug_value is None else {"url": element("url_slug", slug_value)}
    item = make_item("page", elements=elements)

    record = build_record(item, ContentGraph.from_items([item]))

    assert record.slug is None
    assert "slug" not in record.to_index_object()


def test_common_fields_match_between_variants() -> None:
    generic_item = make_item("page", item_id="abc", language="es", collection="marketing")
    structured_item = make_item("camp", type_="campground", item_id="abc", language="es", collection="marketing")

    generic = build_record(generic_item, ContentGraph.from_items([generic_item]))
    structured = build_record(structured_item, ContentGraph.from_items([structured_item]))

    for record in (generic, structured):
        assert record.id == "abc"
        assert record.object_id == "abc_es"
        assert record.language == "es"
        assert record.collection == "marketing"


def test_index_object_uses_object_id_alias() -> None:
    item = make_item("page", elements={"title": element("text", "Hi")})

    document = build_record(item, ContentGraph.from_items([item])).to_index_object()

    assert document["objectID"] == "id-page_en"
    assert "object_id" not in document
    assert "variant" not in document
    assert document["content"][0]["contents"] == "Hi"


def test_building_twice_is_identical() -> None:
    item = campground()
    graph = ContentGraph.from_items([item])

    assert build_record(item, graph).model_dump_json() == build_record(item, graph).model_dump_json()


def test_campground_is_registered_as_structured_type() -> None:
    assert "campground" in STRUCTURED_BUILDERS
