"""Unit tests for merging notification results into a write batch."""

from searchsync.indexer.write_reducer import reduce_results
from searchsync.schema.record import GenericRecord, NotificationResult


def record(item_id: str, language: str = "en", name: str = "Page") -> GenericRecord:
    return GenericRecord(
        id=item_id,
        object_id=f"{item_id}_{language}",
        codename=item_id,
        name=name,
        language=language,
        type="article",
    )


def test_empty_results_give_empty_batch() -> None:
    batch = reduce_results([NotificationResult(), NotificationResult()])

    assert batch.is_empty
    assert batch.records_to_upsert == {}
    assert batch.object_ids_to_delete == set()


def test_same_object_id_collapses_and_later_wins() -> None:
    batch = reduce_results(
        [
            NotificationResult(records_to_upsert=[record("a", name="first")]),
            NotificationResult(records_to_upsert=[record("b")]),
            NotificationResult(records_to_upsert=[record("a", name="second")]),
        ]
    )

    assert list(batch.records_to_upsert) == ["a_en", "b_en"]
    assert batch.records_to_upsert["a_en"].name == "second"


def test_same_item_in_different_languages_stays_separate() -> None:
    batch = reduce_results(
        [
            NotificationResult(records_to_upsert=[record("a", "en")]),
            NotificationResult(records_to_upsert=[record("a", "de")]),
        ]
    )

    assert set(batch.records_to_upsert) == {"a_en", "a_de"}


def test_deletions_are_collected_as_set() -> None:
    batch = reduce_results(
        [
            NotificationResult(object_ids_to_delete=["x_en", "y_en"]),
            NotificationResult(),
            NotificationResult(object_ids_to_delete=["x_en"]),
        ]
    )

    assert batch.object_ids_to_delete == {"x_en", "y_en"}
    assert batch.records_to_upsert == {}
