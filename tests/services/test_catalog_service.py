"""Tests for the verse catalog helpers."""

import pytest

from daily_shloka.models import Verse
from daily_shloka.services import catalog
from daily_shloka.services.errors import CatalogEmptyError, ValidationError


def test_ordered_ids_follow_chapter_then_verse(db_session) -> None:
    later = Verse(chapter_number=2, verse_number=1)
    second = Verse(chapter_number=1, verse_number=2)
    first = Verse(chapter_number=1, verse_number=1)
    db_session.add_all([later, second, first])
    db_session.flush()

    assert catalog.ordered_verse_ids(db_session) == [first.id, second.id, later.id]
    assert catalog.verse_count(db_session) == 3


def test_daily_slice_is_contiguous() -> None:
    ids = list(range(1, 21))
    assert catalog.daily_slice(ids, 0, 7) == [1, 2, 3, 4, 5, 6, 7]
    assert catalog.daily_slice(ids, 7, 7) == [8, 9, 10, 11, 12, 13, 14]


def test_daily_slice_wraps_past_the_last_verse() -> None:
    ids = list(range(1, 21))
    assert catalog.daily_slice(ids, 17, 7) == [18, 19, 20, 1, 2, 3, 4]


def test_daily_slice_reduces_pointer_modulo_total() -> None:
    ids = list(range(1, 21))
    assert catalog.daily_slice(ids, 25, 3) == [6, 7, 8]


def test_daily_slice_never_repeats_in_a_small_catalog() -> None:
    assert catalog.daily_slice([10, 11, 12], 0, 7) == [10, 11, 12]
    assert catalog.daily_slice([10, 11, 12], 2, 7) == [12, 10, 11]


def test_daily_slice_rejects_an_empty_catalog() -> None:
    with pytest.raises(CatalogEmptyError):
        catalog.daily_slice([], 0, 7)


def test_get_verses_keeps_requested_order(db_session, verses) -> None:
    wanted = [verses[5].id, verses[0].id, 999_999, verses[3].id]
    result = catalog.get_verses(db_session, wanted)
    assert [verse.id for verse in result] == [verses[5].id, verses[0].id, verses[3].id]
    assert catalog.get_verses(db_session, []) == []


def test_lookup_by_chapter_position_and_index(db_session, verses) -> None:
    chapter_two = catalog.get_verses_by_chapter(db_session, 2)
    assert [verse.verse_number for verse in chapter_two] == list(range(1, 11))

    found = catalog.get_verse_by_position(db_session, 2, 3)
    assert found is not None
    assert found.reference == "2.3"
    assert catalog.get_verse_by_position(db_session, 9, 9) is None

    assert catalog.get_verse_by_index(db_session, 0).id == verses[0].id
    assert catalog.get_verse_by_index(db_session, 10).id == verses[10].id
    assert catalog.get_verse_by_index(db_session, 20) is None
    assert catalog.get_verse_by_index(db_session, -1) is None


def test_get_verses_from_index_does_not_wrap(db_session, verses) -> None:
    tail = catalog.get_verses_from_index(db_session, 18, 5)
    assert [verse.id for verse in tail] == [verses[18].id, verses[19].id]
    assert catalog.get_verses_from_index(db_session, 0, 0) == []


def test_upsert_updates_the_verse_at_a_position(db_session, verses) -> None:
    updated = catalog.upsert_verse(
        db_session,
        {"chapter_number": 1, "verse_number": 1, "translation": "revised"},
    )
    assert updated.id == verses[0].id
    assert updated.translation == "revised"
    assert updated.sanskrit_text == "sanskrit 0"
    assert catalog.verse_count(db_session) == 20


def test_upsert_verses_inserts_new_rows(db_session) -> None:
    written = catalog.upsert_verses(
        db_session,
        [
            {"chapter_number": 1, "verse_number": 1, "translation": "one"},
            {"chapter_number": "1", "verse_number": "2", "translation": "two"},
        ],
    )
    assert written == 2
    assert catalog.get_verse_by_position(db_session, 1, 2).translation == "two"


def test_upsert_requires_a_position(db_session) -> None:
    with pytest.raises(ValidationError):
        catalog.upsert_verse(db_session, {"chapter_number": 1})
    with pytest.raises(ValidationError):
        catalog.upsert_verse(db_session, {"chapter_number": "one", "verse_number": 1})
