"""Read and ingest helpers for the verse catalog."""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from sqlalchemy.orm import Session

from daily_shloka.models import Verse
from daily_shloka.services.errors import CatalogEmptyError, ValidationError

__all__ = [
    "ordered_verse_ids",
    "verse_count",
    "get_verses",
    "get_verses_by_chapter",
    "get_verse_by_position",
    "get_verse_by_index",
    "get_verses_from_index",
    "daily_slice",
    "upsert_verse",
    "upsert_verses",
]

_VERSE_FIELDS = (
    "sanskrit_text",
    "transliteration",
    "translation",
    "source_key",
)


def _canonical(query: Any) -> Any:
    return query.order_by(Verse.chapter_number, Verse.verse_number)


def ordered_verse_ids(db: Session) -> list[int]:
    """Return every verse id in canonical (chapter, verse) order."""
    return [row.id for row in _canonical(db.query(Verse.id)).all()]


def verse_count(db: Session) -> int:
    """Return the number of verses in the catalog."""
    return db.query(Verse).count()


def get_verses(db: Session, verse_ids: Sequence[int]) -> list[Verse]:
    """Return verses for ``verse_ids`` in the same order, skipping unknown ids."""
    if not verse_ids:
        return []
    rows = db.query(Verse).filter(Verse.id.in_(set(verse_ids))).all()
    by_id = {verse.id: verse for verse in rows}
    return [by_id[verse_id] for verse_id in verse_ids if verse_id in by_id]


def get_verses_by_chapter(db: Session, chapter: int) -> list[Verse]:
    """Return a chapter's verses ordered by verse number."""
    return (
        db.query(Verse)
        .filter(Verse.chapter_number == chapter)
        .order_by(Verse.verse_number)
        .all()
    )


def get_verse_by_position(db: Session, chapter: int, verse: int) -> Verse | None:
    """Return the verse at ``chapter.verse`` if it exists."""
    return (
        db.query(Verse)
        .filter(Verse.chapter_number == chapter, Verse.verse_number == verse)
        .first()
    )


def get_verse_by_index(db: Session, index: int) -> Verse | None:
    """Return the verse at a zero-based canonical index."""
    if index < 0:
        return None
    return _canonical(db.query(Verse)).offset(index).limit(1).first()


def get_verses_from_index(db: Session, start: int, count: int) -> list[Verse]:
    """Return up to ``count`` verses starting at canonical index ``start``.

    Unlike :func:`daily_slice` this does not wrap past the last verse.
    """
    if start < 0 or count <= 0:
        return []
    return _canonical(db.query(Verse)).offset(start).limit(count).all()


def daily_slice(ordered_ids: Sequence[int], pointer: int, count: int) -> list[int]:
    """Return ``count`` contiguous ids starting at ``pointer``, wrapping at the end.

    When the catalog holds fewer than ``count`` verses the slice is the whole
    catalog once, so no verse appears twice in a set.

    Raises:
        CatalogEmptyError: If ``ordered_ids`` is empty.
    """
    total = len(ordered_ids)
    if total == 0:
        raise CatalogEmptyError("Verse catalog is empty")
    size = min(count, total)
    start = pointer % total
    return [ordered_ids[(start + offset) % total] for offset in range(size)]


def upsert_verse(db: Session, data: Mapping[str, Any]) -> Verse:
    """Insert a verse or update the one already stored at its position.

    The caller owns the transaction; this only flushes.
    """
    try:
        chapter = int(data["chapter_number"])
        number = int(data["verse_number"])
    except (KeyError, TypeError, ValueError) as err:
        raise ValidationError("Verse requires integer chapter_number and verse_number") from err

    verse = get_verse_by_position(db, chapter, number)
    if verse is None:
        verse = Verse(chapter_number=chapter, verse_number=number)
        db.add(verse)
    for field in _VERSE_FIELDS:
        if field in data and data[field] is not None:
            setattr(verse, field, str(data[field]))
    db.flush()
    return verse


def upsert_verses(db: Session, rows: Iterable[Mapping[str, Any]]) -> int:
    """Upsert a batch of verses in one transaction and return how many were written."""
    written = 0
    for row in rows:
        upsert_verse(db, row)
        written += 1
    db.commit()
    return written
