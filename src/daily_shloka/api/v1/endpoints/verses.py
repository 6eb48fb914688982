"""Read-only verse catalog endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from daily_shloka.models import Verse
from daily_shloka.schemas.verse import VerseCountResponse, VerseResponse
from daily_shloka.services import catalog

from ..dependencies import SessionDep

router = APIRouter(prefix="/verses", tags=["verses"])


@router.get("/count", response_model=VerseCountResponse)
async def get_verse_count(db: SessionDep) -> VerseCountResponse:
    """Return how many verses are in the catalog."""
    return VerseCountResponse(count=catalog.verse_count(db))


@router.get("/chapters/{chapter}", response_model=list[VerseResponse])
async def get_chapter(chapter: int, db: SessionDep) -> list[Verse]:
    """List a chapter's verses in order."""
    return catalog.get_verses_by_chapter(db, chapter)


@router.get("/index/{index}", response_model=VerseResponse)
async def get_verse_by_index(index: int, db: SessionDep) -> Verse:
    """Get the verse at a zero-based canonical index."""
    verse = catalog.get_verse_by_index(db, index)
    if verse is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Verse not found")
    return verse


@router.get("/{chapter}/{verse}", response_model=VerseResponse)
async def get_verse_by_position(chapter: int, verse: int, db: SessionDep) -> Verse:
    """Get a verse by chapter and verse number."""
    found = catalog.get_verse_by_position(db, chapter, verse)
    if found is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Verse not found")
    return found
