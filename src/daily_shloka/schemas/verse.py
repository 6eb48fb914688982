"""Verse-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class VerseResponse(BaseModel):
    """Schema for a verse returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    chapter_number: int
    verse_number: int
    sanskrit_text: str
    transliteration: str
    translation: str
    source_key: str


class VerseCountResponse(BaseModel):
    count: int
