# src/daily_shloka/models/verse.py
"""SQLAlchemy model for the verse catalog."""

from sqlalchemy import Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from daily_shloka.db.session import Base


class Verse(Base):
    """A single verse of the canonical text.

    Rows are written once by the seed/ingestion path and only read by the
    reading engines. Canonical order is (chapter_number, verse_number).
    """

    __tablename__ = "verse"
    __table_args__ = (
        UniqueConstraint("chapter_number", "verse_number", name="uq_verse_position"),
        Index("ix_verse_chapter_verse", "chapter_number", "verse_number"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chapter_number: Mapped[int] = mapped_column(Integer, nullable=False)
    verse_number: Mapped[int] = mapped_column(Integer, nullable=False)
    sanskrit_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    transliteration: Mapped[str] = mapped_column(Text, nullable=False, default="")
    translation: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Identifier of the upstream source the row was ingested from.
    source_key: Mapped[str] = mapped_column(Text, nullable=False, default="")

    @property
    def reference(self) -> str:
        """Return the human readable chapter.verse reference."""
        return f"{self.chapter_number}.{self.verse_number}"
