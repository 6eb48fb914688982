# src/daily_shloka/scripts/seed_verses.py
"""Load verses from a JSON file into the catalog.

The file holds a list of objects with ``chapter_number``, ``verse_number``
and optionally ``sanskrit_text``, ``transliteration``, ``translation`` and
``source_key``. Rows are upserted by (chapter, verse), so re-running the
script with corrected text updates the catalog in place.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from daily_shloka.db.session import SessionLocal, create_tables
from daily_shloka.services import catalog
from daily_shloka.services.errors import ValidationError

logger = logging.getLogger("daily_shloka.seed")


def load_rows(path: Path) -> list[dict[str, Any]]:
    """Read and minimally validate the JSON payload."""
    with path.open(encoding="utf-8") as handle:
        payload = json.load(handle)
    if isinstance(payload, dict):
        payload = payload.get("verses", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a JSON list of verses")
    return payload


def seed(path: Path, source_key: str | None = None) -> int:
    rows = load_rows(path)
    if source_key:
        rows = [{**row, "source_key": row.get("source_key") or source_key} for row in rows]

    db = SessionLocal()
    try:
        written = catalog.upsert_verses(db, rows)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    logger.info("Upserted %d verses from %s", written, path)
    return written


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the verse catalog from a JSON file")
    parser.add_argument("path", type=Path, help="JSON file with a list of verses")
    parser.add_argument(
        "--source-key",
        default=None,
        help="Source identifier stamped on rows that do not carry one",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding (handy for local SQLite).",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="[seed] %(message)s")
    if args.create_tables:
        create_tables()

    try:
        written = seed(args.path, args.source_key)
    except (OSError, ValueError, ValidationError) as exc:
        print(f"[seed] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"[seed] {written} verses written")


if __name__ == "__main__":
    main()
