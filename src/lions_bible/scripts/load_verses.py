# src/lions_bible/scripts/load_verses.py
"""Load Bible verses from a JSON file.

The file holds a list of objects with ``book``, ``chapter`` and ``verse`` plus
any of ``original_text``, ``transliteration``, ``verbatim_english`` and
``kjv``. Existing verses are updated in place, keyed by location.
"""
from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from sqlalchemy.orm import Session

from lions_bible.core.settings import settings
from lions_bible.db.session import SessionLocal
from lions_bible.repositories.store import Store

logger = logging.getLogger(__name__)

LOCATION_FIELDS = ("book", "chapter", "verse")
TEXT_FIELDS = ("original_text", "transliteration", "verbatim_english", "kjv")


def _normalize(entry: Mapping[str, Any]) -> dict[str, Any]:
    missing = [name for name in LOCATION_FIELDS if entry.get(name) in (None, "")]
    if missing:
        raise ValueError(f"Verse entry is missing {', '.join(missing)}: {dict(entry)!r}")
    record: dict[str, Any] = {
        "book": str(entry["book"]).strip(),
        "chapter": int(entry["chapter"]),
        "verse": int(entry["verse"]),
    }
    for name in TEXT_FIELDS:
        if name in entry:
            record[name] = entry[name]
    return record


def load_verses(db: Session, entries: Iterable[Mapping[str, Any]]) -> int:
    """Insert or update every verse in ``entries``; returns how many were written."""
    store = Store(db)
    written = 0
    with store.transaction():
        for entry in entries:
            record = _normalize(entry)
            location = {name: record[name] for name in LOCATION_FIELDS}
            existing = store.select_one("verses", location)
            if existing is None:
                store.insert("verses", record)
            else:
                store.update("verses", {"id": existing.id}, record)
            written += 1
    logger.info("Loaded %d verse(s)", written)
    return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Load verses from a JSON file.")
    parser.add_argument("path", type=Path, help="JSON file containing a list of verses")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    entries = json.loads(args.path.read_text(encoding="utf-8"))
    if not isinstance(entries, list):
        parser.error("the JSON document must be a list of verse objects")

    db = SessionLocal()
    try:
        written = load_verses(db, entries)
    finally:
        db.close()
    print(f"Loaded {written} verse(s) from {args.path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
