# src/lions_bible/scripts/reconcile_counts.py
"""
Maintenance job that re-derives every counts row from the ledgers.

Run it after restoring a backup or loading data outside the API. Counts that
already match their ledgers are left as they are. Repaired report counts go
through the moderation policy, so anything now over its threshold is hidden.
"""
from __future__ import annotations

import argparse
import logging

from sqlalchemy.orm import Session

from lions_bible.core.settings import settings
from lions_bible.db.session import SessionLocal
from lions_bible.services.moderation import ModerationService, ReconcileReport

logger = logging.getLogger(__name__)


def reconcile_counts(db: Session, *, dry_run: bool = False) -> ReconcileReport:
    """Recompute all counts, hiding whatever the policy now requires.

    Args:
        db: Database session
        dry_run: Report the drift without committing it
    """
    return ModerationService(db).reconcile_all(dry_run=dry_run)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Re-derive counts from the vote and flag ledgers.")
    parser.add_argument("--dry-run", action="store_true", help="Report drift without saving it")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    db = SessionLocal()
    try:
        report = reconcile_counts(db, dry_run=args.dry_run)
    finally:
        db.close()
    verb = "out of date" if args.dry_run else "updated"
    print(f"Reconciled counts: {report.changed} row(s) {verb}, {report.hidden} subject(s) hidden")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
