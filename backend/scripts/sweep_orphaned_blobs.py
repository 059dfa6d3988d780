"""
Remove uploaded blobs that no document row references.
Run: docker compose exec backend python scripts/sweep_orphaned_blobs.py [--grace-minutes N]
"""
import argparse
import asyncio
from datetime import timedelta

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.logging import logger
from app.core.storage import get_storage
from app.services.document_service import DocumentService


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--grace-minutes",
        type=int,
        default=settings.ORPHAN_GRACE_MINUTES,
        help="only remove blobs older than this",
    )
    args = parser.parse_args()

    db: Session = next(get_db())
    try:
        service = DocumentService(db, get_storage())
        removed = asyncio.run(service.sweep_orphaned_blobs(timedelta(minutes=args.grace_minutes)))
    finally:
        db.close()

    for path in removed:
        logger.info(f"Removed orphaned blob: {path}")
    print({"removed": len(removed)})


if __name__ == "__main__":
    main()
