"""
Bulk load patents from a JSON dataset.

Usage: `python -m patent_search.scripts.seed [path/to/patents.json] [--keep]`
"""
import argparse
import json
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete
from sqlalchemy.orm import Session

from patent_search.api.params import parse_date
from patent_search.core.config import settings
from patent_search.core.logging_config import configure_logging
from patent_search.db.database import Database
from patent_search.db.session_manager import db_session
from patent_search.models.model import Patent, PatentStatus

logger = logging.getLogger(__name__)


def parse_status(value: Optional[str]) -> Optional[PatentStatus]:
    """Map a raw status string onto the enum; unknown or missing values become None."""
    if not value:
        return None
    try:
        return PatentStatus(value)
    except ValueError:
        logger.warning("Unknown patent status %r, storing as null", value)
        return None


def patent_from_record(record: Dict[str, Any]) -> Patent:
    publication_date: date = parse_date("publicationDate", record["publicationDate"])
    return Patent(
        id=record["id"],
        title=record["title"],
        abstract=record["abstract"],
        inventors=record.get("inventors") or [],
        publication_date=publication_date,
        relevance_score=float(record.get("relevanceScore") or 0),
        assignee=record.get("assignee"),
        status=parse_status(record.get("status")),
        cpc_codes=record.get("cpcCodes") or [],
        claims=record.get("claims") or [],
    )


def load_records(path: str) -> List[Dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def seed_patents(session: Session, records: Iterable[Dict[str, Any]], keep_existing: bool = False) -> int:
    """
    Insert the records as Patent rows.

    Args:
        session: Open session; the caller commits
        records: Raw patent objects (camelCase keys)
        keep_existing: Keep the rows already in the table

    Returns:
        Number of patents created
    """
    if not keep_existing:
        deleted = session.execute(delete(Patent)).rowcount
        logger.info("Deleted %s records in patent table", deleted)

    count = 0
    for record in records:
        session.add(patent_from_record(record))
        count += 1
    return count


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the patents table from a JSON file")
    parser.add_argument("path", nargs="?", default=settings.SEED_FILE)
    parser.add_argument("--keep", action="store_true", help="do not delete existing patents first")
    args = parser.parse_args(argv)

    configure_logging()
    logger.info("Start seeding from %s", args.path)

    database = Database()
    try:
        database.create_all()
        records = load_records(args.path)
        with db_session(database) as session:
            count = seed_patents(session, records, keep_existing=args.keep)
    finally:
        database.dispose()

    logger.info("Seeding finished. Created %d patents.", count)
    return count


if __name__ == "__main__":
    main()
