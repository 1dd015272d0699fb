"""
Seeding pipeline for the course catalog.

Runs once, before the API serves traffic, and only when the courses table is
empty:

1. Load the schedule export and split off the header rows
2. Parse every data row (malformed rows are skipped)
3. Aggregate rows into courses, sections and meetings (professors are
   written as they are first seen)
4. Upsert courses, sections and meetings

Usage:
    # Seed using the packaged export
    python -m nuschedule.pipelines.seed.pipeline

    # Seed from another export, wiping course data first
    python -m nuschedule.pipelines.seed.pipeline --csv schedule.csv --reset
"""

import argparse
import logging
import sys
from functools import partial
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...core.config import get_settings
from ...database.base import CourseDB, Storage
from .aggregate import ScheduleAggregator
from .loader import SeedError, read_csv_file, read_schedule
from .parser import parse_row
from .upsert import upsert_professor, write_sections

logger = logging.getLogger(__name__)


class SeedReport(BaseModel):
    """Outcome of one seeding run"""

    skipped: bool = False
    semester: Optional[str] = None
    rows_parsed: int = 0
    rows_skipped: int = 0
    courses: int = 0
    sections: int = 0
    professors: int = 0
    meetings: int = 0
    errors: List[str] = []


def count_courses(session: Session) -> int:
    try:
        return session.scalar(select(func.count()).select_from(CourseDB)) or 0
    except SQLAlchemyError as e:
        raise SeedError(f"failed to check courses: {e}") from e


def seed_database(
    session: Session, csv_text: Optional[str], email_domain: str = "nu.edu.kz"
) -> SeedReport:
    """
    Import the schedule export if the database has no courses yet.

    Args:
        session: Database session
        csv_text: Full text of the export (None if it couldn't be read)
        email_domain: Domain for synthesized professor emails

    Returns:
        SeedReport; `skipped` is set when courses already exist

    Raises:
        SeedError: storage is unreachable or the export is unusable
    """
    existing = count_courses(session)
    if existing > 0:
        logger.info(f"Database already has {existing} courses, skipping seed")
        return SeedReport(skipped=True)

    logger.info("Starting database seeding...")
    semester, rows = read_schedule(csv_text)

    aggregator = ScheduleAggregator(
        semester, resolve_professor=partial(upsert_professor, session)
    )
    report = SeedReport(semester=semester)
    for row in rows:
        record = parse_row(row, email_domain=email_domain)
        if record is None:
            report.rows_skipped += 1
            continue
        aggregator.add(record)
        report.rows_parsed += 1

    results = write_sections(session, aggregator)
    report.courses = results["courses_upserted"]
    report.sections = results["sections_upserted"]
    report.meetings = results["meetings_inserted"]
    report.professors = len(aggregator.professor_ids)
    report.errors = results["errors"]

    logger.info(
        f"Seeding complete: {report.courses} courses, {report.sections} sections, "
        f"{report.professors} professors, {report.meetings} meetings"
    )
    return report


def seed_from_file(
    storage: Storage, path: Union[str, Path], email_domain: str = "nu.edu.kz"
) -> SeedReport:
    """Run `seed_database` with the export at `path`"""
    session = storage.session()
    try:
        return seed_database(session, read_csv_file(path), email_domain=email_domain)
    finally:
        session.close()


def main() -> None:
    """Command line entry point"""
    load_dotenv()
    logging.basicConfig(level=logging.INFO)

    settings = get_settings()
    parser = argparse.ArgumentParser(description="Seed the course catalog from a schedule export")
    parser.add_argument(
        "--csv", default=str(settings.seed_csv_path), help="Path to the schedule export"
    )
    parser.add_argument(
        "--reset", action="store_true", help="Wipe course data before seeding"
    )
    args = parser.parse_args()

    storage = Storage(settings.database_url)
    try:
        storage.create_tables()
        if args.reset:
            storage.reset_course_data()
        report = seed_from_file(storage, args.csv, settings.professor_email_domain)
    except SeedError as e:
        print(f"Seeding failed: {e}")
        sys.exit(1)
    finally:
        storage.dispose()

    if report.skipped:
        print("Courses already present, nothing to do")
        return
    print(f"Semester: {report.semester}")
    print(f"Rows parsed: {report.rows_parsed} (skipped {report.rows_skipped})")
    print(f"Courses: {report.courses}")
    print(f"Sections: {report.sections}")
    print(f"Professors: {report.professors}")
    print(f"Meetings: {report.meetings}")
    if report.errors:
        print(f"Errors: {len(report.errors)}")


if __name__ == "__main__":
    main()
