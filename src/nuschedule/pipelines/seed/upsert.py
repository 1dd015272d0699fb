"""
Upsert operations for seeded schedule data.

Handles upserting:
- Professors (keyed by synthesized email)
- Courses (keyed by course code)
- Sections (keyed by course + section number)
- Section meetings (insert-or-ignore on section + day + time slot)

Every entity is committed on its own so one bad record never rolls back
the rest of the run.
"""

import logging
from datetime import time
from typing import Any, Dict, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...database.base import CourseDB, ProfessorDB, SectionDB, SectionMeetingDB
from .aggregate import CourseInfo, MeetingInfo, MeetingKey, ScheduleAggregator, SectionInfo
from .schemas import ProfessorRecord

logger = logging.getLogger(__name__)


def _insert(session: Session, model):
    """Dialect-specific INSERT supporting ON CONFLICT"""
    if session.get_bind().dialect.name == "sqlite":
        return sqlite.insert(model)
    return postgresql.insert(model)


def upsert_professor(session: Session, professor: ProfessorRecord) -> Optional[int]:
    """
    Insert a professor or pick up the existing row with the same email.

    Returns:
        Professor id, or None if the write failed
    """
    stmt = _insert(session, ProfessorDB).values(
        first_name=professor.first_name,
        last_name=professor.last_name,
        email=professor.email,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["email"],
        set_={"first_name": stmt.excluded.first_name},
    ).returning(ProfessorDB.id)

    try:
        professor_id = session.execute(stmt).scalar_one()
        session.commit()
        return professor_id
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning(f"Failed to insert professor {professor.name}: {e}")
        return None


def upsert_course(session: Session, code: str, course: CourseInfo, semester: str) -> int:
    """
    Insert a course; on conflict only the title and internship flag change.
    """
    stmt = _insert(session, CourseDB).values(
        course_code=code,
        course_name=course.title,
        credits=int(course.credits),
        semester=semester,
        is_internship=course.is_internship,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["course_code"],
        set_={
            "course_name": stmt.excluded.course_name,
            "is_internship": stmt.excluded.is_internship,
        },
    ).returning(CourseDB.id)

    course_id = session.execute(stmt).scalar_one()
    session.commit()
    return course_id


def upsert_section(
    session: Session, course_id: int, section_number: str, section: SectionInfo
) -> int:
    """
    Insert a section; on conflict only the seat total changes.
    """
    stmt = _insert(session, SectionDB).values(
        course_id=course_id,
        section_number=section_number,
        section_type=section.section_type.value,
        professor_id=section.professor_id,
        total_seats=section.seats,
        available_seats=section.seats,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["course_id", "section_number"],
        set_={"total_seats": stmt.excluded.total_seats},
    ).returning(SectionDB.id)

    section_id = session.execute(stmt).scalar_one()
    session.commit()
    return section_id


def insert_meeting(
    session: Session, section_id: int, key: MeetingKey, meeting: MeetingInfo
) -> bool:
    """
    Insert one weekly meeting; an identical slot already present is a no-op.

    Returns:
        True if a new row was written
    """
    stmt = _insert(session, SectionMeetingDB).values(
        section_id=section_id,
        day_of_week=key.day.value,
        start_time=time.fromisoformat(key.start_time),
        end_time=time.fromisoformat(key.end_time),
        room=meeting.room,
        building=meeting.building,
    )
    stmt = stmt.on_conflict_do_nothing(
        index_elements=["section_id", "day_of_week", "start_time", "end_time"]
    )

    result = session.execute(stmt)
    session.commit()
    return result.rowcount == 1


def write_sections(session: Session, aggregator: ScheduleAggregator) -> Dict[str, Any]:
    """
    Write every aggregated section with its course and meetings.

    Args:
        session: Database session
        aggregator: Finished aggregator for this run

    Returns:
        Dictionary with counts of upserted records and any errors
    """
    results: Dict[str, Any] = {
        "courses_upserted": 0,
        "sections_upserted": 0,
        "meetings_inserted": 0,
        "errors": [],
    }
    course_ids: Dict[str, int] = {}
    failed_courses = set()

    for key, section in aggregator.sections.items():
        code = key.course_code
        if code in failed_courses:
            continue

        if code not in course_ids:
            try:
                course_ids[code] = upsert_course(
                    session, code, aggregator.courses[code], aggregator.semester
                )
                results["courses_upserted"] += 1
            except SQLAlchemyError as e:
                session.rollback()
                failed_courses.add(code)
                logger.warning(f"Failed to insert course {code}: {e}")
                results["errors"].append(f"Error upserting course {code}: {e}")
                continue

        try:
            section_id = upsert_section(session, course_ids[code], key.section_number, section)
            results["sections_upserted"] += 1
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning(f"Failed to insert section {code}-{key.section_number}: {e}")
            results["errors"].append(
                f"Error upserting section {code}-{key.section_number}: {e}"
            )
            continue

        for meeting_key, meeting in section.meetings.items():
            try:
                if insert_meeting(session, section_id, meeting_key, meeting):
                    results["meetings_inserted"] += 1
            except SQLAlchemyError as e:
                session.rollback()
                logger.warning(f"Failed to insert meeting for section {section_id}: {e}")
                results["errors"].append(
                    f"Error inserting meeting {meeting_key.day.value} "
                    f"{meeting_key.start_time} for section {section_id}: {e}"
                )

    return results
