"""
Read helpers shared by the course and schedule endpoints.
"""

from collections import defaultdict
from typing import Dict, List, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models.schema import DAY_ORDER, CourseSummary, Professor, SectionMeeting, SectionWithDetails
from .base import CourseDB, ProfessorDB, SectionDB, SectionMeetingDB


def get_section_meetings(db: Session, section_ids: Sequence[int]) -> Dict[int, List[SectionMeeting]]:
    """Meetings per section, Monday first, then by start time"""
    if not section_ids:
        return {}

    rows = db.execute(
        select(SectionMeetingDB).where(SectionMeetingDB.section_id.in_(section_ids))
    ).scalars().all()
    rows = sorted(rows, key=lambda m: (DAY_ORDER.get(m.day_of_week, 7), m.start_time))

    meetings: Dict[int, List[SectionMeeting]] = defaultdict(list)
    for row in rows:
        meetings[row.section_id].append(SectionMeeting.model_validate(row))
    return meetings


def get_sections_with_details(db: Session, sections: Sequence[SectionDB]) -> List[SectionWithDetails]:
    """Attach course, professor and meetings to already-loaded sections"""
    if not sections:
        return []

    course_ids = {s.course_id for s in sections}
    professor_ids = {s.professor_id for s in sections if s.professor_id is not None}

    courses = {
        c.id: c
        for c in db.execute(select(CourseDB).where(CourseDB.id.in_(course_ids))).scalars()
    }
    professors = {}
    if professor_ids:
        professors = {
            p.id: p
            for p in db.execute(
                select(ProfessorDB).where(ProfessorDB.id.in_(professor_ids))
            ).scalars()
        }
    meetings = get_section_meetings(db, [s.id for s in sections])

    details = []
    for section in sections:
        professor = professors.get(section.professor_id)
        details.append(
            SectionWithDetails(
                id=section.id,
                course_id=section.course_id,
                section_number=section.section_number,
                section_type=section.section_type,
                professor_id=section.professor_id,
                total_seats=section.total_seats,
                available_seats=section.available_seats,
                parent_section_id=section.parent_section_id,
                course=CourseSummary.model_validate(courses[section.course_id]),
                professor=Professor.model_validate(professor) if professor else None,
                meetings=meetings.get(section.id, []),
            )
        )
    return details
