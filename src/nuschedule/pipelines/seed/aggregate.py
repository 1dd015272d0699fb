"""
Merges parsed export rows into courses, sections and meetings.

The export has one row per section *meeting entry*, so the same section
shows up several times (once per distinct time slot). The aggregator folds
those rows together before anything is written:

- courses:   course code -> display title and the chosen credit value
- sections:  (course code, section number) -> type, seats, professors, meetings
- professors: raw faculty name -> professor id (first seen wins)

Professor names are not normalised, so two spellings of one person give two
professor records.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, NamedTuple, Optional

from ...models.schema import DayOfWeek, SectionType
from .schemas import ProfessorRecord, RowRecord

logger = logging.getLogger(__name__)

ProfessorResolver = Callable[[ProfessorRecord], Optional[int]]


class SectionKey(NamedTuple):
    course_code: str
    section_number: str


class MeetingKey(NamedTuple):
    day: DayOfWeek
    start_time: str
    end_time: str


@dataclass
class MeetingInfo:
    building: Optional[str] = None
    room: Optional[str] = None


@dataclass
class CourseInfo:
    title: str
    credits: float = 0.0
    # Section type of the row the credit value came from
    credit_source: Optional[SectionType] = None

    @property
    def is_internship(self) -> bool:
        return "internship" in self.title.lower()


@dataclass
class SectionInfo:
    section_type: SectionType
    title: str
    seats: int = 0
    professor_ids: List[int] = field(default_factory=list)
    meetings: Dict[MeetingKey, MeetingInfo] = field(default_factory=dict)

    @property
    def professor_id(self) -> Optional[int]:
        return self.professor_ids[0] if self.professor_ids else None


class ScheduleAggregator:
    """
    Accumulates one seeding run's rows.

    Args:
        semester: Semester label from the export header
        resolve_professor: Persists a professor and returns its id (or None
            on failure). Called once per distinct faculty name, while rows
            are still being read, so the id exists before its section is
            written.
    """

    def __init__(self, semester: str, resolve_professor: ProfessorResolver):
        self.semester = semester
        self._resolve_professor = resolve_professor
        self.courses: Dict[str, CourseInfo] = {}
        self.sections: Dict[SectionKey, SectionInfo] = {}
        self.professor_ids: Dict[str, int] = {}

    def add(self, record: RowRecord) -> None:
        self._add_course(record)

        key = SectionKey(record.course_code, record.section_number)
        section = self.sections.get(key)
        if section is None:
            section = SectionInfo(
                section_type=record.section_type,
                title=record.title,
                seats=record.capacity,
            )
            self.sections[key] = section
        else:
            section.seats = max(section.seats, record.capacity)

        professor_id = self.professor_for(record.professor)
        if professor_id is not None and professor_id not in section.professor_ids:
            section.professor_ids.append(professor_id)

        if not record.has_time_window:
            return
        for day in record.days:
            meeting_key = MeetingKey(day, record.start_time, record.end_time)
            if meeting_key not in section.meetings:
                section.meetings[meeting_key] = MeetingInfo(
                    building=record.building, room=record.room
                )

    def _add_course(self, record: RowRecord) -> None:
        course = self.courses.get(record.course_code)
        if course is None:
            course = CourseInfo(title=record.title)
            self.courses[record.course_code] = course
        elif not course.title and record.title:
            course.title = record.title
        choose_credits(course, record.section_type, record.credits)

    def professor_for(self, professor: Optional[ProfessorRecord]) -> Optional[int]:
        if professor is None:
            return None
        if professor.name in self.professor_ids:
            return self.professor_ids[professor.name]

        professor_id = self._resolve_professor(professor)
        if professor_id is not None:
            self.professor_ids[professor.name] = professor_id
        return professor_id

    @property
    def meeting_count(self) -> int:
        return sum(len(section.meetings) for section in self.sections.values())


def choose_credits(course: CourseInfo, section_type: SectionType, credits: float) -> None:
    """
    Apply the credit tie-break for one row.

    The first Lecture row with positive credits wins and sticks. Until one is
    seen, the first non-zero value from any row is kept.
    """
    if course.credit_source == SectionType.LECTURE:
        return

    if section_type == SectionType.LECTURE and credits > 0:
        course.credits = credits
        course.credit_source = SectionType.LECTURE
    elif course.credits == 0 and credits != 0:
        course.credits = credits
        course.credit_source = section_type
