"""
Field-level parsing of schedule export rows.

Every helper degrades to an empty/zero value instead of raising, so one odd
cell never costs the rest of the row.
"""

import math
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from ...models.schema import DayOfWeek, SectionType
from .schemas import ProfessorRecord, RowRecord

# Column positions in a data row
COL_SCHOOL = 0
COL_LEVEL = 1
COL_COURSE_ABBR = 2
COL_SECTION_TYPE = 3
COL_TITLE = 4
COL_CREDITS = 6  # ECTS credits; column 5 holds US credits and is ignored
COL_START_DATE = 7
COL_END_DATE = 8
COL_DAYS = 9
COL_TIME = 10
COL_ENROLLED = 11
COL_CAPACITY = 12
COL_FACULTY = 13
COL_ROOM = 14

REQUIRED_COLUMNS = 15

# Used in the time and faculty columns for remote sections
ONLINE_SENTINEL = "Online/Distant"

SECTION_TYPE_CODES = {
    "L": SectionType.LECTURE,
    "S": SectionType.SEMINAR,
    "B": SectionType.LAB,
    "R": SectionType.RECITATION,
}

DAY_CODES = {
    "M": DayOfWeek.MONDAY,
    "T": DayOfWeek.TUESDAY,
    "W": DayOfWeek.WEDNESDAY,
    "R": DayOfWeek.THURSDAY,
    "F": DayOfWeek.FRIDAY,
    "S": DayOfWeek.SATURDAY,
}


def parse_course_code(abbr: str) -> str:
    """'CSCI 151/MATH 151' -> 'CSCI 151'"""
    return abbr.split("/", 1)[0].strip()


def classify_section_type(code: str) -> SectionType:
    """Section type from the trailing letter of codes like '1L' or '2B'"""
    code = code.strip()
    if not code:
        return SectionType.LECTURE
    return SECTION_TYPE_CODES.get(code[-1].upper(), SectionType.LECTURE)


def parse_credits(value: str) -> float:
    try:
        credits = float(value.strip())
    except (ValueError, AttributeError):
        return 0.0
    return credits if math.isfinite(credits) else 0.0


def parse_int(value: str) -> int:
    try:
        return int(value.strip())
    except (ValueError, AttributeError):
        return 0


def parse_days(value: str) -> List[DayOfWeek]:
    """'MWF' -> [Monday, Wednesday, Friday]; unknown letters are dropped"""
    days = [DAY_CODES[ch] for ch in value.strip() if ch in DAY_CODES]
    return list(dict.fromkeys(days))


def convert_to_24_hour(value: str) -> str:
    """'02:00 PM' -> '14:00:00', or '' if it isn't a 12-hour clock time"""
    value = value.strip()
    if not value:
        return ""
    try:
        parsed = datetime.strptime(value, "%I:%M %p")
    except ValueError:
        return ""
    return parsed.strftime("%H:%M:%S")


def parse_time_range(value: str) -> Tuple[str, str]:
    """
    '02:00 PM-03:15 PM' -> ('14:00:00', '15:15:00').

    Both halves come back empty if either one is unusable.
    """
    value = value.strip()
    if not value or value == ONLINE_SENTINEL:
        return "", ""

    parts = value.split("-")
    if len(parts) != 2:
        return "", ""

    start = convert_to_24_hour(parts[0])
    end = convert_to_24_hour(parts[1])
    if not start or not end:
        return "", ""
    return start, end


def parse_room(value: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Building and room number from the room column.

        '(C3) 1009 - cap:70'   -> ('C3', '1009')
        'Green Hall - cap:231' -> ('Green Hall', None)
    """
    location = value.split("-", 1)[0].strip()
    if not location:
        return None, None

    open_idx = location.find("(")
    close_idx = location.find(")", open_idx + 1) if open_idx != -1 else -1
    if open_idx != -1 and close_idx != -1:
        building = location[open_idx + 1 : close_idx].strip()
        room = location[close_idx + 1 :].strip()
        return building or None, room or None

    return location, None


def make_professor_email(first_name: str, last_name: str, domain: str) -> str:
    last = "".join(last_name.split())
    return f"{first_name.lower()}.{last.lower()}@{domain}"


def parse_faculty(value: str, email_domain: str) -> Optional[ProfessorRecord]:
    """
    First listed instructor of a row.

    Co-instructors after the first comma are ignored, and a name without a
    surname yields no professor.
    """
    value = value.strip()
    if not value or value == ONLINE_SENTINEL:
        return None

    name = value.split(",", 1)[0].strip()
    parts = name.split()
    if len(parts) < 2:
        return None

    first_name = parts[0]
    last_name = " ".join(parts[1:])
    return ProfessorRecord(
        name=name,
        first_name=first_name,
        last_name=last_name,
        email=make_professor_email(first_name, last_name, email_domain),
    )


def parse_row(row: Sequence[str], email_domain: str = "nu.edu.kz") -> Optional[RowRecord]:
    """
    Parse one data row, or return None if the row should be skipped.
    """
    if len(row) < REQUIRED_COLUMNS or not row[COL_COURSE_ABBR].strip():
        return None

    course_code = parse_course_code(row[COL_COURSE_ABBR])
    if not course_code:
        return None

    section_code = row[COL_SECTION_TYPE].strip()
    start_time, end_time = parse_time_range(row[COL_TIME])
    building, room = parse_room(row[COL_ROOM])

    return RowRecord(
        school=row[COL_SCHOOL].strip(),
        level=row[COL_LEVEL].strip(),
        course_code=course_code,
        section_number=section_code,
        section_type=classify_section_type(section_code),
        title=row[COL_TITLE].strip(),
        credits=parse_credits(row[COL_CREDITS]),
        start_date=row[COL_START_DATE].strip(),
        end_date=row[COL_END_DATE].strip(),
        days=parse_days(row[COL_DAYS]),
        start_time=start_time,
        end_time=end_time,
        enrolled=parse_int(row[COL_ENROLLED]),
        capacity=parse_int(row[COL_CAPACITY]),
        professor=parse_faculty(row[COL_FACULTY], email_domain),
        building=building,
        room=room,
    )
