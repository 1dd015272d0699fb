from datetime import datetime, time
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SectionType(str, Enum):
    LECTURE = "Lecture"
    SEMINAR = "Seminar"
    LAB = "Lab"
    RECITATION = "Recitation"


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


DAY_ORDER = {day.value: index for index, day in enumerate(DayOfWeek)}


class Course(BaseModel):
    """Course row as returned by the API"""

    id: int
    course_code: str
    course_name: str
    credits: int
    is_internship: bool
    description: Optional[str] = None
    semester: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Professor(BaseModel):
    """Professor model"""

    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    rating: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class SectionMeeting(BaseModel):
    id: int
    section_id: int
    day_of_week: str
    start_time: time
    end_time: time
    room: Optional[str] = None
    building: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class Section(BaseModel):
    id: int
    course_id: int
    section_number: str
    section_type: str
    professor_id: Optional[int] = None
    total_seats: int
    available_seats: int
    parent_section_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class CourseSummary(BaseModel):
    """Course fields embedded in section responses"""

    id: int
    course_code: str
    course_name: str
    credits: int

    model_config = ConfigDict(from_attributes=True)


class SectionWithDetails(Section):
    """Section together with its course, professor and weekly meetings"""

    course: CourseSummary
    professor: Optional[Professor] = None
    meetings: List[SectionMeeting] = []


class Student(BaseModel):
    """Student profile; the password hash is never exposed"""

    id: int
    email: str
    first_name: str
    last_name: str
    student_id: str
    year_of_study: int
    total_credits_earned: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RegisterRequest(BaseModel):
    email: str
    password: str = Field(min_length=8)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    student_id: str = Field(min_length=1)
    year_of_study: int = Field(ge=1, le=5)


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    token: str
    student: Student


class Schedule(BaseModel):
    id: int
    student_id: int
    schedule_name: str
    description: Optional[str] = None
    is_submitted: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ScheduleWithSections(Schedule):
    sections: List[SectionWithDetails] = []
    total_credits: int = 0


class CreateScheduleRequest(BaseModel):
    schedule_name: str = Field(min_length=1)
    description: Optional[str] = None


class AddSectionRequest(BaseModel):
    section_id: int
    meeting_id: Optional[int] = None


class MessageResponse(BaseModel):
    message: str


class HealthCheck(BaseModel):
    """Health check response model"""

    status: str
    database: dict
    api_version: str
