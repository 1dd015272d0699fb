"""
Pydantic schemas for rows of the registrar's schedule export.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ...models.schema import DayOfWeek, SectionType


class ProfessorRecord(BaseModel):
    """First-listed instructor of a row"""

    name: str = Field(..., description="Raw faculty name as it appears in the export")
    first_name: str
    last_name: str
    email: str = Field(..., description="Synthesized, e.g. 'john.smith@nu.edu.kz'")


class RowRecord(BaseModel):
    """One parsed data row of the export"""

    school: str = ""
    level: str = ""
    course_code: str = Field(..., description="First cross-listed code, e.g. 'CSCI 151'")
    section_number: str = Field(..., description="Section-type field as given, e.g. '1L'")
    section_type: SectionType = SectionType.LECTURE
    title: str = ""
    credits: float = 0.0
    start_date: str = ""
    end_date: str = ""
    days: List[DayOfWeek] = []
    start_time: str = ""  # HH:MM:SS, empty when the time window is unusable
    end_time: str = ""
    enrolled: int = 0
    capacity: int = 0
    professor: Optional[ProfessorRecord] = None
    building: Optional[str] = None
    room: Optional[str] = None

    @property
    def has_time_window(self) -> bool:
        return bool(self.start_time and self.end_time)
