"""
Seeding pipeline for the registrar's schedule export.

This pipeline loads and stores:
- Courses with their chosen credit value
- Professors (first listed instructor per row)
- Sections with seat totals
- Weekly section meetings
"""

from .aggregate import CourseInfo, MeetingKey, ScheduleAggregator, SectionInfo, SectionKey
from .loader import SeedError, read_csv_file, read_schedule
from .parser import classify_section_type, parse_row
from .pipeline import SeedReport, seed_database, seed_from_file
from .schemas import ProfessorRecord, RowRecord

__all__ = [
    # Schemas
    "ProfessorRecord",
    "RowRecord",
    # Stages
    "read_csv_file",
    "read_schedule",
    "parse_row",
    "classify_section_type",
    "ScheduleAggregator",
    "CourseInfo",
    "SectionInfo",
    "SectionKey",
    "MeetingKey",
    # Entry points
    "seed_database",
    "seed_from_file",
    "SeedReport",
    "SeedError",
]
