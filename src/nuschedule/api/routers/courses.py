from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from ...core.cache import TTL_LONG, cached
from ...database.base import CourseDB, SectionDB
from ...database.queries import get_sections_with_details
from ...models.schema import Course, SectionWithDetails
from ..dependencies import get_db_session

router: APIRouter = APIRouter(prefix="/api/courses", tags=["Courses"])


@router.get(
    "",
    response_model=List[Course],
    summary="/api/courses",
    description="Returns all courses, optionally filtered by semester (e.g. 'Spring 2026').",
)
@cached(TTL_LONG)
async def get_courses(
    request: Request,
    semester: Optional[str] = None,
    db: Session = Depends(get_db_session),
):
    query = select(CourseDB)
    if semester:
        query = query.where(CourseDB.semester == semester).order_by(CourseDB.course_code)
    else:
        query = query.order_by(CourseDB.semester.desc(), CourseDB.course_code)

    courses = db.execute(query).scalars().all()
    return [Course.model_validate(c).model_dump(mode="json") for c in courses]


@router.get(
    "/{course_id}",
    response_model=Course,
    summary="/api/courses/{course_id}",
    description="Returns a single course.",
)
async def get_course(course_id: int, db: Session = Depends(get_db_session)):
    course = db.get(CourseDB, course_id)
    if course is None:
        raise HTTPException(status_code=404, detail="course not found")
    return Course.model_validate(course)


@router.get(
    "/{course_id}/sections",
    response_model=List[SectionWithDetails],
    summary="/api/courses/{course_id}/sections",
    description="Returns lectures, labs, seminars and recitations of a course with professor and weekly meetings.",
)
@cached(TTL_LONG)
async def get_course_sections(
    request: Request, course_id: int, db: Session = Depends(get_db_session)
):
    if db.get(CourseDB, course_id) is None:
        raise HTTPException(status_code=404, detail="course not found")

    sections = db.execute(
        select(SectionDB)
        .where(SectionDB.course_id == course_id)
        .order_by(SectionDB.section_type, SectionDB.section_number)
    ).scalars().all()
    details = get_sections_with_details(db, sections)
    return [d.model_dump(mode="json") for d in details]
