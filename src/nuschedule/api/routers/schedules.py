from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...database.base import ScheduleDB, ScheduleSectionDB, SectionDB, SectionMeetingDB
from ...database.queries import get_sections_with_details
from ...models.schema import (
    AddSectionRequest,
    CreateScheduleRequest,
    MessageResponse,
    Schedule,
    ScheduleWithSections,
)
from ..dependencies import get_current_student_id, get_db_session

router: APIRouter = APIRouter(prefix="/api/schedules", tags=["Schedules"])


def get_owned_schedule(db: Session, schedule_id: int, student_id: int) -> ScheduleDB:
    """404 if the schedule doesn't exist, 403 if it belongs to someone else"""
    schedule = db.get(ScheduleDB, schedule_id)
    if schedule is None:
        raise HTTPException(status_code=404, detail="schedule not found")
    if schedule.student_id != student_id:
        raise HTTPException(status_code=403, detail="access denied")
    return schedule


@router.get("", response_model=List[Schedule])
def get_my_schedules(
    student_id: int = Depends(get_current_student_id),
    db: Session = Depends(get_db_session),
):
    schedules = db.execute(
        select(ScheduleDB)
        .where(ScheduleDB.student_id == student_id)
        .order_by(ScheduleDB.created_at.desc(), ScheduleDB.id.desc())
    ).scalars().all()
    return [Schedule.model_validate(s) for s in schedules]


@router.post("", response_model=Schedule, status_code=201)
def create_schedule(
    req: CreateScheduleRequest,
    student_id: int = Depends(get_current_student_id),
    db: Session = Depends(get_db_session),
):
    schedule = ScheduleDB(
        student_id=student_id,
        schedule_name=req.schedule_name,
        description=req.description,
    )
    db.add(schedule)
    db.commit()
    return Schedule.model_validate(schedule)


@router.get("/{schedule_id}", response_model=ScheduleWithSections)
def get_schedule(
    schedule_id: int,
    student_id: int = Depends(get_current_student_id),
    db: Session = Depends(get_db_session),
):
    """Schedule with its sections and the sum of their course credits"""
    schedule = get_owned_schedule(db, schedule_id, student_id)

    sections = db.execute(
        select(SectionDB)
        .join(ScheduleSectionDB, ScheduleSectionDB.section_id == SectionDB.id)
        .where(ScheduleSectionDB.schedule_id == schedule.id)
        .order_by(ScheduleSectionDB.added_at, ScheduleSectionDB.id)
    ).scalars().all()
    details = get_sections_with_details(db, sections)

    return ScheduleWithSections(
        **Schedule.model_validate(schedule).model_dump(),
        sections=details,
        total_credits=sum(d.course.credits for d in details),
    )


@router.post("/{schedule_id}/sections", response_model=MessageResponse)
def add_section_to_schedule(
    schedule_id: int,
    req: AddSectionRequest,
    student_id: int = Depends(get_current_student_id),
    db: Session = Depends(get_db_session),
):
    schedule = get_owned_schedule(db, schedule_id, student_id)

    if db.get(SectionDB, req.section_id) is None:
        raise HTTPException(status_code=404, detail="section not found")
    if req.meeting_id is not None:
        meeting = db.get(SectionMeetingDB, req.meeting_id)
        if meeting is None or meeting.section_id != req.section_id:
            raise HTTPException(status_code=404, detail="meeting not found")

    db.add(
        ScheduleSectionDB(
            schedule_id=schedule.id,
            section_id=req.section_id,
            meeting_id=req.meeting_id,
        )
    )
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="section already in schedule")

    return MessageResponse(message="section added")


@router.delete("/{schedule_id}/sections/{section_id}", response_model=MessageResponse)
def remove_section_from_schedule(
    schedule_id: int,
    section_id: int,
    student_id: int = Depends(get_current_student_id),
    db: Session = Depends(get_db_session),
):
    schedule = get_owned_schedule(db, schedule_id, student_id)

    result = db.execute(
        delete(ScheduleSectionDB).where(
            ScheduleSectionDB.schedule_id == schedule.id,
            ScheduleSectionDB.section_id == section_id,
        )
    )
    db.commit()
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail="section not in schedule")

    return MessageResponse(message="section removed")
