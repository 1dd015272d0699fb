import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...core.config import Settings
from ...core.security import TokenError, create_access_token, hash_password, verify_password
from ...database.base import StudentDB
from ...models.schema import AuthResponse, LoginRequest, RegisterRequest, Student
from ..dependencies import get_app_settings, get_current_student_id, get_db_session

logger = logging.getLogger(__name__)

router: APIRouter = APIRouter(prefix="/api", tags=["Students"])


def _auth_response(settings: Settings, student: StudentDB) -> AuthResponse:
    try:
        token = create_access_token(settings, student.id, student.email)
    except TokenError as e:
        logger.error(f"Token generation failed: {e}")
        raise HTTPException(status_code=500, detail="failed to generate token")
    return AuthResponse(token=token, student=Student.model_validate(student))


@router.post("/auth/register", response_model=AuthResponse, status_code=201)
def register(
    req: RegisterRequest,
    db: Session = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
):
    """Create a student account and return a token for it"""
    if settings.student_email_domain not in req.email:
        raise HTTPException(status_code=400, detail="invalid email format")

    student = StudentDB(
        email=req.email,
        password_hash=hash_password(req.password),
        first_name=req.first_name,
        last_name=req.last_name,
        student_id=req.student_id,
        year_of_study=req.year_of_study,
    )
    db.add(student)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="email already exists")

    logger.info(f"Registered student {student.id}")
    return _auth_response(settings, student)


@router.post("/auth/login", response_model=AuthResponse)
def login(
    req: LoginRequest,
    db: Session = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
):
    student = db.execute(
        select(StudentDB).where(StudentDB.email == req.email)
    ).scalar_one_or_none()
    if student is None:
        raise HTTPException(status_code=404, detail="no student found with such email")

    if not verify_password(student.password_hash, req.password):
        raise HTTPException(status_code=401, detail="wrong password")

    return _auth_response(settings, student)


@router.get("/users/me", response_model=Student)
def get_current_student(
    student_id: int = Depends(get_current_student_id),
    db: Session = Depends(get_db_session),
):
    student = db.get(StudentDB, student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="student not found")
    return Student.model_validate(student)
