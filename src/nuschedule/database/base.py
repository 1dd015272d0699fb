import logging
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
    create_engine,
    delete,
    text,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class CourseDB(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_code = Column(String, nullable=False, unique=True)
    course_name = Column(String, nullable=False)
    credits = Column(Integer, nullable=False, default=0)
    is_internship = Column(Boolean, nullable=False, default=False)
    description = Column(Text, nullable=True)
    semester = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self):
        return f"<Course(id={self.id}, code='{self.course_code}')>"


class ProfessorDB(Base):
    __tablename__ = "professors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    rating = Column(Float, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self):
        return f"<Professor(id={self.id}, name='{self.first_name} {self.last_name}')>"


class SectionDB(Base):
    __tablename__ = "sections"
    __table_args__ = (
        UniqueConstraint("course_id", "section_number", name="uq_sections_course_number"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    section_number = Column(String, nullable=False)
    section_type = Column(String, nullable=False)
    professor_id = Column(Integer, ForeignKey("professors.id"), nullable=True)
    total_seats = Column(Integer, nullable=False, default=0)
    available_seats = Column(Integer, nullable=False, default=0)
    parent_section_id = Column(Integer, ForeignKey("sections.id"), nullable=True)

    def __repr__(self):
        return f"<Section(id={self.id}, course_id={self.course_id}, number='{self.section_number}')>"


class SectionMeetingDB(Base):
    __tablename__ = "section_meetings"
    __table_args__ = (
        UniqueConstraint(
            "section_id",
            "day_of_week",
            "start_time",
            "end_time",
            name="uq_section_meetings_slot",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    section_id = Column(Integer, ForeignKey("sections.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(String, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    room = Column(String, nullable=True)
    building = Column(String, nullable=True)

    def __repr__(self):
        return f"<SectionMeeting(section_id={self.section_id}, day='{self.day_of_week}', start='{self.start_time}')>"


class StudentDB(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    student_id = Column(String, nullable=False)
    year_of_study = Column(Integer, nullable=False)
    total_credits_earned = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self):
        return f"<Student(id={self.id}, email='{self.email}')>"


class ScheduleDB(Base):
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    schedule_name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    is_submitted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)


class ScheduleSectionDB(Base):
    __tablename__ = "schedule_sections"
    __table_args__ = (
        UniqueConstraint("schedule_id", "section_id", name="uq_schedule_sections_entry"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    schedule_id = Column(Integer, ForeignKey("schedules.id", ondelete="CASCADE"), nullable=False)
    section_id = Column(Integer, ForeignKey("sections.id", ondelete="CASCADE"), nullable=False)
    meeting_id = Column(Integer, ForeignKey("section_meetings.id"), nullable=True)
    added_at = Column(DateTime, nullable=False, default=datetime.now)


# Child tables first so plain DELETEs respect foreign keys
COURSE_DATA_TABLES = [
    ScheduleSectionDB,
    SectionMeetingDB,
    SectionDB,
    CourseDB,
    ProfessorDB,
]


def get_database_config(url: str) -> Dict[str, Any]:
    """Get engine configuration with environment-specific optimizations"""
    if url.startswith("sqlite"):
        config: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
            # One shared connection, otherwise every checkout sees an empty database
            config["poolclass"] = StaticPool
        return config

    is_local = any(host in url for host in ("@localhost", "@127.0.0.1", "@[::1]"))
    if is_local:
        # Local database optimizations
        pool = {
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": 10,
            "pool_recycle": 7200,
        }
    else:
        # Remote database optimizations
        pool = {
            "pool_size": 10,
            "max_overflow": 20,
            "pool_timeout": 30,
            "pool_recycle": 3600,
        }
    return {
        **pool,
        "pool_pre_ping": True,
        "connect_args": {"application_name": "nuschedule_api", "connect_timeout": 10},
    }


class Storage:
    """
    Owns the engine and session factory for one database.

    A single instance is created at startup and handed to the API and the
    seeding pipeline; nothing is kept in module globals.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        logger.info("Creating database engine")
        self.engine = create_engine(url, echo=echo, **get_database_config(url))
        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,  # Keep objects accessible after commit
        )

    def session(self) -> Session:
        """Get database session from connection pool"""
        return self._session_factory()

    def create_tables(self) -> None:
        """Create tables if they don't exist"""
        Base.metadata.create_all(self.engine)

    def reset_course_data(self) -> None:
        """Wipe course-related data so the next startup reseeds"""
        with self.engine.begin() as conn:
            if self.engine.dialect.name == "postgresql":
                names = ", ".join(model.__tablename__ for model in COURSE_DATA_TABLES)
                conn.execute(text(f"TRUNCATE {names} RESTART IDENTITY CASCADE"))
            else:
                for model in COURSE_DATA_TABLES:
                    conn.execute(delete(model))
        logger.info("Course data reset")

    def check_health(self) -> Dict[str, Any]:
        """Check database connection health and pool status"""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()

            pool = self.engine.pool
            try:
                pool_status = {
                    "pool_size": pool.size(),
                    "checked_in": pool.checkedin(),
                    "checked_out": pool.checkedout(),
                    "overflow": pool.overflow(),
                    "pool_type": type(pool).__name__,
                }
            except AttributeError:
                # StaticPool and friends don't expose counters
                pool_status = {"pool_type": type(pool).__name__, "status": "active"}

            logger.debug(f"Database health check passed. Pool status: {pool_status}")
            return {"status": "healthy", "pool_status": pool_status}

        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            return {"status": "unhealthy", "error": str(e)}

    def dispose(self) -> None:
        self.engine.dispose()
