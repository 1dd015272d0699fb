from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from nuschedule.api.main import create_app
from nuschedule.core.config import Settings
from nuschedule.database.base import Storage

# Export with the quirks the importer has to cope with: a repeated meeting row,
# cross-listed codes, co-taught rows, remote sections, a one-word faculty
# name, a blank row and a truncated row.
SAMPLE_CSV = """\
Spring 2026,,,,,,,,,,,,,,
Course Schedule by Term,Generated 01/05/2026,,,,,,,,,,,,,
School,Level,Course Abbr,S/T,Course Title,Cr(US),Cr(ECTS),Start Date,End Date,Days,Time,Enr,Capacity,Faculty,Room
SEDS,UG,CSCI 151,1L,Programming for Scientists,4,8,01/12/2026,04/24/2026,MW,09:00 AM-10:15 AM,118,120,Askar Boranbayev,(C3) 1009 - cap:120
SEDS,UG,CSCI 151,1L,Programming for Scientists,4,8,01/12/2026,04/24/2026,MW,09:00 AM-10:15 AM,118,120,Askar Boranbayev,(C3) 1009 - cap:120
SEDS,UG,CSCI 151,1L,Programming for Scientists,4,8,01/12/2026,04/24/2026,F,09:00 AM-09:50 AM,118,120,Askar Boranbayev,(C3) 1009 - cap:120
SEDS,UG,CSCI 151,1B,Programming for Scientists,0,0,01/12/2026,04/24/2026,T,02:00 PM-03:15 PM,30,30,Dana Sarsenova,(7E) 7E.125 - cap:30
SEDS,UG,MATH 161,1R,Calculus I,0,3,01/12/2026,04/24/2026,T,09:00 AM-09:50 AM,40,40,Yerlan Amanbek,(8) 8.105 - cap:40
SEDS,UG,MATH 161,1L,Calculus I,4,4,01/12/2026,04/24/2026,MWF,08:00 AM-08:50 AM,150,160,Yerlan Amanbek,Green Hall - cap:231
SEDS,UG,MATH 161,2R,Calculus I,0,5,01/12/2026,04/24/2026,R,09:00 AM-09:50 AM,38,40,"Yerlan Amanbek, Askar Boranbayev",(8) 8.105 - cap:40
SEDS,UG,CSCI 235/MATH 235,1L,Programming Languages,3,6,01/12/2026,04/24/2026,TR,10:30 AM-11:45 AM,64,70,Hans de Nivelle,(C3) 3017 - cap:70
SSH,UG,HST 100,1L,History of Kazakhstan,3,6,01/12/2026,04/24/2026,,Online/Distant,180,200,Online/Distant,Online/Distant
SEDS,UG,ENG 400,1L,Engineering Internship,0,12,05/18/2026,07/31/2026,,,15,20,Zhanna,
,,,,,,,,,,,,,,
SEDS,UG,CSCI 361,1L,Software Engineering,3,6,01/12/2026,04/24/2026,MW,03:00 PM-04:15 PM,55
"""

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def storage() -> Generator[Storage, None, None]:
    storage = Storage("sqlite+pysqlite:///:memory:")
    storage.create_tables()
    yield storage
    storage.dispose()


@pytest.fixture
def db_session(storage: Storage) -> Generator[Session, None, None]:
    session = storage.session()
    yield session
    session.close()


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "school_schedule_by_term.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def settings(csv_path) -> Settings:
    return Settings(
        database_url="sqlite+pysqlite:///:memory:",
        jwt_secret=TEST_JWT_SECRET,
        seed_csv_path=csv_path,
        seed_on_startup=True,
        reset_db_on_start=False,
        redis_url=None,
    )


@pytest.fixture
def client(settings: Settings, storage: Storage) -> Generator[TestClient, None, None]:
    """App seeded from SAMPLE_CSV at startup"""
    app = create_app(settings, storage=storage)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def register_student(client: TestClient):
    """Register a student and return their token"""

    def register(email: str = "aliya.nurlanova@nu.edu.kz") -> str:
        response = client.post(
            "/api/auth/register",
            json={
                "email": email,
                "password": "supersecret",
                "first_name": "Aliya",
                "last_name": "Nurlanova",
                "student_id": "202412345",
                "year_of_study": 2,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()["token"]

    return register


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(register_student) -> dict:
    return bearer(register_student())
