# tests/conftest.py

import pytest

import config
from core.storage import InMemoryStorage
from models.roster import Roster
from models.session import SessionGate
from models.student import Student

HEADER_LINE = ",".join(config.CSV_HEADERS)


def make_csv(*rows: str) -> str:
    return "\n".join([HEADER_LINE, *rows])


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def empty_roster(storage):
    return Roster(storage)


@pytest.fixture
def sample_student():
    return Student(
        id="s001",
        full_name="أحمد محمد علي حسن",
        timestamp="2024/09/01 9:15:02",
        student_id="401234567",
        gender="ذكر",
        grade="الاول",
        mobile="0599123456",
        has_siblings="نعم",
        nearest_landmark="مسجد النور",
    )


@pytest.fixture
def sample_csv():
    return make_csv(
        "t1,أحمد محمد,401,ذكر,الاول,0599123456,نعم,مسجد النور",
        "t2,سارة محمد,402,انثى,الثالث,059-912-3456,نعم,مسجد النور",
        "t3,يوسف خالد,403,ذكر,السابغ,0598765432,لا,دوار المدينة",
    )


@pytest.fixture
def sample_roster(storage, sample_csv):
    from core.csv_codec import parse_csv

    roster = Roster(storage)
    roster.replace_all(parse_csv(sample_csv))
    return roster


@pytest.fixture
def session_storage():
    return InMemoryStorage()


@pytest.fixture
def session(session_storage):
    return SessionGate(session_storage)
