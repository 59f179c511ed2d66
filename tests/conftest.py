"""
Pytest configuration and shared fixtures.

Every test gets a fresh in-memory SQLite database. The environment is set
before any `seatdesk` import so settings never point at Postgres.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_DATABASE"] = "false"

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from seatdesk.core.config import settings  # noqa: E402
from seatdesk.db.base import Base  # noqa: E402
from seatdesk.db.session import get_db  # noqa: E402
from seatdesk.main import app  # noqa: E402
from seatdesk.models.property import Property  # noqa: E402
from seatdesk.models.shift import Shift  # noqa: E402
from seatdesk.models.student import Student  # noqa: E402
from seatdesk.services import layout, seats  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory, tmp_path, monkeypatch):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_property(db_session):
    def _make(total_seats=50, name="Quiet Reading Room", with_seats=False):
        prop = Property(name=name, address="12 Library Road", total_seats=total_seats)
        db_session.add(prop)
        db_session.commit()
        if with_seats:
            layout.generate_and_save(db_session, prop.id)
            seats.bulk_create(db_session, prop.id)
        db_session.refresh(prop)
        return prop
    return _make


@pytest.fixture
def make_shift(db_session):
    def _make(prop, name="Morning", start="08:00", end="14:00", fee="500"):
        shift = Shift(property_id=prop.id, name=name, start_time=start, end_time=end, fee=Decimal(fee))
        db_session.add(shift)
        db_session.commit()
        db_session.refresh(shift)
        return shift
    return _make


@pytest.fixture
def make_student(db_session):
    counter = iter(range(1, 10_000))

    def _make(prop=None, first_name="Asha"):
        n = next(counter)
        student = Student(
            property_id=prop.id if prop else None,
            first_name=first_name,
            last_name="Verma",
            email=f"student{n}@example.com",
            phone=f"98000000{n:02d}",
        )
        db_session.add(student)
        db_session.commit()
        db_session.refresh(student)
        return student
    return _make


@pytest.fixture
def seated_property(make_property):
    """A 50-seat property with its generated layout and seats."""
    return make_property(total_seats=50, with_seats=True)


@pytest.fixture
def seat_by_number(db_session):
    def _get(prop, number):
        return next(s for s in seats.list_by_property(db_session, prop.id) if s.seat_number == number)
    return _get


@pytest.fixture
def today():
    return date.today()
