import os
import tempfile

# Settings are read at import time; point them at throwaway resources first
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("STATIC_DIR", tempfile.mkdtemp(prefix="campus_events_static_"))
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "1")

from datetime import date, timedelta  # noqa: E402

import fakeredis  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import Engine, StaticPool, create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.orm.session import Session  # noqa: E402

from campus_events.database.db import Base, get_db  # noqa: E402
from campus_events.main import app  # noqa: E402
from campus_events.models.events import Event  # noqa: E402
from campus_events.models.users import User, UserRole  # noqa: E402

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine: Engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Set up and tear down the database for the test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    """Every test starts from empty tables."""
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


# Override the database dependency
def override_get_db():
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def db_session():
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture(autouse=True)
def redis_client(fake_redis, monkeypatch: pytest.MonkeyPatch):
    """Route every Redis access (locks, upload tickets) to an in-process fake."""
    monkeypatch.setattr("campus_events.core.redis_config.get_redis_client", lambda: fake_redis)
    return fake_redis


@pytest.fixture
def organizer(db_session: Session) -> User:
    user = User(role=UserRole.ORGANIZER.value, email="organizer@campus.edu", is_anonymous=False)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def participant(db_session: Session) -> User:
    user = User(role=UserRole.PARTICIPANT.value, name="Asha", is_anonymous=True)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def make_participant(db_session: Session):
    def _make(name: str) -> User:
        user = User(role=UserRole.PARTICIPANT.value, name=name, is_anonymous=True)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_event(db_session: Session, organizer: User):
    def _make(**overrides) -> Event:
        fields = {
            "title": "Intro to Robotics",
            "description": "Hands-on session",
            "date": date.today() + timedelta(days=7),
            "time": "10:00",
            "location": "Hall A",
            "category": "Workshop",
            "max_participants": 10,
            "organizer_id": organizer.id,
            "is_team_event": False,
            "team_size": None,
        }
        fields.update(overrides)
        event = Event(**fields)
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event

    return _make
