import os
import tempfile
from datetime import date
from pathlib import Path

os.environ.setdefault("DATABASE_URL", f"sqlite:///{Path(tempfile.gettempdir()) / 'shiftdesk-tests.db'}")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from shiftdesk.config import get_settings  # noqa: E402
from shiftdesk.db import build_engine, get_db  # noqa: E402
from shiftdesk.dependencies import require_actor  # noqa: E402
from shiftdesk.models import Base  # noqa: E402
from shiftdesk.schemas.shift import ShiftCreate  # noqa: E402
from shiftdesk.services.directory import EmployeeDirectory  # noqa: E402
from shiftdesk.services.scheduling import SchedulingService  # noqa: E402

ACTOR_ID = 1
SHIFT_DAY = date(2024, 1, 8)


class RecordingSink:
    def __init__(self):
        self.events = []

    def publish(self, action, entity_type, entity_id, actor_id=None, payload=None):
        self.events.append((action, entity_type, entity_id, actor_id, payload or {}))

    def actions(self):
        return [event[0] for event in self.events]


@pytest.fixture()
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'schedule.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def events():
    return RecordingSink()


@pytest.fixture()
def directory():
    return EmployeeDirectory({7: "Dana Reyes"})


@pytest.fixture()
def service(db, events, directory):
    return SchedulingService(db, settings=get_settings(), events=events, directory=directory)


@pytest.fixture()
def make_shift(service):
    def _make(**overrides):
        fields = {
            "date": SHIFT_DAY,
            "start_time": "09:00",
            "end_time": "17:00",
            "role": "Cashier",
            "skills": ["register"],
            "location": "Downtown",
            "team": "Front",
            "min_employees": 1,
            "max_employees": 2,
        }
        fields.update(overrides)
        return service.create_shift(ShiftCreate(**fields), ACTOR_ID)

    return _make


@pytest.fixture()
def client(session_factory):
    from shiftdesk.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[require_actor] = lambda: ACTOR_ID
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
