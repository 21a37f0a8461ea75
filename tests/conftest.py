from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from camping.core.incidents.service import IncidentStore
from camping.core.rbac.models import Department, Role, User
from camping.core.rbac.service import UserRegistry
from camping.db.adapter import MemoryAdapter
from camping.main import create_app
from camping.settings import Settings
from camping.state import AppState

SUPER_ADMIN = "info@playabrava.com"
SUPER_ADMIN_PASSWORD = "changeme123!"


class StepClock:
    """Returns a strictly increasing time on every call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 7, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture()
def settings():
    return Settings(
        _env_file=None,
        STORAGE_BACKEND="memory",
        SEED_DEMO_DATA=False,
        BCRYPT_ROUNDS=4,
        GEMINI_API_KEY="",
        SUPER_ADMIN_EMAIL=SUPER_ADMIN,
        SUPER_ADMIN_PASSWORD=SUPER_ADMIN_PASSWORD,
        EXPORT_TIMEZONE="UTC",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def registry():
    return UserRegistry(SUPER_ADMIN, bcrypt_rounds=4)


@pytest.fixture()
def clock():
    return StepClock()


@pytest.fixture()
def store(clock):
    return IncidentStore(clock=clock)


@pytest.fixture()
def admin():
    return User(name="Marta", email="marta@playabrava.com", password="x", department=Department.SSTT, role=Role.ADMIN)


@pytest.fixture()
def staff():
    return User(name="Ana", email="ana@playabrava.com", password="x", department=Department.RECEPCION, role=Role.USER)


@pytest.fixture()
def app_state(settings):
    return AppState(settings, MemoryAdapter())


@pytest.fixture()
def client(settings, app_state):
    app = create_app(settings, state=app_state)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def login(client):
    def _login(email: str = SUPER_ADMIN, password: str = SUPER_ADMIN_PASSWORD) -> dict:
        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _login
