import os
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("JWT_SECRET", "test-secret-with-at-least-32-characters")

from fastapi.testclient import TestClient

from brandkeeper.core.policy import UserRole
from brandkeeper.dependencies import CurrentUser, get_current_user, get_db
from brandkeeper.main import app


class FakeSession:
    """Stands in for AsyncSession where the handler under test never reaches a query."""

    def __init__(self):
        self.added = []
        self.deleted = []
        self.flushes = 0
        self.info = {}

    def add(self, obj):
        self.added.append(obj)

    async def flush(self):
        self.flushes += 1

    async def refresh(self, obj):
        return None

    async def delete(self, obj):
        self.deleted.append(obj)

    async def get(self, model, ident):
        return None

    async def execute(self, *args, **kwargs):
        raise AssertionError("unexpected query")


def make_user(role: UserRole = UserRole.COLLABORATOR, company_id: uuid.UUID | None = None, **overrides):
    now = datetime.now(timezone.utc)
    values = dict(
        id=uuid.uuid4(),
        email="persona@example.com",
        full_name="Persona Prueba",
        phone=None,
        role=role.value,
        company_id=company_id or uuid.uuid4(),
        avatar_url=None,
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def db():
    return FakeSession()


@pytest.fixture
def company_id():
    return uuid.uuid4()


@pytest.fixture
def client_as(db, company_id):
    """Returns a factory: ``client_as(role)`` gives a TestClient logged in with that role."""

    def _client(role: UserRole | None):
        async def _db():
            yield db

        app.dependency_overrides[get_db] = _db
        if role is not None:
            user = make_user(role, company_id)
            app.dependency_overrides[get_current_user] = lambda: CurrentUser(
                user=user, user_id=user.id, role=role, company_id=user.company_id,
            )
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()


@pytest.fixture
def user_factory():
    return make_user
