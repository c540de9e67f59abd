import os

# cheap hashes for the test run; read once when settings load
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import itertools
import logging
import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from nulltask.api.v1.deps import get_user_repo
from nulltask.core.context import AppContext, get_context
from nulltask.core.exceptions import EmailAlreadyRegistered, UserNotFound
from nulltask.main import app


class InMemoryUserRepository:
    """Stand-in for UserRepository with the same live-row and uniqueness rules."""

    def __init__(self):
        self.rows: dict[uuid.UUID, dict] = {}
        self._member_numbers = itertools.count(1)

    def _live(self) -> list[dict]:
        return [row for row in self.rows.values() if row["deleted_at"] is None]

    def _email_in_use(self, email: str, exclude=None) -> bool:
        return any(row["email"] == email and row["id"] != exclude for row in self._live())

    def _live_row(self, user_id):
        row = self.rows.get(user_id)
        if row is None or row["deleted_at"] is not None:
            raise UserNotFound(user_id)
        return row

    async def get_by_email(self, email: str) -> dict:
        for row in self._live():
            if row["email"] == email:
                return dict(row)
        raise UserNotFound(email)

    async def get_by_id(self, user_id) -> dict:
        try:
            key = user_id if isinstance(user_id, uuid.UUID) else uuid.UUID(str(user_id))
        except ValueError:
            raise UserNotFound(user_id)
        return dict(self._live_row(key))

    async def list_all(self) -> list[dict]:
        return [dict(row) for row in sorted(self._live(), key=lambda r: r["member_number"])]

    async def create(self, user_in: dict) -> dict:
        if self._email_in_use(user_in["email"]):
            raise EmailAlreadyRegistered()
        now = datetime.now(timezone.utc)
        row = {
            "id": uuid.uuid4(),
            "name": user_in["name"],
            "email": user_in["email"],
            "password": user_in["password"],
            "age": user_in["age"],
            "member_number": next(self._member_numbers),
            "created_at": now,
            "updated_at": now,
            "deleted_at": None,
        }
        self.rows[row["id"]] = row
        return dict(row)

    async def save(self, user: dict) -> dict:
        row = self._live_row(user["id"])
        if self._email_in_use(user["email"], exclude=user["id"]):
            raise EmailAlreadyRegistered()
        row.update(
            name=user["name"],
            email=user["email"],
            password=user["password"],
            age=user["age"],
            updated_at=datetime.now(timezone.utc),
        )
        return dict(row)

    async def soft_delete(self, user_id) -> None:
        row = self._live_row(user_id)
        now = datetime.now(timezone.utc)
        row["deleted_at"] = now
        row["updated_at"] = now


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def app_context():
    return AppContext(pool=None, logger=logging.getLogger("nulltask.tests"))


@pytest.fixture
def client(user_repo, app_context):
    app.dependency_overrides[get_context] = lambda: app_context
    app.dependency_overrides[get_user_repo] = lambda: user_repo
    # not entered as a context manager: the lifespan (and its pool) never starts
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def ana_payload():
    return {"name": "Ana", "email": "ana@x.com", "password": "secret1", "age": 25}
