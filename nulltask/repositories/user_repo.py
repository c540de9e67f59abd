import logging
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional

from asyncpg import Connection, InterfaceError, PostgresError, UniqueViolationError

from nulltask.core.exceptions import EmailAlreadyRegistered, StorageFault, UserNotFound


class UserRepository:
    """asyncpg-backed access to the ``users`` table.

    Lookups only ever see live rows (``deleted_at IS NULL``). Missing rows
    raise ``UserNotFound``; any other database failure is logged here and
    surfaces as ``StorageFault``.
    """

    def __init__(self, conn: Connection, logger: Optional[logging.Logger] = None):
        self.conn = conn
        self.logger = logger or logging.getLogger(__name__)

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except UniqueViolationError:
            raise EmailAlreadyRegistered()
        except (PostgresError, InterfaceError, OSError) as e:
            self.logger.error("Storage fault while %s: %s", action, e, exc_info=True)
            raise StorageFault(f"storage fault while {action}") from e

    # ------------------ Retrieval Methods ------------------ #

    async def get_by_email(self, email: str) -> dict:
        sql = "SELECT * FROM users WHERE email = $1 AND deleted_at IS NULL;"
        with self._guard("fetching user by email"):
            record = await self.conn.fetchrow(sql, email)
        if not record:
            raise UserNotFound(email)
        return dict(record)

    async def get_by_id(self, user_id: str | uuid.UUID) -> dict:
        try:
            key = user_id if isinstance(user_id, uuid.UUID) else uuid.UUID(str(user_id))
        except ValueError:
            raise UserNotFound(user_id)

        sql = "SELECT * FROM users WHERE id = $1 AND deleted_at IS NULL;"
        with self._guard("fetching user by id"):
            record = await self.conn.fetchrow(sql, key)
        if not record:
            raise UserNotFound(user_id)
        return dict(record)

    async def list_all(self) -> list[dict]:
        sql = "SELECT * FROM users WHERE deleted_at IS NULL ORDER BY member_number;"
        with self._guard("listing users"):
            records = await self.conn.fetch(sql)
        return [dict(record) for record in records]

    # ------------------ Creation ------------------ #

    async def create(self, user_in: dict) -> dict:
        sql = """
            INSERT INTO users (id, name, email, password, age)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING *;
        """
        user_id = uuid.uuid4()
        with self._guard("creating user"):
            record = await self.conn.fetchrow(
                sql,
                user_id,
                user_in["name"],
                user_in["email"],
                user_in["password"],
                user_in["age"],
            )
        return dict(record)

    # ------------------ Update / Delete ------------------ #

    async def save(self, user: dict) -> dict:
        sql = """
            UPDATE users
            SET name = $2, email = $3, password = $4, age = $5, updated_at = now()
            WHERE id = $1 AND deleted_at IS NULL
            RETURNING *;
        """
        with self._guard("saving user"):
            record = await self.conn.fetchrow(
                sql,
                user["id"],
                user["name"],
                user["email"],
                user["password"],
                user["age"],
            )
        if not record:
            raise UserNotFound(user["id"])
        return dict(record)

    async def soft_delete(self, user_id: uuid.UUID) -> None:
        sql = """
            UPDATE users
            SET deleted_at = now(), updated_at = now()
            WHERE id = $1 AND deleted_at IS NULL
            RETURNING id;
        """
        with self._guard("deleting user"):
            deleted = await self.conn.fetchval(sql, user_id)
        if deleted is None:
            raise UserNotFound(user_id)
