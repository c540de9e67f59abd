import logging
from typing import Optional

from nulltask.core.exceptions import (
    EmailAlreadyRegistered,
    UserAlreadyExistsException,
    UserNotFound,
    UserNotFoundException,
)
from nulltask.core.security import hash_password, verify_password
from nulltask.repositories.user_repo import UserRepository
from nulltask.schemas.user_schema import UserCreate, UserUpdate
from nulltask.services.validation import normalize_email, validate_user


class UserService:
    def __init__(self, user_repo: UserRepository, logger: Optional[logging.Logger] = None):
        self.user_repo = user_repo
        self.logger = logger or logging.getLogger(__name__)

    async def _email_taken(self, email: str) -> bool:
        try:
            await self.user_repo.get_by_email(email)
        except UserNotFound:
            return False
        return True

    async def register_user(self, user_in: UserCreate) -> dict:
        # fast path only; the partial unique index is the real guard
        if await self._email_taken(user_in.email):
            raise UserAlreadyExistsException("email")

        user_data = {
            "name": user_in.name,
            "email": user_in.email,
            "password": hash_password(user_in.password),
            "age": user_in.age,
        }
        try:
            created = await self.user_repo.create(user_in=user_data)
        except EmailAlreadyRegistered:
            raise UserAlreadyExistsException("email")

        self.logger.info("Created user %s (member #%s)", created["id"], created["member_number"])
        return created

    async def get_by_email(self, email: str) -> dict:
        # stored addresses are normalized, so lookups must be too
        normalized = normalize_email(email)
        if normalized is None:
            raise UserNotFoundException()
        try:
            return await self.user_repo.get_by_email(normalized)
        except UserNotFound:
            raise UserNotFoundException()

    async def get_by_id(self, user_id: str) -> dict:
        try:
            return await self.user_repo.get_by_id(user_id)
        except UserNotFound:
            raise UserNotFoundException()

    async def list_users(self) -> list[dict]:
        return await self.user_repo.list_all()

    async def update_by_email(self, email: str, changes: UserUpdate) -> dict:
        current = await self.get_by_email(email)
        return await self._apply_update(current, changes)

    async def update_by_id(self, user_id: str, changes: UserUpdate) -> dict:
        current = await self.get_by_id(user_id)
        return await self._apply_update(current, changes)

    async def _apply_update(self, current: dict, changes: UserUpdate) -> dict:
        incoming = changes.model_dump(exclude_unset=True, exclude_none=True)
        merged = {
            "name": current["name"],
            "email": current["email"],
            "age": current["age"],
            **incoming,
        }
        candidate = validate_user(merged)

        if candidate.email != current["email"] and await self._email_taken(candidate.email):
            raise UserAlreadyExistsException("email")

        # a stored hash is kept as is; only a different plaintext gets hashed
        password = current["password"]
        if candidate.password is not None and not verify_password(candidate.password, password):
            password = hash_password(candidate.password)

        try:
            return await self.user_repo.save({
                "id": current["id"],
                "name": candidate.name,
                "email": candidate.email,
                "password": password,
                "age": candidate.age,
            })
        except UserNotFound:
            raise UserNotFoundException()
        except EmailAlreadyRegistered:
            raise UserAlreadyExistsException("email")

    async def delete_by_email(self, email: str) -> None:
        current = await self.get_by_email(email)
        await self._soft_delete(current)

    async def delete_by_id(self, user_id: str) -> None:
        current = await self.get_by_id(user_id)
        await self._soft_delete(current)

    async def _soft_delete(self, current: dict) -> None:
        try:
            await self.user_repo.soft_delete(current["id"])
        except UserNotFound:
            raise UserNotFoundException()
        self.logger.info("Soft-deleted user %s", current["id"])
