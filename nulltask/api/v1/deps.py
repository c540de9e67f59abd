from asyncpg import Connection
from fastapi import Depends

from nulltask.core.context import AppContext, get_context
from nulltask.db.session import get_db_connection
from nulltask.repositories.user_repo import UserRepository
from nulltask.services.user_service import UserService


def get_user_repo(
        conn: Connection = Depends(get_db_connection),
        context: AppContext = Depends(get_context),
) -> UserRepository:
    return UserRepository(conn, logger=context.logger)


def get_user_service(
        user_repo: UserRepository = Depends(get_user_repo),
        context: AppContext = Depends(get_context),
) -> UserService:
    return UserService(user_repo, logger=context.logger)
