import logging
from typing import AsyncGenerator

import asyncpg
from asyncpg import Connection
from asyncpg.pool import Pool
from fastapi import Depends

from nulltask.core.config import Settings
from nulltask.core.context import AppContext, get_context


async def create_db_pool(settings: Settings, logger: logging.Logger) -> Pool:
    try:
        pool = await asyncpg.create_pool(
            dsn=settings.asyncpg_url,
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
            timeout=settings.DB_POOL_TIMEOUT,
        )
    except Exception:
        logger.exception("Error connecting to database %s:%s", settings.DB_HOST, settings.DB_PORT)
        raise
    logger.info("AsyncPG connection pool created (%s:%s/%s).",
                settings.DB_HOST, settings.DB_PORT, settings.DB_NAME)
    return pool


async def close_db_pool(pool: Pool | None, logger: logging.Logger) -> None:
    if pool is not None:
        await pool.close()
        logger.info("AsyncPG connection pool closed.")


async def get_db_connection(
        context: AppContext = Depends(get_context),
) -> AsyncGenerator[Connection, None]:
    if context.pool is None:
        raise RuntimeError("Database pool is not initialized.")
    async with context.pool.acquire() as connection:
        yield connection
