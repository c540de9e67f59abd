import logging
from dataclasses import dataclass

from asyncpg.pool import Pool
from fastapi import Request


@dataclass
class AppContext:
    """Process-wide collaborators, built once by the app lifespan."""
    pool: Pool | None
    logger: logging.Logger


def get_context(request: Request) -> AppContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("Application context is not initialized.")
    return context
