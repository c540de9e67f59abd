from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from nulltask.api.v1 import routers
from nulltask.core.config import settings
from nulltask.core.context import AppContext
from nulltask.core.logging import get_logger
from nulltask.db.session import close_db_pool, create_db_pool
from nulltask.services.validation import describe_errors

logger = get_logger("nulltask")


@asynccontextmanager
async def lifespan(app: FastAPI):
    pool = await create_db_pool(settings, logger)
    app.state.context = AppContext(pool=pool, logger=logger)
    yield
    await close_db_pool(pool, logger)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": describe_errors(exc.errors())},
    )


app = FastAPI(
    title="NullTask API",
    description="User management service backed by PostgreSQL",
    version="1.0.0",
    lifespan=lifespan
)

app.add_exception_handler(RequestValidationError, request_validation_handler)
app.include_router(routers.router)

@app.get("/")
async def root():
    return {"message": "Welcome to NullTask API"}

@app.get("/health")
async def health():
    return {"status": "ok", "service": settings.APP_NAME}


def run() -> None:
    uvicorn.run("nulltask.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
