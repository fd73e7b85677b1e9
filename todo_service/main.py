"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_service.config import settings
from todo_service.database import create_db_and_tables
from todo_service.utils.constants import AUTH_HEADER
from todo_service.utils.logging import setup_logging
from todo_service.api import system, todos, users
from todo_service.api.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging()
    create_db_and_tables()
    yield


app = FastAPI(
    title="Todo Service",
    description="Multi-tenant todo tracking API with token sessions",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[AUTH_HEADER],
)

register_exception_handlers(app)

# Mount routers
app.include_router(users.router)
app.include_router(todos.router)
app.include_router(system.router)
