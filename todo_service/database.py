"""SQLModel database engine and session management."""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, create_engine, Session

from todo_service.config import settings
from todo_service.services.errors import StoreError

logger = logging.getLogger(__name__)

# SQLite needs check_same_thread=False; PostgreSQL does not
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    echo=False,
    connect_args=connect_args,
)


def create_db_and_tables(bind=None):
    """Create all tables. Called on startup."""
    # Models must be imported so their tables are registered on the metadata
    import todo_service.models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
    logger.info("Database schema ready")


def get_session() -> Session:
    """Dependency that yields a database session."""
    with Session(engine) as session:
        yield session


@contextmanager
def store_errors(session: Session):
    """Roll back and re-raise any SQLAlchemy failure as StoreError."""
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Store failure: {e}")
        raise StoreError() from e
