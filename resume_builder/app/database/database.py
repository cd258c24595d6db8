import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

log = logging.getLogger(__name__)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create a database engine for the given URL.

    Args:
        database_url (str): SQLAlchemy connection URL.
        echo (bool): Whether SQLAlchemy should log every statement.

    Returns:
        Engine: The SQLAlchemy engine instance used to connect to the database.

    Notes:
        1. For SQLite URLs, allow the connection to be used from FastAPI's worker threads.
        2. For in-memory SQLite, share a single connection so every session sees the same database.
        3. Network access occurs lazily, when the engine first connects.

    """
    _msg = "Creating database engine"
    log.debug(_msg)

    engine_kwargs: dict = {"echo": echo}
    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            engine_kwargs["poolclass"] = StaticPool

    return create_engine(database_url, **engine_kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory bound to an engine.

    Args:
        engine (Engine): The engine sessions should use.

    Returns:
        sessionmaker: The SQLAlchemy sessionmaker instance used to create database sessions.

    Notes:
        1. Sessions are created with autoflush disabled.
        2. `expire_on_commit` is disabled so rows stay readable after the commit that created them.
        3. No network access in this function itself.

    """
    _msg = "Creating session factory"
    log.debug(_msg)
    return sessionmaker(
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )
