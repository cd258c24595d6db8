"""This module provides database engine and session factory helpers.

Functions:
    create_db_engine: Returns a SQLAlchemy engine for a database URL.
    create_session_factory: Returns a sessionmaker bound to an engine.

Notes:
    1. Neither helper keeps process-wide state; the storage layer owns the
       engine and the session factory it creates.

"""

from .database import create_db_engine, create_session_factory

__all__ = ["create_db_engine", "create_session_factory"]
