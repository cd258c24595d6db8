"""Storage for users, templates, and resumes.

Classes:
    Storage: The interface every backend implements.
    MemStorage: Dict-backed storage, lost on restart.
    DatabaseStorage: SQLAlchemy-backed storage.

Functions:
    create_storage: Build the backend named by the application settings.

"""

import logging

from resume_builder.app.core.config import Settings
from resume_builder.app.database.database import create_db_engine

from .base import Storage
from .database import DatabaseStorage
from .errors import (
    ResumeNotFoundError,
    StorageError,
    TemplateNotFoundError,
    UsernameTakenError,
)
from .memory import MemStorage

log = logging.getLogger(__name__)

__all__ = [
    "DatabaseStorage",
    "MemStorage",
    "ResumeNotFoundError",
    "Storage",
    "StorageError",
    "TemplateNotFoundError",
    "UsernameTakenError",
    "create_storage",
]


def create_storage(settings: Settings) -> Storage:
    """Construct the storage backend selected by configuration.

    Args:
        settings (Settings): Application settings. `storage_backend` selects the
            implementation and `database_url` is used by the database backend.

    Returns:
        Storage: A freshly constructed and seeded storage instance.

    Raises:
        ValueError: If `storage_backend` names an unknown backend.

    Notes:
        1. "memory" builds a `MemStorage`.
        2. "database" builds an engine from `database_url` and a `DatabaseStorage`.
           Tables are created automatically only for SQLite URLs.
        3. Database access occurs when the database backend seeds templates.

    """
    backend = settings.storage_backend
    _msg = f"Creating storage backend: {backend}"
    log.info(_msg)

    if backend == "memory":
        return MemStorage()
    if backend == "database":
        database_url = settings.database_url
        engine = create_db_engine(database_url)
        return DatabaseStorage(engine, create_all=database_url.startswith("sqlite"))

    raise ValueError(f"Unknown storage backend: {backend}")
