import logging

from fastapi import Request

from resume_builder.app.core.config import Settings
from resume_builder.app.storage.base import Storage

log = logging.getLogger(__name__)


def get_storage(request: Request) -> Storage:
    """Return the storage instance the application was created with.

    Args:
        request (Request): The incoming request.

    Returns:
        Storage: The storage attached to `app.state` by `create_app`.

    """
    return request.app.state.storage


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings
