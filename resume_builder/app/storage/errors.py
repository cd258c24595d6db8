import logging

log = logging.getLogger(__name__)


class StorageError(Exception):
    """Base class for errors raised by storage implementations."""


class ResumeNotFoundError(StorageError):
    """Raised when an operation targets a resume id that does not exist."""

    def __init__(self, resume_id: int):
        self.resume_id = resume_id
        super().__init__("Resume not found")


class UsernameTakenError(StorageError):
    """Raised when creating a user whose username already exists."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username already exists: {username}")


class TemplateNotFoundError(StorageError):
    """Raised when creating a resume for a template id that does not exist."""

    def __init__(self, template_id: int):
        self.template_id = template_id
        super().__init__("Template not found")
