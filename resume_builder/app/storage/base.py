import logging
from abc import ABC, abstractmethod

from resume_builder.app.schemas.resume import Resume, ResumeContent, Template
from resume_builder.app.schemas.user import User, UserCreate

log = logging.getLogger(__name__)


class Storage(ABC):
    """Persistence for users, templates, and resumes.

    Two implementations exist: `MemStorage` (dict-backed) and
    `DatabaseStorage` (SQLAlchemy-backed). Both return pydantic models that
    callers may mutate freely without affecting stored state.

    Notes:
        1. Constructing an implementation seeds the default templates.
        2. Ids are assigned by the implementation and never reused.
        3. Errors are raised as subclasses of `StorageError`.

    """

    @abstractmethod
    def get_user(self, user_id: int) -> User | None:
        """Return the user with the given id, or None."""

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None:
        """Return the user with the given username, or None."""

    @abstractmethod
    def create_user(self, insert: UserCreate) -> User:
        """Store a new user and return it with its assigned id.

        Raises:
            UsernameTakenError: If the username already exists.

        """

    @abstractmethod
    def get_resume(self, resume_id: int) -> Resume | None:
        """Return the resume with the given id, or None."""

    @abstractmethod
    def get_resumes_by_user(self, user_id: int) -> list[Resume]:
        """Return every resume owned by the user."""

    @abstractmethod
    def create_resume(
        self,
        user_id: int,
        template_id: int,
        title: str,
        content: ResumeContent,
    ) -> Resume:
        """Store a new resume, assigning its id and creation timestamp.

        Raises:
            TemplateNotFoundError: If no template has the given id.

        """

    @abstractmethod
    def update_resume(self, resume_id: int, content: ResumeContent) -> Resume:
        """Replace a resume's content, leaving every other field unchanged.

        Raises:
            ResumeNotFoundError: If no resume has the given id.

        """

    @abstractmethod
    def delete_resume(self, resume_id: int) -> None:
        """Remove a resume. Removing an absent id is not an error."""

    @abstractmethod
    def get_templates(self) -> list[Template]:
        """Return all templates."""

    @abstractmethod
    def get_template(self, template_id: int) -> Template | None:
        """Return the template with the given id, or None."""

    def close(self) -> None:
        """Release any resources held by the storage."""
