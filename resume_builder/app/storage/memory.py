import logging
import threading
from datetime import datetime, timezone

from resume_builder.app.schemas.resume import Resume, ResumeContent, Template
from resume_builder.app.schemas.user import User, UserCreate
from resume_builder.app.storage.base import Storage
from resume_builder.app.storage.errors import (
    ResumeNotFoundError,
    TemplateNotFoundError,
    UsernameTakenError,
)
from resume_builder.app.storage.seed import DEFAULT_TEMPLATES

log = logging.getLogger(__name__)


class MemStorage(Storage):
    """Dict-backed storage that lives for the lifetime of the process.

    Attributes:
        users (dict[int, User]): Users keyed by id.
        resumes (dict[int, Resume]): Resumes keyed by id, in insertion order.
        templates (dict[int, Template]): Seeded templates keyed by id.

    Notes:
        1. Sync routes run on worker threads, so every mutation holds `_lock`
           for its whole check-then-write, and reads that iterate a map hold it too.
        2. Values are copied on the way in and out.

    """

    def __init__(self):
        """Create empty user and resume maps and seed the default templates.

        Notes:
            1. User and resume id counters both start at 1.
            2. Default templates receive ids 1..n in seed order.
            3. This operation does not involve network, disk, or database access.

        """
        _msg = "Initializing in-memory storage"
        log.debug(_msg)

        self.users: dict[int, User] = {}
        self.resumes: dict[int, Resume] = {}
        self.templates: dict[int, Template] = {}
        self._next_user_id = 1
        self._next_resume_id = 1
        self._lock = threading.Lock()

        for template_id, template in enumerate(DEFAULT_TEMPLATES, start=1):
            self.templates[template_id] = Template.model_validate(
                {"id": template_id, **template},
            )

    def get_user(self, user_id: int) -> User | None:
        user = self.users.get(user_id)
        return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            for user in self.users.values():
                if user.username == username:
                    return user.model_copy()
        return None

    def create_user(self, insert: UserCreate) -> User:
        """Store a new user.

        Args:
            insert (UserCreate): Username and password to store.

        Returns:
            User: The stored user with its newly assigned id.

        Raises:
            UsernameTakenError: If a user with the same username exists.

        """
        with self._lock:
            if any(user.username == insert.username for user in self.users.values()):
                raise UsernameTakenError(insert.username)

            user_id = self._next_user_id
            self._next_user_id += 1
            user = User(id=user_id, username=insert.username, password=insert.password)
            self.users[user_id] = user

        _msg = f"Created user {user.username} with id {user_id}"
        log.debug(_msg)
        return user.model_copy()

    def get_resume(self, resume_id: int) -> Resume | None:
        resume = self.resumes.get(resume_id)
        return resume.model_copy(deep=True) if resume else None

    def get_resumes_by_user(self, user_id: int) -> list[Resume]:
        with self._lock:
            return [
                resume.model_copy(deep=True)
                for resume in self.resumes.values()
                if resume.user_id == user_id
            ]

    def create_resume(
        self,
        user_id: int,
        template_id: int,
        title: str,
        content: ResumeContent,
    ) -> Resume:
        """Store a new resume.

        Args:
            user_id (int): Owning user.
            template_id (int): Template used for rendering. Must name a seeded template.
            title (str): Resume title.
            content (ResumeContent): Validated resume content.

        Returns:
            Resume: The stored resume with assigned id and `created_at`.

        Raises:
            TemplateNotFoundError: If `template_id` names no template.

        """
        if template_id not in self.templates:
            raise TemplateNotFoundError(template_id)

        with self._lock:
            resume_id = self._next_resume_id
            self._next_resume_id += 1
            resume = Resume(
                id=resume_id,
                user_id=user_id,
                template_id=template_id,
                title=title,
                content=content.model_copy(deep=True),
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            self.resumes[resume_id] = resume

        _msg = f"Created resume {resume_id} for user {user_id}"
        log.debug(_msg)
        return resume.model_copy(deep=True)

    def update_resume(self, resume_id: int, content: ResumeContent) -> Resume:
        with self._lock:
            resume = self.resumes.get(resume_id)
            if resume is None:
                raise ResumeNotFoundError(resume_id)

            updated = resume.model_copy(update={"content": content.model_copy(deep=True)})
            self.resumes[resume_id] = updated
        return updated.model_copy(deep=True)

    def delete_resume(self, resume_id: int) -> None:
        with self._lock:
            self.resumes.pop(resume_id, None)

    def get_templates(self) -> list[Template]:
        return [template.model_copy(deep=True) for template in self.templates.values()]

    def get_template(self, template_id: int) -> Template | None:
        template = self.templates.get(template_id)
        return template.model_copy(deep=True) if template else None
