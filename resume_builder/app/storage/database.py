import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from resume_builder.app.database.database import create_session_factory
from resume_builder.app.models import Base
from resume_builder.app.models.resume_model import Resume as DatabaseResume
from resume_builder.app.models.resume_model import ResumeData
from resume_builder.app.models.template import Template as DatabaseTemplate
from resume_builder.app.models.user import User as DatabaseUser
from resume_builder.app.schemas.resume import Resume, ResumeContent, Template
from resume_builder.app.schemas.user import User, UserCreate
from resume_builder.app.storage.base import Storage
from resume_builder.app.storage.errors import (
    ResumeNotFoundError,
    StorageError,
    TemplateNotFoundError,
    UsernameTakenError,
)
from resume_builder.app.storage.seed import DEFAULT_TEMPLATES

log = logging.getLogger(__name__)


class DatabaseStorage(Storage):
    """SQLAlchemy-backed storage.

    Every public method runs in its own session and transaction, committed
    on success and rolled back on error. Rows are converted to pydantic
    models before the session closes.

    Attributes:
        engine (Engine): The engine the storage was created with.

    """

    def __init__(self, engine: Engine, create_all: bool = False):
        """Bind the storage to an engine and seed the default templates.

        Args:
            engine (Engine): The database engine.
            create_all (bool): Create missing tables first. Used for SQLite
                deployments and tests; PostgreSQL deployments use Alembic.

        Notes:
            1. Optionally create all tables registered on `Base.metadata`.
            2. Insert the default templates only if the templates table is empty,
               so restarts do not duplicate them.
            3. Database access: reads and possibly writes the templates table.

        """
        _msg = "Initializing database storage"
        log.debug(_msg)

        self.engine = engine
        self._session_factory = create_session_factory(engine)
        if create_all:
            Base.metadata.create_all(bind=engine)
        self._seed_templates()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _seed_templates(self) -> None:
        with self._session() as db:
            count = db.scalar(select(func.count()).select_from(DatabaseTemplate))
            if count:
                _msg = f"Found {count} templates, skipping seed"
                log.debug(_msg)
                return

            _msg = "Seeding default templates"
            log.info(_msg)
            db.add_all(
                [
                    DatabaseTemplate(
                        name=template["name"],
                        description=template["description"],
                        structure=template["structure"],
                    )
                    for template in DEFAULT_TEMPLATES
                ],
            )

    def get_user(self, user_id: int) -> User | None:
        with self._session() as db:
            row = db.get(DatabaseUser, user_id)
            return User.model_validate(row) if row else None

    def get_user_by_username(self, username: str) -> User | None:
        with self._session() as db:
            row = db.scalars(
                select(DatabaseUser).where(DatabaseUser.username == username),
            ).first()
            return User.model_validate(row) if row else None

    def create_user(self, insert: UserCreate) -> User:
        """Insert a new user row.

        Args:
            insert (UserCreate): Username and password to store.

        Returns:
            User: The stored user with the id assigned by the database.

        Raises:
            UsernameTakenError: If the unique constraint on username is violated.

        """
        with self._session() as db:
            row = DatabaseUser(username=insert.username, password=insert.password)
            db.add(row)
            try:
                db.flush()
            except IntegrityError as e:
                _msg = f"Username already exists: {insert.username}"
                log.debug(_msg)
                raise UsernameTakenError(insert.username) from e
            return User.model_validate(row)

    def get_resume(self, resume_id: int) -> Resume | None:
        with self._session() as db:
            row = db.get(DatabaseResume, resume_id)
            return Resume.model_validate(row) if row else None

    def get_resumes_by_user(self, user_id: int) -> list[Resume]:
        with self._session() as db:
            rows = db.scalars(
                select(DatabaseResume)
                .where(DatabaseResume.user_id == user_id)
                .order_by(DatabaseResume.id),
            ).all()
            return [Resume.model_validate(row) for row in rows]

    def create_resume(
        self,
        user_id: int,
        template_id: int,
        title: str,
        content: ResumeContent,
    ) -> Resume:
        """Insert a new resume row.

        Args:
            user_id (int): Owning user.
            template_id (int): Template used for rendering.
            title (str): Resume title.
            content (ResumeContent): Validated resume content, stored as camelCase JSON.

        Returns:
            Resume: The stored resume with id and `created_at` assigned.

        Raises:
            TemplateNotFoundError: If `template_id` names no template.
            StorageError: If the insert violates another constraint.

        Notes:
            1. Check the template in the same transaction, so the outcome does
               not depend on whether the engine enforces foreign keys.
            2. Translate any remaining `IntegrityError` into `StorageError`.

        """
        with self._session() as db:
            if db.get(DatabaseTemplate, template_id) is None:
                _msg = f"Template {template_id} does not exist"
                log.debug(_msg)
                raise TemplateNotFoundError(template_id)

            row = DatabaseResume(
                data=ResumeData(
                    user_id=user_id,
                    template_id=template_id,
                    title=title,
                    content=content.model_dump(mode="json", by_alias=True),
                ),
            )
            db.add(row)
            try:
                db.flush()
            except IntegrityError as e:
                _msg = f"Resume insert rejected by the database: {e.orig}"
                log.exception(_msg)
                raise StorageError(_msg) from e

            _msg = f"Created resume {row.id} for user {user_id}"
            log.debug(_msg)
            return Resume.model_validate(row)

    def update_resume(self, resume_id: int, content: ResumeContent) -> Resume:
        with self._session() as db:
            row = db.get(DatabaseResume, resume_id)
            if row is None:
                raise ResumeNotFoundError(resume_id)
            row.content = content.model_dump(mode="json", by_alias=True)
            db.flush()
            return Resume.model_validate(row)

    def delete_resume(self, resume_id: int) -> None:
        with self._session() as db:
            row = db.get(DatabaseResume, resume_id)
            if row is not None:
                db.delete(row)

    def get_templates(self) -> list[Template]:
        with self._session() as db:
            rows = db.scalars(select(DatabaseTemplate).order_by(DatabaseTemplate.id)).all()
            return [Template.model_validate(row) for row in rows]

    def get_template(self, template_id: int) -> Template | None:
        with self._session() as db:
            row = db.get(DatabaseTemplate, template_id)
            return Template.model_validate(row) if row else None

    def close(self) -> None:
        _msg = "Disposing database engine"
        log.debug(_msg)
        self.engine.dispose()
